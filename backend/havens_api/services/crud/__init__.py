"""
CRUD helpers shared by domain services.
"""

from .soft_delete import soft_delete

__all__ = ["soft_delete"]
