"""
Common dependencies shared across routers.
"""

from .deps import current_staff, require_permission

__all__ = ["current_staff", "require_permission"]
