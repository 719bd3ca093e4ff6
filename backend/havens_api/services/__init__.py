"""
Service layer: domain services, CRUD helpers and object storage.
"""
