"""
Infrastructure module: database sessions and request correlation.
"""

from havens_shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)
from havens_shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
    "get_request_id",
]
