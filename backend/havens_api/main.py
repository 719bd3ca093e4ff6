"""
Havens POS REST API.
Entry point for the FastAPI server.

Run:
    uvicorn havens_api.main:app --app-dir backend --port 8000
"""

from fastapi import FastAPI

from havens_api.core import (
    configure_cors,
    lifespan,
    register_exception_handlers,
    register_middlewares,
)
from havens_api.routers import (
    auth_router,
    staff_router,
    menu_router,
    tables_router,
    uploads_router,
    orders_router,
    kitchen_router,
    waiter_router,
    performance_router,
    receptionist_router,
)
from havens_shared.config.settings import settings
from havens_shared.security.rate_limit import limiter


app = FastAPI(
    title="Havens POS API",
    description="Restaurant point-of-sale and back-office API",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter

register_exception_handlers(app)
register_middlewares(app)
configure_cors(app)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health", tags=["health"])
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "havens-pos-api",
        "environment": settings.environment,
    }


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_router)
app.include_router(staff_router)
app.include_router(menu_router)
app.include_router(tables_router)
app.include_router(uploads_router)
app.include_router(orders_router)
app.include_router(kitchen_router)
app.include_router(waiter_router)
app.include_router(performance_router)
app.include_router(receptionist_router)
