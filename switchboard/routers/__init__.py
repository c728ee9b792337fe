# FastAPI Routers
from switchboard.routers.agents import router as agents_router
from switchboard.routers.billing import router as billing_router
from switchboard.routers.catalog import router as catalog_router
from switchboard.routers.health import router as health_router

__all__ = [
    "agents_router",
    "billing_router",
    "catalog_router",
    "health_router",
]
