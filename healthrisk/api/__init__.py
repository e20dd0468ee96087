"""HealthRisk HTTP routers."""

from .router import router as assessments_router
from .health import router as health_router

__all__ = ["assessments_router", "health_router"]
