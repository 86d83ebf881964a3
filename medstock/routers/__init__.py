from medstock.routers.alerts import router as alerts_router
from medstock.routers.analytics import router as analytics_router
from medstock.routers.dashboard import router as dashboard_router
from medstock.routers.health import router as health_router
from medstock.routers.medicines import router as medicines_router
from medstock.routers.reports import router as reports_router

__all__ = [
    "alerts_router",
    "analytics_router",
    "dashboard_router",
    "health_router",
    "medicines_router",
    "reports_router",
]
