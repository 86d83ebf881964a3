import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from medstock.config import Settings, get_settings
from medstock.core.logging import setup_logging
from medstock.database import Base, SessionLocal, engine
from medstock.models import import_all_models
from medstock.routers import (
    alerts_router,
    analytics_router,
    dashboard_router,
    health_router,
    medicines_router,
    reports_router,
)
from medstock.services.sample_data import seed_sample_data

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)

import_all_models()
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(medicines_router)
app.include_router(analytics_router)
app.include_router(dashboard_router)
app.include_router(alerts_router)
app.include_router(reports_router)


@app.get("/")
def root():
    return RedirectResponse(url="/dashboard", status_code=302)


__all__ = ["app", "root"]
