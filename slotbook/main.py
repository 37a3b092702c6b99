import logging

from fastapi import FastAPI
from slotbook.core.logging_config import setup_logging
from slotbook.db.base import Base, engine
from slotbook.db.models import availability, booking, offering, provider  # noqa: F401  register tables
from slotbook.api.routes import providers as providers_router
from slotbook.api.routes import availability as availability_router
from slotbook.api.routes import bookings as bookings_router

logger = logging.getLogger(__name__)

app = FastAPI(title="slotbook")

@app.on_event("startup")
def startup():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("slotbook started, tables ensured on %s", engine.url)

@app.get("/")
def root():
    return {"message": "slotbook scheduling API running"}


app.include_router(providers_router.router)
app.include_router(availability_router.router)
app.include_router(bookings_router.router)
