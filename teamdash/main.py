# teamdash/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from teamdash.api.v1.api import api_router
from teamdash.api.v1.endpoints import auth
from teamdash.core.config import settings
from teamdash.core.errors import register_exception_handlers
from teamdash.core.logging_config import configure_logging
from teamdash.db.session import init_db

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Team Productivity API started")
    yield


app = FastAPI(title="Team Productivity API", lifespan=lifespan)
register_exception_handlers(app)

# Include the main router for all routes prefixed with /api/v1
app.include_router(api_router, prefix="/api/v1")

# Auth lives outside the versioned prefix
app.include_router(auth.router, prefix="/auth", tags=["Auth"])

@app.get("/")
def read_root():
    return {"message": "Welcome to the Team Productivity API"}
