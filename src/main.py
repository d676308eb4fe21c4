# src/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config.settings import settings
from src.db.database import Base, engine
from src.routers import tracker

# registers the tracker tables on Base.metadata
import src.models  # noqa: F401

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create_all only creates missing tables, it never alters existing ones
    Base.metadata.create_all(bind=engine)
    logger.info("tracker tables ready")
    yield


app = FastAPI(title="Health Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tracker.router, prefix=settings.api_prefix)


# status endpoint
@app.get("/")
async def root():
    return {
        "message": "Health Tracker API is running",
        "version": "1.0.0",
    }
