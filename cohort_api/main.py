"""
Cohort Tracker API - Main Application

FastAPI backend with:
- MongoDB for cohorts, students and users
- JWT bearer authentication
- Static endpoint documentation at /docs (Swagger UI at /swagger)

Run: uvicorn cohort_api.main:app --reload
  or python -m cohort_api

MONGODB_URI and JWT_SECRET must be set (env or .env); without them the
process exits with status 1 before serving anything.
"""

import logging
import os
import sys
import time

from pydantic import ValidationError

from cohort_api.core.config import get_settings

logger = logging.getLogger(__name__)

try:
    settings = get_settings()
except ValidationError as exc:
    logging.basicConfig()
    missing = ", ".join(str(err["loc"][0]).upper() for err in exc.errors())
    logger.critical("Missing or invalid configuration: %s", missing)
    sys.exit(1)

from fastapi import Depends, FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import FileResponse  # noqa: E402
from pymongo.database import Database  # noqa: E402
from pymongo.errors import PyMongoError  # noqa: E402

from cohort_api.api.error_handlers import register_error_handlers  # noqa: E402
from cohort_api.api.routes import api_router, auth_router  # noqa: E402
from cohort_api.core.observability import setup_logging  # noqa: E402
from cohort_api.db.mongodb import (  # noqa: E402
    close_mongo_client, get_mongo_db, init_mongo_indexes, test_mongo_connection,
)
from cohort_api.schemas.schemas import HealthResponse, StatusResponse  # noqa: E402

setup_logging(settings.log_level)

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")

# Create FastAPI app
app = FastAPI(
    title="Cohort Tracker API",
    description="""
    CRUD backend for cohorts and students with email/password auth.

    ## Features
    - **Cohorts**: create, list, update, delete course groups
    - **Students**: CRUD, each optionally linked to one cohort (populated on read)
    - **Auth**: signup, login (JWT, 7 days), token verification
    """,
    version="1.0.0",
    docs_url="/swagger",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routes
app.include_router(auth_router)
app.include_router(api_router, prefix="/api")


@app.middleware("http")
async def access_log(request: Request, call_next):
    """One line per request: method, path, status, duration."""
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        # Unhandled errors skip past here to the 500 handler; still log them
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.url.path,
                    status_code, elapsed_ms)


@app.on_event("startup")
def startup_event():
    """Connect to MongoDB and create indexes; refuse to start if unreachable."""
    if not test_mongo_connection():
        logger.critical("MongoDB is unreachable at startup")
        raise RuntimeError("MongoDB connection failed")
    init_mongo_indexes()
    logger.info("MongoDB connected, indexes ready")


@app.on_event("shutdown")
def shutdown_event():
    close_mongo_client()


@app.get("/", response_model=StatusResponse, tags=["Health"])
async def root():
    return StatusResponse(status="ok", docs="/docs")


@app.get("/docs", include_in_schema=False)
async def docs():
    """Static endpoint reference."""
    return FileResponse(os.path.join(STATIC_DIR, "docs.html"))


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(db: Database = Depends(get_mongo_db)):
    """Health check including the store connection."""
    try:
        db.command("ping")
    except PyMongoError as e:
        logger.warning("Health check ping failed: %s", e)
        return HealthResponse(status="degraded", mongodb="disconnected")
    return HealthResponse(status="healthy", mongodb="connected")
