"""
Provider Cost Report Backend - FastAPI Application
Provider catalog and LLM-estimated cost reports
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from cost_report.__version__ import __version__
from cost_report.api.v1.router import api_router
from cost_report.core.config import settings
from cost_report.core.database import init_db
from cost_report.core.exception_handlers import register_exception_handlers
from cost_report.core.logging import log_request, setup_logging

# Import all models so they register with Base
from cost_report.models import *  # noqa

# Configure logging (JSON in production, colored in development)
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting Cost Report Backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    if not settings.LLM_API_KEY:
        logger.warning("LLM_API_KEY is not set; reports needing the upstream will fail")
    await init_db()
    logger.info("Database tables initialized")
    yield
    logger.info("Shutting down Cost Report Backend...")


app = FastAPI(
    title="Cost Report API",
    description="Provider catalog and cost report API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    log_request(
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response


register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check with dependency status"""
    from sqlalchemy import text

    from cost_report.core.database import async_session

    result = {
        "status": "healthy",
        "version": __version__,
        "checks": {},
    }

    db_type = "postgresql" if "postgresql" in settings.DATABASE_URL else "sqlite"
    try:
        async with async_session() as db:
            await db.execute(text("SELECT 1"))
        result["checks"][db_type] = "ok"
    except Exception as e:
        result["checks"][db_type] = f"error: {type(e).__name__}"
        result["status"] = "degraded"

    result["checks"]["llm"] = "configured" if settings.LLM_API_KEY else "missing_api_key"

    return result


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Welcome to Cost Report API", "docs": "/docs", "version": __version__}
