"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from evalboard.api.router import api_router
from evalboard.core.config import settings
from evalboard.core.database import close_db, init_db
from evalboard.core.logging import setup_logging
from evalboard.core.redis import close_redis, init_redis
from evalboard.schemas.shared import StatusResponse
from evalboard.services.notification import notification_hub
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    await init_db()
    await init_redis()
    yield
    notification_hub.close_all()
    await close_redis()
    await close_db()
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS_LIST,
    allow_credentials=settings.CORS_ORIGINS_LIST != ["*"],
    allow_methods=settings.CORS_METHODS_LIST,
    allow_headers=settings.CORS_HEADERS_LIST,
)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": get_message("store", "unavailable")},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", response_model=StatusResponse, tags=["Health"])
async def health():
    return StatusResponse(
        status="ok",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
