"""FastAPI application for the document classifier service."""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Union

import magic
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded  # type: ignore[import-not-found]

from doc_classifier.config import get_settings
from doc_classifier.middleware.logging import RequestLoggingMiddleware, configure_logging
from doc_classifier.middleware.rate_limit import get_limiter, rate_limit_exceeded_handler
from doc_classifier.routers import classification
from doc_classifier.services.document_classifier import classify_document

# Application metadata
VERSION = "1.0.0"
COMMIT_HASH = "development"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan event handler for startup and shutdown."""
    # Raises ValidationError on bad environment values
    settings = get_settings()
    configure_logging(settings.log_level_value)

    logger.info(f"Starting Document Classifier API v{VERSION}")
    logger.info(f"Max upload size: {settings.max_upload_size_mb}MB")

    yield

    logger.info("Shutting down Document Classifier API")


app = FastAPI(
    title="Document Classifier API",
    description="Offline rule-based classification of RFQs, purchase orders, quotations and invoices",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state (required by slowapi)
app.state.limiter = get_limiter()
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to specific domains
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=None)
async def health_check() -> Union[Dict[str, Any], Response]:
    """
    Health check endpoint that verifies the classifier and libmagic work.

    Status Codes:
        200: All services healthy
        503: One or more services unavailable
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    services: Dict[str, str] = {}
    overall_healthy = True

    try:
        classify_document("health-check.txt", "Invoice No. 1 Amount Due: $1")
        services["classifier"] = "healthy"
    except Exception as e:
        services["classifier"] = f"unhealthy: {str(e)}"
        overall_healthy = False

    try:
        magic.from_buffer(b"health check", mime=True)
        services["magic"] = "healthy"
    except Exception as e:
        services["magic"] = f"unhealthy: {str(e)}"
        overall_healthy = False

    response_data: Dict[str, Any] = {
        "status": "healthy" if overall_healthy else "unhealthy",
        "timestamp": timestamp,
        "services": services,
    }

    if not overall_healthy:
        return Response(
            content=json.dumps(response_data),
            status_code=503,
            media_type="application/json",
        )

    return response_data


@app.get("/version")
async def version_info() -> Dict[str, str]:
    """Get version information for the API."""
    return {
        "version": VERSION,
        "commit_hash": COMMIT_HASH,
    }


app.include_router(classification.router)
