#!/usr/bin/env python3
"""
TalentMatch API - FastAPI Application

Serves match queries and the talent/job mutations that feed the
publish and notify queues.

Usage:
    uv run python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import sys
import logging
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from fastapi import FastAPI, HTTPException

from core.exceptions import RecordNotFoundError
from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    record_not_found_handler,
    http_exception_handler,
    general_exception_handler
)
from .models.responses import HealthResponse
from .routers import (
    matching_router,
    talents_router,
    jobs_router,
    queues_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TalentMatch API",
    description="Talent/job matching and notification API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(RecordNotFoundError, record_not_found_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(matching_router)
app.include_router(talents_router)
app.include_router(jobs_router)
app.include_router(queues_router)


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", service="talentmatch-web")


def main():
    """Run the web server."""
    import uvicorn

    from database.init_db import init_db
    from .dependencies import get_db_manager

    config = get_config()
    init_db(bind=get_db_manager().engine)

    logger.info(f"Starting TalentMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
