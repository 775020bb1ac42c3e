#!/usr/bin/env python3
"""
TalentSift Web API - FastAPI Application

Upload a candidate file, describe who you want to hire, and stream the
selection progress back as Server-Sent Events.

Usage:
    python main.py serve

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import TalentSiftError
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    upload_router,
    process_router,
    export_router,
    session_router
)
from .routers.upload import add_rate_limit_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.ctx.session_store
    store.start_sweeper()
    try:
        yield
    finally:
        store.stop_sweeper()


def create_app(ctx: Optional[AppContext] = None) -> FastAPI:
    """Create the FastAPI app around an application context.

    Builds the context from ``config.yaml`` when none is given.
    """
    if ctx is None:
        ctx = AppContext.build(load_config())

    app = FastAPI(
        title="TalentSift API",
        description="AI-assisted candidate shortlisting",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.ctx = ctx

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(TalentSiftError, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(upload_router)
    app.include_router(process_router)
    app.include_router(export_router)
    app.include_router(session_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "talentsift-web", "sessions": len(app.state.ctx.session_store)}

    return app


def main():
    """Run the web server."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    config = load_config()

    logger.info(f"Starting TalentSift Web Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        create_app(AppContext.build(config)),
        host=config.web.host,
        port=config.web.port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
