#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from fastapi import Request

from core.app_context import AppContext


def get_context(request: Request) -> AppContext:
    """
    FastAPI dependency returning the application context built at startup.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_context)):
            ...
    """
    return request.app.state.ctx
