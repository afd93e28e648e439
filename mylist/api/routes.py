"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /api/mylist             → The caller's list (add, list, remove)

Usage:
======
    from mylist.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from mylist.api.handlers import health_handler, mylist_handler


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # My List endpoints
    app.include_router(
        mylist_handler.router,
        prefix="/api/mylist",
        tags=["My List"],
    )
