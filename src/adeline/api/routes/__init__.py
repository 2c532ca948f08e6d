"""API routes."""

from .genui import router as genui_router

__all__ = [
    "genui_router",
]
