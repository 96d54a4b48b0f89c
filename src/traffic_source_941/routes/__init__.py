"""
Detection API routes.

Thin FastAPI adapter so a UI (or anything else speaking JSON) can call the
detector over HTTP.
"""

from .detect import create_detection_router

__all__ = ["create_detection_router"]
