"""API routes package."""

from familydrive.routes.basic_routes import router as basic_router
from familydrive.routes.user_routes import router as user_router
from familydrive.routes.file_routes import router as file_router

__all__ = ["basic_router", "user_router", "file_router"]
