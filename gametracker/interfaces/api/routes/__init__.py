from fastapi import FastAPI

from .admin import router as admin_router
from .auth import router as auth_router
from .games import router as games_router
from .library import router as library_router
from .sharing import router as sharing_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(games_router)
    app.include_router(library_router)
    app.include_router(users_router)
    app.include_router(sharing_router)
    app.include_router(admin_router)
