"""API routes."""

from fastapi import APIRouter

from filmoteca.api.routes import auth, filmografias, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(filmografias.router, tags=["filmografias"])
