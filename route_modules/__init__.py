"""
Routes package - organized API routes.

This package provides modular route definitions.
Import the combined router for use in main.py.
"""
from fastapi import APIRouter

from .auth_routes import router as auth_router
from .workout_routes import router as workout_router
from .trainer_request_routes import router as trainer_request_router
from .trainer_routes import router as trainer_router
from .assigned_routes import router as assigned_router
from .progress_routes import router as progress_router
from .template_routes import router as template_router

# Combined router that includes all sub-routers
combined_router = APIRouter()
combined_router.include_router(auth_router, tags=["auth"])
combined_router.include_router(workout_router, tags=["workouts"])
combined_router.include_router(trainer_request_router, tags=["trainer-requests"])
combined_router.include_router(trainer_router, tags=["trainer"])
combined_router.include_router(assigned_router, tags=["assigned"])
combined_router.include_router(progress_router, tags=["progress"])
combined_router.include_router(template_router, tags=["templates"])

__all__ = [
    'combined_router', 'auth_router', 'workout_router', 'trainer_request_router',
    'trainer_router', 'assigned_router', 'progress_router', 'template_router'
]
