"""
Workout Routes - API endpoints for the caller's own workouts.
"""
from typing import List
from fastapi import APIRouter, Depends
from auth import get_current_user
from models import WorkoutCreate, WorkoutUpdate, WorkoutOut
from models_orm import UserORM
from service_modules.workout_service import WorkoutService, get_workout_service

router = APIRouter()


@router.get("/api/workouts", response_model=List[WorkoutOut])
async def get_workouts(
    service: WorkoutService = Depends(get_workout_service),
    current_user: UserORM = Depends(get_current_user)
):
    """List the current user's workouts, most recent first."""
    return service.get_workouts(current_user.id)


@router.post("/api/workouts", response_model=WorkoutOut)
async def create_workout(
    workout: WorkoutCreate,
    service: WorkoutService = Depends(get_workout_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Log a new workout for today."""
    return service.create_workout(workout.model_dump(), current_user.id)


@router.get("/api/workouts/{workout_id}", response_model=WorkoutOut)
async def get_workout(
    workout_id: int,
    service: WorkoutService = Depends(get_workout_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.get_workout(workout_id, current_user.id)


@router.put("/api/workouts/{workout_id}", response_model=WorkoutOut)
async def update_workout(
    workout_id: int,
    workout: WorkoutUpdate,
    service: WorkoutService = Depends(get_workout_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Update an existing workout."""
    return service.update_workout(workout_id, workout.model_dump(), current_user.id)


@router.delete("/api/workouts/{workout_id}")
async def delete_workout(
    workout_id: int,
    service: WorkoutService = Depends(get_workout_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Delete a workout."""
    return service.delete_workout(workout_id, current_user.id)
