"""
Progress Routes - API endpoints for the caller's progress entries.
"""
from typing import List
from fastapi import APIRouter, Depends
from auth import get_current_user
from models import ProgressLogCreate, ProgressLogUpdate, ProgressLogOut
from models_orm import UserORM
from service_modules.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.get("/api/progress", response_model=List[ProgressLogOut])
async def get_progress_logs(
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.get_logs(current_user.id)


@router.post("/api/progress", response_model=ProgressLogOut)
async def create_progress_log(
    log: ProgressLogCreate,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Record a new progress entry."""
    return service.create_log(current_user.id, log.model_dump())


@router.get("/api/progress/{log_id}", response_model=ProgressLogOut)
async def get_progress_log(
    log_id: int,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.get_log(log_id, current_user.id)


@router.put("/api/progress/{log_id}", response_model=ProgressLogOut)
async def update_progress_log(
    log_id: int,
    log: ProgressLogUpdate,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Edit date, weight, body fat and notes of an entry."""
    return service.update_log(log_id, current_user.id, log.model_dump())


@router.delete("/api/progress/{log_id}")
async def delete_progress_log(
    log_id: int,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.delete_log(log_id, current_user.id)
