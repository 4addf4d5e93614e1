"""
Assigned Routes - the client's side of trainer assignments.
"""
from fastapi import APIRouter, Depends
from auth import get_current_user, require_client
from models import CompleteAssignmentRequest, WorkoutOut
from models_orm import UserORM
from service_modules.assignment_service import AssignmentService, get_assignment_service

router = APIRouter()


@router.get("/api/assigned")
async def get_assigned(
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Workouts assigned to the current client, newest first."""
    require_client(current_user)
    return service.assigned_for(current_user.id)


@router.get("/api/assigned/{assigned_id}")
async def get_assigned_entry(
    assigned_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    """One assignment with the exercises to log."""
    require_client(current_user)
    return service.assigned_entry(assigned_id, current_user.id)


@router.get("/api/assigned/{assigned_id}/prefill")
async def get_assigned_prefill(
    assigned_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    require_client(current_user)
    return service.prefill(assigned_id, current_user.id)


@router.post("/api/assigned/{assigned_id}/complete", response_model=WorkoutOut)
async def complete_assigned(
    assigned_id: int,
    payload: CompleteAssignmentRequest,
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Log an assigned workout with the per-set values entered."""
    require_client(current_user)
    per_set_inputs = {
        (s.exercise_name, s.set_number): (s.reps, s.weight)
        for s in payload.sets
    }
    return service.complete(assigned_id, current_user.id, per_set_inputs, payload.notes)
