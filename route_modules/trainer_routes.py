"""
Trainer Routes - client roster, access requests, progress review and assignments.
"""
from typing import List
from fastapi import APIRouter, Depends
from auth import get_current_user, require_trainer
from models import AssignTemplateRequest, TrainerFeedbackRequest, TrainerRequestOut
from models_orm import UserORM
from service_modules.trainer_request_service import TrainerRequestService, get_trainer_request_service
from service_modules.assignment_service import AssignmentService, get_assignment_service
from service_modules.progress_service import ProgressService, get_progress_service
from service_modules.template_service import TemplateService, get_template_service

router = APIRouter()


@router.get("/api/trainer/clients")
async def get_trainer_clients(
    service: TrainerRequestService = Depends(get_trainer_request_service),
    current_user: UserORM = Depends(get_current_user)
):
    """All clients with this trainer's current request status."""
    require_trainer(current_user)
    return service.clients_overview(current_user.id)


@router.post("/api/trainer/clients/{client_id}/request")
async def request_access(
    client_id: int,
    service: TrainerRequestService = Depends(get_trainer_request_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Ask a client for access to their workouts and progress."""
    require_trainer(current_user)
    return service.request_access(current_user.id, client_id)


@router.get("/api/trainer/clients/{client_id}/requests", response_model=List[TrainerRequestOut])
async def get_request_history(
    client_id: int,
    service: TrainerRequestService = Depends(get_trainer_request_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Every request this trainer sent to a client, newest first."""
    require_trainer(current_user)
    return service.history(current_user.id, client_id)


@router.get("/api/trainer/clients/{client_id}/progress")
async def get_client_progress(
    client_id: int,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    require_trainer(current_user)
    return service.client_progress(current_user.id, client_id)


@router.post("/api/trainer/progress/{log_id}/feedback")
async def add_trainer_feedback(
    log_id: int,
    payload: TrainerFeedbackRequest,
    service: ProgressService = Depends(get_progress_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Leave feedback on a client's progress entry."""
    require_trainer(current_user)
    return service.add_feedback(current_user.id, log_id, payload.feedback)


@router.get("/api/trainer/assign")
async def get_assign_options(
    request_service: TrainerRequestService = Depends(get_trainer_request_service),
    template_service: TemplateService = Depends(get_template_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Clients the trainer may assign to, and the template catalog."""
    require_trainer(current_user)
    return {
        "clients": request_service.accepted_clients(current_user.id),
        "templates": template_service.get_templates()
    }


@router.post("/api/trainer/assign")
async def assign_template(
    assignment: AssignTemplateRequest,
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Assign a template to a client."""
    require_trainer(current_user)
    return service.assign(current_user.id, assignment.client_id, assignment.template_id)


@router.get("/api/trainer/assignments")
async def get_trainer_assignments(
    service: AssignmentService = Depends(get_assignment_service),
    current_user: UserORM = Depends(get_current_user)
):
    require_trainer(current_user)
    return service.assignments_by_trainer(current_user.id)
