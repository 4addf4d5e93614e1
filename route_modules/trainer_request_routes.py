"""
Trainer Request Routes - the client's side of trainer access requests.
"""
from typing import List
from fastapi import APIRouter, Depends
from auth import get_current_user, require_client
from models import TrainerRequestRespond, TrainerRequestOut, PendingRequestOut
from models_orm import UserORM
from service_modules.trainer_request_service import TrainerRequestService, get_trainer_request_service

router = APIRouter()


@router.get("/api/trainer-requests/mine", response_model=List[PendingRequestOut])
async def get_my_requests(
    service: TrainerRequestService = Depends(get_trainer_request_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Pending trainer requests addressed to the current client."""
    require_client(current_user)
    return service.pending_for(current_user.id)


@router.post("/api/trainer-requests/respond", response_model=TrainerRequestOut)
async def respond_to_request(
    response: TrainerRequestRespond,
    service: TrainerRequestService = Depends(get_trainer_request_service),
    current_user: UserORM = Depends(get_current_user)
):
    """Accept or decline a pending trainer request."""
    require_client(current_user)
    return service.respond(current_user.id, response.request_id, response.decision)
