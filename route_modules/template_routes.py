"""
Template Routes - read access to the global template catalog.
"""
from typing import List
from fastapi import APIRouter, Depends
from auth import get_current_user
from models import WorkoutTemplateOut
from models_orm import UserORM
from service_modules.template_service import TemplateService, get_template_service

router = APIRouter()


@router.get("/api/templates", response_model=List[WorkoutTemplateOut])
async def get_templates(
    service: TemplateService = Depends(get_template_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.get_templates()


@router.get("/api/templates/{template_id}", response_model=WorkoutTemplateOut)
async def get_template(
    template_id: int,
    service: TemplateService = Depends(get_template_service),
    current_user: UserORM = Depends(get_current_user)
):
    return service.get_template(template_id)
