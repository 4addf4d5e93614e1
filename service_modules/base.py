"""
Base service utilities and shared imports.
All services should import from here for common functionality.
"""
from fastapi import HTTPException
import logging
from datetime import date, datetime

from database import get_db_session, Base, engine
from models_orm import (
    UserORM, TrainerClientRequestORM, WorkoutTemplateORM, WorkoutTemplateExerciseORM,
    TrainerAssignedWorkoutORM, WorkoutORM, WorkoutSetORM, ProgressLogORM,
    ROLE_USER, ROLE_TRAINER, STATUS_PENDING, STATUS_ACCEPTED, STATUS_DECLINED
)

# Re-export for convenience
__all__ = [
    'HTTPException', 'logging', 'date', 'datetime',
    'get_db_session', 'Base', 'engine',
    'UserORM', 'TrainerClientRequestORM', 'WorkoutTemplateORM', 'WorkoutTemplateExerciseORM',
    'TrainerAssignedWorkoutORM', 'WorkoutORM', 'WorkoutSetORM', 'ProgressLogORM',
    'ROLE_USER', 'ROLE_TRAINER', 'STATUS_PENDING', 'STATUS_ACCEPTED', 'STATUS_DECLINED'
]

logger = logging.getLogger("fitness_tracker")
