"""
Services package - organized service modules.
"""
from .base import *
from .auth_service import AuthService, auth_service, get_auth_service
from .trainer_request_service import TrainerRequestService, trainer_request_service, get_trainer_request_service
from .workout_service import WorkoutService, workout_service, get_workout_service
from .assignment_service import AssignmentService, assignment_service, get_assignment_service
from .progress_service import ProgressService, progress_service, get_progress_service
from .template_service import TemplateService, template_service, get_template_service

__all__ = [
    'AuthService',
    'auth_service',
    'get_auth_service',
    'TrainerRequestService',
    'trainer_request_service',
    'get_trainer_request_service',
    'WorkoutService',
    'workout_service',
    'get_workout_service',
    'AssignmentService',
    'assignment_service',
    'get_assignment_service',
    'ProgressService',
    'progress_service',
    'get_progress_service',
    'TemplateService',
    'template_service',
    'get_template_service',
]
