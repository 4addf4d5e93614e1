from pydantic import BaseModel, Field
from typing import List, Optional, Any
from datetime import date as Date, datetime

# --- AUTH ---
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1)
    confirm_password: str
    role: str = "User"

class LoginRequest(BaseModel):
    email: str
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

# --- WORKOUT ---
class WorkoutSetOut(BaseModel):
    id: int
    exercise_name: str
    set_number: int
    reps: int
    weight: float

class WorkoutBase(BaseModel):
    workout_style: str = Field(..., min_length=1, max_length=40)
    duration_minutes: Optional[int] = Field(None, ge=0)
    total_sets: Optional[int] = Field(None, ge=0)
    total_reps: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=250)

class WorkoutCreate(WorkoutBase):
    pass

class WorkoutUpdate(WorkoutBase):
    pass

class WorkoutOut(WorkoutBase):
    id: int
    user_id: int
    date: Date
    weight: Optional[float] = None
    sets: List[WorkoutSetOut] = []

# --- TRAINER REQUESTS ---
class TrainerRequestRespond(BaseModel):
    request_id: int
    decision: str  # "accept" | "decline"

class TrainerRequestOut(BaseModel):
    id: int
    trainer_id: int
    client_id: int
    status: str
    sent_date: datetime
    responded_at: Optional[datetime] = None

# --- ASSIGNMENTS ---
class AssignTemplateRequest(BaseModel):
    client_id: int
    template_id: int

class SetInput(BaseModel):
    # Free-form on purpose: anything that does not parse is logged as 0
    exercise_name: str
    set_number: int
    reps: Optional[Any] = None
    weight: Optional[Any] = None

class CompleteAssignmentRequest(BaseModel):
    notes: Optional[str] = Field(None, max_length=250)
    sets: List[SetInput] = []

# --- PROGRESS ---
class ProgressLogBase(BaseModel):
    entry_date: Date = Field(default_factory=Date.today)
    weight: float = Field(..., ge=1, le=1000)
    body_fat_percent: Optional[float] = Field(None, ge=1, le=100)
    notes: Optional[str] = Field(None, max_length=250)

class ProgressLogCreate(ProgressLogBase):
    pass

class ProgressLogUpdate(ProgressLogBase):
    pass

class ProgressLogOut(ProgressLogBase):
    id: int
    user_id: int
    trainer_feedback: Optional[str] = None

class TrainerFeedbackRequest(BaseModel):
    feedback: str = Field(..., max_length=250)

# --- TEMPLATES ---
class TemplateExerciseOut(BaseModel):
    id: int
    exercise_name: str
    sets: int
    reps: int
    suggested_weight: float

class WorkoutTemplateOut(BaseModel):
    id: int
    name: str
    category: Optional[str] = None
    exercises: List[TemplateExerciseOut] = []

# --- SHARED ---
class PendingRequestOut(BaseModel):
    id: int
    trainer_id: int
    trainer_name: str
    sent_date: datetime
