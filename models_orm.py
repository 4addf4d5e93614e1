from sqlalchemy import Column, Integer, String, Boolean, Float, ForeignKey, Date, DateTime, Index
from sqlalchemy.orm import relationship
from database import Base
from datetime import datetime, date

# --- ROLES & STATUSES ---

ROLE_USER = "User"
ROLE_TRAINER = "Trainer"

STATUS_PENDING = "Pending"
STATUS_ACCEPTED = "Accepted"
STATUS_DECLINED = "Declined"

# --- CORE MODELS ---

class UserORM(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), default=ROLE_USER, index=True)  # User, Trainer
    created_at = Column(DateTime, default=datetime.utcnow)

    # Owned data goes with the account
    workouts = relationship("WorkoutORM", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    progress_logs = relationship("ProgressLogORM", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_trainer(self):
        return self.role == ROLE_TRAINER


# --- TRAINER <-> CLIENT LEDGER ---

class TrainerClientRequestORM(Base):
    """One row per access request; history is kept, the newest row is the current state."""
    __tablename__ = "trainer_client_requests"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # RESTRICT: requests are audit history, users referenced here cannot be silently dropped
    trainer_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)  # Pending, Accepted, Declined
    sent_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    responded_at = Column(DateTime, nullable=True)

    trainer = relationship("UserORM", foreign_keys=[trainer_id])
    client = relationship("UserORM", foreign_keys=[client_id])

    __table_args__ = (
        Index("idx_trainer_client_pair", "trainer_id", "client_id", "sent_date"),
    )


# --- TEMPLATE CATALOG (Global) ---

class WorkoutTemplateORM(Base):
    __tablename__ = "workout_templates"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=True)  # Legs, Back, Biceps...

    exercises = relationship(
        "WorkoutTemplateExerciseORM",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutTemplateExerciseORM.id"
    )


class WorkoutTemplateExerciseORM(Base):
    __tablename__ = "workout_template_exercises"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    template_id = Column(Integer, ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_name = Column(String, nullable=False)
    sets = Column(Integer, default=0)
    reps = Column(Integer, default=0)
    suggested_weight = Column(Float, default=0.0)

    template = relationship("WorkoutTemplateORM", back_populates="exercises")


class TrainerAssignedWorkoutORM(Base):
    __tablename__ = "trainer_assigned_workouts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    trainer_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    is_completed = Column(Boolean, default=False, index=True)
    completed_date = Column(DateTime, nullable=True)

    trainer = relationship("UserORM", foreign_keys=[trainer_id])
    client = relationship("UserORM", foreign_keys=[client_id])
    template = relationship("WorkoutTemplateORM")


# --- WORKOUT LOG ---

class WorkoutORM(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today, index=True)
    workout_style = Column(String(40), nullable=False)  # "Leg Day", "Upper Body"...
    duration_minutes = Column(Integer, nullable=True)
    total_sets = Column(Integer, nullable=True)
    total_reps = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)  # optional aggregate
    notes = Column(String(250), nullable=True)

    user = relationship("UserORM", back_populates="workouts")
    sets = relationship(
        "WorkoutSetORM",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutSetORM.id"
    )


class WorkoutSetORM(Base):
    __tablename__ = "workout_sets"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_name = Column(String, nullable=False)
    set_number = Column(Integer, nullable=False)  # 1-based per exercise
    reps = Column(Integer, default=0)
    weight = Column(Float, default=0.0)

    workout = relationship("WorkoutORM", back_populates="sets")


# --- BODY PROGRESS ---

class ProgressLogORM(Base):
    __tablename__ = "progress_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, default=date.today, index=True)
    weight = Column(Float, nullable=False)  # lbs
    body_fat_percent = Column(Float, nullable=True)
    notes = Column(String(250), nullable=True)
    trainer_feedback = Column(String(250), nullable=True)

    user = relationship("UserORM", back_populates="progress_logs")
