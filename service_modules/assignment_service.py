"""
Assignment Service - trainer template assignments and their completion.

Completing an assignment expands the template into one WorkoutSet row per
(exercise, set index) and logs it as a regular workout for the client.
"""
import math

from .base import (
    HTTPException, logging, date, datetime,
    get_db_session, WorkoutTemplateORM, TrainerAssignedWorkoutORM,
    WorkoutORM, WorkoutSetORM
)
from .trainer_request_service import trainer_request_service
from .workout_service import workout_to_dict
from data import DEFAULT_WORKOUT_STYLE

logger = logging.getLogger("fitness_tracker")

WORKOUT_STYLE_MAX_LENGTH = 40

# Reps are stored as a 32-bit signed integer
REPS_MIN = -2 ** 31
REPS_MAX = 2 ** 31 - 1


def parse_reps(value) -> int:
    """Whole number of reps, 0 for anything missing, unparsable or out of range."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        reps = value
    else:
        try:
            reps = int(str(value).strip())
        except (TypeError, ValueError):
            return 0
    return reps if REPS_MIN <= reps <= REPS_MAX else 0


def parse_weight(value) -> float:
    """Weight as a float, 0 for anything missing, unparsable or non-finite."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        weight = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    return weight if math.isfinite(weight) else 0.0


def expand_template(exercises, per_set_inputs: dict) -> list:
    """
    Turn template exercises into per-set rows.

    ``per_set_inputs`` maps ``(exercise_name, set_number)`` to a
    ``(reps, weight)`` pair of raw values. Missing keys and bad values log as 0;
    exercises with no sets produce nothing.
    """
    rows = []
    for ex in exercises:
        for set_number in range(1, (ex.sets or 0) + 1):
            raw_reps, raw_weight = per_set_inputs.get((ex.exercise_name, set_number), (None, None))
            rows.append({
                "exercise_name": ex.exercise_name,
                "set_number": set_number,
                "reps": parse_reps(raw_reps),
                "weight": parse_weight(raw_weight)
            })
    return rows


def _assignment_to_dict(a: TrainerAssignedWorkoutORM, include_exercises: bool = False) -> dict:
    data = {
        "id": a.id,
        "trainer_id": a.trainer_id,
        "trainer_name": a.trainer.name if a.trainer else None,
        "client_id": a.client_id,
        "client_name": a.client.name if a.client else None,
        "template_id": a.template_id,
        "template_name": a.template.name if a.template else None,
        "assigned_date": a.assigned_date.isoformat() if a.assigned_date else None,
        "is_completed": bool(a.is_completed),
        "completed_date": a.completed_date.isoformat() if a.completed_date else None
    }
    if include_exercises:
        data["exercises"] = [{
            "id": ex.id,
            "exercise_name": ex.exercise_name,
            "sets": ex.sets,
            "reps": ex.reps,
            "suggested_weight": ex.suggested_weight
        } for ex in (a.template.exercises if a.template else [])]
    return data


class AssignmentService:
    """Service for assigning templates to clients and logging them."""

    def assign(self, trainer_id: int, client_id: int, template_id: int) -> dict:
        """Assign a template to a client the trainer has access to."""
        db = get_db_session()
        try:
            if not trainer_request_service.has_access(trainer_id, client_id, db_session=db):
                logger.warning(f"Trainer {trainer_id} tried to assign to client {client_id} without access")
                raise HTTPException(status_code=403, detail="You do not have access to this client.")

            template = db.query(WorkoutTemplateORM).filter(WorkoutTemplateORM.id == template_id).first()
            if not template:
                raise HTTPException(status_code=404, detail="Template not found")

            assigned = TrainerAssignedWorkoutORM(
                trainer_id=trainer_id,
                client_id=client_id,
                template_id=template_id,
                assigned_date=datetime.utcnow(),
                is_completed=False
            )
            db.add(assigned)
            db.commit()
            db.refresh(assigned)

            logger.info(f"Trainer {trainer_id} assigned template {template_id} to client {client_id}")
            return _assignment_to_dict(assigned)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to assign template {template_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to assign template: {str(e)}")
        finally:
            db.close()

    def complete(self, assigned_id: int, client_id: int, per_set_inputs: dict, notes: str = None) -> dict:
        """
        Log an assignment as a workout.

        The workout, all of its set rows and the completion flag are written in
        one transaction; on any failure nothing is kept.
        """
        db = get_db_session()
        try:
            assigned = db.query(TrainerAssignedWorkoutORM).filter(
                TrainerAssignedWorkoutORM.id == assigned_id,
                TrainerAssignedWorkoutORM.client_id == client_id
            ).first()

            if not assigned:
                raise HTTPException(status_code=404, detail="Assigned workout not found.")

            if assigned.is_completed:
                raise HTTPException(status_code=409, detail="Assigned workout already completed.")

            template = assigned.template
            exercises = template.exercises if template else []
            style = template.name if template else DEFAULT_WORKOUT_STYLE

            workout = WorkoutORM(
                user_id=client_id,
                date=date.today(),
                workout_style=style[:WORKOUT_STYLE_MAX_LENGTH],
                total_sets=0,
                total_reps=0,
                notes=notes
            )
            db.add(workout)
            db.flush()  # assigns workout.id

            rows = expand_template(exercises, per_set_inputs or {})
            for row in rows:
                db.add(WorkoutSetORM(workout_id=workout.id, **row))

            workout.total_sets = len(rows)
            workout.total_reps = sum(row["reps"] for row in rows)

            assigned.is_completed = True
            assigned.completed_date = datetime.utcnow()

            db.commit()
            db.refresh(workout)

            logger.info(
                f"Client {client_id} completed assignment {assigned_id} "
                f"as workout {workout.id} ({workout.total_sets} sets, {workout.total_reps} reps)"
            )
            return workout_to_dict(workout)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to complete assignment {assigned_id}, rolled back: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save workout: {str(e)}")
        finally:
            db.close()

    def assigned_for(self, client_id: int) -> list:
        """A client's assignments, newest first."""
        db = get_db_session()
        try:
            assigned = db.query(TrainerAssignedWorkoutORM).filter(
                TrainerAssignedWorkoutORM.client_id == client_id
            ).order_by(
                TrainerAssignedWorkoutORM.assigned_date.desc(),
                TrainerAssignedWorkoutORM.id.desc()
            ).all()
            return [_assignment_to_dict(a) for a in assigned]
        finally:
            db.close()

    def assigned_entry(self, assigned_id: int, client_id: int) -> dict:
        """One assignment with its template exercises, for the logging form."""
        db = get_db_session()
        try:
            assigned = db.query(TrainerAssignedWorkoutORM).filter(
                TrainerAssignedWorkoutORM.id == assigned_id,
                TrainerAssignedWorkoutORM.client_id == client_id
            ).first()
            if not assigned:
                raise HTTPException(status_code=404, detail="Assigned workout not found.")
            return _assignment_to_dict(assigned, include_exercises=True)
        finally:
            db.close()

    def prefill(self, assigned_id: int, client_id: int) -> dict:
        """Workout draft built from the assigned template's targets."""
        db = get_db_session()
        try:
            assigned = db.query(TrainerAssignedWorkoutORM).filter(
                TrainerAssignedWorkoutORM.id == assigned_id,
                TrainerAssignedWorkoutORM.client_id == client_id
            ).first()
            if not assigned:
                raise HTTPException(status_code=404, detail="Assigned workout not found.")

            template = assigned.template
            exercises = template.exercises if template else []
            name = template.name if template else DEFAULT_WORKOUT_STYLE

            return {
                "workout_style": name[:WORKOUT_STYLE_MAX_LENGTH],
                "total_sets": sum(ex.sets or 0 for ex in exercises),
                "total_reps": sum((ex.sets or 0) * (ex.reps or 0) for ex in exercises),
                "notes": f"Trainer template used: {name}",
                "template_name": name
            }
        finally:
            db.close()

    def assignments_by_trainer(self, trainer_id: int) -> list:
        """Everything a trainer has assigned, newest first."""
        db = get_db_session()
        try:
            assigned = db.query(TrainerAssignedWorkoutORM).filter(
                TrainerAssignedWorkoutORM.trainer_id == trainer_id
            ).order_by(
                TrainerAssignedWorkoutORM.assigned_date.desc(),
                TrainerAssignedWorkoutORM.id.desc()
            ).all()
            return [_assignment_to_dict(a) for a in assigned]
        finally:
            db.close()


# Singleton instance
assignment_service = AssignmentService()

def get_assignment_service() -> AssignmentService:
    """Dependency injection helper."""
    return assignment_service
