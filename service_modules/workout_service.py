"""
Workout Service - handles workout CRUD operations for the owning user.
"""
from .base import (
    HTTPException, logging, date,
    get_db_session, WorkoutORM
)

logger = logging.getLogger("fitness_tracker")


def workout_to_dict(w: WorkoutORM, include_sets: bool = True) -> dict:
    data = {
        "id": w.id,
        "user_id": w.user_id,
        "date": w.date.isoformat() if w.date else None,
        "workout_style": w.workout_style,
        "duration_minutes": w.duration_minutes,
        "total_sets": w.total_sets,
        "total_reps": w.total_reps,
        "weight": w.weight,
        "notes": w.notes
    }
    if include_sets:
        data["sets"] = [{
            "id": s.id,
            "exercise_name": s.exercise_name,
            "set_number": s.set_number,
            "reps": s.reps,
            "weight": s.weight
        } for s in w.sets]
    return data


class WorkoutService:
    """Service for managing a user's logged workouts."""

    def _get_owned(self, db, workout_id: int, user_id: int) -> WorkoutORM:
        workout = db.query(WorkoutORM).filter(
            WorkoutORM.id == workout_id,
            WorkoutORM.user_id == user_id
        ).first()
        if not workout:
            raise HTTPException(status_code=404, detail="Workout not found")
        return workout

    def get_workouts(self, user_id: int) -> list:
        """All workouts of a user, most recent first."""
        db = get_db_session()
        try:
            workouts = db.query(WorkoutORM).filter(
                WorkoutORM.user_id == user_id
            ).order_by(WorkoutORM.date.desc(), WorkoutORM.id.desc()).all()
            return [workout_to_dict(w, include_sets=False) for w in workouts]
        finally:
            db.close()

    def get_workout(self, workout_id: int, user_id: int) -> dict:
        db = get_db_session()
        try:
            return workout_to_dict(self._get_owned(db, workout_id, user_id))
        finally:
            db.close()

    def create_workout(self, workout: dict, user_id: int) -> dict:
        """Log a new workout dated today."""
        db = get_db_session()
        try:
            db_workout = WorkoutORM(
                user_id=user_id,
                date=date.today(),
                workout_style=workout["workout_style"],
                duration_minutes=workout.get("duration_minutes"),
                total_sets=workout.get("total_sets"),
                total_reps=workout.get("total_reps"),
                notes=workout.get("notes")
            )
            db.add(db_workout)
            db.commit()
            db.refresh(db_workout)
            return workout_to_dict(db_workout)
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create workout for user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create workout: {str(e)}")
        finally:
            db.close()

    def update_workout(self, workout_id: int, updates: dict, user_id: int) -> dict:
        db = get_db_session()
        try:
            workout = self._get_owned(db, workout_id, user_id)

            workout.workout_style = updates["workout_style"]
            workout.duration_minutes = updates.get("duration_minutes")
            workout.total_sets = updates.get("total_sets")
            workout.total_reps = updates.get("total_reps")
            workout.notes = updates.get("notes")

            db.commit()
            db.refresh(workout)
            return workout_to_dict(workout)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to update workout {workout_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update workout: {str(e)}")
        finally:
            db.close()

    def delete_workout(self, workout_id: int, user_id: int) -> dict:
        """Delete a workout and its set rows."""
        db = get_db_session()
        try:
            workout = self._get_owned(db, workout_id, user_id)
            db.delete(workout)
            db.commit()
            return {"status": "success", "message": "Workout deleted"}
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete workout: {str(e)}")
        finally:
            db.close()


# Singleton instance for easy import
workout_service = WorkoutService()

def get_workout_service() -> WorkoutService:
    """Dependency injection helper."""
    return workout_service
