"""
Progress Service - body progress entries and trainer feedback on them.
"""
from .base import (
    HTTPException, logging,
    get_db_session, UserORM, ProgressLogORM, ROLE_USER
)
from .trainer_request_service import trainer_request_service

logger = logging.getLogger("fitness_tracker")


def _log_to_dict(p: ProgressLogORM) -> dict:
    return {
        "id": p.id,
        "user_id": p.user_id,
        "entry_date": p.entry_date.isoformat() if p.entry_date else None,
        "weight": p.weight,
        "body_fat_percent": p.body_fat_percent,
        "notes": p.notes,
        "trainer_feedback": p.trainer_feedback
    }


class ProgressService:
    """Service for progress logs, scoped to their owner."""

    def get_logs(self, user_id: int) -> list:
        """A user's progress entries, oldest first."""
        db = get_db_session()
        try:
            logs = db.query(ProgressLogORM).filter(
                ProgressLogORM.user_id == user_id
            ).order_by(ProgressLogORM.entry_date, ProgressLogORM.id).all()
            return [_log_to_dict(p) for p in logs]
        finally:
            db.close()

    def get_log(self, log_id: int, user_id: int) -> dict:
        db = get_db_session()
        try:
            log = db.query(ProgressLogORM).filter(
                ProgressLogORM.id == log_id,
                ProgressLogORM.user_id == user_id
            ).first()
            if not log:
                raise HTTPException(status_code=404, detail="Progress entry not found")
            return _log_to_dict(log)
        finally:
            db.close()

    def create_log(self, user_id: int, data: dict) -> dict:
        db = get_db_session()
        try:
            log = ProgressLogORM(
                user_id=user_id,
                entry_date=data["entry_date"],
                weight=data["weight"],
                body_fat_percent=data.get("body_fat_percent"),
                notes=data.get("notes")
            )
            db.add(log)
            db.commit()
            db.refresh(log)
            return _log_to_dict(log)
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to save progress entry for user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save progress entry: {str(e)}")
        finally:
            db.close()

    def update_log(self, log_id: int, user_id: int, data: dict) -> dict:
        """Update the user-editable fields; trainer feedback is left alone."""
        db = get_db_session()
        try:
            log = db.query(ProgressLogORM).filter(
                ProgressLogORM.id == log_id,
                ProgressLogORM.user_id == user_id
            ).first()
            if not log:
                raise HTTPException(status_code=404, detail="Progress entry not found")

            log.entry_date = data["entry_date"]
            log.weight = data["weight"]
            log.body_fat_percent = data.get("body_fat_percent")
            log.notes = data.get("notes")

            db.commit()
            db.refresh(log)
            return _log_to_dict(log)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to update progress entry {log_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update progress entry: {str(e)}")
        finally:
            db.close()

    def delete_log(self, log_id: int, user_id: int) -> dict:
        db = get_db_session()
        try:
            log = db.query(ProgressLogORM).filter(
                ProgressLogORM.id == log_id,
                ProgressLogORM.user_id == user_id
            ).first()
            if not log:
                raise HTTPException(status_code=404, detail="Progress entry not found")

            db.delete(log)
            db.commit()
            return {"status": "success", "message": "Progress entry deleted"}
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to delete progress entry {log_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete progress entry: {str(e)}")
        finally:
            db.close()

    # --- TRAINER SIDE ---

    def client_progress(self, trainer_id: int, client_id: int) -> dict:
        """A client's progress as seen by a trainer with access."""
        db = get_db_session()
        try:
            client = db.query(UserORM).filter(
                UserORM.id == client_id,
                UserORM.role == ROLE_USER
            ).first()
            if not client:
                raise HTTPException(status_code=404, detail="Client not found")

            if not trainer_request_service.has_access(trainer_id, client_id, db_session=db):
                raise HTTPException(status_code=403, detail="You do not have access to this client.")

            logs = db.query(ProgressLogORM).filter(
                ProgressLogORM.user_id == client_id
            ).order_by(ProgressLogORM.entry_date, ProgressLogORM.id).all()

            return {
                "client_id": client.id,
                "client_name": client.name,
                "logs": [_log_to_dict(p) for p in logs]
            }
        finally:
            db.close()

    def add_feedback(self, trainer_id: int, log_id: int, feedback: str) -> dict:
        """Attach trainer feedback to a client's progress entry."""
        db = get_db_session()
        try:
            log = db.query(ProgressLogORM).filter(ProgressLogORM.id == log_id).first()
            if not log:
                raise HTTPException(status_code=404, detail="Progress entry not found")

            if not trainer_request_service.has_access(trainer_id, log.user_id, db_session=db):
                logger.warning(f"Trainer {trainer_id} tried to leave feedback on entry {log_id} without access")
                raise HTTPException(status_code=403, detail="You do not have access to this client.")

            log.trainer_feedback = feedback
            db.commit()
            db.refresh(log)
            return _log_to_dict(log)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to save feedback on entry {log_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save feedback: {str(e)}")
        finally:
            db.close()


# Singleton instance
progress_service = ProgressService()

def get_progress_service() -> ProgressService:
    """Dependency injection helper."""
    return progress_service
