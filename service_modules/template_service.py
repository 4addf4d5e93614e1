"""
Template Service - the global workout template catalog.
"""
from .base import (
    HTTPException, logging,
    get_db_session, WorkoutTemplateORM, WorkoutTemplateExerciseORM
)
from data import DEFAULT_TEMPLATES

logger = logging.getLogger("fitness_tracker")


def template_to_dict(t: WorkoutTemplateORM) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "category": t.category,
        "exercises": [{
            "id": ex.id,
            "exercise_name": ex.exercise_name,
            "sets": ex.sets,
            "reps": ex.reps,
            "suggested_weight": ex.suggested_weight
        } for ex in t.exercises]
    }


class TemplateService:
    """Service for the shared template catalog."""

    def get_templates(self) -> list:
        db = get_db_session()
        try:
            templates = db.query(WorkoutTemplateORM).order_by(WorkoutTemplateORM.id).all()
            return [template_to_dict(t) for t in templates]
        finally:
            db.close()

    def get_template(self, template_id: int) -> dict:
        db = get_db_session()
        try:
            template = db.query(WorkoutTemplateORM).filter(WorkoutTemplateORM.id == template_id).first()
            if not template:
                raise HTTPException(status_code=404, detail="Template not found")
            return template_to_dict(template)
        finally:
            db.close()

    def create_template(self, name: str, exercises: list, category: str = None, template_id: int = None) -> dict:
        """Add a template; ``exercises`` is a list of dicts matching the exercise columns."""
        db = get_db_session()
        try:
            template = WorkoutTemplateORM(id=template_id, name=name, category=category)
            for ex in exercises:
                template.exercises.append(WorkoutTemplateExerciseORM(
                    id=ex.get("id"),
                    exercise_name=ex["exercise_name"],
                    sets=ex.get("sets", 0),
                    reps=ex.get("reps", 0),
                    suggested_weight=ex.get("suggested_weight", 0)
                ))
            db.add(template)
            db.commit()
            db.refresh(template)
            return template_to_dict(template)
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create template {name}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create template: {str(e)}")
        finally:
            db.close()

    def seed_defaults(self) -> int:
        """Insert the default catalog when no templates exist. Returns how many were added."""
        db = get_db_session()
        try:
            if db.query(WorkoutTemplateORM).first() is not None:
                return 0
        finally:
            db.close()

        for t in DEFAULT_TEMPLATES:
            self.create_template(t["name"], t["exercises"], category=t["category"], template_id=t["id"])
        logger.info(f"Seeded {len(DEFAULT_TEMPLATES)} default workout templates")
        return len(DEFAULT_TEMPLATES)


# Singleton instance
template_service = TemplateService()

def get_template_service() -> TemplateService:
    """Dependency injection helper."""
    return template_service
