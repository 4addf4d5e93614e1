import importlib
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from conftest import register
from database import get_db_session
from models_orm import UserORM, WorkoutORM, WorkoutSetORM, TrainerAssignedWorkoutORM
from service_modules.assignment_service import (
    assignment_service as service, expand_template, parse_reps, parse_weight
)
from service_modules.trainer_request_service import trainer_request_service
from service_modules.workout_service import workout_service

# The package re-exports the service instance under the module name
assignment_module = importlib.import_module("service_modules.assignment_service")


@pytest.fixture
def linked(trainer, client_user):
    request_id = trainer_request_service.request_access(trainer["id"], client_user["id"])["request_id"]
    trainer_request_service.respond(client_user["id"], request_id, "accept")
    return trainer, client_user


def _assign(linked, template):
    trainer, client_user = linked
    return service.assign(trainer["id"], client_user["id"], template["id"])


# --- EXPANSION ---

def test_expand_template_one_row_per_set():
    exercises = [
        SimpleNamespace(exercise_name="Squat", sets=3),
        SimpleNamespace(exercise_name="Curl", sets=2),
    ]

    rows = expand_template(exercises, {})

    assert [(r["exercise_name"], r["set_number"]) for r in rows] == [
        ("Squat", 1), ("Squat", 2), ("Squat", 3), ("Curl", 1), ("Curl", 2)
    ]


def test_expand_template_skips_exercises_without_sets():
    exercises = [
        SimpleNamespace(exercise_name="Plank", sets=0),
        SimpleNamespace(exercise_name="Broken", sets=-2),
        SimpleNamespace(exercise_name="Row", sets=1),
    ]

    rows = expand_template(exercises, {("Row", 1): ("12", "40.5")})

    assert rows == [{"exercise_name": "Row", "set_number": 1, "reps": 12, "weight": 40.5}]


@pytest.mark.parametrize("raw, expected", [
    ("10", 10), (" 8 ", 8), (7, 7), (None, 0), ("", 0), ("ten", 0), ("10.5", 0), (True, 0),
    ("2147483647", 2147483647), ("2147483648", 0), ("-2147483649", 0),
    ("99999999999999999999", 0), (10 ** 20, 0),
])
def test_parse_reps(raw, expected):
    assert parse_reps(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("50", 50.0), ("52.5", 52.5), (20, 20.0), (None, 0.0), ("heavy", 0.0), ("nan", 0.0), ("inf", 0.0),
])
def test_parse_weight(raw, expected):
    assert parse_weight(raw) == expected


# --- ASSIGN ---

def test_assign_requires_accepted_access(trainer, client_user, make_template):
    template = make_template("Leg Day", [("Squat", 3, 10)])
    trainer_request_service.request_access(trainer["id"], client_user["id"])

    with pytest.raises(HTTPException) as exc:
        service.assign(trainer["id"], client_user["id"], template["id"])
    assert exc.value.status_code == 403


def test_assign_unknown_template(linked):
    trainer, client_user = linked
    with pytest.raises(HTTPException) as exc:
        service.assign(trainer["id"], client_user["id"], 4242)
    assert exc.value.status_code == 404


def test_assign_creates_open_assignment(linked, make_template):
    template = make_template("Leg Day", [("Squat", 3, 10)])

    assigned = _assign(linked, template)

    assert assigned["is_completed"] is False
    assert assigned["completed_date"] is None
    assert assigned["template_name"] == "Leg Day"
    assert [a["id"] for a in service.assigned_for(linked[1]["id"])] == [assigned["id"]]
    assert [a["id"] for a in service.assignments_by_trainer(linked[0]["id"])] == [assigned["id"]]


# --- COMPLETE ---

def test_complete_expands_every_set(linked, make_template):
    template = make_template("Full Body", [("Squat", 3, 10), ("Curl", 2, 12)])
    assigned = _assign(linked, template)

    workout = service.complete(assigned["id"], linked[1]["id"], {}, "felt good")

    assert len(workout["sets"]) == 5
    assert workout["total_sets"] == 5
    assert workout["workout_style"] == "Full Body"
    assert workout["notes"] == "felt good"


def test_complete_without_input_logs_zeros(linked, make_template):
    template = make_template("Full Body", [("Squat", 3, 10), ("Curl", 2, 12)])
    assigned = _assign(linked, template)

    workout = service.complete(assigned["id"], linked[1]["id"], {})

    assert workout["total_reps"] == 0
    assert all(s["reps"] == 0 and s["weight"] == 0 for s in workout["sets"])


def test_complete_with_missing_set_defaults_to_zero(linked, make_template):
    template = make_template("Leg Day", [("Squat", 3, 10)])
    assigned = _assign(linked, template)
    inputs = {
        ("Squat", 1): ("10", "50"),
        ("Squat", 2): ("8", "55"),
    }

    workout = service.complete(assigned["id"], linked[1]["id"], inputs)

    sets = {s["set_number"]: s for s in workout["sets"]}
    assert len(sets) == 3
    assert (sets[1]["reps"], sets[1]["weight"]) == (10, 50.0)
    assert (sets[2]["reps"], sets[2]["weight"]) == (8, 55.0)
    assert (sets[3]["reps"], sets[3]["weight"]) == (0, 0.0)
    assert workout["total_reps"] == 18


def test_complete_with_oversized_reps_logs_zero(linked, make_template):
    template = make_template("Leg Day", [("Squat", 2, 10)])
    assigned = _assign(linked, template)
    inputs = {
        ("Squat", 1): ("99999999999999999999", "50"),
        ("Squat", 2): (10 ** 20, "55"),
    }

    workout = service.complete(assigned["id"], linked[1]["id"], inputs)

    assert [(s["reps"], s["weight"]) for s in workout["sets"]] == [(0, 50.0), (0, 55.0)]
    assert workout["total_reps"] == 0


def test_complete_marks_assignment_done_once(linked, make_template):
    template = make_template("Leg Day", [("Squat", 1, 10)])
    assigned = _assign(linked, template)
    service.complete(assigned["id"], linked[1]["id"], {})

    entry = service.assigned_entry(assigned["id"], linked[1]["id"])
    assert entry["is_completed"] is True
    assert entry["completed_date"] is not None

    with pytest.raises(HTTPException) as exc:
        service.complete(assigned["id"], linked[1]["id"], {})
    assert exc.value.status_code == 409


def test_complete_by_other_client_is_not_found(linked, make_template):
    template = make_template("Leg Day", [("Squat", 1, 10)])
    assigned = _assign(linked, template)
    other = register("Sam")

    with pytest.raises(HTTPException) as exc:
        service.complete(assigned["id"], other["id"], {})
    assert exc.value.status_code == 404


def test_complete_failure_keeps_nothing(linked, make_template, monkeypatch):
    template = make_template("Leg Day", [("Squat", 2, 10)])
    assigned = _assign(linked, template)

    # A row the set model cannot accept blows up after the parent workout was flushed
    monkeypatch.setattr(assignment_module, "expand_template", lambda exercises, inputs: [
        {"exercise_name": "Squat", "set_number": 1, "reps": 5, "weight": 0.0},
        {"exercise_name": "Squat", "set_number": 2, "reps": 5, "weight": 0.0, "tempo": "3-1-1"},
    ])

    with pytest.raises(HTTPException) as exc:
        service.complete(assigned["id"], linked[1]["id"], {})
    assert exc.value.status_code == 500

    db = get_db_session()
    try:
        assert db.query(WorkoutORM).count() == 0
        assert db.query(WorkoutSetORM).count() == 0
        row = db.query(TrainerAssignedWorkoutORM).filter(TrainerAssignedWorkoutORM.id == assigned["id"]).one()
        assert row.is_completed is False
        assert row.completed_date is None
    finally:
        db.close()


# --- DELETION RULES ---

def test_deleting_completed_workout_removes_its_sets(linked, make_template):
    template = make_template("Leg Day", [("Squat", 3, 10)])
    assigned = _assign(linked, template)
    workout = service.complete(assigned["id"], linked[1]["id"], {("Squat", 1): ("10", "50")})

    workout_service.delete_workout(workout["id"], linked[1]["id"])

    db = get_db_session()
    try:
        assert db.query(WorkoutORM).count() == 0
        assert db.query(WorkoutSetORM).filter(WorkoutSetORM.workout_id == workout["id"]).count() == 0
        # The assignment itself stays completed
        row = db.query(TrainerAssignedWorkoutORM).filter(TrainerAssignedWorkoutORM.id == assigned["id"]).one()
        assert row.is_completed is True
    finally:
        db.close()


def test_users_with_assignments_cannot_be_deleted(linked, make_template):
    template = make_template("Leg Day", [("Squat", 1, 10)])
    assigned = _assign(linked, template)
    trainer, client_user = linked

    db = get_db_session()
    try:
        for user_id in (client_user["id"], trainer["id"]):
            with pytest.raises(IntegrityError):
                db.query(UserORM).filter(UserORM.id == user_id).delete()
                db.commit()
            db.rollback()

        assert db.query(UserORM).count() == 2
        assert db.query(TrainerAssignedWorkoutORM).filter(
            TrainerAssignedWorkoutORM.id == assigned["id"]
        ).count() == 1
    finally:
        db.close()


# --- PREFILL ---

def test_prefill_uses_template_targets(linked, make_template):
    template = make_template("Leg Day", [("Squat", 3, 10), ("Lunge", 2, 12)])
    assigned = _assign(linked, template)

    draft = service.prefill(assigned["id"], linked[1]["id"])

    assert draft["workout_style"] == "Leg Day"
    assert draft["total_sets"] == 5
    assert draft["total_reps"] == 3 * 10 + 2 * 12
    assert draft["notes"] == "Trainer template used: Leg Day"
