from datetime import datetime

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from conftest import register
from database import get_db_session
from models_orm import UserORM, TrainerClientRequestORM, STATUS_PENDING, STATUS_ACCEPTED, STATUS_DECLINED
from service_modules.trainer_request_service import (
    trainer_request_service as service, latest_request, next_status
)


def _rows(trainer_id, client_id):
    return service.history(trainer_id, client_id)


def test_request_access_creates_single_pending(trainer, client_user):
    result = service.request_access(trainer["id"], client_user["id"])

    assert result["created"] is True
    rows = _rows(trainer["id"], client_user["id"])
    assert [r["status"] for r in rows] == [STATUS_PENDING]


def test_second_request_while_pending_leaves_ledger_unchanged(trainer, client_user):
    first = service.request_access(trainer["id"], client_user["id"])
    second = service.request_access(trainer["id"], client_user["id"])

    assert second["created"] is False
    assert second["request_id"] == first["request_id"]
    assert len(_rows(trainer["id"], client_user["id"])) == 1


def test_accept_then_respond_again_conflicts(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]

    accepted = service.respond(client_user["id"], request_id, "accept")
    assert accepted["status"] == STATUS_ACCEPTED

    with pytest.raises(HTTPException) as exc:
        service.respond(client_user["id"], request_id, "decline")
    assert exc.value.status_code == 409
    assert _rows(trainer["id"], client_user["id"])[0]["status"] == STATUS_ACCEPTED


def test_rerequest_after_decline_creates_new_pending_row(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]
    service.respond(client_user["id"], request_id, "Decline")

    result = service.request_access(trainer["id"], client_user["id"])

    assert result["created"] is True
    rows = _rows(trainer["id"], client_user["id"])
    assert len(rows) == 2
    assert rows[0]["status"] == STATUS_PENDING
    assert rows[1]["status"] == STATUS_DECLINED


def test_rerequest_after_accept_is_conflict(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]
    service.respond(client_user["id"], request_id, "accept")

    with pytest.raises(HTTPException) as exc:
        service.request_access(trainer["id"], client_user["id"])
    assert exc.value.status_code == 409
    assert len(_rows(trainer["id"], client_user["id"])) == 1


def test_only_addressed_client_can_respond(trainer, client_user):
    other = register("Sam")
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]

    with pytest.raises(HTTPException) as exc:
        service.respond(other["id"], request_id, "accept")
    assert exc.value.status_code == 404
    assert service.current_status(trainer["id"], client_user["id"]) == STATUS_PENDING


def test_unknown_decision_is_rejected(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]

    with pytest.raises(HTTPException) as exc:
        service.respond(client_user["id"], request_id, "maybe")
    assert exc.value.status_code == 400
    assert service.current_status(trainer["id"], client_user["id"]) == STATUS_PENDING


def test_request_to_missing_or_trainer_account_is_not_found(trainer):
    other_trainer = register("Other", role="Trainer")

    with pytest.raises(HTTPException) as exc:
        service.request_access(trainer["id"], 9999)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        service.request_access(trainer["id"], other_trainer["id"])
    assert exc.value.status_code == 404


def test_pending_for_lists_newest_first(client_user):
    first_trainer = register("First", role="Trainer")
    second_trainer = register("Second", role="Trainer")
    service.request_access(first_trainer["id"], client_user["id"])
    service.request_access(second_trainer["id"], client_user["id"])

    pending = service.pending_for(client_user["id"])

    assert [p["trainer_name"] for p in pending] == ["Second", "First"]


def test_pending_for_skips_resolved_requests(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]
    service.respond(client_user["id"], request_id, "accept")

    assert service.pending_for(client_user["id"]) == []


def test_latest_request_breaks_ties_by_id(trainer, client_user):
    sent = datetime(2025, 1, 1, 12, 0, 0)
    db = get_db_session()
    try:
        db.add(TrainerClientRequestORM(trainer_id=trainer["id"], client_id=client_user["id"],
                                       status=STATUS_DECLINED, sent_date=sent))
        db.add(TrainerClientRequestORM(trainer_id=trainer["id"], client_id=client_user["id"],
                                       status=STATUS_ACCEPTED, sent_date=sent))
        db.commit()

        assert latest_request(db, trainer["id"], client_user["id"]).status == STATUS_ACCEPTED
    finally:
        db.close()


def test_next_status_transitions():
    assert next_status(STATUS_PENDING, "accept") == STATUS_ACCEPTED
    assert next_status(STATUS_PENDING, " DECLINE ") == STATUS_DECLINED

    for current in (STATUS_ACCEPTED, STATUS_DECLINED):
        with pytest.raises(HTTPException) as exc:
            next_status(current, "accept")
        assert exc.value.status_code == 409


def test_clients_overview_and_accepted_clients(trainer, client_user):
    stranger = register("Zed")
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]
    service.respond(client_user["id"], request_id, "accept")

    overview = {c["id"]: c["status"] for c in service.clients_overview(trainer["id"])}

    assert overview == {client_user["id"]: STATUS_ACCEPTED, stranger["id"]: None}
    assert [c["id"] for c in service.accepted_clients(trainer["id"])] == [client_user["id"]]
    assert service.has_access(trainer["id"], client_user["id"])
    assert not service.has_access(trainer["id"], stranger["id"])


def test_users_with_request_history_cannot_be_deleted(trainer, client_user):
    request_id = service.request_access(trainer["id"], client_user["id"])["request_id"]
    service.respond(client_user["id"], request_id, "decline")

    db = get_db_session()
    try:
        with pytest.raises(IntegrityError):
            db.query(UserORM).filter(UserORM.id == client_user["id"]).delete()
            db.commit()
        db.rollback()

        assert db.query(UserORM).filter(UserORM.id == client_user["id"]).count() == 1
    finally:
        db.close()

    assert len(_rows(trainer["id"], client_user["id"])) == 1
