"""
Trainer Request Service - the trainer -> client access ledger.

Every access request is kept as its own row. The current state of a
trainer/client pair is the status of its newest row (by sent_date, then id),
and the only way a row changes status is through ``next_status``.
"""
from .base import (
    HTTPException, logging, datetime,
    get_db_session, UserORM, TrainerClientRequestORM,
    ROLE_USER, STATUS_PENDING, STATUS_ACCEPTED, STATUS_DECLINED
)

logger = logging.getLogger("fitness_tracker")

DECISION_ACCEPT = "accept"
DECISION_DECLINE = "decline"

# (current status, decision) -> new status. Anything missing is not allowed.
TRANSITIONS = {
    (STATUS_PENDING, DECISION_ACCEPT): STATUS_ACCEPTED,
    (STATUS_PENDING, DECISION_DECLINE): STATUS_DECLINED,
}


def next_status(current: str, decision: str) -> str:
    """Apply a client decision to a request status or raise."""
    decision = (decision or "").strip().lower()
    if decision not in (DECISION_ACCEPT, DECISION_DECLINE):
        raise HTTPException(status_code=400, detail="Invalid decision.")

    new_status = TRANSITIONS.get((current, decision))
    if new_status is None:
        raise HTTPException(status_code=409, detail="Request already handled.")
    return new_status


def latest_request(db, trainer_id: int, client_id: int):
    """Newest request between a trainer and a client, or None."""
    return db.query(TrainerClientRequestORM).filter(
        TrainerClientRequestORM.trainer_id == trainer_id,
        TrainerClientRequestORM.client_id == client_id
    ).order_by(
        TrainerClientRequestORM.sent_date.desc(),
        TrainerClientRequestORM.id.desc()
    ).first()


def _request_to_dict(r: TrainerClientRequestORM) -> dict:
    return {
        "id": r.id,
        "trainer_id": r.trainer_id,
        "client_id": r.client_id,
        "status": r.status,
        "sent_date": r.sent_date.isoformat() if r.sent_date else None,
        "responded_at": r.responded_at.isoformat() if r.responded_at else None
    }


class TrainerRequestService:
    """Service for trainer access requests and their lifecycle."""

    def request_access(self, trainer_id: int, client_id: int) -> dict:
        """Ask a client for access. Idempotent while a request is pending."""
        db = get_db_session()
        try:
            client = db.query(UserORM).filter(
                UserORM.id == client_id,
                UserORM.role == ROLE_USER
            ).first()
            if not client:
                raise HTTPException(status_code=404, detail="Client not found")

            last = latest_request(db, trainer_id, client_id)

            if last is not None and last.status == STATUS_PENDING:
                return {
                    "created": False,
                    "status": STATUS_PENDING,
                    "request_id": last.id,
                    "message": "Request already sent and is pending."
                }

            if last is not None and last.status == STATUS_ACCEPTED:
                logger.warning(f"Trainer {trainer_id} re-requested accepted client {client_id}")
                raise HTTPException(status_code=409, detail="You already have access to this client.")

            # No history, or the last one was declined
            request = TrainerClientRequestORM(
                trainer_id=trainer_id,
                client_id=client_id,
                status=STATUS_PENDING,
                sent_date=datetime.utcnow()
            )
            db.add(request)
            db.commit()
            db.refresh(request)

            logger.info(f"Trainer {trainer_id} requested access to client {client_id} (request {request.id})")
            return {
                "created": True,
                "status": request.status,
                "request_id": request.id,
                "message": "Request sent."
            }
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create trainer request: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to send request: {str(e)}")
        finally:
            db.close()

    def respond(self, client_id: int, request_id: int, decision: str) -> dict:
        """Accept or decline a pending request addressed to this client."""
        db = get_db_session()
        try:
            request = db.query(TrainerClientRequestORM).filter(
                TrainerClientRequestORM.id == request_id,
                TrainerClientRequestORM.client_id == client_id
            ).first()

            if not request:
                raise HTTPException(status_code=404, detail="Trainer request not found")

            try:
                request.status = next_status(request.status, decision)
            except HTTPException as he:
                logger.warning(f"Client {client_id} could not respond to request {request_id}: {he.detail}")
                raise

            request.responded_at = datetime.utcnow()
            db.commit()
            db.refresh(request)

            logger.info(f"Request {request_id} is now {request.status}")
            return _request_to_dict(request)
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to respond to trainer request {request_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to respond: {str(e)}")
        finally:
            db.close()

    def pending_for(self, client_id: int) -> list:
        """Pending requests addressed to a client, newest first."""
        db = get_db_session()
        try:
            rows = db.query(TrainerClientRequestORM, UserORM).join(
                UserORM, UserORM.id == TrainerClientRequestORM.trainer_id
            ).filter(
                TrainerClientRequestORM.client_id == client_id,
                TrainerClientRequestORM.status == STATUS_PENDING
            ).order_by(
                TrainerClientRequestORM.sent_date.desc(),
                TrainerClientRequestORM.id.desc()
            ).all()

            return [{
                "id": r.id,
                "trainer_id": r.trainer_id,
                "trainer_name": trainer.name,
                "sent_date": r.sent_date.isoformat()
            } for r, trainer in rows]
        finally:
            db.close()

    def current_status(self, trainer_id: int, client_id: int, db_session=None):
        """Status of the newest request for the pair, None when never requested."""
        db = db_session if db_session else get_db_session()
        should_close = db_session is None
        try:
            last = latest_request(db, trainer_id, client_id)
            return last.status if last else None
        finally:
            if should_close:
                db.close()

    def has_access(self, trainer_id: int, client_id: int, db_session=None) -> bool:
        return self.current_status(trainer_id, client_id, db_session=db_session) == STATUS_ACCEPTED

    def clients_overview(self, trainer_id: int) -> list:
        """Every client account with this trainer's current status for it."""
        db = get_db_session()
        try:
            clients = db.query(UserORM).filter(UserORM.role == ROLE_USER).order_by(UserORM.name, UserORM.id).all()

            requests = db.query(TrainerClientRequestORM).filter(
                TrainerClientRequestORM.trainer_id == trainer_id
            ).order_by(
                TrainerClientRequestORM.sent_date.desc(),
                TrainerClientRequestORM.id.desc()
            ).all()

            # First row seen per client is the newest
            latest = {}
            for r in requests:
                latest.setdefault(r.client_id, r)

            overview = []
            for c in clients:
                last = latest.get(c.id)
                overview.append({
                    "id": c.id,
                    "name": c.name,
                    "email": c.email,
                    "status": last.status if last else None,
                    "request_id": last.id if last else None
                })
            return overview
        finally:
            db.close()

    def accepted_clients(self, trainer_id: int) -> list:
        """Clients this trainer currently has access to."""
        return [
            {"id": c["id"], "name": c["name"], "email": c["email"]}
            for c in self.clients_overview(trainer_id)
            if c["status"] == STATUS_ACCEPTED
        ]

    def history(self, trainer_id: int, client_id: int) -> list:
        """All requests for the pair, newest first."""
        db = get_db_session()
        try:
            rows = db.query(TrainerClientRequestORM).filter(
                TrainerClientRequestORM.trainer_id == trainer_id,
                TrainerClientRequestORM.client_id == client_id
            ).order_by(
                TrainerClientRequestORM.sent_date.desc(),
                TrainerClientRequestORM.id.desc()
            ).all()
            return [_request_to_dict(r) for r in rows]
        finally:
            db.close()


# Singleton instance
trainer_request_service = TrainerRequestService()

def get_trainer_request_service() -> TrainerRequestService:
    """Dependency injection helper."""
    return trainer_request_service
