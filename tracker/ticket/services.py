# tracker/ticket/services.py
import logging

from sqlalchemy import asc, desc, or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from tracker.auth.schemas import AuthContext, UserOut
from tracker.auth.services import get_user, get_users_by_ids
from tracker.core.database import utcnow
from tracker.core.errors import FieldErrors, NotFound
from tracker.core.validation import ensure_valid, validate_ticket_form
from tracker.ticket.models import Ticket
from tracker.ticket.schemas import TicketCreate, TicketFilter, TicketOut, TicketUpdate

logger = logging.getLogger(__name__)

# Fields that may be omitted on update but never set to null
_NON_NULLABLE = ("title", "status", "priority")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _serialize(db: Session, tickets: list[Ticket]) -> list[TicketOut]:
    """Attach creator/assignee identities with one user lookup for the whole batch."""
    user_ids = {t.created_by for t in tickets} | {t.assigned_to for t in tickets if t.assigned_to}
    users = get_users_by_ids(db, user_ids)

    def resolve(user_id: str | None) -> UserOut | None:
        user = users.get(user_id) if user_id else None
        return UserOut.from_user(user) if user else None

    return [
        TicketOut(
            id=t.id,
            title=t.title,
            description=t.description,
            status=t.status,
            priority=t.priority,
            created_by=resolve(t.created_by),
            assigned_to=resolve(t.assigned_to),
            created_at=t.created_at,
            updated_at=t.updated_at,
        )
        for t in tickets
    ]


def _check_assignee(db: Session, assigned_to: str | None, errors: FieldErrors) -> None:
    if assigned_to and not get_user(db, assigned_to):
        errors["assignedTo"] = ["Assigned user does not exist"]


def _get_or_404(db: Session, ticket_id: str) -> Ticket:
    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not ticket:
        raise NotFound("Ticket not found")
    return ticket


def ticket_exists(db: Session, ticket_id: str) -> bool:
    return db.query(Ticket.id).filter(Ticket.id == ticket_id).first() is not None


def list_tickets(db: Session, filters: TicketFilter) -> list[TicketOut]:
    query = db.query(Ticket)

    search = (filters.search or "").strip()
    if search:
        # Title substring (case-insensitive) or exact id
        pattern = f"%{_escape_like(search)}%"
        query = query.filter(or_(Ticket.title.ilike(pattern, escape="\\"), Ticket.id == search))

    if filters.status is not None:
        query = query.filter(Ticket.status == filters.status.value)

    direction = asc if filters.sort_order == "asc" else desc
    if filters.sort_by == "title":
        query = query.order_by(
            direction(Ticket.title), direction(Ticket.created_at), direction(Ticket.id)
        )
    else:
        query = query.order_by(direction(Ticket.created_at), direction(Ticket.id))

    return _serialize(db, query.all())


def get_ticket(db: Session, ticket_id: str) -> TicketOut:
    return _serialize(db, [_get_or_404(db, ticket_id)])[0]


def create_ticket(db: Session, payload: TicketCreate, auth: AuthContext) -> TicketOut:
    errors = validate_ticket_form(payload.title, payload.description)
    _check_assignee(db, payload.assigned_to, errors)
    ensure_valid(errors)

    now = utcnow()
    db_ticket = Ticket(
        title=payload.title.strip(),
        description=payload.description,
        status=payload.status.value,
        priority=payload.priority.value,
        created_by=auth.user_id,
        assigned_to=payload.assigned_to or None,
        created_at=now,
        updated_at=now,
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    logger.info("Ticket %s created by %s", db_ticket.id, auth.user_id)
    return _serialize(db, [db_ticket])[0]


def update_ticket(db: Session, ticket_id: str, payload: TicketUpdate, auth: AuthContext) -> TicketOut:
    # Any authenticated user may edit any ticket; there is no ownership rule here.
    db_ticket = _get_or_404(db, ticket_id)
    fields = payload.model_dump(exclude_unset=True)

    form_errors = validate_ticket_form(fields.get("title"), fields.get("description"))
    errors: FieldErrors = {field: msgs for field, msgs in form_errors.items() if field in fields}
    for field in _NON_NULLABLE:
        if field in fields and fields[field] is None and field not in errors:
            errors[field] = [f"{field.capitalize()} cannot be null"]
    if "assigned_to" in fields:
        _check_assignee(db, fields["assigned_to"], errors)
    ensure_valid(errors)

    for field, value in fields.items():
        if field in ("status", "priority"):
            value = value.value
        elif field == "title":
            value = value.strip()
        elif field == "assigned_to":
            value = value or None
        setattr(db_ticket, field, value)
    db_ticket.updated_at = utcnow()

    try:
        db.commit()
    except StaleDataError:
        # Row went away between the read and the write
        db.rollback()
        raise NotFound("Ticket not found")
    db.refresh(db_ticket)
    logger.info("Ticket %s updated by %s: %s", ticket_id, auth.user_id, sorted(fields))
    return _serialize(db, [db_ticket])[0]


def delete_ticket(db: Session, ticket_id: str, auth: AuthContext) -> None:
    # No ownership rule and no cascade: the ticket's comments are left in place.
    deleted = db.query(Ticket).filter(Ticket.id == ticket_id).delete(synchronize_session=False)
    if not deleted:
        raise NotFound("Ticket not found")
    db.commit()
    logger.info("Ticket %s deleted by %s", ticket_id, auth.user_id)
