# tracker/ticket/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from tracker.auth.dependencies import get_auth_context
from tracker.auth.schemas import AuthContext
from tracker.core.database import get_db
from tracker.core.schemas import MessageOut
from tracker.ticket import services as ticket_service
from tracker.ticket.models import TicketStatus
from tracker.ticket.schemas import (
    SortField,
    SortOrder,
    TicketCreate,
    TicketFilter,
    TicketOut,
    TicketUpdate,
)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("", response_model=list[TicketOut])
def list_all(
    search: str | None = Query(default=None, description="Title substring or exact ticket id"),
    status: TicketStatus | None = Query(default=None),
    sort_by: SortField = Query(default="createdAt", alias="sortBy"),
    sort_order: SortOrder = Query(default="desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    filters = TicketFilter(search=search, status=status, sort_by=sort_by, sort_order=sort_order)
    return ticket_service.list_tickets(db, filters)


@router.post("", response_model=TicketOut, status_code=201)
def create(
    ticket: TicketCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return ticket_service.create_ticket(db, ticket, auth)


@router.get("/{ticket_id}", response_model=TicketOut)
def get(
    ticket_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return ticket_service.get_ticket(db, ticket_id)


@router.put("/{ticket_id}", response_model=TicketOut)
def update(
    ticket_id: str,
    ticket: TicketUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return ticket_service.update_ticket(db, ticket_id, ticket, auth)


@router.delete("/{ticket_id}", response_model=MessageOut)
def delete(
    ticket_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    ticket_service.delete_ticket(db, ticket_id, auth)
    return MessageOut(message="Ticket deleted successfully")
