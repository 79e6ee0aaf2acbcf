# tracker/ticket/schemas.py
from typing import Literal

from pydantic import Field

from tracker.auth.schemas import UserOut
from tracker.core.schemas import CamelModel, UTCDateTime
from tracker.ticket.models import TicketPriority, TicketStatus

SortField = Literal["createdAt", "title"]
SortOrder = Literal["asc", "desc"]


class TicketCreate(CamelModel):
    title: str = ""
    description: str | None = None
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    assigned_to: str | None = None


class TicketUpdate(CamelModel):
    """Any subset of fields; only the ones present in the request are applied."""

    title: str | None = None
    description: str | None = None
    status: TicketStatus | None = None
    priority: TicketPriority | None = None
    assigned_to: str | None = None


class TicketFilter(CamelModel):
    search: str | None = None
    status: TicketStatus | None = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"


class TicketOut(CamelModel):
    id: str = Field(alias="_id")
    title: str
    description: str | None = None
    status: TicketStatus
    priority: TicketPriority
    created_by: UserOut | None = None
    assigned_to: UserOut | None = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
