# tracker/ticket/models.py
import enum

from sqlalchemy import Column, DateTime, String, Text
from tracker.core.database import Base, new_id, utcnow


class TicketStatus(str, enum.Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"


class TicketPriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(24), primary_key=True, default=new_id)
    title = Column(String(100), index=True, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, default=TicketStatus.OPEN.value, index=True, nullable=False)
    priority = Column(String, default=TicketPriority.MEDIUM.value, nullable=False)
    # Plain user id references, resolved by the service layer
    created_by = Column(String(24), index=True, nullable=False)
    assigned_to = Column(String(24), index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
