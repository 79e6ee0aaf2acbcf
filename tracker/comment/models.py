# tracker/comment/models.py
from sqlalchemy import Column, DateTime, String
from tracker.core.database import Base, new_id, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(24), primary_key=True, default=new_id)
    content = Column(String(500), nullable=False)
    # No foreign key: deleting a ticket leaves its comments behind
    ticket_id = Column(String(24), index=True, nullable=False)
    user_id = Column(String(24), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
