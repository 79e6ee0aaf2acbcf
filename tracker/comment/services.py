# tracker/comment/services.py
import logging

from sqlalchemy.orm import Session
from tracker.auth.schemas import AuthContext, UserOut
from tracker.auth.services import get_users_by_ids
from tracker.comment.models import Comment
from tracker.comment.schemas import CommentCreate, CommentOut
from tracker.core.database import utcnow
from tracker.core.errors import Forbidden, NotFound
from tracker.core.validation import ensure_valid, validate_comment_form
from tracker.ticket.services import ticket_exists

logger = logging.getLogger(__name__)


def _ensure_ticket(db: Session, ticket_id: str) -> None:
    if not ticket_exists(db, ticket_id):
        raise NotFound("Ticket not found")


def _serialize(db: Session, comments: list[Comment]) -> list[CommentOut]:
    authors = get_users_by_ids(db, {c.user_id for c in comments})
    return [
        CommentOut(
            id=c.id,
            content=c.content,
            ticket_id=c.ticket_id,
            author=UserOut.from_user(authors[c.user_id]) if c.user_id in authors else None,
            created_at=c.created_at,
            updated_at=c.updated_at,
        )
        for c in comments
    ]


def _get_or_404(db: Session, comment_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFound("Comment not found")
    return comment


def list_comments(db: Session, ticket_id: str) -> list[CommentOut]:
    _ensure_ticket(db, ticket_id)
    comments = (
        db.query(Comment)
        .filter(Comment.ticket_id == ticket_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return _serialize(db, comments)


def create_comment(db: Session, ticket_id: str, payload: CommentCreate, auth: AuthContext) -> CommentOut:
    # Ticket existence is checked before the content so a missing ticket is always a 404
    _ensure_ticket(db, ticket_id)
    ensure_valid(validate_comment_form(payload.content))

    now = utcnow()
    comment = Comment(
        content=payload.content.strip(),
        ticket_id=ticket_id,
        user_id=auth.user_id,
        created_at=now,
        updated_at=now,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("Comment %s added to ticket %s by %s", comment.id, ticket_id, auth.user_id)
    return _serialize(db, [comment])[0]


def delete_comment(db: Session, comment_id: str, auth: AuthContext) -> None:
    """Delete a comment (author only)."""
    comment = _get_or_404(db, comment_id)
    if comment.user_id != auth.user_id:
        logger.warning("User %s denied deleting comment %s", auth.user_id, comment_id)
        raise Forbidden("You can only delete your own comments")

    # Author is part of the condition so a concurrent delete cannot be reported as success
    deleted = (
        db.query(Comment)
        .filter(Comment.id == comment_id, Comment.user_id == auth.user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFound("Comment not found")
    db.commit()
    logger.info("Comment %s deleted by %s", comment_id, auth.user_id)
