# tracker/comment/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tracker.auth.dependencies import get_auth_context
from tracker.auth.schemas import AuthContext
from tracker.comment import services as comment_service
from tracker.comment.schemas import CommentCreate, CommentOut
from tracker.core.database import get_db
from tracker.core.schemas import MessageOut

router = APIRouter(tags=["Comments"])


@router.get("/tickets/{ticket_id}/comments", response_model=list[CommentOut])
def list_for_ticket(
    ticket_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return comment_service.list_comments(db, ticket_id)


@router.post("/tickets/{ticket_id}/comments", response_model=CommentOut, status_code=201)
def create(
    ticket_id: str,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return comment_service.create_comment(db, ticket_id, comment, auth)


@router.delete("/comments/{comment_id}", response_model=MessageOut)
def delete(
    comment_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    comment_service.delete_comment(db, comment_id, auth)
    return MessageOut(message="Comment deleted successfully")
