# tracker/comment/schemas.py
from pydantic import Field

from tracker.auth.schemas import UserOut
from tracker.core.schemas import CamelModel, UTCDateTime


class CommentCreate(CamelModel):
    content: str = ""


class CommentOut(CamelModel):
    id: str = Field(alias="_id")
    content: str
    ticket_id: str
    # Populated author, exposed as "userId" the way the clients read it
    author: UserOut | None = Field(default=None, alias="userId")
    created_at: UTCDateTime
    updated_at: UTCDateTime
