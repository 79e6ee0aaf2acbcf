# tracker/auth/dependencies.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from tracker.auth.schemas import AuthContext
from tracker.auth.services import get_user
from tracker.core import security
from tracker.core.database import get_db
from tracker.core.errors import Unauthenticated


def get_auth_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Resolve the bearer token to the calling user or reject the request with 401."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Missing or invalid Authorization header")

    payload = security.decode_access_token(token.strip())
    if not payload or "sub" not in payload:
        raise Unauthenticated("Invalid or expired token")

    user = get_user(db, str(payload["sub"]))
    if not user:
        raise Unauthenticated("User not found")
    return AuthContext(user_id=user.id, name=user.name, email=user.email)
