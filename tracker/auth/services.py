# tracker/auth/services.py
import logging

from sqlalchemy.orm import Session
from tracker.auth.models import User
from tracker.auth.schemas import LoginRequest, RegisterRequest
from tracker.core import security
from tracker.core.errors import Conflict, Unauthenticated
from tracker.core.validation import ensure_valid, validate_login_form, validate_register_form

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_users_by_ids(db: Session, user_ids: set[str]) -> dict[str, User]:
    """Resolve a batch of user references in one query."""
    if not user_ids:
        return {}
    users = db.query(User).filter(User.id.in_(list(user_ids))).all()
    return {user.id: user for user in users}


def register_user(db: Session, payload: RegisterRequest) -> User:
    errors = validate_register_form(
        payload.name, payload.email, payload.password, payload.confirm_password
    )
    if payload.confirm_password is None:
        errors.pop("confirmPassword", None)
    ensure_valid(errors)

    email = payload.email.strip().lower()
    if get_user_by_email(db, email):
        raise Conflict("User with this email already exists")

    user = User(
        name=payload.name.strip(),
        email=email,
        hashed_password=security.hash_password(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered: %s", user.id)
    return user


def authenticate_user(db: Session, payload: LoginRequest) -> User:
    ensure_valid(validate_login_form(payload.email, payload.password))

    user = get_user_by_email(db, payload.email)
    if not user or not security.verify_password(payload.password, user.hashed_password):
        logger.warning("Failed login attempt")
        raise Unauthenticated("Invalid email or password")
    return user
