# tracker/core/validation.py
"""Field and form validation rules shared by the auth, ticket and comment modules.

Field validators return a list of messages (empty means valid). For a single
field only the first failing rule is reported; form validators check every
field and return a ``{field: messages}`` map holding only the failing ones.
"""
import re

from tracker.core.errors import FieldErrors, ValidationFailed

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[a-zA-Z\s]+$")

PASSWORD_MIN_LENGTH = 6
NAME_MIN_LENGTH = 2
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
COMMENT_MIN_LENGTH = 2
COMMENT_MAX_LENGTH = 500


def validate_email(email: str | None) -> list[str]:
    email = email or ""
    if not email.strip():
        return ["Email is required"]
    if not EMAIL_RE.fullmatch(email):
        return ["Please enter a valid email address"]
    return []


def validate_password(password: str | None) -> list[str]:
    """Strength rules used at registration."""
    if not password:
        return ["Password is required"]
    if len(password) < PASSWORD_MIN_LENGTH:
        return [f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"]
    if not re.search(r"[a-z]", password):
        return ["Password must contain at least one lowercase letter"]
    if not re.search(r"[A-Z]", password):
        return ["Password must contain at least one uppercase letter"]
    if not re.search(r"\d", password):
        return ["Password must contain at least one number"]
    return []


def validate_login_password(password: str | None) -> list[str]:
    if not (password or "").strip():
        return ["Password is required"]
    return []


def validate_name(name: str | None) -> list[str]:
    trimmed = (name or "").strip()
    if not trimmed:
        return ["Name is required"]
    if len(trimmed) < NAME_MIN_LENGTH:
        return [f"Name must be at least {NAME_MIN_LENGTH} characters long"]
    if not NAME_RE.fullmatch(trimmed):
        return ["Name can only contain letters and spaces"]
    return []


def validate_confirm_password(password: str | None, confirm_password: str | None) -> list[str]:
    if not confirm_password:
        return ["Please confirm your password"]
    if password != confirm_password:
        return ["Passwords do not match"]
    return []


def validate_ticket_title(title: str | None) -> list[str]:
    trimmed = (title or "").strip()
    if not trimmed:
        return ["Title is required"]
    if len(trimmed) < TITLE_MIN_LENGTH:
        return [f"Title must be at least {TITLE_MIN_LENGTH} characters long"]
    if len(trimmed) > TITLE_MAX_LENGTH:
        return [f"Title cannot exceed {TITLE_MAX_LENGTH} characters"]
    return []


def validate_ticket_description(description: str | None) -> list[str]:
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        return [f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"]
    return []


def validate_comment(content: str | None) -> list[str]:
    content = content or ""
    trimmed = content.strip()
    if not trimmed:
        return ["Comment cannot be empty"]
    if len(trimmed) < COMMENT_MIN_LENGTH:
        return [f"Comment must be at least {COMMENT_MIN_LENGTH} characters long"]
    if len(content) > COMMENT_MAX_LENGTH:
        return [f"Comment cannot exceed {COMMENT_MAX_LENGTH} characters"]
    return []


def _collect(**fields: list[str]) -> FieldErrors:
    return {field: messages for field, messages in fields.items() if messages}


def validate_login_form(email: str | None, password: str | None) -> FieldErrors:
    return _collect(
        email=validate_email(email),
        password=validate_login_password(password),
    )


def validate_register_form(
    name: str | None,
    email: str | None,
    password: str | None,
    confirm_password: str | None,
) -> FieldErrors:
    return _collect(
        name=validate_name(name),
        email=validate_email(email),
        password=validate_password(password),
        confirmPassword=validate_confirm_password(password, confirm_password),
    )


def validate_ticket_form(title: str | None, description: str | None = None) -> FieldErrors:
    return _collect(
        title=validate_ticket_title(title),
        description=validate_ticket_description(description),
    )


def validate_comment_form(content: str | None) -> FieldErrors:
    return _collect(content=validate_comment(content))


def ensure_valid(errors: FieldErrors) -> None:
    if errors:
        raise ValidationFailed(errors)
