# tracker/auth/schemas.py
from dataclasses import dataclass

from pydantic import Field

from tracker.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str | None = None


class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


class UserOut(CamelModel):
    # Record ids go out as "_id", the key both clients store and route on
    id: str = Field(alias="_id")
    name: str
    email: str

    @classmethod
    def from_user(cls, user) -> "UserOut":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(CamelModel):
    token: str
    user: UserOut


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Identity of the caller, resolved from the bearer token and handed to services."""

    user_id: str
    name: str
    email: str
