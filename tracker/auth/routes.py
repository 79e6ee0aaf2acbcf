# tracker/auth/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tracker.auth import services as auth_service
from tracker.auth.dependencies import get_auth_context
from tracker.auth.schemas import AuthContext, AuthResponse, LoginRequest, RegisterRequest, UserOut
from tracker.core.database import get_db
from tracker.core.security import create_access_token

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, payload)
    return AuthResponse(token=create_access_token(user.id), user=UserOut.from_user(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate_user(db, payload)
    return AuthResponse(token=create_access_token(user.id), user=UserOut.from_user(user))


@router.get("/me", response_model=UserOut)
def me(auth: AuthContext = Depends(get_auth_context)):
    return UserOut(id=auth.user_id, name=auth.name, email=auth.email)
