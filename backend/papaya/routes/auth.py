from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from papaya.database import get_session
from papaya.models.user import UserRole
from papaya.services import identity
from papaya.utils.guards import Caller

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Caller:
    """Resolve the bearer token to a Caller; raises Unauthenticated (401)."""
    token = credentials.credentials if credentials else None
    return identity.authenticate(token)


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    role: UserRole = UserRole.jugador
    city: Optional[str] = None
    level: Optional[float] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    city: Optional[str] = None
    level: Optional[float] = None
    created_at: datetime


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(request: RegisterRequest, session: Session = Depends(get_session)):
    """Create a jugador or club account and return a token for it"""
    user = identity.register_user(
        session,
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
        city=request.city,
        level=request.level,
    )
    return AuthResponse(token=identity.issue_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, session: Session = Depends(get_session)):
    user = identity.authenticate_credentials(session, request.email, request.password)
    return AuthResponse(token=identity.issue_token(user), user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def me(caller: Caller = Depends(get_current_caller), session: Session = Depends(get_session)):
    return identity.current_user(session, caller)
