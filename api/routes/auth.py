"""Account routes: signup, login and the current user"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service, get_current_user
from domain.mappers import UserMapper
from domain.models import User
from domain.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)
from services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    """Create an account and return an access token for it."""
    user, token = auth.signup(body.name, body.email, body.password)
    return AuthResponse(token=token, user=UserMapper.to_response(user))


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token."""
    user, token = auth.login(body.email, body.password)
    return AuthResponse(token=token, user=UserMapper.to_response(user))


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return UserMapper.to_response(user)
