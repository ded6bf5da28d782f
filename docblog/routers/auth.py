from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from docblog.core.config import get_settings
from docblog.core.security import create_access_token, require_signing_secret
from docblog.db.session import get_db
from docblog.models.user import User
from docblog.routers.deps import TOKEN_COOKIE, get_current_user
from docblog.schemas.auth import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserRead, UserSummary
from docblog.services.accounts import authenticate_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _issue_session(response: Response, user: User) -> AuthResponse:
    settings = get_settings()
    token = create_access_token(user.id)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.jwt_cookie_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return AuthResponse(token=token, user=UserSummary.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, response: Response, db: Session = Depends(get_db)) -> AuthResponse:
    # Fail before the account is committed when no token could be issued for it.
    require_signing_secret()
    user = register_user(db, payload.name, payload.email, payload.password)
    return _issue_session(response, user)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> AuthResponse:
    user = authenticate_user(db, payload.email, payload.password)
    return _issue_session(response, user)


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(TOKEN_COOKIE, httponly=True, samesite="strict", secure=get_settings().is_production)
    return MessageResponse(message="User logged out successfully")
