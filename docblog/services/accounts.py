import logging

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from docblog.core.errors import DuplicateEmailError, InvalidCredentialsError, ValidationError
from docblog.core.security import burn_password_check, hash_password, verify_password
from docblog.models.user import User
from docblog.schemas.auth import UserCreate

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(db: Session, name: str, email: str, password: str) -> User:
    try:
        payload = UserCreate(name=name, email=normalize_email(email), password=password)
    except SchemaValidationError as exc:
        raise ValidationError(errors=[_describe(error) for error in exc.errors()]) from exc

    normalized = normalize_email(str(payload.email))
    if db.scalar(select(User.id).where(User.email == normalized)):
        logger.info("register_duplicate_email")
        raise DuplicateEmailError()

    user = User(name=payload.name, email=normalized, password_hash=hash_password(payload.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmailError() from exc
    db.refresh(user)
    logger.info("user_registered", extra={"registered_user_id": user.id})
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = db.scalar(select(User).where(User.email == normalize_email(email)))
    if user is None:
        burn_password_check(password)
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def _describe(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error.get('msg', 'invalid value')}" if field else error.get("msg", "invalid value")
