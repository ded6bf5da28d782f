from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from docblog.core.config import get_settings
from docblog.core.errors import ConfigurationError, InvalidTokenError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return pwd_context.hash("docblog-timing-equalizer")


def burn_password_check(password: str) -> None:
    """Run a hash comparison that always fails, for lookups that found no user."""
    pwd_context.verify(password, _dummy_hash())


def require_signing_secret() -> str:
    secret = get_settings().jwt_secret
    if not secret:
        raise ConfigurationError("JWT_SECRET is not configured.")
    return secret


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    require_signing_secret()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.jwt_expire_days))
    payload = {"sub": user_id, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token`` or raise InvalidTokenError."""
    settings = get_settings()
    if not settings.jwt_secret:
        raise InvalidTokenError("Token cannot be verified")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError() from exc
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidTokenError()
    return subject
