from fastapi import Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from docblog.core.errors import AuthenticationRequiredError, InvalidTokenError
from docblog.core.logging import current_user_id
from docblog.core.security import decode_access_token
from docblog.db.session import get_db
from docblog.models.user import User
from docblog.services.accounts import get_user
from docblog.services.media import ImageRecord, normalize_upload

TOKEN_COOKIE = "token"


def extract_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE) or None


async def require_user_id(request: Request) -> str:
    token = extract_token(request)
    if token is None:
        raise AuthenticationRequiredError("No token, authorization denied")
    user_id = decode_access_token(token)
    request.state.user_id = user_id
    current_user_id.set(user_id)
    return user_id


def get_current_user(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)) -> User:
    user = get_user(db, user_id)
    if user is None:
        raise InvalidTokenError()
    return user


async def image_upload(image: UploadFile | None = File(default=None)) -> ImageRecord | None:
    return await normalize_upload(image)
