from docblog.schemas.auth import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserCreate, UserRead, UserSummary
from docblog.schemas.blog import AuthorRead, BlogDeleted, BlogEnvelope, BlogRead, ImageRead

__all__ = [
    "UserCreate",
    "RegisterRequest",
    "LoginRequest",
    "UserSummary",
    "UserRead",
    "AuthResponse",
    "MessageResponse",
    "ImageRead",
    "AuthorRead",
    "BlogRead",
    "BlogEnvelope",
    "BlogDeleted",
]
