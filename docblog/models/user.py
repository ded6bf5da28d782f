from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docblog.db.base import Base
from docblog.models.common import TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    blogs = relationship("Blog", back_populates="author", cascade="all, delete-orphan")
