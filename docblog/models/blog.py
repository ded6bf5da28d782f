from sqlalchemy import Boolean, CheckConstraint, ForeignKey, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docblog.db.base import Base
from docblog.models.common import TimestampMixin, UUIDPrimaryKeyMixin
from docblog.services.media import ImageRecord


class Blog(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "blogs"
    __table_args__ = (
        CheckConstraint(
            "(image_data IS NULL AND image_content_type IS NULL AND image_filename IS NULL)"
            " OR (image_data IS NOT NULL AND image_content_type IS NOT NULL AND image_filename IS NOT NULL)",
            name="ck_blogs_image_complete",
        ),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    google_drive_link: Mapped[str] = mapped_column(String(2048), nullable=False)
    image_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    image_content_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    image_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    author = relationship("User", back_populates="blogs")

    @property
    def image(self) -> ImageRecord | None:
        if self.image_data is None:
            return None
        return ImageRecord(data=self.image_data, content_type=self.image_content_type, filename=self.image_filename)

    @image.setter
    def image(self, record: ImageRecord | None) -> None:
        if record is None:
            self.image_data = self.image_content_type = self.image_filename = None
            return
        self.image_data = record.data
        self.image_content_type = record.content_type
        self.image_filename = record.filename
