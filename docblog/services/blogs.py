import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from docblog.core.config import get_settings
from docblog.core.errors import InvalidIdError, NotAuthorizedError, NotFoundError, ValidationError
from docblog.models.blog import Blog
from docblog.schemas.blog import AuthorRead, BlogRead, ImageRead
from docblog.services.documents import extract_document_id, is_valid_document_link
from docblog.services.media import ImageRecord

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200


@dataclass(slots=True)
class BlogPatch:
    title: str | None = None
    google_drive_link: str | None = None
    image: ImageRecord | None = None
    featured: bool | None = None


def parse_blog_id(raw_id: str) -> str:
    try:
        return str(uuid.UUID(raw_id))
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidIdError("Invalid blog ID format") from exc


def clean_title(title: str | None) -> str:
    value = (title or "").strip()
    if not value:
        raise ValidationError("Title is required")
    if len(value) < TITLE_MIN_LENGTH:
        raise ValidationError(f"Title must be at least {TITLE_MIN_LENGTH} characters long")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters long")
    return value


def clean_link(link: str | None) -> str:
    value = (link or "").strip()
    if not value:
        raise ValidationError("Google Drive link is required")
    if not is_valid_document_link(value, get_settings().allowed_document_hosts):
        raise ValidationError("Please provide a valid Google Docs or Google Drive link")
    return value


def create_blog(
    db: Session,
    owner_id: str,
    title: str | None,
    link: str | None,
    image: ImageRecord | None = None,
    featured: bool = False,
) -> Blog:
    blog = Blog(title=clean_title(title), google_drive_link=clean_link(link), author_id=owner_id, featured=featured)
    blog.image = image
    db.add(blog)
    db.commit()
    logger.info("blog_created", extra={"blog_id": blog.id, "has_image": image is not None})
    return _load(db, blog.id)


def list_blogs(db: Session) -> list[Blog]:
    stmt = select(Blog).options(joinedload(Blog.author)).order_by(Blog.created_at.desc(), Blog.id.desc())
    return list(db.scalars(stmt).all())


def get_blog(db: Session, raw_id: str) -> Blog:
    blog_id = parse_blog_id(raw_id)
    blog = db.scalar(select(Blog).options(joinedload(Blog.author)).where(Blog.id == blog_id))
    if blog is None:
        raise NotFoundError("Blog not found")
    return blog


def update_blog(db: Session, raw_id: str, owner_id: str, patch: BlogPatch) -> Blog:
    blog = _owned(db, raw_id, owner_id)
    # Blank form fields count as unset, matching what the client sends for untouched inputs.
    if patch.title is not None and patch.title.strip():
        blog.title = clean_title(patch.title)
    if patch.google_drive_link is not None and patch.google_drive_link.strip():
        blog.google_drive_link = clean_link(patch.google_drive_link)
    if patch.image is not None:
        blog.image = patch.image
    if patch.featured is not None:
        blog.featured = patch.featured
    db.add(blog)
    db.commit()
    logger.info("blog_updated", extra={"blog_id": blog.id})
    return _load(db, blog.id)


def delete_blog(db: Session, raw_id: str, owner_id: str) -> None:
    blog = _owned(db, raw_id, owner_id)
    blog_id = blog.id
    db.delete(blog)
    db.commit()
    logger.info("blog_deleted", extra={"blog_id": blog_id})


def serialize_blog(blog: Blog) -> BlogRead:
    image = blog.image
    return BlogRead(
        id=blog.id,
        title=blog.title,
        google_drive_link=blog.google_drive_link,
        document_id=extract_document_id(blog.google_drive_link),
        image=ImageRead.model_validate(image.to_wire()) if image else None,
        author=AuthorRead(id=blog.author.id, name=blog.author.name),
        featured=blog.featured,
        created_at=blog.created_at,
        updated_at=blog.updated_at,
    )


def _owned(db: Session, raw_id: str, owner_id: str) -> Blog:
    blog = get_blog(db, raw_id)
    if blog.author_id != owner_id:
        logger.warning("blog_mutation_denied", extra={"blog_id": blog.id})
        raise NotAuthorizedError()
    return blog


def _load(db: Session, blog_id: str) -> Blog:
    db.expire_all()
    return db.scalar(select(Blog).options(joinedload(Blog.author)).where(Blog.id == blog_id))
