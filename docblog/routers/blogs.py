from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from docblog.db.session import get_db
from docblog.models.user import User
from docblog.routers.deps import get_current_user, image_upload
from docblog.schemas.blog import BlogDeleted, BlogEnvelope, BlogRead
from docblog.services.blogs import (
    BlogPatch,
    create_blog,
    delete_blog,
    get_blog,
    list_blogs,
    serialize_blog,
    update_blog,
)
from docblog.services.media import ImageRecord

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.get("", response_model=list[BlogRead])
def list_all(db: Session = Depends(get_db)) -> list[BlogRead]:
    return [serialize_blog(blog) for blog in list_blogs(db)]


@router.post("", response_model=BlogRead, status_code=status.HTTP_201_CREATED)
def create(
    current_user: User = Depends(get_current_user),
    image: ImageRecord | None = Depends(image_upload),
    title: str | None = Form(default=None),
    google_drive_link: str | None = Form(default=None, alias="googleDriveLink"),
    featured: bool = Form(default=False),
    db: Session = Depends(get_db),
) -> BlogRead:
    blog = create_blog(db, current_user.id, title, google_drive_link, image=image, featured=featured)
    return serialize_blog(blog)


@router.get("/{blog_id}", response_model=BlogEnvelope)
def get_one(blog_id: str, db: Session = Depends(get_db)) -> BlogEnvelope:
    return BlogEnvelope(data=serialize_blog(get_blog(db, blog_id)))


@router.put("/{blog_id}", response_model=BlogRead)
def update(
    blog_id: str,
    current_user: User = Depends(get_current_user),
    image: ImageRecord | None = Depends(image_upload),
    title: str | None = Form(default=None),
    google_drive_link: str | None = Form(default=None, alias="googleDriveLink"),
    featured: bool | None = Form(default=None),
    db: Session = Depends(get_db),
) -> BlogRead:
    patch = BlogPatch(title=title, google_drive_link=google_drive_link, image=image, featured=featured)
    return serialize_blog(update_blog(db, blog_id, current_user.id, patch))


@router.delete("/{blog_id}", response_model=BlogDeleted)
def delete(blog_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> BlogDeleted:
    delete_blog(db, blog_id, current_user.id)
    return BlogDeleted(message="Blog removed successfully")
