from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageRead(CamelModel):
    data: str
    content_type: str
    filename: str


class AuthorRead(CamelModel):
    id: str
    name: str


class BlogRead(CamelModel):
    id: str
    title: str
    google_drive_link: str
    document_id: str | None
    image: ImageRead | None
    author: AuthorRead
    featured: bool
    created_at: datetime
    updated_at: datetime


class BlogEnvelope(BaseModel):
    success: bool = True
    data: BlogRead


class BlogDeleted(BaseModel):
    message: str
