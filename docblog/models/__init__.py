from docblog.models.blog import Blog
from docblog.models.user import User

__all__ = ["User", "Blog"]
