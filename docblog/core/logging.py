import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s user_id=%(user_id)s %(message)s"

current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)


class PrivacyFilter(logging.Filter):
    """Drop credentials and binary payloads from structured logs."""

    BLOCKED_KEYS = {"password", "password_hash", "token", "image_data"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "user_id"):
            record.user_id = current_user_id.get()
        return True


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
    )
    root = logging.getLogger()
    for handler in root.handlers:
        _add_once(handler, PrivacyFilter)
        _add_once(handler, RequestContextFilter)


def _add_once(handler: logging.Handler, filter_cls: type[logging.Filter]) -> None:
    if not any(isinstance(existing, filter_cls) for existing in handler.filters):
        handler.addFilter(filter_cls())
