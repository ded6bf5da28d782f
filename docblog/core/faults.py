import asyncio
import logging
import os
import signal
import sys
import threading
from types import TracebackType

logger = logging.getLogger(__name__)


def request_shutdown() -> None:
    """Ask the server to stop the same way an operator's SIGTERM would."""
    os.kill(os.getpid(), signal.SIGTERM)


def handle_uncaught_exception(
    exc_type: type[BaseException], exc: BaseException, tb: TracebackType | None
) -> None:
    """Log a main-thread crash; the interpreter is already exiting, so no SIGTERM is sent."""
    logger.critical("uncaught_exception_shutting_down", exc_info=(exc_type, exc, tb))
    logging.shutdown()


def handle_thread_exception(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    thread_name = args.thread.name if args.thread else "unknown"
    logger.critical(
        "uncaught_thread_exception_shutting_down",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        extra={"crashed_thread": thread_name},
    )
    request_shutdown()


def handle_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logger.critical(
        "unhandled_async_error_shutting_down",
        exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
        extra={"loop_message": context.get("message")},
    )
    request_shutdown()


def install_fault_handlers() -> None:
    sys.excepthook = handle_uncaught_exception
    threading.excepthook = handle_thread_exception
