import asyncio
import sys

import uvicorn

from docblog.core.config import get_settings
from docblog.core.faults import handle_loop_exception, install_fault_handlers
from docblog.core.logging import configure_logging

STARTUP_FAILURE = 3


async def _serve(server: uvicorn.Server) -> None:
    asyncio.get_running_loop().set_exception_handler(handle_loop_exception)
    await server.serve()


def run() -> None:
    settings = get_settings()
    configure_logging()
    install_fault_handlers()
    config = uvicorn.Config("docblog.main:app", host=settings.host, port=settings.port, log_config=None)
    server = uvicorn.Server(config)
    asyncio.run(_serve(server))
    if not server.started:
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    run()
