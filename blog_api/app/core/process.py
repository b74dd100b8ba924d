"""
Process level error policy.

Two kinds of failures are handled outside the request pipeline:

* errors reported to the asyncio loop's exception handler (for example
  a task whose exception was never retrieved) are logged and the
  process keeps serving;
* an exception escaping the server itself is fatal: it is logged and
  the process exits with status 1 so a supervisor (systemd, Docker,
  a process manager) can restart it.
"""

import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, NoReturn

logger = logging.getLogger(__name__)

FATAL_EXIT_CODE = 1


def log_unhandled_async_error(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Loop exception handler: log and continue."""
    exc = context.get("exception")
    message = context.get("message", "Unhandled error in event loop")
    if exc is not None:
        logger.error("Unhandled async error: %s", message, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.error("Unhandled async error: %s", message)


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    loop.set_exception_handler(log_unhandled_async_error)


def exit_on_fatal_error(exc: BaseException) -> NoReturn:
    logger.critical("Uncaught Exception: %s", exc, exc_info=(type(exc), exc, exc.__traceback__))
    sys.exit(FATAL_EXIT_CODE)


def run_supervised(main: Callable[[], Awaitable[None]]) -> None:
    """Run ``main`` on a fresh event loop with the error policy applied.

    ``KeyboardInterrupt`` and ``SystemExit`` are passed through; any other
    exception terminates the process with ``FATAL_EXIT_CODE``.
    """

    async def _runner() -> None:
        install_loop_exception_handler(asyncio.get_running_loop())
        await main()

    try:
        asyncio.run(_runner())
    except (KeyboardInterrupt, SystemExit):
        raise
    except Exception as exc:
        exit_on_fatal_error(exc)
