"""Logging setup for entity_codegen.

Every module obtains its logger through :func:`get_logger` so all output
hangs off the ``entity_codegen`` logger. Nothing is printed until
:func:`configure_logging` installs a rich handler (the CLI does this).
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "entity_codegen"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.INFO, console: Console | None = None
) -> logging.Handler:
    """Send package log records to a rich handler on stderr.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Minimum level for the package logger.
        console: Console to write to (defaults to a stderr console).

    Returns:
        The installed handler.
    """
    for handler in _root_logger.handlers[:]:
        if isinstance(handler, RichHandler):
            _root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    return handler
