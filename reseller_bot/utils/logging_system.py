"""
Console logging for the bot and the discord.py library.

``configure_logging`` is called once by the entry point, after the
configuration (and any ``.env`` file) has been loaded, and attaches a
handler to the ``reseller_bot`` and ``discord`` loggers.  Modules only ever
call ``logging.getLogger(__name__)`` and inherit that setup.
"""
import logging
import os
import sys
from typing import Iterable

from rich.logging import RichHandler

# Loggers that receive a console handler: the package and discord.py.
ROOT_LOGGERS = ("reseller_bot", "discord")

_PLAIN_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _console_handler() -> logging.Handler:
    # Colour only for an interactive terminal that has not opted out.
    if os.getenv("NO_COLOR") is None and sys.stdout.isatty():
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt="%H:%M:%S"))
    return handler


def setup_log_system(name: str, *, level: str | None = None) -> logging.Logger:
    """
    Give logger ``name`` a console handler and a level.

    ``level`` falls back to ``LOG_LEVEL`` and then INFO.  Calling this again
    for the same logger only updates its level.
    """
    level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_str, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    if not logger.handlers:
        logger.addHandler(_console_handler())
    # Records still reach handlers installed on the root logger (pytest's
    # caplog, for one); the root logger has none of its own by default.
    logger.propagate = True
    return logger


def configure_logging(level: str | None = None, names: Iterable[str] = ROOT_LOGGERS) -> None:
    """Set up every logger in ``names`` with the same level."""
    for name in names:
        setup_log_system(name, level=level)


# Convenience alias
get_logger = setup_log_system
