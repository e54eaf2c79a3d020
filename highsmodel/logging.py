"""
Logging configuration for highsmodel

The package logger carries only a ``NullHandler``; records reach whatever
handlers the application configures. Call ``setup_root_logger`` to have
highsmodel print its own messages to stderr.
"""
import logging
import sys
from typing import Optional, Union

_ROOT_NAME = "highsmodel"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_root_configured = False

logging.getLogger(_ROOT_NAME).addHandler(logging.NullHandler())


def setup_root_logger(
    level: int = logging.WARNING,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """
    Attach a single output handler to the ``highsmodel`` logger.

    Calling this more than once is a no-op until ``reset_logging`` runs.

    Parameters
    ----------
    level : int
        Logging level (default: WARNING)
    format_string : str, optional
        Custom format string
    handler : logging.Handler, optional
        Custom handler (default: StreamHandler on stderr)
    """
    global _root_configured

    if _root_configured:
        return

    root_logger = logging.getLogger(_ROOT_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the ``highsmodel`` namespace.

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module

    Returns
    -------
    logging.Logger
        Child logger inheriting the package configuration
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the level of every ``highsmodel`` logger.

    This does not add a handler; see ``setup_root_logger``.

    Parameters
    ----------
    level : int or str
        ``logging.DEBUG`` etc., or a level name such as ``'DEBUG'``
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger(_ROOT_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def reset_logging() -> None:
    """Return to the library default of a lone ``NullHandler`` (mainly for tests)."""
    global _root_configured
    _root_configured = False

    root_logger = logging.getLogger(_ROOT_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.NOTSET)
