"""Rich-based logging system for SUBSIFT.

Provides colourised, module-tagged log messages with optional file output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_console = Console(stderr=True)
_file_handler: Optional[logging.FileHandler] = None
_configured = False


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    verbose: bool = False,
) -> None:
    """Install the console and file handlers on the ``subsift`` logger.

    Args:
        level: Base log level (e.g. ``logging.DEBUG``).
        log_file: Optional filesystem path for a persistent log file.
        verbose: When ``True``, forces ``DEBUG`` level.
    """
    global _file_handler, _configured

    if verbose:
        level = logging.DEBUG

    package_logger = logging.getLogger("subsift")
    package_logger.setLevel(level)
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None
    package_logger.handlers.clear()

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
        # subdomain names may contain brackets; print them verbatim
        markup=False,
    )
    rich_handler.setLevel(level)
    package_logger.addHandler(rich_handler)

    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = logging.FileHandler(file_path, encoding="utf-8")
        _file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        _file_handler.setFormatter(formatter)
        package_logger.addHandler(_file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named child logger under the ``subsift`` hierarchy.

    Installs the default handlers on first use when
    :func:`configure_logging` has not been called.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.

    Returns:
        :class:`logging.Logger` instance.
    """
    if not _configured:
        configure_logging()

    if name.startswith("subsift.") or name == "subsift":
        return logging.getLogger(name)
    return logging.getLogger(f"subsift.{name}")
