"""Logging configuration for gitter.

Console output goes through rich, optional file output uses a plain
format.

Example:
    ```python
    from gitter.core.logging import setup_logging

    setup_logging(debug=True, log_file="~/logs/gitter.log")
    ```
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from rich.console import Console
from rich.logging import RichHandler

# Create console for rich output
console = Console(stderr=True)


def setup_logging(
    debug: bool = False,
    log_file: Optional[str] = None,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Set up logging configuration.

    Args:
        debug: Whether to enable debug logging (default: False). Debug
            logging shows every git command line that is run.
        log_file: Optional path to log file. If provided, logs will be
                 written to this file in addition to console output.
                 The path is expanded to handle ~ for home directory.
        log_format: Format string for file log messages.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=console,
        show_path=debug,
        enable_link_path=debug,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized (debug=%s)", debug)
    if log_file:
        logger.debug("Log file: %s", log_file)

    def handle_exception(
        exc_type: Type[BaseException],
        exc_value: BaseException,
        exc_traceback: Optional[TracebackType],
    ) -> None:
        """Log uncaught exceptions instead of printing a bare traceback."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )

    sys.excepthook = handle_exception
