"""
Logging setup for a process whose terminal belongs to Textual.
"""

import logging

from textual.logging import TextualHandler

from narrator_console.config import LoggingOptions

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(options: LoggingOptions) -> None:
    """
    Route records to the Textual devtools console, and to a file if asked.

    Nothing is written to stdout/stderr while the app is running; the
    handler only falls back to stderr when no app is active.
    """
    handlers: list[logging.Handler] = [TextualHandler()]
    if options.log_file:
        file_handler = logging.FileHandler(options.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=options.level, handlers=handlers, force=True)
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLevelName(options.level)))
