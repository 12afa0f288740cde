import logging
import sys

from exhibitor_web import settings


class MainFormatter(logging.Formatter):
    """A formatter for bootstrap logs and the raw output of the CLI help table."""

    def format(self, record):
        # Help lines are already laid out by ExhibitorCLI.log_help.
        if getattr(record, "raw", False):
            return record.getMessage()

        original_format = self._style._fmt
        self._style._fmt = settings.LOG_FORMAT
        formatted_message = super().format(record)
        self._style._fmt = original_format
        return formatted_message


def setup_logging(console_level: int = logging.INFO) -> None:
    """
    Configures the root logger for the application.
    This sets up the console handler, clearing any previously configured
    handlers to prevent duplication.

    :param console_level: The logging level for the console output (e.g., logging.INFO).
    """
    root_logger = logging.getLogger()
    # Set root level to lowest to capture all messages for handler filtering
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to prevent re-adding them on re-runs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(MainFormatter())
    root_logger.addHandler(console_handler)

    # Hypercorn's access log is noisy at DEBUG.
    logging.getLogger("hypercorn.access").setLevel(max(console_level, logging.INFO))
