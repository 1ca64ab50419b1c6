import logging
import sys


class Log:
    """Centralized logging with structured format.

    Messages about a single document can be tagged with ``file_name``; the tag
    is rendered as a ``[name]`` prefix so batch output stays readable when
    several files are processed in one run.
    """

    _logger: logging.Logger = logging.getLogger("docanalyzer")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stderr handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, file_name: str | None = None) -> None:
        """Log an info message."""
        cls._logger.info(cls._tag(message, file_name))

    @classmethod
    def error(cls, message: str, file_name: str | None = None) -> None:
        """Log an error message."""
        cls._logger.error(cls._tag(message, file_name))

    @classmethod
    def warning(cls, message: str, file_name: str | None = None) -> None:
        """Log a warning message."""
        cls._logger.warning(cls._tag(message, file_name))

    @classmethod
    def debug(cls, message: str, file_name: str | None = None) -> None:
        """Log a debug message."""
        cls._logger.debug(cls._tag(message, file_name))

    @classmethod
    def exception(cls, message: str, file_name: str | None = None) -> None:
        """Log an error message with the active exception's traceback."""
        cls._logger.exception(cls._tag(message, file_name))

    @staticmethod
    def _tag(message: str, file_name: str | None) -> str:
        if file_name is None:
            return message
        return f"[{file_name}] {message}"
