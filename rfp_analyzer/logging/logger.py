import logging
import sys


class Log:
    """Centralized logging with structured key=value context."""

    _logger: logging.Logger = logging.getLogger("rfp_analyzer")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @staticmethod
    def format(message: str, context: dict[str, object]) -> str:
        """Append context as sorted key=value pairs to the message."""
        if not context:
            return message
        pairs = " ".join(f"{key}={context[key]!r}" for key in sorted(context))
        return f"{message} {pairs}"

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(cls.format(message, context))

    @classmethod
    def error(cls, message: str, exc_info: bool = False, **context: object) -> None:
        """Log an error message, optionally with the active traceback."""
        cls._logger.error(cls.format(message, context), exc_info=exc_info)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(cls.format(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(cls.format(message, context))
