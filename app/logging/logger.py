import logging
import sys


class Log:
    """Centralized logging with structured format.

    Keyword arguments are rendered as ``key=value`` pairs after the message,
    e.g. ``Log.info("Extraction finished", document_id="d1", duration_ms=12)``
    logs ``Extraction finished | document_id=d1 duration_ms=12``.
    """

    _logger: logging.Logger = logging.getLogger("docpipeline")

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

    @classmethod
    def info(cls, message: str, /, **fields: object) -> None:
        cls._logger.info(cls._render(message, fields))

    @classmethod
    def error(cls, message: str, /, **fields: object) -> None:
        cls._logger.error(cls._render(message, fields))

    @classmethod
    def exception(cls, message: str, /, **fields: object) -> None:
        """Log an error together with the active exception's traceback."""
        cls._logger.error(cls._render(message, fields), exc_info=True)

    @classmethod
    def warning(cls, message: str, /, **fields: object) -> None:
        cls._logger.warning(cls._render(message, fields))

    @classmethod
    def debug(cls, message: str, /, **fields: object) -> None:
        cls._logger.debug(cls._render(message, fields))

    @staticmethod
    def _render(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} | {pairs}"
