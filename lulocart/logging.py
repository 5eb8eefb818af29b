import sys

from loguru import logger
from lulocart.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> {extra[context]}"
)


def _attach_context(record) -> None:
    """Render diagnostic metadata bound with ``logger.bind`` after the message."""
    extra = record["extra"]
    extra.setdefault("name", record["name"])
    context = {k: v for k, v in extra.items() if k not in ("name", "context")}
    extra["context"] = " ".join(f"{k}={v}" for k, v in sorted(context.items())) if context else ""


class AppLogger:
    """Global logger configuration for the cart and order services.

    Sets the log level from get_config().log_level. Records go to stderr so
    diagnostics never mix with values a caller prints.
    """
    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        logger.remove()
        logger.configure(patcher=_attach_context)
        logger.add(sink=sys.stderr, level=log_level, format=LOG_FORMAT)
        self.logger = logger

    def get_logger(self, name: str = None, **context):
        """Get the configured logger instance.

        Args:
            name (str, optional): Name for the logger context. Defaults to None.
            **context: Diagnostic metadata (endpoint, status, order id, ...)
                appended to every record of the returned logger.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(name=name, **context)
        return self.logger.bind(**context) if context else self.logger

def get_logger(name: str = None, **context):
    """Get a new application logger using the latest config."""
    return AppLogger().get_logger(name, **context)
