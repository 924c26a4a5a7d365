import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import IO, Any, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "profile-engine"
LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(lineno)d %(message)s"


def _plain_value(value: Any) -> Any:
    # Roles are enums; population and simulation extras can carry numpy scalars
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "item") and callable(value.item) and getattr(value, "ndim", None) == 0:
        return value.item()
    return value


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        for key, value in list(log_record.items()):
            log_record[key] = _plain_value(value)


def setup_logging(log_level_str: Optional[str] = None, stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Installs the JSON handler on the root logger and returns it.

    The level defaults to ``SCORING_LOG_LEVEL``. Calling this again only
    changes the level; the existing handler is reused.
    """
    if log_level_str is None:
        from .config import scoring_settings
        log_level_str = scoring_settings.log_level
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers:
        if isinstance(handler.formatter, CustomJsonFormatter):
            return handler

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CustomJsonFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.debug("Structured JSON logging configured", extra={"log_level": logging.getLevelName(log_level)})
    return handler
