# schoolhub/config/logging.py

import json
import logging
from datetime import datetime, timezone

from schoolhub.core.context import correlation_id_ctx, school_id_ctx

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_BASE_FIELDS = {"timestamp", "level", "message", "logger"}


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "correlation_id": correlation_id_ctx.get(),
            "school_id": school_id_ctx.get(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and key not in _BASE_FIELDS:
                log_record[key] = value
        return json.dumps(log_record, default=str)


def configure_logging(log_level: str):
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)
