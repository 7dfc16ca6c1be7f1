"""Console logging setup shared by the registries and the HTTP adapter."""

import json
import logging
from logging.config import dictConfig


class ExtrasFormatter(logging.Formatter):
    """Append the structured ``data`` payload passed via ``extra`` when present."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        data = getattr(record, "data", None)
        if data:
            message = f"{message} | data={json.dumps(data, sort_keys=True, default=str)}"
        return message


def configure_logging(level: str = "INFO") -> None:
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "extras": {
                "()": ExtrasFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "extras",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "loggers": {
            "medsim_registry": {
                "level": level.upper(),
                "propagate": True,
            },
        },
    })
