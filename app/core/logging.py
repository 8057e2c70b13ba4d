import sys
from logging.config import dictConfig

from app.core.config import LOG_LEVEL

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s | "
    "%(path)s | %(status_code)s | %(process_time_ms)sms"
)


def _stdout_handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def setup_logging():
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": DEFAULT_FORMAT},
                "access": {"format": ACCESS_FORMAT},
            },
            "handlers": {
                "console": _stdout_handler("default"),
                "access_console": _stdout_handler("access"),
            },
            "loggers": {
                # request_logging_middleware writes here
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                # our access log replaces uvicorn's
                "uvicorn.access": {
                    "level": "WARNING",
                },
                "sqlalchemy.engine": {
                    "level": "WARNING",
                },
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["console"],
            },
        }
    )
