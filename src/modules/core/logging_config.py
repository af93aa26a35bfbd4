"""structlog setup shared by settings and the stdlib ``logging`` tree.

All output is JSON on stdout.  Credentials never reach a log line:
``mask_sensitive_data`` rewrites passwords, secrets and bearer tokens in
every string value before rendering.
"""

import re
from typing import Any, Dict

import structlog

MASK = "***MASKED***"

SENSITIVE_PATTERN = re.compile(
    r"(?P<bearer>bearer\s+)[^\s,}\"']+"
    r"|(?P<key>password|passwd|secret|token|authorization)"
    r"""(?P<sep>[=:]\s*["']?)(?:bearer\s+)?([^\s,}"']+)""",
    re.IGNORECASE,
)


def _mask(match: re.Match) -> str:
    if match.group("bearer"):
        return f"{match.group('bearer')}{MASK}"
    return f"{match.group('key')}{match.group('sep')}{MASK}"


def mask_sensitive_data(_, __, event_dict):
    """structlog processor: mask credentials in string values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(_mask, value)
    return event_dict


SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_structlog() -> None:
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """``LOGGING`` dict routing stdlib and structlog records to one JSON handler."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    structlog.processors.JSONRenderer(),
                ],
                "foreign_pre_chain": SHARED_PROCESSORS,
            },
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "json"},
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
            # runserver access lines duplicate request_finished
            "django.server": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }
