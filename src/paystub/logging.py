import logging
import sys

import structlog

SERVICE = "paystub"


def _add_service(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE)
    return event_dict


def _stderr_logger(*args) -> structlog.PrintLogger:
    # looked up per call so a swapped sys.stderr is honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = "INFO") -> None:
    """JSON event logs on stderr; stdout is left to CLI output."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            _add_service,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
