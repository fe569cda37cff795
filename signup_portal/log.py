import logging
import sys

import structlog


def get_logger(name: str | None = None):
    """
    Get a structlog logger under the signup_portal namespace.

    Args:
        name: Module name (typically __name__). If None, returns the root signup_portal logger.
    """
    if name is None:
        return structlog.get_logger("signup_portal")
    if name.startswith("signup_portal"):
        return structlog.get_logger(name)
    return structlog.get_logger(f"signup_portal.{name}")


def setup_third_party_logging(debug_all: bool = False) -> None:
    """Quiet werkzeug/urllib3 and friends unless everything should be verbose."""
    if debug_all:
        return

    for log_name in list(logging.Logger.manager.loggerDict):
        if not log_name.startswith("signup_portal"):
            logging.getLogger(log_name).setLevel(logging.WARNING)


def format_context(logger, method_name, event_dict):
    """Fold bound key/values into the event message"""
    excluded = {"level", "timestamp", "logger", "stack", "exc_info", "event"}
    context = " ".join(f"{k}={v}" for k, v in event_dict.items() if k not in excluded)

    event = event_dict.get("event", "")
    event_dict["event"] = f"{event} [{context}]" if context else event

    return event_dict


def setup_logging(log_level: str = "INFO", debug_all: bool = False) -> None:
    """
    Setup logging for the portal.

    signup_portal logs at `log_level`; the root logger (and so third-party
    libraries) stays at WARNING unless `debug_all` is set.
    """
    root_level = "DEBUG" if debug_all else "WARNING"
    logging.basicConfig(
        stream=sys.stderr,
        level=root_level,
        format="%(levelname)s:%(name)s: %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            format_context,
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    setup_third_party_logging(debug_all)
    logging.getLogger("signup_portal").setLevel(log_level.upper())
