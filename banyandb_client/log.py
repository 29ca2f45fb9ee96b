"""structlog setup for the BanyanDB client."""

import structlog


def configure_logging(level: int = 0) -> None:
    """Configure structlog with JSON rendering and ISO timestamps.

    Args:
        level: Minimum stdlib log level to emit (0 emits everything).
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a module logger."""
    return structlog.get_logger(name)
