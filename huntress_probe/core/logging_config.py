from huntress_probe.core.config import settings
import logging
import structlog

def setup_logging(level: str | None = None, log_file: str | None = None):
    """Configures logging for the entire application.

    Everything goes to stderr (and optionally a file) so stdout only
    carries the rendered probe output."""
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    # 1. Standard logging configuration
    handlers: list[logging.Handler] = [logging.StreamHandler()]  # stderr
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(message)s",  # Structlog will handle formatting
        handlers=handlers,
        force=True,
    )

    # 2. Configure structlog
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),  # Add timestamp
            structlog.processors.add_log_level,  # Include log level
            structlog.stdlib.add_logger_name,  # Include logger name
            structlog.processors.StackInfoRenderer(),  # Adds stack info on errors
            structlog.processors.format_exc_info,  # Adds exception trace
            structlog.processors.JSONRenderer(),  # Output logs in JSON format
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 3. Reduce noisy logs from the HTTP client
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return structlog.get_logger()
