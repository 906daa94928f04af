# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks for both modes and structlog loggers for the pipeline

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import (
    LogContext,
    generate_operation_id,
    get_logger,
    log_source_fetch,
    with_operation_context,
    with_scrape_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "generate_operation_id",
    "get_logger",
    "log_source_fetch",
    "with_operation_context",
    "with_scrape_context",
]
