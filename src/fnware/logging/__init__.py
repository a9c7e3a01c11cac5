"""fnware Logging — structlog configuration for the logging hooks."""

from fnware.logging.structlog_adapter import StructlogAdapter, configure_logging, get_logger

__all__ = ["StructlogAdapter", "configure_logging", "get_logger"]
