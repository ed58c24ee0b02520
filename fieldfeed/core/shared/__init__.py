"""
Shared utilities module

Domain-agnostic helpers used across the application.
"""

from .logger import ContextLogger, configure_logging, get_api_logger, get_logger, get_service_logger

__all__ = ["ContextLogger", "configure_logging", "get_logger", "get_api_logger", "get_service_logger"]
