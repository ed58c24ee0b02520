"""
HTTP middleware
"""

from .logging_middleware import RequestLoggingMiddleware, get_client_ip

__all__ = ["RequestLoggingMiddleware", "get_client_ip"]
