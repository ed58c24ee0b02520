"""
Core components shared by every domain
"""

from .background_tasks import BackgroundTaskRunner

__all__ = ["BackgroundTaskRunner"]
