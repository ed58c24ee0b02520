"""
Field to Feed orders service.
"""

__version__ = "0.1.0"
