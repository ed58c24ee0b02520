"""
Invoice rendering infrastructure
"""

from .pdf_generator import InvoicePdfGenerator
from .temp_storage import InvoiceTempStorage

__all__ = ["InvoicePdfGenerator", "InvoiceTempStorage"]
