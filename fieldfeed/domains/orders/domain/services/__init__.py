"""
Orders Domain Services
"""

from .invoice_calculator import Invoice, InvoiceCalculator, InvoiceLine, invoice_number_for

__all__ = ["InvoiceCalculator", "Invoice", "InvoiceLine", "invoice_number_for"]
