"""
Invoice Renderer Port
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.services import Invoice


@dataclass(frozen=True)
class RenderedInvoice:
    """A rendered invoice document plus the figures printed on it."""

    content: bytes
    filename: str
    invoice: Invoice

    @property
    def invoice_number(self) -> str:
        return self.invoice.invoice_number


@runtime_checkable
class IInvoiceRenderer(Protocol):
    """Produces a billing document for an order."""

    def render(self, order: Order) -> RenderedInvoice:
        """Render the invoice document for ``order``"""
        ...
