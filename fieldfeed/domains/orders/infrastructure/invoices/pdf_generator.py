"""
Invoice PDF Generator

Renders order invoices with fpdf2. Figures come from ``InvoiceCalculator``
so the PDF always matches the JSON invoice endpoints.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fpdf import FPDF

from fieldfeed.domains.orders.application.ports import RenderedInvoice
from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.services import Invoice, InvoiceCalculator

logger = logging.getLogger(__name__)


def _pdf_text(value: object) -> str:
    """Core PDF fonts are latin-1 only."""
    return str(value).encode("latin-1", errors="replace").decode("latin-1")


def _money(amount, currency: str) -> str:
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{float(amount):,.2f}"


class InvoicePdfGenerator:
    """
    Implements ``IInvoiceRenderer`` with fpdf2.

    Layout:
    - Company header
    - Invoice number, order number, dates
    - Bill-to block (customer snapshot, delivery address)
    - Line items table
    - Subtotal / tax / total box
    """

    PAGE_WIDTH = 210
    MARGIN = 20

    PRIMARY_COLOR = (5, 150, 105)
    SECONDARY_COLOR = (100, 116, 139)
    TEXT_COLOR = (30, 41, 59)
    HEADER_FILL = (241, 245, 249)

    # Line item table column widths (mm), sums to the printable width
    COLUMNS = (("Product", 62), ("Category", 34), ("Qty", 24), ("Unit Price", 25), ("Total", 25))

    def __init__(self, calculator: InvoiceCalculator, company_info: dict[str, str]):
        self.calculator = calculator
        self.company_info = company_info

    def render(self, order: Order) -> RenderedInvoice:
        invoice = self.calculator.build(order)
        filename = f"Invoice_{invoice.invoice_number}_{order.order_number}.pdf"

        logger.info(f"Generating invoice PDF {invoice.invoice_number} for order {order.order_number}")

        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.set_font("Helvetica", size=10)

        self._add_header(pdf)
        self._add_invoice_details(pdf, invoice)
        self._add_bill_to(pdf, order)
        self._add_line_items(pdf, invoice)
        self._add_totals(pdf, invoice)
        self._add_footer(pdf, order)

        # fpdf2's output() returns bytearray
        content = bytes(pdf.output())
        logger.info(f"Invoice PDF generated: {filename} ({len(content)} bytes)")
        return RenderedInvoice(content=content, filename=filename, invoice=invoice)

    def _add_header(self, pdf: FPDF) -> None:
        pdf.set_y(self.MARGIN)
        pdf.set_font("Helvetica", "B", 18)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(0, 10, _pdf_text(self.company_info.get("name", "")), new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", size=9)
        pdf.set_text_color(*self.SECONDARY_COLOR)
        for key in ("tagline", "address"):
            if self.company_info.get(key):
                pdf.cell(0, 5, _pdf_text(self.company_info[key]), new_x="LMARGIN", new_y="NEXT")
        contact = " | ".join(
            self.company_info[key] for key in ("phone", "email", "website") if self.company_info.get(key)
        )
        if contact:
            pdf.cell(0, 5, _pdf_text(contact), new_x="LMARGIN", new_y="NEXT")

        pdf.ln(4)
        pdf.set_draw_color(*self.PRIMARY_COLOR)
        pdf.set_line_width(0.5)
        y_pos = pdf.get_y()
        pdf.line(self.MARGIN, y_pos, self.PAGE_WIDTH - self.MARGIN, y_pos)
        pdf.ln(6)

    def _add_invoice_details(self, pdf: FPDF, invoice: Invoice) -> None:
        pdf.set_font("Helvetica", "B", 16)
        pdf.set_text_color(*self.TEXT_COLOR)
        pdf.cell(0, 10, "INVOICE", new_x="LMARGIN", new_y="NEXT")

        rows = (
            ("Invoice Number:", invoice.invoice_number),
            ("Order Number:", invoice.order_number),
            ("Invoice Date:", invoice.invoice_date.strftime("%B %d, %Y")),
            ("Due Date:", invoice.due_date.strftime("%B %d, %Y")),
        )
        for label, value in rows:
            pdf.set_font("Helvetica", "B", 10)
            pdf.cell(40, 6, label, new_x="RIGHT")
            pdf.set_font("Helvetica", size=10)
            pdf.cell(0, 6, _pdf_text(value), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

    def _add_bill_to(self, pdf: FPDF, order: Order) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(0, 7, "Bill To", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", size=10)
        pdf.set_text_color(*self.TEXT_COLOR)
        customer = order.customer
        lines = [customer.name, customer.company, customer.email, customer.phone] if customer else []
        if order.delivery_address is not None:
            lines.append(order.delivery_address.get_full_address())
        for line in lines:
            if line:
                pdf.cell(0, 5, _pdf_text(line), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _add_line_items(self, pdf: FPDF, invoice: Invoice) -> None:
        currency = invoice.totals.currency

        pdf.set_font("Helvetica", "B", 10)
        pdf.set_fill_color(*self.HEADER_FILL)
        pdf.set_draw_color(226, 232, 240)
        for title, width in self.COLUMNS:
            pdf.cell(width, 8, title, border=1, fill=True, new_x="RIGHT")
        pdf.ln()

        pdf.set_font("Helvetica", size=9)
        for line in invoice.lines:
            values = (
                line.name,
                line.category,
                f"{line.quantity} {line.unit}".strip(),
                _money(line.unit_price, currency),
                _money(line.line_total, currency),
            )
            for (_, width), value in zip(self.COLUMNS, values):
                pdf.cell(width, 7, _pdf_text(value)[:40], border=1, new_x="RIGHT")
            pdf.ln()
        pdf.ln(6)

    def _add_totals(self, pdf: FPDF, invoice: Invoice) -> None:
        currency = invoice.totals.currency
        box_width = 80
        box_x = self.PAGE_WIDTH - self.MARGIN - box_width
        tax_percent = f"{float(invoice.tax_rate) * 100:.0f}%"

        rows = (
            ("Subtotal:", _money(invoice.subtotal, currency), False),
            (f"Tax ({tax_percent}):", _money(invoice.tax_amount, currency), False),
            ("Total:", _money(invoice.total, currency), True),
        )
        for label, value, emphasis in rows:
            pdf.set_x(box_x)
            pdf.set_font("Helvetica", "B" if emphasis else "", 12 if emphasis else 10)
            pdf.set_text_color(*(self.PRIMARY_COLOR if emphasis else self.TEXT_COLOR))
            pdf.cell(40, 7, label, new_x="RIGHT")
            pdf.cell(40, 7, value, align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(8)

    def _add_footer(self, pdf: FPDF, order: Order) -> None:
        if order.admin_notes:
            pdf.set_font("Helvetica", "B", 10)
            pdf.set_text_color(*self.TEXT_COLOR)
            pdf.cell(0, 6, "Notes", new_x="LMARGIN", new_y="NEXT")
            pdf.set_font("Helvetica", size=9)
            pdf.multi_cell(0, 5, _pdf_text(order.admin_notes), new_x="LMARGIN", new_y="NEXT")
            pdf.ln(4)

        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(0, 8, "Thank you for your business!", align="C", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", size=8)
        pdf.set_text_color(*self.SECONDARY_COLOR)
        generated_at = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        pdf.cell(0, 5, f"Generated: {generated_at}", align="C", new_x="LMARGIN", new_y="NEXT")
