"""
Email template rendering with Jinja2.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from fieldfeed.core.domain import NotificationException

logger = logging.getLogger(__name__)


def format_money(value: Decimal | float | int | None, currency: str = "USD") -> str:
    amount = Decimal(str(value or 0))
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{amount:,.2f}"


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%B %d, %Y")


class EmailTemplateRenderer:
    """
    Renders the HTML bodies in ``fieldfeed/templates/email``.

    Uses strict undefined checking so a template referencing a value the
    caller did not pass fails loudly instead of sending a blank field.
    """

    def __init__(self, company_info: dict[str, str], currency: str = "USD"):
        self.company_info = company_info
        self.currency = currency
        self._env = Environment(
            loader=PackageLoader("fieldfeed", "templates/email"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["money"] = format_money
        self._env.filters["datetime"] = format_datetime

    def render(self, template_name: str, **context: Any) -> str:
        """
        Render ``template_name`` (without extension).

        Raises:
            NotificationException: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(f"{template_name}.html")
            return template.render(company=self.company_info, currency=self.currency, **context)
        except TemplateError as e:
            logger.error(f"Failed to render email template '{template_name}': {e}")
            raise NotificationException(
                f"Failed to render email template: {e}",
                template=template_name,
                original_error=e,
            ) from e
