"""
Tests for the structured logging helpers.
"""

import json
import logging

from fieldfeed.core.shared.logger import ColoredFormatter, JSONFormatter, PlainFormatter, get_service_logger


def _record(**extra_data) -> logging.LogRecord:
    record = logging.LogRecord("service.notifications", logging.ERROR, __file__, 10, "Notification failed", None, None)
    record.extra_data = extra_data
    return record


class TestContextLogger:
    def test_with_context_merges_without_mutating_parent(self):
        base = get_service_logger("notifications")

        child = base.with_context(order_number="ORD-000001")

        assert child.context["order_number"] == "ORD-000001"
        assert child.context["service"] == "notifications"
        assert "order_number" not in base.context

    def test_context_travels_on_the_record(self, caplog):
        log = get_service_logger("notifications").with_context(recipient="buyer@priyafarms.com")

        with caplog.at_level(logging.INFO, logger="service.notifications"):
            log.info("sent", template="quote")

        assert caplog.records[-1].extra_data["recipient"] == "buyer@priyafarms.com"
        assert caplog.records[-1].extra_data["template"] == "quote"


class TestFormatters:
    def test_json_formatter_emits_context_object(self):
        output = json.loads(JSONFormatter().format(_record(order_number="ORD-000001")))

        assert output["level"] == "ERROR"
        assert output["context"] == {"order_number": "ORD-000001"}

    def test_plain_formatter_appends_key_values(self):
        output = PlainFormatter("%(message)s").format(_record(order_number="ORD-000001", recipient=None))

        assert output == "Notification failed [order_number=ORD-000001]"

    def test_colored_formatter_leaves_shared_record_untouched(self):
        record = _record()

        ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert record.levelname == "ERROR"
