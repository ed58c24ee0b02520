"""
Integration tests for the public order endpoints: submission, customer
confirmation and invoice lookup by order number.
"""

from uuid import UUID

import pytest

from fieldfeed.domains.orders.domain.value_objects import OrderStatus

from tests.utils.fakes import ADMIN_EMAIL
from tests.utils.builders import order_payload

pytestmark = pytest.mark.integration

API = "/api/v1/orders"
CUSTOMER = "buyer@priyafarms.com"


def _create(client, **overrides) -> dict:
    response = client.post(f"{API}/create", json=order_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]["order"]


class TestCreateOrder:
    def test_creates_pending_order(self, client):
        response = client.post(f"{API}/create", json=order_payload(), headers={"User-Agent": "field-app/2.1"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Order created successfully"
        order = body["data"]["order"]
        assert order["orderNumber"] == "ORD-000001"
        assert order["status"] == "pending"
        assert order["priority"] == "high"
        assert order["totalItems"] == 2
        assert order["customerInfo"]["email"] == CUSTOMER
        assert order["metadata"]["userAgent"] == "field-app/2.1"

    def test_price_breakdown_scenario(self, client):
        """Two lines totalling 1000 at 18% tax."""
        order = _create(client)

        assert order["priceCalculation"]["subtotal"] == 1000.0
        assert order["priceCalculation"]["taxAmount"] == 180.0
        assert order["priceCalculation"]["total"] == 1180.0
        assert order["estimatedTotal"] == 1180.0

    def test_order_numbers_are_unique_and_sequential(self, client):
        numbers = [_create(client)["orderNumber"] for _ in range(3)]

        assert numbers == ["ORD-000001", "ORD-000002", "ORD-000003"]

    def test_forwarded_client_ip_is_recorded(self, client, order_repository):
        response = client.post(
            f"{API}/create", json=order_payload(), headers={"X-Forwarded-For": "198.51.100.4, 10.0.0.1"}
        )

        stored = order_repository.stored(UUID(response.json()["data"]["order"]["id"]))
        assert stored.metadata.source_ip == "198.51.100.4"

    def test_notifications_go_to_admin_and_customer(self, client, drain, email_sender):
        _create(client)
        drain()

        assert sorted(m.to for m in email_sender.sent) == sorted([ADMIN_EMAIL, CUSTOMER])
        customer_mail = email_sender.to(CUSTOMER)[0]
        assert customer_mail.message.attachments[0].filename == "Invoice_INV-000001_ORD-000001.pdf"
        assert customer_mail.attachment_bytes[0].startswith(b"%PDF")

    def test_mail_failure_does_not_fail_the_request(self, client, drain, email_sender, order_repository):
        email_sender.fail_all = True

        response = client.post(f"{API}/create", json=order_payload())
        drain()

        assert response.status_code == 201
        assert len(order_repository) == 1
        assert email_sender.sent == []

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"products": []}, "products"),
            (
                {"customerInfo": {"name": "P", "email": "buyer@priyafarms.com", "phone": "+15551234567"}},
                "customerInfo.name",
            ),
            (
                {"customerInfo": {"name": "Priya", "email": "not-an-email", "phone": "+15551234567"}},
                "customerInfo.email",
            ),
            ({"priority": "whenever"}, "priority"),
        ],
    )
    def test_invalid_input_is_rejected_per_field(self, client, order_repository, overrides, field):
        response = client.post(f"{API}/create", json=order_payload(**overrides))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert field in [error["field"] for error in body["errors"]]
        assert len(order_repository) == 0

    def test_missing_customer_info(self, client):
        payload = order_payload()
        del payload["customerInfo"]

        response = client.post(f"{API}/create", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "customerInfo"

    def test_quantity_must_be_positive(self, client):
        payload = order_payload()
        payload["products"][0]["quantity"] = 0

        response = client.post(f"{API}/create", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "products.0.quantity"


class TestConfirmOrder:
    def _quoted_order(self, client, auth_headers) -> dict:
        order = _create(client)
        response = client.post(f"{API}/{order['id']}/quote", json={"quotedPrice": 500}, headers=auth_headers)
        assert response.status_code == 200
        return order

    def test_confirm_quoted_order(self, client, auth_headers):
        self._quoted_order(client, auth_headers)

        response = client.post(
            f"{API}/confirm", json={"orderNumber": "ORD-000001", "customerEmail": "Buyer@PriyaFarms.com"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order confirmed successfully"
        assert body["data"]["order"]["status"] == "confirmed"
        assert body["data"]["order"]["confirmedAt"] is not None
        assert body["data"]["order"]["quotedPrice"] == 500.0
        assert "customerInfo" not in body["data"]["order"]

    def test_second_confirm_is_a_conflict(self, client, auth_headers):
        self._quoted_order(client, auth_headers)
        payload = {"orderNumber": "ORD-000001", "customerEmail": CUSTOMER}
        client.post(f"{API}/confirm", json=payload)

        response = client.post(f"{API}/confirm", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Order cannot be confirmed. Current status: confirmed"
        assert response.json()["errors"][0]["value"] == "confirmed"

    def test_pending_order_cannot_be_confirmed(self, client, order_repository):
        order = _create(client)

        response = client.post(f"{API}/confirm", json={"orderNumber": "ORD-000001", "customerEmail": CUSTOMER})

        assert response.status_code == 400
        assert response.json()["message"] == "Order cannot be confirmed. Current status: pending"
        assert order_repository.stored(UUID(order["id"])).status == OrderStatus.PENDING

    def test_wrong_email_is_not_found(self, client, auth_headers):
        self._quoted_order(client, auth_headers)

        response = client.post(
            f"{API}/confirm", json={"orderNumber": "ORD-000001", "customerEmail": "intruder@example.com"}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found or email does not match"

    def test_malformed_order_number(self, client):
        response = client.post(f"{API}/confirm", json={"orderNumber": "12345", "customerEmail": CUSTOMER})

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error == {"field": "orderNumber", "message": "Invalid order number format", "value": "12345"}

    def test_confirmation_alerts_admin(self, client, auth_headers, drain, email_sender):
        self._quoted_order(client, auth_headers)
        drain()
        email_sender.sent.clear()

        client.post(f"{API}/confirm", json={"orderNumber": "ORD-000001", "customerEmail": CUSTOMER})
        drain()

        assert sorted(m.subject for m in email_sender.sent) == [
            "Order Confirmed - Order ORD-000001",
            "Order ORD-000001 CONFIRMED - Payment & Processing Required",
        ]


class TestInvoiceByNumber:
    def test_public_invoice_lookup(self, client):
        _create(client)

        response = client.get(
            f"{API}/by-number/invoice", params={"orderNumber": "ORD-000001", "customerEmail": CUSTOMER}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["invoiceNumber"] == "INV-000001"
        assert data["total"] == 1180.0
        assert data["companyInfo"]["name"] == "Field to Feed Export"

    def test_missing_parameters(self, client):
        response = client.get(f"{API}/by-number/invoice", params={"orderNumber": "ORD-000001"})

        assert response.status_code == 400
        assert response.json()["message"] == "Order number and customer email are required"

    def test_wrong_email(self, client):
        _create(client)

        response = client.get(
            f"{API}/by-number/invoice", params={"orderNumber": "ORD-000001", "customerEmail": "x@example.com"}
        )

        assert response.status_code == 404
