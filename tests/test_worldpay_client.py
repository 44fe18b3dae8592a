"""
Tests for the Worldpay gateway client.
"""
import re
import uuid
from datetime import datetime

import pytest

from exceptions import ConfigurationError, ProviderError, ValidationError
from services.worldpay_client import (
    CURRENCY,
    THANK_YOU_MESSAGE,
    WorldpayClient,
    build_payment_request,
)
from tests.conftest import make_response


BASE = "https://worldpay.test/text-to-pay/v1/merchants/mid-123"


class TestCreateCustomer:

    @pytest.mark.parametrize("phone", ["+1234567890", "+12125551234", "+123456789012345"])
    def test_accepts_valid_phone(self, worldpay_env, worldpay, provider_session, phone):
        provider_session.request.return_value = make_response(200, {"id": "cus_1", "name": "Jane"})

        customer = worldpay.create_customer("Jane", phone)

        assert customer == {"id": "cus_1", "name": "Jane"}
        provider_session.request.assert_called_once()

    @pytest.mark.parametrize(
        "phone",
        [
            "1234567890",
            "+123456789",
            "+1234567890123456",
            "+1 212 555 1234",
            "+1212555123a",
            "++12125551234",
            "+12125551234\n",
            "+١٢١٢٥٥٥١٢٣٤",
        ],
    )
    def test_rejects_invalid_phone(self, worldpay_env, worldpay, provider_session, phone):
        with pytest.raises(ValidationError, match="Invalid phone number format"):
            worldpay.create_customer("Jane", phone)
        provider_session.request.assert_not_called()

    @pytest.mark.parametrize("name,phone", [(None, "+12125551234"), ("Jane", None), ("", ""), (None, None)])
    def test_requires_name_and_phone(self, worldpay_env, worldpay, provider_session, name, phone):
        with pytest.raises(ValidationError, match="Name and phone are required"):
            worldpay.create_customer(name, phone)
        provider_session.request.assert_not_called()

    def test_sends_customer_body_to_merchant_endpoint(self, worldpay_env, worldpay, provider_session):
        worldpay.create_customer("Jane Doe", "+12125551234")

        method, url = provider_session.request.call_args.args
        assert method == "POST"
        assert url == f"{BASE}/customers"
        assert provider_session.request.call_args.kwargs["json"] == {
            "name": "Jane Doe",
            "contact": {"phone": "+12125551234"},
        }

    def test_missing_credentials_fail_before_network(self, no_worldpay_env, worldpay, provider_session):
        with pytest.raises(ConfigurationError, match="Worldpay credentials not configured"):
            worldpay.create_customer("Jane", "+12125551234")
        provider_session.request.assert_not_called()

    def test_validation_runs_before_credential_check(self, no_worldpay_env, worldpay):
        with pytest.raises(ValidationError):
            worldpay.create_customer("Jane", "555")

    def test_provider_error_carries_status_and_body(self, worldpay_env, worldpay, provider_session):
        provider_session.request.return_value = make_response(422, None, text='{"message":"bad phone"}')

        with pytest.raises(ProviderError) as excinfo:
            worldpay.create_customer("Jane", "+12125551234")

        assert excinfo.value.status_code == 422
        assert excinfo.value.body == '{"message":"bad phone"}'
        assert str(excinfo.value) == 'Worldpay API error: 422 - {"message":"bad phone"}'


class TestHeaders:

    def test_every_request_carries_auth_and_diagnostics(self, worldpay_env, worldpay, provider_session):
        worldpay.create_customer("Jane", "+12125551234")

        headers = provider_session.request.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer test-api-key"
        assert headers["X-WP-Diagnostics-CallerId"] == "text-to-pay-poc"
        assert headers["Content-Type"] == "application/json"
        assert headers["accept"] == "application/json"
        uuid.UUID(headers["X-WP-Diagnostics-CorrelationId"])
        datetime.fromisoformat(headers["X-WP-Timestamp"].replace("Z", "+00:00"))

    def test_correlation_id_is_fresh_per_request(self, worldpay_env, worldpay, provider_session):
        worldpay.create_customer("Jane", "+12125551234")
        worldpay.create_customer("John", "+12125559876")

        first, second = [call.kwargs["headers"]["X-WP-Diagnostics-CorrelationId"]
                         for call in provider_session.request.call_args_list]
        assert first != second

    def test_credentials_are_read_at_request_time(self, monkeypatch, worldpay_env, worldpay, provider_session):
        monkeypatch.setenv("WORLDPAY_API_KEY", "rotated-key")

        worldpay.create_customer("Jane", "+12125551234")

        assert provider_session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer rotated-key"


class TestCreatePayment:

    @pytest.mark.parametrize("amount", [0, -1, -2500])
    def test_rejects_non_positive_amount(self, worldpay_env, worldpay, provider_session, amount):
        with pytest.raises(ValidationError):
            worldpay.create_payment("cus_1", amount, "Consulting")
        provider_session.request.assert_not_called()

    @pytest.mark.parametrize(
        "customer_id,amount,title",
        [(None, 100, "Consulting"), ("cus_1", None, "Consulting"), ("cus_1", 100, None), ("cus_1", 100, "")],
    )
    def test_requires_customer_amount_and_title(self, worldpay_env, worldpay, customer_id, amount, title):
        with pytest.raises(ValidationError, match="Customer ID, amount, and title are required"):
            worldpay.create_payment(customer_id, amount, title)

    @pytest.mark.parametrize("amount", [1, 2500, 123456789])
    def test_forwards_amount_unmodified(self, worldpay_env, worldpay, provider_session, amount):
        provider_session.request.return_value = make_response(200, {"id": "pay_1"})

        worldpay.create_payment("cus_1", amount, "Consulting", "INV-1")

        body = provider_session.request.call_args.kwargs["json"]
        assert body["totalAmount"] == amount
        assert body["invoices"][0]["amount"] == amount

    def test_payload_shape_and_endpoint(self, worldpay_env, worldpay, provider_session):
        provider_session.request.return_value = make_response(200, {"id": "pay_1", "status": "Pending"})

        payment = worldpay.create_payment("cus_1", 2500, "Consulting", "INV-42")

        assert payment == {"id": "pay_1", "status": "Pending"}
        method, url = provider_session.request.call_args.args
        assert method == "POST"
        assert url == f"{BASE}/customers/cus_1/payments"
        body = provider_session.request.call_args.kwargs["json"]
        assert body["currency"] == "USD"
        assert body["message"] == {"text": THANK_YOU_MESSAGE}
        assert len(body["invoices"]) == 1
        line = body["invoices"][0]
        assert line["title"] == "Consulting"
        assert line["reference"] == "INV-42"
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", line["invoiceDate"])

    def test_default_reference(self):
        payload = build_payment_request(100, "Consulting")

        assert payload.currency == CURRENCY
        assert re.fullmatch(r"INV-\d{13}", payload.invoices[0].reference)

    def test_missing_credentials_fail_before_network(self, no_worldpay_env, worldpay, provider_session):
        with pytest.raises(ConfigurationError):
            worldpay.create_payment("cus_1", 2500, "Consulting")
        provider_session.request.assert_not_called()

    def test_provider_error(self, worldpay_env, worldpay, provider_session):
        provider_session.request.return_value = make_response(500, None, text="upstream down")

        with pytest.raises(ProviderError, match="Worldpay API error: 500 - upstream down"):
            worldpay.create_payment("cus_1", 2500, "Consulting")


def test_get_customer(worldpay_env, worldpay, provider_session):
    provider_session.request.return_value = make_response(200, {"id": "cus_9"})

    assert worldpay.get_customer("cus_9") == {"id": "cus_9"}
    method, url = provider_session.request.call_args.args
    assert method == "GET"
    assert url == f"{BASE}/customers/cus_9"
