"""
HTTP tests for the service boundary.
"""
import requests

from tests.conftest import make_response


class TestCustomerRoutes:

    def test_create_customer_relays_provider_json(self, worldpay_env, client, provider_session):
        provider_session.request.return_value = make_response(
            200, {"id": "cus_1", "name": "Jane Doe", "contact": {"phone": "+12125551234"}}
        )

        response = client.post("/api/customers", json={"name": "Jane Doe", "phone": "+12125551234"})

        assert response.status_code == 200
        assert response.json() == {"id": "cus_1", "name": "Jane Doe", "contact": {"phone": "+12125551234"}}

    def test_missing_fields_are_400(self, worldpay_env, client, provider_session):
        response = client.post("/api/customers", json={"name": "Jane Doe"})

        assert response.status_code == 400
        assert response.json() == {"error": "Name and phone are required"}
        provider_session.request.assert_not_called()

    def test_bad_phone_is_400(self, worldpay_env, client):
        response = client.post("/api/customers", json={"name": "Jane", "phone": "2125551234"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid phone number format. Use +1234567890"}

    def test_missing_credentials_are_500(self, no_worldpay_env, client, provider_session):
        response = client.post("/api/customers", json={"name": "Jane", "phone": "+12125551234"})

        assert response.status_code == 500
        assert response.json() == {"error": "Worldpay credentials not configured"}
        provider_session.request.assert_not_called()

    def test_provider_failure_is_500_with_status_and_body(self, worldpay_env, client, provider_session):
        provider_session.request.return_value = make_response(401, None, text="unauthorized")

        response = client.post("/api/customers", json={"name": "Jane", "phone": "+12125551234"})

        assert response.status_code == 500
        assert response.json() == {"error": "Worldpay API error: 401 - unauthorized"}

    def test_transport_failure_is_500(self, worldpay_env, client, provider_session):
        provider_session.request.side_effect = requests.ConnectionError("connection refused")

        response = client.post("/api/customers", json={"name": "Jane", "phone": "+12125551234"})

        assert response.status_code == 500
        assert response.json() == {"error": "connection refused"}

    def test_get_customer(self, worldpay_env, client, provider_session):
        provider_session.request.return_value = make_response(200, {"id": "cus_7"})

        response = client.get("/api/customers/cus_7")

        assert response.status_code == 200
        assert response.json() == {"id": "cus_7"}


class TestPaymentRoutes:

    def test_create_payment(self, worldpay_env, client, provider_session):
        provider_session.request.return_value = make_response(200, {"id": "pay_1"})

        response = client.post(
            "/api/payments",
            json={"customerId": "cus_1", "amount": 2500, "title": "Consulting", "reference": "INV-1"},
        )

        assert response.status_code == 200
        assert response.json() == {"id": "pay_1"}
        assert provider_session.request.call_args.kwargs["json"]["totalAmount"] == 2500

    def test_zero_amount_is_400(self, worldpay_env, client):
        response = client.post("/api/payments", json={"customerId": "cus_1", "amount": 0, "title": "Consulting"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_negative_amount_is_400(self, worldpay_env, client):
        response = client.post("/api/payments", json={"customerId": "cus_1", "amount": -5, "title": "Consulting"})

        assert response.status_code == 400
        assert response.json() == {"error": "Amount must be greater than 0"}

    def test_missing_title_is_400(self, worldpay_env, client):
        response = client.post("/api/payments", json={"customerId": "cus_1", "amount": 100})

        assert response.status_code == 400
        assert response.json() == {"error": "Customer ID, amount, and title are required"}

    def test_non_integer_amount_is_400(self, worldpay_env, client, provider_session):
        response = client.post("/api/payments", json={"customerId": "cus_1", "amount": "lots", "title": "X"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("amount:")
        provider_session.request.assert_not_called()

    def test_missing_credentials_are_500(self, no_worldpay_env, client):
        response = client.post("/api/payments", json={"customerId": "cus_1", "amount": 100, "title": "X"})

        assert response.status_code == 500
        assert response.json() == {"error": "Worldpay credentials not configured"}


class TestSystemRoutes:

    def test_health_reports_presence_flags(self, monkeypatch, worldpay_env, client):
        monkeypatch.setenv("PUSHER_APP_ID", "1")
        monkeypatch.setenv("PUSHER_KEY", "key")
        monkeypatch.delenv("PUSHER_SECRET", raising=False)

        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert "timestamp" in body
        assert body["environment"] == {
            "hasWorldpayKey": True,
            "hasWorldpayMid": True,
            "hasPusherConfig": False,
        }

    def test_health_never_exposes_secrets(self, worldpay_env, client):
        assert "test-api-key" not in client.get("/api/health").text

    def test_pusher_config(self, monkeypatch, client):
        monkeypatch.setenv("PUSHER_KEY", "public-key")
        monkeypatch.setenv("PUSHER_SECRET", "secret")
        monkeypatch.delenv("PUSHER_CLUSTER", raising=False)

        response = client.get("/api/pusher-config")

        assert response.status_code == 200
        assert response.json() == {"key": "public-key", "cluster": "us2"}

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}
