# services/worldpay_client.py
"""
Worldpay Text-to-Pay API client.

Operations exposed to the routers:
- create_customer: POST /v1/merchants/{mid}/customers
- get_customer:    GET  /v1/merchants/{mid}/customers/{id}
- create_payment:  POST /v1/merchants/{mid}/customers/{id}/payments

Credentials are looked up on every call; a missing key or merchant id raises
ConfigurationError before any network traffic. Non-2xx answers raise
ProviderError with the provider's status code and raw body.
"""
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from config import WORLDPAY_CALLER_ID, get_worldpay_credentials
from exceptions import ProviderError, ValidationError
from logging_config import get_logger
from schemas.customer import is_valid_phone
from schemas.payment import InvoiceLine, PaymentMessage, ProviderPaymentRequest

logger = get_logger(__name__)

CURRENCY = "USD"
THANK_YOU_MESSAGE = "Thank you for your business. Please pay your invoice."


def _now_iso() -> str:
     return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_reference() -> str:
     """Invoice reference used when the caller does not supply one."""
     return f"INV-{int(time.time() * 1000)}"


def build_payment_request(
     amount: int,
     title: str,
     reference: Optional[str] = None,
) -> ProviderPaymentRequest:
     """Shape the provider invoice payload for a single-line invoice."""
     return ProviderPaymentRequest(
          totalAmount=amount,
          currency=CURRENCY,
          invoices=[
               InvoiceLine(
                    title=title,
                    reference=reference or default_reference(),
                    invoiceDate=datetime.now(timezone.utc).date().isoformat(),
                    amount=amount,
               )
          ],
          message=PaymentMessage(text=THANK_YOU_MESSAGE),
     )


class WorldpayClient:
     """Thin request-shaping wrapper around the provider REST API."""

     def __init__(self, session: Optional[requests.Session] = None):
          self.session = session or requests.Session()

     def _headers(self, api_key: str) -> Dict[str, str]:
          return {
               "accept": "application/json",
               "Content-Type": "application/json",
               "Authorization": f"Bearer {api_key}",
               "X-WP-Diagnostics-CorrelationId": str(uuid.uuid4()),
               "X-WP-Diagnostics-CallerId": WORLDPAY_CALLER_ID,
               "X-WP-Timestamp": _now_iso(),
          }

     def _request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
          credentials = get_worldpay_credentials()
          url = f"{credentials.base_url}/v1/merchants/{credentials.merchant_id}{path}"
          headers = self._headers(credentials.api_key)

          logger.info(
               "worldpay_request_sent",
               method=method,
               url=url,
               correlation_id=headers["X-WP-Diagnostics-CorrelationId"],
          )
          response = self.session.request(method, url, headers=headers, json=body)
          logger.info("worldpay_response_received", status_code=response.status_code)

          if not response.ok:
               logger.error(
                    "worldpay_api_error",
                    status_code=response.status_code,
                    body=response.text,
               )
               raise ProviderError(response.status_code, response.text)

          return response.json()

     def create_customer(self, name: Optional[str], phone: Optional[str]) -> Dict[str, Any]:
          """
          Create a provider customer.

          Raises:
               ValidationError: If name or phone is missing, or phone is not +<10-15 digits>
               ConfigurationError: If Worldpay credentials are not set
               ProviderError: If the provider answers with a non-success status
          """
          if not name or not phone:
               raise ValidationError("Name and phone are required")
          if not is_valid_phone(phone):
               raise ValidationError("Invalid phone number format. Use +1234567890")

          customer = self._request("POST", "/customers", {"name": name, "contact": {"phone": phone}})
          logger.info("customer_created", customer_id=_field(customer, "id"))
          return customer

     def get_customer(self, customer_id: str) -> Dict[str, Any]:
          if not customer_id:
               raise ValidationError("Customer ID is required")
          return self._request("GET", f"/customers/{customer_id}")

     def create_payment(
          self,
          customer_id: Optional[str],
          amount: Optional[int],
          title: Optional[str],
          reference: Optional[str] = None,
     ) -> Dict[str, Any]:
          """
          Create a text-to-pay payment request for an existing customer.

          The amount is in minor currency units and is forwarded unmodified as
          totalAmount and as the single invoice line amount.
          """
          if not customer_id or amount is None or not title:
               raise ValidationError("Customer ID, amount, and title are required")
          if amount <= 0:
               raise ValidationError("Amount must be greater than 0")

          payload = build_payment_request(amount, title, reference)
          payment = self._request(
               "POST",
               f"/customers/{customer_id}/payments",
               payload.model_dump(),
          )
          logger.info("payment_created", payment_id=_field(payment, "id"), customer_id=customer_id)
          return payment


def _field(document: Any, name: str) -> Any:
     return document.get(name) if isinstance(document, dict) else None


def get_worldpay_client() -> WorldpayClient:
     """FastAPI dependency; one client (and connection pool) per request."""
     return WorldpayClient()
