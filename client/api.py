# client/api.py
"""
HTTP client for the Text-to-Pay service boundary (/api/*).
"""
from typing import Any, Dict, Optional

import requests

from config import get_api_url
from logging_config import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
     """The service answered with a non-success status."""

     def __init__(self, message: str, status_code: Optional[int] = None):
          super().__init__(message)
          self.message = message
          self.status_code = status_code


class TextToPayApi:

     def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
          self.base_url = (base_url or get_api_url()).rstrip("/")
          self.session = session or requests.Session()

     def _call(self, method: str, path: str, fallback_error: str, body: Optional[dict] = None) -> Any:
          response = self.session.request(method, f"{self.base_url}{path}", json=body)
          if not response.ok:
               try:
                    message = response.json().get("error")
               except (ValueError, AttributeError):
                    message = None
               logger.warning("api_call_failed", path=path, status_code=response.status_code, error=message)
               raise ApiError(message or fallback_error, response.status_code)
          return response.json()

     def create_customer(self, name: str, phone: str) -> Dict[str, Any]:
          return self._call("POST", "/api/customers", "Failed to create customer", {"name": name, "phone": phone})

     def get_customer(self, customer_id: str) -> Dict[str, Any]:
          return self._call("GET", f"/api/customers/{customer_id}", "Failed to fetch customer")

     def create_payment(
          self,
          customer_id: str,
          amount: int,
          title: str,
          reference: Optional[str] = None,
     ) -> Dict[str, Any]:
          body = {"customerId": customer_id, "amount": amount, "title": title, "reference": reference}
          return self._call("POST", "/api/payments", "Failed to create payment", body)

     def pusher_config(self) -> Dict[str, Any]:
          return self._call("GET", "/api/pusher-config", "Failed to load pusher config")

     def health(self) -> Dict[str, Any]:
          return self._call("GET", "/api/health", "Health check failed")
