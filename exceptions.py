# exceptions.py
"""
Error taxonomy for the Text-to-Pay service.

Every handler boundary converts these into a JSON body of the form
{"error": "<message>"} with the status code carried by the exception.
"""
from typing import Any, Dict, Optional


class TextToPayError(Exception):
     """Base class for errors that map onto an HTTP response."""

     http_status = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message

     def to_dict(self) -> Dict[str, Any]:
          return {"error": self.message}


class ValidationError(TextToPayError):
     """Missing or malformed input fields."""

     http_status = 400


class ConfigurationError(TextToPayError):
     """Provider credentials are missing from the environment."""

     http_status = 500


class ProviderError(TextToPayError):
     """The payment provider answered with a non-success status."""

     http_status = 500

     def __init__(self, status_code: int, body: Optional[str] = None):
          self.status_code = status_code
          self.body = body or ""
          super().__init__(f"Worldpay API error: {status_code} - {self.body}")
