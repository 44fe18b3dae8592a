# client/invoice_flow.py
"""
Text-to-Pay submission flow.

Validates the merchant's form input, creates the customer and then the
payment through the service, and records the result in the store. A failed
submission is reported through a notification and an activity entry; it never
prevents the next submission.
"""
import re
import time
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

import requests
from pydantic import ValidationError as SchemaError

from logging_config import get_logger
from schemas.customer import is_valid_phone

from .api import ApiError, TextToPayApi
from .display import utc_now_iso
from .records import InvoiceView, PaymentRecord
from .store import PENDING, ReconciliationStore

logger = get_logger(__name__)

_NON_DIGITS = re.compile(r"\D", re.ASCII)


def normalize_phone(raw: Optional[str]) -> str:
     """
     Turn free-form phone input into +<digits>, assuming US numbers.

     "2125551234" -> "+12125551234", "1 (212) 555-1234" -> "+12125551234",
     "447911123456" -> "+447911123456".
     """
     digits = _NON_DIGITS.sub("", raw or "")
     if not digits:
          return ""
     if digits.startswith("1"):
          return "+" + digits
     if len(digits) <= 10:
          return "+1" + digits
     return "+" + digits


def parse_dollars(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
     if value is None:
          return None
     try:
          amount = Decimal(str(value).strip())
     except InvalidOperation:
          return None
     return amount if amount.is_finite() else None


def dollars_to_minor_units(amount: Union[str, int, float, Decimal]) -> int:
     """25.00 -> 2500; cents are rounded half up."""
     dollars = parse_dollars(amount)
     if dollars is None:
          raise ValueError(f"Invalid amount: {amount!r}")
     return int((dollars * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _provider_id(value: Any) -> Optional[str]:
     """Provider ids are cached as strings, even when they arrive as numbers."""
     return None if value is None else str(value)


def _invoice_date(today: Optional[date] = None) -> str:
     today = today or date.today()
     return f"{today.month}/{today.day}/{today.year}"


class InvoiceFlow:

     def __init__(self, api: TextToPayApi, store: ReconciliationStore):
          self.api = api
          self.store = store
          self.is_loading = False

     def send_text_to_pay(
          self,
          title: str,
          amount: Union[str, int, float, Decimal],
          name: str,
          phone: str,
     ) -> Optional[PaymentRecord]:
          """
          Send a text-to-pay invoice for amount dollars to the given customer.

          Returns the cached payment record, or None when validation or any
          service call failed.
          """
          notifier = self.store.notifier
          dollars = parse_dollars(amount)

          if not title or dollars is None or dollars <= 0:
               notifier.notify("Please enter a valid title and amount greater than $0.00", "error")
               return None

          phone = normalize_phone(phone)
          if not name or not phone:
               notifier.notify("Please enter customer name and phone number", "error")
               return None

          if not is_valid_phone(phone):
               notifier.notify("Please enter a valid phone number with country code (e.g., +1234567890)", "error")
               return None

          self.is_loading = True
          try:
               amount_minor = dollars_to_minor_units(dollars)
               reference = f"INV-{int(time.time() * 1000)}"

               created = self.api.create_customer(name, phone)
               if isinstance(created, dict):
                    created = {**created, "id": _provider_id(created.get("id"))}
               customer = self.store.add_customer(created)
               logger.info("customer_created", customer_id=customer.id)

               payment = self.api.create_payment(customer.id, amount_minor, title, reference)
               payment_id = _provider_id(payment.get("id")) if isinstance(payment, dict) else None
               logger.info("payment_created", payment_id=payment_id)

               record = PaymentRecord(
                    id=payment_id or f"pay_{int(time.time() * 1000)}",
                    customerId=customer.id,
                    customerName=name,
                    customerPhone=phone,
                    invoiceTitle=title,
                    invoiceReference=reference,
                    amount=amount_minor,
                    status=PENDING,
                    date=utc_now_iso(),
               )
               invoice = InvoiceView(
                    title=title,
                    amount=amount_minor,
                    reference=reference,
                    date=_invoice_date(),
                    status=PENDING,
                    id=payment_id,
               )
               self.store.add_payment(record, invoice)

               notifier.notify("Text-to-Pay invoice sent successfully!", "success")
               self.store.add_activity(
                    f"Text-to-Pay sent to {name} ({phone}) - {title} ${dollars:.2f}",
                    "success",
               )
               return record
          except (ApiError, requests.RequestException, SchemaError) as e:
               logger.error("text_to_pay_failed", error=str(e))
               notifier.notify(f"Error: {e}", "error")
               self.store.add_activity(f"Error sending payment request: {e}", "error")
               return None
          finally:
               self.is_loading = False
