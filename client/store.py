# client/store.py
"""
Client Reconciliation Store.

Owns this session's view of customers, payments and activity. Every change to
a collection is written straight through to local storage under the
"payments", "customers" and "activity" keys; load() restores them at startup.

Payment-updated broadcasts are matched against cached payments by payment id
only. An update for an unknown id is ignored and leaves storage untouched.
Updates are applied in delivery order, with no sequencing or de-duplication.
"""
import json
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaError

from logging_config import get_logger
from schemas.webhook import PaymentUpdateEvent

from .display import utc_now_iso
from .notifier import Notifier
from .records import Activity, CustomerRecord, InvoiceView, PaymentRecord
from .storage import LocalStorage

logger = get_logger(__name__)

PAYMENTS_KEY = "payments"
CUSTOMERS_KEY = "customers"
ACTIVITY_KEY = "activity"
STORAGE_KEYS = (PAYMENTS_KEY, CUSTOMERS_KEY, ACTIVITY_KEY)

MAX_ACTIVITIES = 10
COMPLETED = "Completed"
PENDING = "Pending"

ModelT = TypeVar("ModelT", bound=BaseModel)


def display_status(status: str) -> str:
     """Provider "completed" is shown as "Completed"; anything else verbatim."""
     return COMPLETED if status == "completed" else status


class ReconciliationStore:
     """In-session state holder driven by form submissions and broadcasts."""

     def __init__(self, storage: LocalStorage, notifier: Optional[Notifier] = None):
          self.storage = storage
          self.notifier = notifier or Notifier()

          self.payments: List[PaymentRecord] = []
          self.customers: List[CustomerRecord] = []
          self.activities: List[Activity] = []

          self.current_invoice: Optional[InvoiceView] = None
          self.current_customer: Optional[CustomerRecord] = None
          self.selected_payment: Optional[PaymentRecord] = None
          self.show_payment_status = False
          self.is_connected = False

          self._last_activity_id = 0

     # ------------------------------------------------------------------
     # Persistence
     # ------------------------------------------------------------------

     def load(self) -> "ReconciliationStore":
          self.payments = self._read(PAYMENTS_KEY, PaymentRecord)
          self.customers = self._read(CUSTOMERS_KEY, CustomerRecord)
          self.activities = self._read(ACTIVITY_KEY, Activity)
          if self.activities:
               self._last_activity_id = max(activity.id for activity in self.activities)
          logger.info(
               "store_loaded",
               payments=len(self.payments),
               customers=len(self.customers),
               activities=len(self.activities),
          )
          return self

     def _read(self, key: str, model: Type[ModelT]) -> List[ModelT]:
          raw = self.storage.get_item(key)
          if raw is None:
               return []
          try:
               return TypeAdapter(List[model]).validate_json(raw)
          except SchemaError as e:
               logger.warning("storage_entry_unreadable", key=key, errors=e.error_count())
               return []

     def _write(self, key: str, items: List[BaseModel]) -> None:
          self.storage.set_item(key, json.dumps([item.model_dump(mode="json") for item in items]))

     def _save_payments(self) -> None:
          self._write(PAYMENTS_KEY, self.payments)

     def _save_customers(self) -> None:
          self._write(CUSTOMERS_KEY, self.customers)

     def _save_activities(self) -> None:
          self._write(ACTIVITY_KEY, self.activities)

     # ------------------------------------------------------------------
     # Mutations
     # ------------------------------------------------------------------

     def set_connected(self, connected: bool) -> None:
          was_connected = self.is_connected
          self.is_connected = connected
          if connected == was_connected:
               return
          logger.info("broadcast_connection_changed", connected=connected)
          if was_connected:
               self.add_activity("Disconnected from real-time updates", "warning")

     def add_customer(self, customer: Union[CustomerRecord, Dict[str, Any]]) -> CustomerRecord:
          if not isinstance(customer, CustomerRecord):
               customer = CustomerRecord.model_validate(customer)
          self.current_customer = customer
          self.customers = [*self.customers, customer]
          self._save_customers()
          return customer

     def add_payment(self, payment: PaymentRecord, invoice: Optional[InvoiceView] = None) -> PaymentRecord:
          """Append a sent payment and, when given, show its invoice as in progress."""
          self.payments = [*self.payments, payment]
          self._save_payments()
          if invoice is not None:
               self.current_invoice = invoice
               self.show_payment_status = True
          return payment

     def add_activity(self, message: str, type: str = "info") -> Activity:
          """Prepend an activity entry, keeping only the newest MAX_ACTIVITIES."""
          activity_id = max(int(time.time() * 1000), self._last_activity_id + 1)
          self._last_activity_id = activity_id
          activity = Activity(id=activity_id, message=message, type=type, timestamp=utc_now_iso())
          self.activities = [activity, *self.activities[: MAX_ACTIVITIES - 1]]
          self._save_activities()
          return activity

     def find_payment(self, payment_id: str) -> Optional[PaymentRecord]:
          for payment in self.payments:
               if payment.id == payment_id:
                    return payment
          return None

     def apply_update(self, event: Union[PaymentUpdateEvent, Dict[str, Any]]) -> bool:
          """
          Reconcile a payment-updated broadcast with the cached payments.

          Returns True when a cached payment matched and was updated.
          """
          if not isinstance(event, PaymentUpdateEvent):
               event = PaymentUpdateEvent.model_validate(event)

          payment_id = None if event.paymentId is None else str(event.paymentId)
          status = None if event.status is None else str(event.status)
          matching = self.find_payment(payment_id) if payment_id is not None else None
          if matching is None or status is None:
               logger.info("payment_update_ignored", payment_id=payment_id, status=status)
               return False

          new_status = display_status(status)
          logger.info("payment_update_applied", payment_id=payment_id, status=new_status)

          self.payments = [
               payment.model_copy(update={"status": new_status}) if payment.id == payment_id else payment
               for payment in self.payments
          ]
          self._save_payments()

          if self.current_invoice is not None and self.current_invoice.id == payment_id:
               self.current_invoice = self.current_invoice.model_copy(update={"status": new_status})

          if self.selected_payment is not None and self.selected_payment.id == payment_id:
               self.selected_payment = self.selected_payment.model_copy(update={"status": new_status})

          customer_name = matching.customerName
          if status == "completed":
               self.notifier.celebrate()
               self.add_activity(f"🎉 Payment completed for {customer_name}!", "success")
          else:
               message = f"Payment status updated to {status} for {customer_name}"
               self.notifier.notify(message, "info")
               self.add_activity(message, "info")

          return True

     # ------------------------------------------------------------------
     # View state
     # ------------------------------------------------------------------

     def view_payment_details(self, payment_id: str) -> Optional[PaymentRecord]:
          payment = self.find_payment(payment_id)
          if payment is not None:
               self.selected_payment = payment
          return payment

     def close_payment_details(self) -> None:
          self.selected_payment = None

     def create_new_invoice(self) -> None:
          """Leave the in-progress invoice and start over with an empty form."""
          self.current_invoice = None
          self.current_customer = None
          self.show_payment_status = False

     def clear_all(self) -> None:
          """Empty every collection and drop the persisted entries."""
          self.payments = []
          self.customers = []
          self.activities = []
          self.current_invoice = None
          self.current_customer = None
          self.selected_payment = None
          self.show_payment_status = False

          for key in STORAGE_KEYS:
               self.storage.remove_item(key)

          logger.info("store_cleared")
          self.notifier.notify("All data cleared successfully", "success")

     # ------------------------------------------------------------------
     # Reporting
     # ------------------------------------------------------------------

     def stats(self) -> Dict[str, Any]:
          return {
               "total": len(self.payments),
               "completed": sum(1 for p in self.payments if p.status == COMPLETED),
               "pending": sum(1 for p in self.payments if p.status == PENDING),
               "totalAmount": sum(p.amount for p in self.payments) / 100,
          }

     def export_data(self) -> Dict[str, Any]:
          """Snapshot of every collection, as written to an export file."""
          data = {
               "customers": [c.model_dump(mode="json") for c in self.customers],
               "payments": [p.model_dump(mode="json") for p in self.payments],
               "activities": [a.model_dump(mode="json") for a in self.activities],
               "exportDate": utc_now_iso(),
          }
          self.notifier.notify("Data exported successfully", "success")
          self.add_activity("Data exported", "info")
          return data

     @staticmethod
     def export_filename(today: Optional[datetime] = None) -> str:
          today = today or datetime.now(timezone.utc)
          return f"worldpay-text-to-pay-data-{today.date().isoformat()}.json"
