# client/records.py
"""
Pydantic models for the records the client caches.

Field names follow the JSON stored under the payments, customers and activity
storage keys.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class CustomerContact(BaseModel):
     phone: Optional[str] = None

     model_config = ConfigDict(extra="allow")


class CustomerRecord(BaseModel):
     """Customer as returned by the provider; unknown fields are preserved."""
     id: Optional[str] = None
     name: Optional[str] = None
     contact: Optional[CustomerContact] = None

     model_config = ConfigDict(extra="allow")


class PaymentRecord(BaseModel):
     """
     A text-to-pay payment request sent from this session.

     id is the provider's payment id and the only key used to match
     payment-updated broadcasts. amount is in cents.
     """
     id: str
     customerId: Optional[str] = None
     customerName: str
     customerPhone: str
     invoiceTitle: str
     invoiceReference: str
     amount: int
     status: str
     date: str


class InvoiceView(BaseModel):
     """The invoice shown while its payment is in progress."""
     title: str
     amount: int
     reference: str
     date: str
     status: str
     id: Optional[str] = None


class Activity(BaseModel):
     id: int
     message: str
     type: str
     timestamp: str
