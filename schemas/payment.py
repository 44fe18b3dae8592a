# schemas/payment.py
"""
Pydantic schemas for the payment (text-to-pay invoice) API.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
     """Request body for POST /api/payments."""

     customerId: Optional[str] = Field(None, description="Provider customer id")
     amount: Optional[int] = Field(None, description="Amount in minor currency units (cents)")
     title: Optional[str] = Field(None, description="Invoice title")
     reference: Optional[str] = Field(None, description="Invoice reference, defaults to INV-<epoch millis>")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "customerId": "cus_123",
                    "amount": 2500,
                    "title": "Consulting",
                    "reference": "INV-1700000000000",
               }
          }
     )


class InvoiceLine(BaseModel):
     title: str
     reference: str
     invoiceDate: str
     amount: int


class PaymentMessage(BaseModel):
     text: str


class ProviderPaymentRequest(BaseModel):
     """Invoice payload sent to the provider's payment-creation endpoint."""

     totalAmount: int
     currency: str
     invoices: List[InvoiceLine]
     message: PaymentMessage
