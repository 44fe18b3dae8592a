# routers/payments.py
"""
Payment request API.

POST /api/payments: create a text-to-pay payment request for a customer.
The amount is in minor currency units (cents) and is forwarded unmodified.
"""
from fastapi import APIRouter, Depends

from schemas.payment import PaymentCreate
from services.worldpay_client import WorldpayClient, get_worldpay_client

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("", summary="Create a text-to-pay payment request")
def create_payment(
     body: PaymentCreate,
     client: WorldpayClient = Depends(get_worldpay_client),
):
     """
     Create a payment request under an existing customer.

     - **customerId**: Provider customer id
     - **amount**: Amount in cents, must be positive
     - **title**: Invoice title
     - **reference**: Optional invoice reference (defaults to INV-<epoch millis>)
     """
     return client.create_payment(
          customer_id=body.customerId,
          amount=body.amount,
          title=body.title,
          reference=body.reference,
     )
