# routers/customers.py
"""
Customer API.

POST /api/customers: create a provider customer for the invoice flow.
GET  /api/customers/{customer_id}: fetch a provider customer.

Responses are the provider's JSON, relayed unchanged.
"""
from fastapi import APIRouter, Depends

from schemas.customer import CustomerCreate
from services.worldpay_client import WorldpayClient, get_worldpay_client

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post("", summary="Create a customer")
def create_customer(
     body: CustomerCreate,
     client: WorldpayClient = Depends(get_worldpay_client),
):
     """
     Create a customer with the payment provider.

     - **name**: Customer display name
     - **phone**: Phone number with country code, e.g. +12125551234
     """
     return client.create_customer(body.name, body.phone)


@router.get("/{customer_id}", summary="Get a customer")
def get_customer(
     customer_id: str,
     client: WorldpayClient = Depends(get_worldpay_client),
):
     return client.get_customer(customer_id)
