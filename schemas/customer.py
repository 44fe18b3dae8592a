# schemas/customer.py
"""
Pydantic schemas for the customer API.

Request fields are optional at the schema level so that a missing name or
phone reaches the gateway client and is reported with its own message.
"""
import re
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


PHONE_PATTERN = re.compile(r"^\+\d{10,15}$", re.ASCII)


def is_valid_phone(phone: Any) -> bool:
     return isinstance(phone, str) and PHONE_PATTERN.fullmatch(phone) is not None


class CustomerCreate(BaseModel):
     """Request body for POST /api/customers."""
     name: Optional[str] = Field(None, description="Customer display name")
     phone: Optional[str] = Field(None, description="Phone number, + followed by 10-15 digits")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Jane Doe",
                    "phone": "+12125551234"
               }
          }
     )
