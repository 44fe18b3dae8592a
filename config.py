# config.py
"""
Environment configuration for the Text-to-Pay service and client.

Values are read from the process environment (optionally seeded from a .env
file) at call time, so a credential added or removed while the process runs
is picked up by the next request.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from exceptions import ConfigurationError

# Load .env
load_dotenv()

WORLDPAY_DEFAULT_BASE_URL = "https://apis.stage.worldpay.com/text-to-pay"
WORLDPAY_CALLER_ID = "text-to-pay-poc"

PUSHER_DEFAULT_CLUSTER = "us2"
PAYMENT_UPDATES_CHANNEL = "payment-updates"
PAYMENT_UPDATED_EVENT = "payment-updated"

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_STORAGE_URL = "sqlite:///texttopay_client.db"


@dataclass(frozen=True)
class WorldpayCredentials:
     api_key: str
     merchant_id: str
     base_url: str


@dataclass(frozen=True)
class PusherSettings:
     app_id: Optional[str]
     key: Optional[str]
     secret: Optional[str]
     cluster: str

     @property
     def is_configured(self) -> bool:
          return bool(self.app_id and self.key and self.secret)


def get_worldpay_credentials() -> WorldpayCredentials:
     """
     Read the Worldpay credentials from the environment.

     Raises:
          ConfigurationError: If the API key or merchant id is missing.
     """
     api_key = os.getenv("WORLDPAY_API_KEY")
     merchant_id = os.getenv("WORLDPAY_MID")
     if not api_key or not merchant_id:
          raise ConfigurationError("Worldpay credentials not configured")
     return WorldpayCredentials(
          api_key=api_key,
          merchant_id=merchant_id,
          base_url=os.getenv("WORLDPAY_BASE_URL", WORLDPAY_DEFAULT_BASE_URL).rstrip("/"),
     )


def get_pusher_settings() -> PusherSettings:
     return PusherSettings(
          app_id=os.getenv("PUSHER_APP_ID"),
          key=os.getenv("PUSHER_KEY"),
          secret=os.getenv("PUSHER_SECRET"),
          cluster=os.getenv("PUSHER_CLUSTER") or PUSHER_DEFAULT_CLUSTER,
     )


def environment_flags() -> dict:
     """Presence flags reported by the health endpoint. Values are never exposed."""
     return {
          "hasWorldpayKey": bool(os.getenv("WORLDPAY_API_KEY")),
          "hasWorldpayMid": bool(os.getenv("WORLDPAY_MID")),
          "hasPusherConfig": get_pusher_settings().is_configured,
     }


def get_cors_origins() -> list[str]:
     raw = os.getenv("CORS_ORIGINS", "")
     origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
     return origins or ["*"]


def get_api_url() -> str:
     return os.getenv("TEXTTOPAY_API_URL", DEFAULT_API_URL).rstrip("/")


def get_storage_url() -> str:
     return os.getenv("TEXTTOPAY_STORAGE_URL", DEFAULT_STORAGE_URL)
