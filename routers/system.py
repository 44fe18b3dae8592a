# routers/system.py
"""
Operational endpoints: health check and public broadcast-subscription config.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from config import environment_flags, get_pusher_settings

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health():
     return {
          "status": "OK",
          "timestamp": datetime.now(timezone.utc).isoformat(),
          "environment": environment_flags(),
     }


@router.get("/pusher-config")
def pusher_config():
     """Public key and cluster a subscriber needs; the app secret stays server side."""
     settings = get_pusher_settings()
     return {"key": settings.key, "cluster": settings.cluster}
