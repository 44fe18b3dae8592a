# client/display.py
from datetime import datetime, timezone
from typing import Optional, Union


def utc_now_iso() -> str:
     return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Union[str, datetime]) -> datetime:
     if isinstance(value, datetime):
          parsed = value
     else:
          parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
     if parsed.tzinfo is None:
          parsed = parsed.replace(tzinfo=timezone.utc)
     return parsed


def time_ago(value: Union[str, datetime], now: Optional[datetime] = None) -> str:
     """Relative age: "Just now", "5m ago", "3h ago", "2d ago"."""
     now = now or datetime.now(timezone.utc)
     seconds = int((now - parse_timestamp(value)).total_seconds())

     if seconds < 60:
          return "Just now"
     if seconds < 3600:
          return f"{seconds // 60}m ago"
     if seconds < 86400:
          return f"{seconds // 3600}h ago"
     return f"{seconds // 86400}d ago"


def format_amount(minor_units: int) -> str:
     """2500 -> "$25.00"."""
     return f"${minor_units / 100:,.2f}"
