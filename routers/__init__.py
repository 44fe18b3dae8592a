# routers/__init__.py
from .customers import router as customers_router
from .payments import router as payments_router
from .system import router as system_router
from .webhooks import router as webhooks_router

__all__ = [
     "customers_router",
     "payments_router",
     "system_router",
     "webhooks_router",
]
