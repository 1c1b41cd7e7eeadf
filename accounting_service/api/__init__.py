from accounting_service.api.accounts import router as accounts_router
from accounting_service.api.categories import router as categories_router
from accounting_service.api.health import router as health_router
from accounting_service.api.journals import router as journals_router

__all__ = [
    "accounts_router",
    "categories_router",
    "health_router",
    "journals_router",
]
