"""API routers."""
from .alerts import router as alerts_router
from .categories import router as categories_router
from .triggers import router as triggers_router
from .bindings import router as bindings_router

__all__ = ["alerts_router", "categories_router", "triggers_router", "bindings_router"]
