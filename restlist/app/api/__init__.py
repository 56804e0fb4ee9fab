"""restlist HTTP API routers."""

from .parameters import router as parameters_router

__all__ = ["parameters_router"]
