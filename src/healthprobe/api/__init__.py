"""HTTP surface for probe results."""

from .routes import ENDPOINTS, create_health_router

__all__ = ["ENDPOINTS", "create_health_router"]
