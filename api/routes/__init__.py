"""API routes package"""

from . import meals, health

__all__ = ["meals", "health"]
