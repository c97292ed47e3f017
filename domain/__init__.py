"""
Domain layer - Business entities, models and schemas.
"""

from domain import models, schemas

__all__ = ["models", "schemas"]
