"""API routes package"""

from . import auth, recipes, plans, health

__all__ = ["auth", "recipes", "plans", "health"]
