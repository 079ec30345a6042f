"""
API dependencies for dependency injection
"""

from typing import Optional

from bson import ObjectId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from adapters import mongo_adapter
from app.config import Settings
from app.exceptions import ServiceValidationError, UnauthorizedError
from domain.models import User
from services import AuthService, PlannerService, RecipeService, ShoppingService

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """The Settings instance the application was built with."""
    return request.app.state.settings


def get_db() -> Database:
    """
    Database handle dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Database = Depends(get_db)):
            pass
    """
    return mongo_adapter.get_db()


def get_auth_service(
    db: Database = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> AuthService:
    return AuthService(db, settings)


def get_recipe_service(db: Database = Depends(get_db)) -> RecipeService:
    return RecipeService(db)


def get_planner_service(db: Database = Depends(get_db)) -> PlannerService:
    return PlannerService(db)


def get_shopping_service(db: Database = Depends(get_db)) -> ShoppingService:
    return ShoppingService(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the ``Authorization: Bearer`` header to the stored user."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized to access this route")
    return auth.authenticate(credentials.credentials)


def current_owner_id(user: User = Depends(get_current_user)) -> ObjectId:
    """ObjectId of the authenticated caller, used to scope every query."""
    return ObjectId(user.id)


def parse_object_id(value: str, label: str) -> ObjectId:
    """Convert a path id, rejecting malformed ids with a 400."""
    if not ObjectId.is_valid(value):
        raise ServiceValidationError(
            errors=[{"field": "id", "message": f"Invalid {label} ID"}]
        )
    return ObjectId(value)
