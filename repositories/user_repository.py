"""
User Repository - Data access layer for user accounts
"""

from typing import Optional

from adapters.mongo_adapter import USERS
from domain.models import User
from repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    collection_name = USERS
    model = User
    duplicate_message = "User already exists"

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (lowercased) email"""
        return self._to_model(self.collection.find_one({"email": email.lower()}))

    def create_user(self, name: str, email: str, password_hash: str, now) -> User:
        """Create a new user; ConflictError if the email is taken"""
        return self.insert(
            {
                "name": name,
                "email": email.lower(),
                "password_hash": password_hash,
                "created_at": now,
                "updated_at": now,
            }
        )
