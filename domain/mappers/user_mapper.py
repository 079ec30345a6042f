"""
User domain mappers.
Handles transformation between stored user documents and DTOs.
"""

from domain.models import User
from domain.schemas.auth_schemas import UserResponse


class UserMapper:
    """Mapper for user transformations."""

    @staticmethod
    def to_response(user: User) -> UserResponse:
        """
        Convert a User document model to UserResponse DTO.

        The password hash never leaves this layer.
        """
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )
