"""Authentication service: signup, login and bearer-token resolution"""

import logging
from datetime import timedelta
from typing import Tuple

import bcrypt
import jwt
from bson import ObjectId
from pymongo.database import Database

from app.config import Settings
from app.exceptions import ServiceValidationError, UnauthorizedError
from domain.models import User
from domain.models.base import utcnow
from repositories import UserRepository

logger = logging.getLogger("mealplanner.auth")


class AuthService:
    """Business logic for user accounts and access tokens."""

    def __init__(self, db: Database, settings: Settings):
        self.users = UserRepository(db)
        self.settings = settings

    # ---------- passwords ----------

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    # ---------- tokens ----------

    def create_token(self, user_id: str) -> str:
        now = utcnow()
        payload = {
            "id": user_id,
            "iat": now,
            "exp": now + timedelta(days=self.settings.jwt_expires_days),
        }
        return jwt.encode(
            payload, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm
        )

    def decode_token(self, token: str) -> str:
        """Return the user id carried by a valid token."""
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token")

        user_id = payload.get("id")
        if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
            raise UnauthorizedError("Invalid token")
        return user_id

    def authenticate(self, token: str) -> User:
        """Resolve a bearer token to the stored user."""
        user_id = self.decode_token(token)
        user = self.users.get_by_id(ObjectId(user_id))
        if not user:
            logger.warning("Token for unknown user %s", user_id)
            raise UnauthorizedError("User not found")
        return user

    # ---------- account flows ----------

    def signup(self, name: str, email: str, password: str) -> Tuple[User, str]:
        name = name.strip()
        if not name:
            raise ServiceValidationError(
                errors=[{"field": "name", "message": "Name is required"}]
            )
        if self.users.get_by_email(email):
            raise ServiceValidationError("User already exists")

        user = self.users.create_user(
            name=name,
            email=email,
            password_hash=self.hash_password(password),
            now=utcnow(),
        )
        logger.info("user_created user_id=%s", user.id)
        return user, self.create_token(user.id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self.users.get_by_email(email)
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning("login_failed email=%s", email.lower())
            raise UnauthorizedError("Invalid credentials")
        logger.info("login_succeeded user_id=%s", user.id)
        return user, self.create_token(user.id)
