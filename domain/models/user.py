"""
User account document model.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from domain.models.base import oid_str, utcnow


class User(BaseModel):
    """User account as stored in the ``users`` collection."""

    id: Optional[str] = None
    name: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        data = dict(doc)
        data["id"] = oid_str(data.pop("_id", None))
        return cls.model_validate(data)
