"""
models/user.py
--------------
Domain model for application users.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents an account that can sign in to the catalog.

    Attributes:
        id: Database primary key.
        email: Login email, matched exactly.
        first_name: Given name.
        last_name: Family name.
        password: Password hash as stored; never serialized.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last change.
    """
    id: int
    email: str
    first_name: str
    last_name: str
    password: str = field(repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Return a JSON-ready representation without the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
