"""User domain model for adopters and administrators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(slots=True)
class UserDocument:
    name: str
    reference: str


@dataclass(slots=True)
class User:
    """
    User entity representing both adopters and administrators.

    Attributes:
        id: Unique identifier
        first_name: Given name
        last_name: Family name
        email: Email address (unique, lower-cased)
        password_hash: bcrypt hash, never the plaintext password
        role: Capability the user holds when authenticated
        pets: Ids of adopted pets, in adoption order
        documents: Uploaded document references
        last_connection: Last login or logout timestamp
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime
    updated_at: datetime
    pets: List[int] = field(default_factory=list)
    documents: List[UserDocument] = field(default_factory=list)
    last_connection: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role.value}>"
