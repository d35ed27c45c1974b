from __future__ import annotations

from dataclasses import dataclass

from .user import Role


@dataclass(frozen=True, slots=True)
class IdentityContext:
    """Verified, request-scoped identity derived from a session token."""

    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
