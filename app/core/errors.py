"""Typed failures raised by the session, authorization and adoption layers.

Every error carries a stable ``code`` and the HTTP status it maps to. The
boundary translator in ``app.presentation.api.error_handlers`` renders them
into the shared ``{"status": "error", ...}`` envelope.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for every failure that is safe to show to a client."""

    code = "INTERNAL_ERROR"
    http_status = 500
    default_message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        http_status: Optional[int] = None,
    ) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        return {"status": "error", "code": self.code, "error": self.message}


# Authentication -------------------------------------------------------------
class Unauthorized(AppError):
    code = "UNAUTHORIZED"
    http_status = 401
    default_message = "No token provided"


class InvalidCredentials(AppError):
    code = "INVALID_CREDENTIALS"
    http_status = 401
    default_message = "Invalid email or password"


class InvalidToken(AppError):
    code = "INVALID_TOKEN"
    http_status = 401
    default_message = "Invalid token"


class TokenExpired(AppError):
    code = "TOKEN_EXPIRED"
    http_status = 401
    default_message = "Token expired"


# Authorization --------------------------------------------------------------
class Forbidden(AppError):
    code = "FORBIDDEN"
    http_status = 403
    default_message = "Not authorized"


# Lookups --------------------------------------------------------------------
class NotFound(AppError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Resource not found"


class UserNotFound(NotFound):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class PetNotFound(NotFound):
    code = "PET_NOT_FOUND"
    default_message = "Pet not found"


class AdoptionNotFound(NotFound):
    code = "ADOPTION_NOT_FOUND"
    default_message = "Adoption not found"


# Conflicts ------------------------------------------------------------------
class Conflict(AppError):
    code = "CONFLICT"
    http_status = 409
    default_message = "Conflicting state"


class PetAlreadyAdopted(Conflict):
    code = "PET_ALREADY_ADOPTED"
    http_status = 400
    default_message = "Pet is already adopted"


class UserAlreadyExists(Conflict):
    code = "USER_ALREADY_EXISTS"
    http_status = 400
    default_message = "User already exists"


class InvalidStatusTransition(Conflict):
    code = "INVALID_STATUS_TRANSITION"
    default_message = "Adoption status cannot be changed"


class UserHasPets(Conflict):
    code = "USER_HAS_PETS"
    default_message = "User owns adopted pets and cannot be deleted"


# Input ----------------------------------------------------------------------
class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    http_status = 400
    default_message = "Invalid request data"
