"""Pydantic schemas for user API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from ....domain.models import Role


class UserUpdateRequest(BaseModel):
    """Request schema for a partial profile update."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None


class DocumentPayload(BaseModel):
    """Reference to a file kept in external storage."""

    name: str = Field(..., min_length=1, max_length=200)
    reference: str = Field(..., min_length=1, max_length=500)


class DocumentsUploadRequest(BaseModel):
    """Request schema for attaching documents to a user."""

    documents: List[DocumentPayload]
