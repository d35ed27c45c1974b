from pydantic import BaseModel, EmailStr, Field, field_validator

from ....core.security import MAX_PASSWORD_BYTES, password_fits


class _PasswordMixin(BaseModel):
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        if not password_fits(value):
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return value


class RegisterRequest(_PasswordMixin):
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    email: EmailStr


class LoginRequest(_PasswordMixin):
    email: EmailStr
