"""User request/response schemas - API contract and validation."""

from datetime import datetime

from pydantic import BaseModel, field_validator

# bcrypt only looks at the first 72 bytes of the encoded password
BCRYPT_MAX_BYTES = 72


class RegisterRequest(BaseModel):
    username: str
    password: str

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """No length rules: an impossible password is just a failed login (401)."""

    username: str
    password: str


class RegisterResponse(BaseModel):
    id: int
    username: str


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: int
    username: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
