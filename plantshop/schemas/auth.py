"""Request/response schemas for registration and login."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "admin"]


class RegisterRequest(BaseModel):
    """New account credentials. Only presence is checked."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Signed session token returned after successful login."""

    token: str = Field(..., description="JWT access token (send as 'Authorization: Bearer <token>')")
    role: Role = Field(..., description="Role embedded in the token")


class UserRead(BaseModel):
    """Account as returned by registration (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role


class CurrentUser(BaseModel):
    """Claims decoded from a valid bearer token, attached to the request."""

    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
