"""Authentication models for the portal client."""

from typing import Optional

from pydantic import BaseModel, Field


class LoginCredentials(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Body of a successful login call."""

    token: Optional[str] = None
    email: str = ""
    role: str = ""


class AuthUser(BaseModel):
    """User record kept alongside the session credential."""

    email: str
    role: str
    name: str

    @classmethod
    def from_login(cls, response: LoginResponse) -> "AuthUser":
        return cls(email=response.email, role=response.role, name=response.email.split("@")[0])
