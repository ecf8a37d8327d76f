"""SPOC (single point of contact) models for the portal client."""

from typing import Optional

from pydantic import BaseModel, Field


class CreateSpocInput(BaseModel):
    """Payload for creating a SPOC."""

    name: str = Field(..., min_length=1)
    designation: str
    mobile_number: str
    email: str


class Spoc(CreateSpocInput):
    """A SPOC as returned by the backend."""

    id: int
    is_active: bool = True
    created_at: Optional[str] = None
