"""Drive models for the portal client."""

from typing import List, Optional

from pydantic import BaseModel, Field


class Round(BaseModel):
    """One interview round of a drive."""

    name: str
    date: str
    description: str = ""


class DriveFields(BaseModel):
    """Fields shared by drive payloads and drive records."""

    company_name: str = Field(..., min_length=1)
    job_role: str = Field(..., min_length=1)
    job_description: str = ""
    location: str = ""
    website: Optional[str] = None
    logo_url: Optional[str] = None
    drive_type: str = ""
    company_category: str = ""
    spoc_id: Optional[int] = Field(None, description="Single Point Of Contact id")
    ctc_min: float = 0
    ctc_max: float = 0
    ctc_display: str = ""
    min_cgpa: float = Field(0, ge=0, le=10)
    max_backlogs_allowed: int = Field(0, ge=0)
    eligible_batches: List[int] = Field(default_factory=list)
    eligible_departments: List[str] = Field(default_factory=list)
    eligible_gender: str = "Any"
    rounds: List[Round] = Field(default_factory=list)
    drive_date: str = ""
    deadline_date: str = ""


class CreateDriveInput(DriveFields):
    """Payload for creating a drive."""


class Drive(DriveFields):
    """A drive as returned by the backend."""

    id: int
    status: str = ""
    applicant_count: Optional[int] = None
