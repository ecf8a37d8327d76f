"""Student models for the portal client."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Student(BaseModel):
    """A student record as listed by the admin API."""

    id: int
    email: str
    full_name: str
    register_number: str
    department: str
    batch_year: int
    mobile: str = ""
    is_blocked: bool = False
    profile_status: Optional[str] = None
    student_type: Optional[str] = None
    cgpa: Optional[float] = None
    backlogs: Optional[int] = None
    profile_photo_url: Optional[str] = None


class StudentQuery(BaseModel):
    """Filters for the paginated student listing."""

    dept: Optional[str] = None
    batch: Optional[int] = None
    search: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1)

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class PaginatedStudents(BaseModel):
    """Page of students plus paging metadata."""

    data: List[Student] = Field(default_factory=list)
    meta: PageMeta
