"""Pydantic models for portal API payloads."""

from placement_portal.models.auth import AuthUser, LoginCredentials, LoginResponse
from placement_portal.models.drive import CreateDriveInput, Drive, Round
from placement_portal.models.spoc import CreateSpocInput, Spoc
from placement_portal.models.student import PageMeta, PaginatedStudents, Student, StudentQuery

__all__ = [
    "AuthUser",
    "CreateDriveInput",
    "CreateSpocInput",
    "Drive",
    "LoginCredentials",
    "LoginResponse",
    "PageMeta",
    "PaginatedStudents",
    "Round",
    "Spoc",
    "Student",
    "StudentQuery",
]
