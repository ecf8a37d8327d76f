"""Feature services used by the portal screens."""

from placement_portal.services.auth_service import AuthService
from placement_portal.services.drive_service import DriveService
from placement_portal.services.spoc_service import SpocService
from placement_portal.services.student_service import StudentService

__all__ = ["AuthService", "DriveService", "SpocService", "StudentService"]
