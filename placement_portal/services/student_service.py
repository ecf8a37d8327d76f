"""Student service for the portal client."""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from placement_portal.api.client import PortalClient, response_body
from placement_portal.api.routes import API_ROUTES
from placement_portal.core.logging import logger
from placement_portal.models.student import PaginatedStudents, StudentQuery


class StudentService:
    def __init__(self, client: PortalClient):
        self.client = client

    async def list_students(
        self, query: Optional[Union[StudentQuery, Dict[str, Any]]] = None
    ) -> PaginatedStudents:
        """Fetch one page of students."""
        if query is not None and not isinstance(query, StudentQuery):
            query = StudentQuery.model_validate(query)
        params = query.to_params() if query else None
        response = await self.client.get(API_ROUTES["ADMIN_STUDENTS"], params=params)
        return PaginatedStudents.model_validate(response_body(response))

    async def get_student(self, student_id: Union[int, str]) -> Any:
        response = await self.client.get(f"{API_ROUTES['ADMIN_STUDENTS']}/{student_id}")
        return response_body(response)

    async def create_student(self, data: Dict[str, Any]) -> Any:
        response = await self.client.post(API_ROUTES["ADMIN_STUDENTS"], json=data)
        return response_body(response)

    async def delete_student(self, student_id: int) -> Any:
        response = await self.client.delete(f"{API_ROUTES['ADMIN_STUDENTS']}/{student_id}")
        return response_body(response)

    async def bulk_delete_students(self, student_ids: Sequence[int]) -> Any:
        response = await self.client.post(
            f"{API_ROUTES['ADMIN_STUDENTS']}/delete-many", json={"ids": list(student_ids)}
        )
        return response_body(response)

    async def bulk_upload_students(
        self,
        file: Union[str, Path, bytes],
        filename: str = "students.csv",
        content_type: str = "text/csv",
    ) -> Any:
        """Upload a CSV of students.

        Args:
            file: Path to the CSV or its raw bytes
            filename: Name sent with raw bytes (a path uses its own name)
            content_type: MIME type of the upload
        """
        if isinstance(file, (str, Path)):
            path = Path(file)
            content = path.read_bytes()
            filename = path.name
        else:
            content = file

        logger.info("student_bulk_upload", filename=filename, size_bytes=len(content))
        response = await self.client.post(
            API_ROUTES["BULK_UPLOAD_STUDENTS"],
            files={"file": (filename, content, content_type)},
        )
        return response_body(response)

    async def set_blocked(self, student_id: int, block: bool) -> Any:
        response = await self.client.put(
            f"{API_ROUTES['ADMIN_USERS']}/{student_id}/block", json={"block": block}
        )
        return response_body(response)
