"""Drive service for the portal client.

Drive CRUD, applications and company brand lookup.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from placement_portal.api.client import PortalClient, ProgressCallback, response_body
from placement_portal.api.routes import API_ROUTES
from placement_portal.core.logging import logger
from placement_portal.models.drive import CreateDriveInput, Drive

# (filename, content, content_type)
Attachment = Tuple[str, bytes, str]

DOCUMENT_TYPES = ("resume", "aadhar", "pan", "profile_photo")


def _drive_payload(data: Union[CreateDriveInput, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(data, CreateDriveInput):
        return data.model_dump(mode="json")
    return dict(data)


def _multipart(
    payload: Dict[str, Any], attachments: Sequence[Attachment]
) -> Tuple[Dict[str, str], List[Tuple[str, Attachment]]]:
    """Split a drive into the ``drive_data`` field plus ``attachments`` file parts."""
    fields = {"drive_data": json.dumps(payload)}
    files = [("attachments", attachment) for attachment in attachments]
    return fields, files


class DriveService:
    def __init__(self, client: PortalClient):
        self.client = client

    async def list_drives(
        self, department: Optional[str] = None, batch: Optional[int] = None
    ) -> List[Drive]:
        """List drives visible to students, optionally filtered."""
        response = await self.client.get(
            API_ROUTES["DRIVES"], params={"department": department, "batch": batch}
        )
        return [Drive.model_validate(item) for item in response_body(response) or []]

    async def list_admin_drives(self) -> List[Drive]:
        response = await self.client.get(API_ROUTES["ADMIN_DRIVES"])
        return [Drive.model_validate(item) for item in response_body(response) or []]

    async def get_drive(self, drive_id: int) -> Optional[Drive]:
        """Find one drive. The admin API has no single-drive endpoint, so the list is searched."""
        for drive in await self.list_admin_drives():
            if drive.id == drive_id:
                return drive
        return None

    async def create_drive(
        self,
        data: Union[CreateDriveInput, Dict[str, Any]],
        attachments: Sequence[Attachment] = (),
        on_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        """Create a drive, as multipart when attachments are given.

        Args:
            data: Drive fields
            attachments: Files to upload with the drive
            on_progress: Called with the upload percentage while attachments are sent

        Returns:
            Backend response body
        """
        if not isinstance(data, CreateDriveInput):
            data = CreateDriveInput.model_validate(data)
        payload = _drive_payload(data)

        if attachments:
            fields, files = _multipart(payload, attachments)
            logger.info("drive_create_multipart", company=data.company_name, files=len(files))
            response = await self.client.post(
                API_ROUTES["ADMIN_DRIVES"],
                data=fields,
                files=files,
                on_upload_progress=on_progress,
            )
        else:
            response = await self.client.post(API_ROUTES["ADMIN_DRIVES"], json=payload)
        return response_body(response)

    async def update_drive(
        self,
        drive_id: int,
        data: Union[CreateDriveInput, Dict[str, Any]],
        attachments: Sequence[Attachment] = (),
    ) -> Any:
        path = f"{API_ROUTES['ADMIN_DRIVES']}/{drive_id}"
        payload = _drive_payload(data)
        if attachments:
            fields, files = _multipart(payload, attachments)
            response = await self.client.put(path, data=fields, files=files)
        else:
            response = await self.client.put(path, json=payload)
        return response_body(response)

    async def delete_drive(self, drive_id: int) -> Any:
        response = await self.client.delete(f"{API_ROUTES['ADMIN_DRIVES']}/{drive_id}")
        return response_body(response)

    async def bulk_delete_drives(self, drive_ids: Sequence[int]) -> Any:
        response = await self.client.post(
            f"{API_ROUTES['ADMIN_DRIVES']}/bulk-delete", json={"ids": list(drive_ids)}
        )
        return response_body(response)

    async def apply_for_drive(self, drive_id: int) -> Any:
        response = await self.client.post(f"{API_ROUTES['DRIVES']}/{drive_id}/apply")
        return response_body(response)

    async def register_student(self, drive_id: int, student_id: int) -> Any:
        """Manually add a student to a drive."""
        response = await self.client.post(
            f"{API_ROUTES['ADMIN_DRIVES']}/{drive_id}/add-student",
            json={"student_id": student_id},
        )
        return response_body(response)

    async def list_applicants(self, drive_id: int) -> Any:
        response = await self.client.get(f"{API_ROUTES['ADMIN_DRIVES']}/{drive_id}/applicants")
        return response_body(response)

    async def update_application_status(self, drive_id: int, student_id: int, status: str) -> Any:
        response = await self.client.put(
            f"{API_ROUTES['ADMIN']}/applications/status",
            json={"drive_id": drive_id, "student_id": student_id, "status": status},
        )
        return response_body(response)

    async def get_brand_details(self, domain: str) -> Any:
        response = await self.client.get(f"{API_ROUTES['BRANDS']}/{domain}")
        return response_body(response)

    async def search_company(self, query: str) -> Any:
        response = await self.client.get(f"{API_ROUTES['BRANDS']}/search", params={"query": query})
        return response_body(response)

    async def get_student_document_url(self, student_id: int, document_type: str) -> Any:
        if document_type not in DOCUMENT_TYPES:
            raise ValueError(
                f"Unknown document type '{document_type}'. Expected one of: {', '.join(DOCUMENT_TYPES)}"
            )
        response = await self.client.get(
            f"{API_ROUTES['ADMIN_STUDENTS']}/{student_id}/documents/{document_type}"
        )
        return response_body(response)
