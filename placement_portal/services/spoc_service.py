"""SPOC service for the portal client."""

from typing import Any, Dict, List, Union

from placement_portal.api.client import PortalClient, response_body
from placement_portal.api.routes import API_ROUTES
from placement_portal.models.spoc import CreateSpocInput, Spoc


class SpocService:
    def __init__(self, client: PortalClient):
        self.client = client

    async def list_spocs(self) -> List[Spoc]:
        response = await self.client.get(API_ROUTES["SPOCS"])
        return [Spoc.model_validate(item) for item in response_body(response) or []]

    async def create_spoc(self, data: Union[CreateSpocInput, Dict[str, Any]]) -> Spoc:
        if not isinstance(data, CreateSpocInput):
            data = CreateSpocInput.model_validate(data)
        response = await self.client.post(API_ROUTES["ADMIN_SPOCS"], json=data.model_dump())
        return Spoc.model_validate(response_body(response))

    async def update_spoc(self, spoc_id: int, data: Dict[str, Any]) -> Spoc:
        """Partial update; only the given fields are sent."""
        response = await self.client.put(f"{API_ROUTES['ADMIN_SPOCS']}/{spoc_id}", json=data)
        return Spoc.model_validate(response_body(response))

    async def delete_spoc(self, spoc_id: int) -> None:
        await self.client.delete(f"{API_ROUTES['ADMIN_SPOCS']}/{spoc_id}")

    async def toggle_spoc_status(self, spoc_id: int, is_active: bool) -> Spoc:
        response = await self.client.put(
            f"{API_ROUTES['ADMIN_SPOCS']}/{spoc_id}/status", json={"is_active": is_active}
        )
        return Spoc.model_validate(response_body(response))
