"""Portal API client and route constants."""

from placement_portal.api.client import CallScope, PortalClient, create_client, response_body
from placement_portal.api.routes import API_ROUTES, APP_ROUTES

__all__ = [
    "API_ROUTES",
    "APP_ROUTES",
    "CallScope",
    "PortalClient",
    "create_client",
    "response_body",
]
