"""Request augmenter for the portal client.

Attaches the bearer credential and tracing headers to outbound requests.
"""

import dataclasses
from datetime import datetime, timezone
from typing import Callable, Optional

from placement_portal.core.execution.models import OutboundRequest
from placement_portal.core.logging import logger
from placement_portal.infrastructure.auth.session import CredentialStore

ISSUED_AT_HEADER = "X-Request-Issued-At"
REQUEST_ID_HEADER = "X-Request-ID"


class RequestAugmenter:
    """Produces an augmented copy of a request for each attempt.

    Never fails: without a valid credential the request goes out
    unauthenticated and the backend decides.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.credentials = credentials
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def augment(self, draft: OutboundRequest) -> OutboundRequest:
        headers = dict(draft.headers)
        headers[ISSUED_AT_HEADER] = self._clock().isoformat()
        headers[REQUEST_ID_HEADER] = draft.request_id

        credential = self.credentials.current()
        token = credential.token if credential else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            headers.pop("Authorization", None)

        logger.debug(
            "api_request",
            method=draft.method.upper(),
            path=draft.path,
            authenticated=token is not None,
        )
        return dataclasses.replace(draft, headers=headers, credential=token)
