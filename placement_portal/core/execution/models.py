"""Request lifecycle models for the portal client.

Type-safe dataclasses for outbound requests and per-call retry state.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RetryState:
    """Retry bookkeeping for one logical call. Never persisted."""

    attempt: int = 0  # retries issued so far
    elapsed_delay: float = 0.0  # seconds spent in backoff

    def record(self, delay: float) -> None:
        self.attempt += 1
        self.elapsed_delay += delay


@dataclass
class OutboundRequest:
    """Draft of a request before it is sent.

    A fresh instance is created per logical call; the augmenter returns
    copies with headers attached for each attempt.
    """

    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    data: Optional[Dict[str, Any]] = None
    files: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    credential: Optional[str] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    retry_state: RetryState = field(default_factory=RetryState)

    @property
    def label(self) -> str:
        return f"{self.method.upper()} {self.path}"
