"""Retry configuration for the portal client.

Defines error kinds and retry behavior settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet


class ErrorKind(str, Enum):
    """Kinds assigned to a failed HTTP attempt.

    - NETWORK: no response received (connection refused, DNS, reset)
    - TIMEOUT: no response before the configured timeout elapsed
    - AUTH: 401 / 403
    - NOT_FOUND: 404
    - VALIDATION: 422, carries backend detail
    - RATE_LIMITED: 429
    - SERVER: any 5xx
    - UNKNOWN: everything else
    """

    NETWORK = "network"
    TIMEOUT = "timeout"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Delay before retry n (1-based) is ``initial_delay * backoff_factor ** (n - 1)``,
    capped at ``max_delay``. ``jitter`` is a fraction applied symmetrically to
    each delay; 0.0 keeps delays exact.
    """

    max_retries: int = 3
    initial_delay: float = 1.0  # seconds
    backoff_factor: float = 2.0
    max_delay: float = 60.0
    jitter: float = 0.0
    retry_on: FrozenSet[ErrorKind] = field(
        default_factory=lambda: frozenset({ErrorKind.SERVER, ErrorKind.NETWORK})
    )

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be >= 0")
        if not 0.0 <= self.jitter < 1.0:
            raise ValueError("jitter must be in [0.0, 1.0)")
