"""Error types for the portal client."""

from dataclasses import dataclass
from typing import Optional

from placement_portal.core.retry_config import ErrorKind


@dataclass(frozen=True)
class ClassifiedError:
    """Normalized description of one failed HTTP attempt."""

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    detail: Optional[str] = None


class RequestFailed(Exception):
    """Raised to the caller when a logical call ends in a terminal error.

    The failure has already been reported to the user (``handled`` is True),
    so callers should not notify again.
    """

    def __init__(self, error: ClassifiedError, attempts: int = 1):
        super().__init__(error.message)
        self.error = error
        self.attempts = attempts
        self.handled = True

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def status_code(self) -> Optional[int]:
        return self.error.status_code

    def __repr__(self) -> str:
        return (
            f"RequestFailed(kind={self.error.kind.value!r}, "
            f"status_code={self.error.status_code!r}, attempts={self.attempts})"
        )
