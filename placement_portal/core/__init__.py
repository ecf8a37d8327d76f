"""Core request lifecycle for the portal client."""

from placement_portal.core.errors import ClassifiedError, RequestFailed
from placement_portal.core.retry_config import ErrorKind, RetryConfig

__all__ = ["ClassifiedError", "ErrorKind", "RequestFailed", "RetryConfig"]
