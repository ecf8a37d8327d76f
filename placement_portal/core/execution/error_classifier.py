"""Response classifier for the portal client.

Classifies failed attempts into error kinds for retry and notification decisions.
"""

from typing import Optional

import httpx

from placement_portal.core.errors import ClassifiedError
from placement_portal.core.retry_config import ErrorKind


class ErrorClassifier:
    """Classifies failed HTTP attempts into ErrorKind values.

    Static methods for stateless classification. Never raises.
    """

    @staticmethod
    def classify(
        response: Optional[httpx.Response] = None,
        error: Optional[BaseException] = None,
    ) -> ClassifiedError:
        """Classify a failed attempt.

        Args:
            response: Response with a non-2xx status, if one was received
            error: Transport exception raised instead of a response

        Returns:
            ClassifiedError with exactly one kind
        """
        # Status codes only count when a response actually arrived
        if response is not None:
            return ErrorClassifier.classify_status(
                response.status_code, ErrorClassifier.extract_detail(response)
            )

        if isinstance(error, httpx.TimeoutException):
            return ClassifiedError(kind=ErrorKind.TIMEOUT, message=f"Request timed out: {error}")

        if isinstance(error, httpx.TransportError):
            return ClassifiedError(kind=ErrorKind.NETWORK, message=f"Network failure: {error}")

        if error is not None:
            return ClassifiedError(
                kind=ErrorKind.UNKNOWN, message=f"{type(error).__name__}: {error}"
            )

        return ClassifiedError(kind=ErrorKind.NETWORK, message="No response received")

    @staticmethod
    def classify_status(status_code: int, detail: Optional[str] = None) -> ClassifiedError:
        """Classify a non-2xx status code.

        Args:
            status_code: HTTP status received
            detail: Backend-provided error detail, if any

        Returns:
            ClassifiedError carrying the status and detail
        """
        if status_code in (401, 403):
            kind = ErrorKind.AUTH
            message = detail or "Not authorized"
        elif status_code == 404:
            kind = ErrorKind.NOT_FOUND
            message = detail or "Resource not found"
        elif status_code == 422:
            kind = ErrorKind.VALIDATION
            message = f"Validation failed: {detail}" if detail else "Validation failed"
        elif status_code == 429:
            kind = ErrorKind.RATE_LIMITED
            message = detail or "Rate limited"
        elif status_code >= 500:
            kind = ErrorKind.SERVER
            message = f"Server returned {status_code}"
        else:
            kind = ErrorKind.UNKNOWN
            message = detail or f"Request failed with status {status_code}"

        return ClassifiedError(kind=kind, message=message, status_code=status_code, detail=detail)

    @staticmethod
    def extract_detail(response: httpx.Response) -> Optional[str]:
        """Pull the ``error`` or ``message`` string out of a JSON error body."""
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        return None
