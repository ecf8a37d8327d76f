"""Session credential storage for the portal client.

The CredentialStore is the provider/observer pair the client is built
around: the request augmenter reads ``current()`` on every call, while
login, logout and the session invalidator write through it and listeners
are told about every change.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from placement_portal.core.logging import logger
from placement_portal.infrastructure.auth.jwt import InvalidToken, decode_expiry
from placement_portal.infrastructure.storage import KeyValueStorage, MemoryStorage

TOKEN_KEY = "token"
USER_KEY = "user"

CredentialListener = Callable[[Optional["SessionCredential"]], None]


@dataclass(frozen=True)
class SessionCredential:
    """Bearer token plus its decoded expiry instant."""

    token: str
    expires_at: Optional[datetime] = None
    malformed: bool = False

    @classmethod
    def from_token(cls, token: str) -> "SessionCredential":
        try:
            return cls(token=token, expires_at=decode_expiry(token))
        except InvalidToken:
            return cls(token=token, malformed=True)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Malformed tokens are always expired; tokens without ``exp`` never are."""
        if self.malformed:
            return True
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(timezone.utc))


class CredentialStore:
    """Reads and writes the session credential in key-value storage.

    Writes are last-writer-wins; no locking.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize credential store.

        Args:
            storage: Backend holding the token (defaults to in-memory storage)
            clock: Returns the current aware UTC datetime (for tests)
        """
        self.storage = storage or MemoryStorage()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._listeners: List[CredentialListener] = []

    # Provider side

    def stored(self) -> Optional[SessionCredential]:
        """Return the stored credential, expired or not."""
        token = self.storage.get(TOKEN_KEY)
        if not token:
            return None
        return SessionCredential.from_token(token)

    def current(self) -> Optional[SessionCredential]:
        """Return the stored credential if it is still valid, else None."""
        credential = self.stored()
        if credential is None:
            return None
        if credential.is_expired(self._clock()):
            logger.debug("session_credential_expired", expires_at=str(credential.expires_at))
            return None
        return credential

    def has_valid_session(self) -> bool:
        return self.current() is not None

    def user(self) -> Optional[Dict[str, Any]]:
        """Return the stored user record, if any."""
        raw = self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("session_user_record_invalid")
            return None

    # Writer side

    def save(self, token: str, user: Optional[Dict[str, Any]] = None) -> SessionCredential:
        """Persist a new credential (and optional user record) after login."""
        self.storage.set(TOKEN_KEY, token)
        if user is not None:
            self.storage.set(USER_KEY, json.dumps(user))
        credential = SessionCredential.from_token(token)
        logger.info("session_credential_saved", expires_at=str(credential.expires_at))
        self._notify(credential)
        return credential

    def clear(self) -> bool:
        """Remove the credential and user record.

        Returns:
            True if a token was actually removed
        """
        removed = self.storage.delete(TOKEN_KEY)
        self.storage.delete(USER_KEY)
        if removed:
            logger.info("session_credential_cleared")
            self._notify(None)
        return removed

    # Observer side

    def subscribe(self, listener: CredentialListener) -> Callable[[], None]:
        """Register a listener for credential changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, credential: Optional[SessionCredential]) -> None:
        for listener in list(self._listeners):
            listener(credential)
