"""Session invalidator for the portal client.

Tears down the local session after an authentication failure.
"""

import asyncio
from typing import Optional

from placement_portal.core.logging import logger
from placement_portal.infrastructure.auth.session import CredentialStore
from placement_portal.infrastructure.navigation import Navigator


class SessionInvalidator:
    """Clears the credential and schedules one redirect to login.

    Safe to call any number of times: the credential is only cleared if
    present and a redirect is never scheduled while another is pending.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        navigator: Navigator,
        login_path: str = "/login",
        redirect_delay: float = 1.5,
    ):
        self.credentials = credentials
        self.navigator = navigator
        self.login_path = login_path
        self.redirect_delay = redirect_delay
        self._pending: Optional[asyncio.TimerHandle] = None

    @property
    def redirect_pending(self) -> bool:
        return self._pending is not None

    def invalidate(self) -> bool:
        """Run one invalidation cycle.

        Returns:
            True if a credential was cleared or a redirect was scheduled
        """
        cleared = self.credentials.clear()
        scheduled = self._schedule_redirect()
        if cleared or scheduled:
            logger.info(
                "session_invalidated",
                credential_cleared=cleared,
                redirect_scheduled=scheduled,
                location=self.navigator.current_location,
            )
        return cleared or scheduled

    def cancel_pending_redirect(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            logger.debug("session_redirect_cancelled")

    def _schedule_redirect(self) -> bool:
        if self.navigator.is_at(self.login_path) or self._pending is not None:
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Outside an event loop there is nothing to wait on
            self.navigator.navigate(self.login_path)
            return True
        self._pending = loop.call_later(self.redirect_delay, self._redirect)
        return True

    def _redirect(self) -> None:
        self._pending = None
        if not self.navigator.is_at(self.login_path):
            self.navigator.navigate(self.login_path)
