"""Authentication service for the portal client.

Login, logout and session restore on top of the shared credential store.
"""

from typing import Any, Dict, Optional, Union

from placement_portal.api.client import PortalClient, response_body
from placement_portal.api.routes import API_ROUTES
from placement_portal.core.errors import RequestFailed
from placement_portal.core.logging import logger
from placement_portal.models.auth import AuthUser, LoginCredentials, LoginResponse

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
NO_TOKEN_MESSAGE = "Login failed. No token received."
ADMIN_REQUIRED_MESSAGE = "Unauthorized access. Admin credentials required."


class AuthService:
    """Admin authentication flows."""

    def __init__(self, client: PortalClient):
        self.client = client

    @property
    def is_authenticated(self) -> bool:
        return self.client.credentials.has_valid_session()

    @property
    def user(self) -> Optional[AuthUser]:
        record = self.client.credentials.user()
        return AuthUser.model_validate(record) if record else None

    async def login(
        self,
        credentials: Union[LoginCredentials, Dict[str, Any]],
        account_type: str = "admin",
    ) -> Optional[AuthUser]:
        """Log in and persist the session.

        Args:
            credentials: Email and password
            account_type: "admin" (default) or "student"

        Returns:
            The logged-in user, or None if login failed (the user was already notified)
        """
        if not isinstance(credentials, LoginCredentials):
            credentials = LoginCredentials.model_validate(credentials)

        endpoint = (
            API_ROUTES["ADMIN_AUTH"]["LOGIN"]
            if account_type == "admin"
            else API_ROUTES["STUDENT_AUTH"]["LOGIN"]
        )

        try:
            response = await self.client.post(endpoint, json=credentials.model_dump())
        except RequestFailed as e:
            logger.warning("login_failed", kind=e.kind.value, status_code=e.status_code)
            return None

        body = LoginResponse.model_validate(response_body(response) or {})

        if not body.token:
            logger.error("login_missing_token", email=body.email)
            self.client.notifier.notify_message(NO_TOKEN_MESSAGE)
            return None

        if account_type == "admin" and body.role != "admin":
            logger.warning("login_rejected_non_admin", email=body.email, role=body.role)
            self.client.notifier.notify_message(ADMIN_REQUIRED_MESSAGE)
            return None

        user = AuthUser.from_login(body)
        self.client.credentials.save(body.token, user.model_dump())
        self.client.navigator.navigate(self.client.config.dashboard_path)
        logger.info("login_succeeded", email=user.email, role=user.role)
        return user

    def logout(self) -> None:
        logger.info("logout")
        self.client.credentials.clear()
        self.client.navigator.navigate(self.client.config.login_path)

    def restore_session(self) -> Optional[AuthUser]:
        """Re-establish state from a persisted session on startup.

        An expired stored token is cleared, the user is told, and the
        navigator is sent to login.

        Returns:
            The stored user if the session is still valid, else None
        """
        stored = self.client.credentials.stored()
        if stored is None:
            logger.debug("session_restore_no_token")
            return None

        if self.client.credentials.current() is None:
            logger.info("session_restore_expired")
            self.client.credentials.clear()
            self.client.notifier.notify_message(SESSION_EXPIRED_MESSAGE)
            self.client.navigator.navigate(self.client.config.login_path)
            return None

        logger.info("session_restored")
        return self.user

    async def forgot_password(self, email: str) -> Any:
        response = await self.client.post(
            API_ROUTES["ADMIN_AUTH"]["FORGOT_PASSWORD"], json={"email": email}
        )
        return response_body(response)

    async def reset_password(self, data: Dict[str, Any]) -> Any:
        response = await self.client.post(API_ROUTES["ADMIN_AUTH"]["RESET_PASSWORD"], json=data)
        return response_body(response)
