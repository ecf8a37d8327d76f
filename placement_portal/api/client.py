"""Portal API client.

One explicitly constructed client per application. Every feature call goes
through the same lifecycle:

    augment -> send -> classify -> retry (bounded) -> invalidate / notify

Successful calls return the ``httpx.Response``. Terminal failures are
reported to the user once and raised as ``RequestFailed``.
"""

import asyncio
from typing import Any, AsyncIterator, Callable, Coroutine, Dict, Optional, Set, Tuple

import httpx
import structlog

from placement_portal.config import ClientConfig
from placement_portal.core.errors import ClassifiedError, RequestFailed
from placement_portal.core.execution import (
    ErrorClassifier,
    OutboundRequest,
    RequestAugmenter,
    RetryController,
    SessionInvalidator,
    UserNotifier,
)
from placement_portal.core.execution.retry_controller import Sleeper
from placement_portal.core.logging import logger
from placement_portal.core.retry_config import ErrorKind
from placement_portal.infrastructure.auth.session import CredentialStore
from placement_portal.infrastructure.navigation import Navigator
from placement_portal.infrastructure.storage import JsonFileStorage, MemoryStorage

ProgressCallback = Callable[[int], None]


class PortalClient:
    """Async client for the placement portal backend.

    Collaborators are injected so an application can share one store,
    navigator and notifier between the client and its screens.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        credentials: Optional[CredentialStore] = None,
        navigator: Optional[Navigator] = None,
        notifier: Optional[UserNotifier] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleeper] = None,
    ):
        """Initialize PortalClient.

        Args:
            config: Client settings (defaults to ClientConfig.from_env())
            credentials: Session credential store
            navigator: Navigation state used for login redirects
            notifier: User notifier
            transport: httpx transport override (tests, proxies)
            sleep: Backoff sleeper override
        """
        self.config = config or ClientConfig.from_env()
        self.credentials = credentials or CredentialStore()
        self.navigator = navigator or Navigator()
        self.notifier = notifier or UserNotifier()

        self.augmenter = RequestAugmenter(self.credentials)
        self.classifier = ErrorClassifier()
        self.retry = RetryController(self.config.retry, sleep=sleep)
        self.invalidator = SessionInvalidator(
            self.credentials,
            self.navigator,
            login_path=self.config.login_path,
            redirect_delay=self.config.redirect_delay,
        )

        self._http = httpx.AsyncClient(
            base_url=self.config.resolved_base_url,
            timeout=self.config.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        self.invalidator.cancel_pending_redirect()
        await self._http.aclose()

    def scope(self) -> "CallScope":
        """Create a scope whose calls are cancelled together on teardown."""
        return CallScope()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Any = None,
        headers: Optional[Dict[str, str]] = None,
        retry: bool = True,
        notify: bool = True,
        on_upload_progress: Optional[ProgressCallback] = None,
    ) -> httpx.Response:
        """Run one logical call through the request lifecycle.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            params: Query parameters (None values are dropped)
            json: JSON body
            data: Form fields (multipart when combined with files)
            files: Multipart files; pass bytes so retries can resend them
            headers: Extra headers
            retry: Whether transient failures are retried
            notify: Whether a terminal failure is shown to the user
            on_upload_progress: Called with the percentage of the body sent,
                restarting from 0 on each attempt

        Returns:
            The successful (2xx) response

        Raises:
            RequestFailed: On terminal failure, already reported to the user
            asyncio.CancelledError: If the call is cancelled; nothing is reported
        """
        draft = OutboundRequest(
            method=method.upper(),
            path=path,
            params={k: v for k, v in params.items() if v is not None} if params else None,
            json=json,
            data=data,
            files=files,
            headers=dict(headers or {}),
        )
        with structlog.contextvars.bound_contextvars(request_id=draft.request_id):
            try:
                return await self._run(
                    draft, retry=retry, notify=notify, on_upload_progress=on_upload_progress
                )
            except asyncio.CancelledError:
                logger.info(
                    "request_cancelled",
                    request=draft.label,
                    retries=draft.retry_state.attempt,
                )
                raise

    async def get(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def _run(
        self,
        draft: OutboundRequest,
        retry: bool,
        notify: bool,
        on_upload_progress: Optional[ProgressCallback] = None,
    ) -> httpx.Response:
        state = draft.retry_state

        while True:
            attempt = self.augmenter.augment(draft)
            response, error = await self._send(attempt, on_upload_progress)

            if error is None:
                logger.debug(
                    "api_response",
                    request=draft.label,
                    status_code=response.status_code,
                    retries=state.attempt,
                )
                return response

            if retry and self.retry.should_retry(error, state):
                await self.retry.backoff(error, state, draft.label)
                continue

            raise self._fail(draft, error, notify)

    async def _send(
        self, attempt: OutboundRequest, on_upload_progress: Optional[ProgressCallback] = None
    ) -> Tuple[Optional[httpx.Response], Optional[ClassifiedError]]:
        request = self._http.build_request(
            attempt.method,
            attempt.path,
            params=attempt.params,
            json=attempt.json,
            data=attempt.data,
            files=attempt.files,
            headers=attempt.headers,
        )
        if on_upload_progress is not None:
            _track_upload(request, on_upload_progress)
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            return None, self.classifier.classify(error=e)

        if response.is_success:
            return response, None
        return response, self.classifier.classify(response=response)

    def _fail(self, draft: OutboundRequest, error: ClassifiedError, notify: bool) -> RequestFailed:
        attempts = draft.retry_state.attempt + 1
        logger.warning(
            "api_request_failed",
            request=draft.label,
            kind=error.kind.value,
            status_code=error.status_code,
            attempts=attempts,
            error=error.message,
        )

        if error.kind == ErrorKind.AUTH:
            self.invalidator.invalidate()

        if notify:
            self.notifier.notify_error(error)

        return RequestFailed(error, attempts=attempts)


class CallScope:
    """Tracks the logical calls started by one caller (e.g. a screen).

    Closing the scope cancels every call still in flight, including any
    waiting on a retry backoff, so none of them retries or notifies later.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()
        self.closed = False

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        if self.closed:
            coro.close()
            raise RuntimeError("Cannot start a call in a closed scope")
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        self.closed = True
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.debug("call_scope_closed", cancelled=len(pending))

    async def __aenter__(self) -> "CallScope":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def create_client(config: Optional[ClientConfig] = None, **kwargs) -> PortalClient:
    """Build a client with session persistence chosen from configuration.

    Uses a JSON file store when ``session_file`` is configured, otherwise
    keeps the session in memory.
    """
    config = config or ClientConfig.from_env()
    if "credentials" not in kwargs:
        storage = JsonFileStorage(config.session_file) if config.session_file else MemoryStorage()
        kwargs["credentials"] = CredentialStore(storage)
    client = PortalClient(config=config, **kwargs)
    logger.info(
        "portal_client_created",
        base_url=client.base_url,
        app_env=config.app_env,
        persistent_session=bool(config.session_file),
    )
    return client


def response_body(response: httpx.Response) -> Any:
    """Decode a JSON body, or None for empty responses (e.g. 204)."""
    if not response.content:
        return None
    return response.json()


class _UploadProgressStream(httpx.AsyncByteStream):
    """Wraps a request body and reports the share of it sent so far."""

    def __init__(self, stream: Any, total: int, callback: ProgressCallback):
        self._stream = stream
        self._total = total
        self._callback = callback

    async def __aiter__(self) -> AsyncIterator[bytes]:
        sent = 0
        async for chunk in self._stream:
            sent += len(chunk)
            self._callback(round(sent * 100 / self._total))
            yield chunk


def _track_upload(request: httpx.Request, callback: ProgressCallback) -> None:
    # Progress needs a known body size
    total = int(request.headers.get("Content-Length") or 0)
    if total:
        request.stream = _UploadProgressStream(request.stream, total, callback)
