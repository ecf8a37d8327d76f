"""Connection diagnostics for the portal client.

Checks configuration, backend reachability and auth setup. Every check
returns a dict with a ``status`` and never raises for backend failures.
"""

from typing import Any, Dict

from placement_portal.api.client import PortalClient
from placement_portal.api.routes import API_ROUTES
from placement_portal.config import DEFAULT_API_BASE_URL
from placement_portal.core.errors import RequestFailed
from placement_portal.core.logging import logger
from placement_portal.core.retry_config import ErrorKind


def check_configuration(client: PortalClient) -> Dict[str, Any]:
    """Report the settings the client was built with."""
    cfg = client.config
    return {
        "status": "configured" if cfg.base_url != DEFAULT_API_BASE_URL else "default",
        "environment": cfg.app_env,
        "api_url": client.base_url,
        "production": cfg.is_production,
        "timeout_seconds": cfg.timeout,
        "max_retries": cfg.retry.max_retries,
        "base_backoff_ms": int(cfg.retry.initial_delay * 1000),
    }


async def check_api_health(client: PortalClient) -> Dict[str, Any]:
    """Probe the backend health endpoint once, without retries or notifications.

    Returns:
        Dict with status ("healthy", "unhealthy", "timeout", "unreachable")
        and optional error message
    """
    try:
        response = await client.get(API_ROUTES["HEALTH"], retry=False, notify=False)
    except RequestFailed as e:
        if e.kind == ErrorKind.TIMEOUT:
            status = "timeout"
        elif e.kind == ErrorKind.NETWORK:
            status = "unreachable"
        else:
            status = "unhealthy"
        return {"status": status, "error": e.error.message[:100]}

    return {"status": "healthy", "status_code": response.status_code}


def check_session(client: PortalClient) -> Dict[str, Any]:
    stored = client.credentials.stored()
    if stored is None:
        return {"status": "anonymous"}
    if client.credentials.current() is None:
        return {"status": "expired", "expires_at": str(stored.expires_at)}
    return {
        "status": "authenticated",
        "token_preview": stored.token[:20] + "...",
        "expires_at": str(stored.expires_at),
    }


async def check_endpoint(client: PortalClient, path: str) -> Dict[str, Any]:
    """Call a protected endpoint once and describe the outcome."""
    if not client.credentials.has_valid_session():
        return {"status": "skipped", "error": "No auth token. Please login first."}

    try:
        response = await client.get(path, retry=False, notify=False)
    except RequestFailed as e:
        result = {"status": "failed", "kind": e.kind.value, "error": e.error.message[:100]}
        if e.status_code == 403:
            result["status"] = "forbidden"
        return result

    return {"status": "accessible", "status_code": response.status_code}


async def run_connection_checks(client: PortalClient) -> Dict[str, Any]:
    """Run all diagnostics in order, stopping after a failed health check.

    Protected endpoints are only probed once the backend is reachable.
    """
    report: Dict[str, Any] = {
        "configuration": check_configuration(client),
        "health": await check_api_health(client),
        "session": check_session(client),
    }

    if report["health"]["status"] != "healthy":
        logger.warning("connection_check_failed", health=report["health"])
        report["ready"] = False
        return report

    report["protected_endpoint"] = await check_endpoint(client, API_ROUTES["DRIVES"])
    report["admin_endpoint"] = await check_endpoint(client, API_ROUTES["ADMIN_DRIVES"])
    report["ready"] = True

    logger.info(
        "connection_check_completed",
        health=report["health"]["status"],
        session=report["session"]["status"],
        protected=report["protected_endpoint"]["status"],
        admin=report["admin_endpoint"]["status"],
    )
    return report
