"""Health and connection diagnostics."""

from placement_portal.infrastructure.health.checks import (
    check_api_health,
    check_configuration,
    check_endpoint,
    check_session,
    run_connection_checks,
)

__all__ = [
    "check_api_health",
    "check_configuration",
    "check_endpoint",
    "check_session",
    "run_connection_checks",
]
