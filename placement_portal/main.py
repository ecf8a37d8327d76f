"""Main entry point for the portal client.

Runs the connection diagnostics against the configured backend.

Usage:
    PORTAL_API_URL=https://portal.example.edu/api python -m placement_portal.main
"""

import asyncio
import json
from typing import Any, Dict

from placement_portal.api import create_client
from placement_portal.infrastructure.health import run_connection_checks


async def main() -> Dict[str, Any]:
    async with create_client() as client:
        return await run_connection_checks(client)


if __name__ == "__main__":
    report = asyncio.run(main())
    print(json.dumps(report, indent=2, default=str))
    raise SystemExit(0 if report.get("ready") else 1)
