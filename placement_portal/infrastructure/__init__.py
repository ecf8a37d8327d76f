"""Infrastructure modules for the portal client.

- Auth: session credential store and JWT expiry inspection
- Storage: persistent key-value backends
- Navigation: current location and login redirects
- Health: connection diagnostics (import from placement_portal.infrastructure.health)
"""

# Auth
from placement_portal.infrastructure.auth import CredentialStore, SessionCredential

# Navigation
from placement_portal.infrastructure.navigation import Navigator

# Storage
from placement_portal.infrastructure.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "CredentialStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "Navigator",
    "SessionCredential",
]
