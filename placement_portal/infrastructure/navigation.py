"""Navigation state for the portal client.

Tracks the screen the user is on so the session invalidator knows whether
a redirect to login is needed.
"""

from typing import Callable, List, Optional

from placement_portal.core.logging import logger


class Navigator:
    """Current location plus redirect hook.

    Args:
        location: Initial location
        on_navigate: Optional callback invoked with each new location
    """

    def __init__(self, location: str = "/", on_navigate: Optional[Callable[[str], None]] = None):
        self.current_location = location
        self.history: List[str] = []
        self._on_navigate = on_navigate

    def navigate(self, location: str) -> None:
        logger.info("navigation", source=self.current_location, target=location)
        self.current_location = location
        self.history.append(location)
        if self._on_navigate is not None:
            self._on_navigate(location)

    def is_at(self, location: str) -> bool:
        return self.current_location.rstrip("/") == location.rstrip("/")
