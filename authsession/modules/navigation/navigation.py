"""Navigation sinks consuming fire-and-forget "go to path" intents."""

import logging
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class Destination:
    """Paths the session manager navigates to."""

    ROOT = "/"
    PROFILE = "/profile"
    SUCCESS = "/success"


class NavigationSink(Protocol):
    """Protocol for anything accepting navigation intents."""

    def navigate(self, path: str) -> None:
        ...


class NullNavigator:
    """Discards every intent."""

    def navigate(self, path: str) -> None:
        logger.debug(f"Navigation intent dropped: {path}")


class RecordingNavigator:
    """Keeps every intent in order; useful headless and in tests."""

    def __init__(self):
        self.history: List[str] = []

    def navigate(self, path: str) -> None:
        self.history.append(path)

    @property
    def last(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()


class CallbackNavigator:
    """Adapter forwarding intents to a router callable."""

    def __init__(self, callback: Callable[[str], None]):
        self._callback = callback

    def navigate(self, path: str) -> None:
        self._callback(path)
