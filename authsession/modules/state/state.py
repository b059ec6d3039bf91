"""Observable session state: immutable state values and the single cell holding them."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unauthenticated:
    """No user is logged in."""

    @property
    def is_authenticated(self) -> bool:
        return False

    @property
    def user(self) -> None:
        return None


@dataclass(frozen=True)
class Authenticated:
    """A user is logged in and their profile has been resolved."""

    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return True


SessionState = Union[Unauthenticated, Authenticated]
Observer = Callable[[SessionState], None]


class SessionStateCell:
    """
    Observable holder of the process-wide session state.

    Starts ``Unauthenticated``. Values are immutable, so a reader never
    observes a partially applied transition. Only the session manager
    writes through ``_publish``.
    """

    def __init__(self):
        self._state: SessionState = Unauthenticated()
        self._observers: List[Observer] = []
        self._waiters: List[tuple] = []

    @property
    def current(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._state.user

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer called with every newly published state.

        Returns:
            Callable removing the observer (safe to call more than once)
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    async def wait_for(
        self,
        predicate: Callable[[SessionState], bool],
        timeout: Optional[float] = None,
    ) -> SessionState:
        """
        Wait until the state satisfies ``predicate``.

        Returns immediately when the current state already matches.

        Raises:
            asyncio.TimeoutError: If no matching state is published in time
        """
        if predicate(self._state):
            return self._state

        future = asyncio.get_running_loop().create_future()
        entry = (predicate, future)
        self._waiters.append(entry)
        try:
            return await asyncio.wait_for(future, timeout)
        finally:
            if entry in self._waiters:
                self._waiters.remove(entry)

    def _publish(self, state: SessionState) -> None:
        """Replace the current state and notify observers and waiters."""
        previous = self._state
        self._state = state

        if type(previous) is not type(state):
            logger.info(f"Session state: {type(previous).__name__} -> {type(state).__name__}")

        for predicate, future in list(self._waiters):
            if not future.done() and predicate(state):
                future.set_result(state)

        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Session state observer failed")
