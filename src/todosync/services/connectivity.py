"""Connectivity notifications for the remote API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..models import Connectivity

logger = logging.getLogger(__name__)

ConnectivityListener = Callable[[Connectivity], None]


class ConnectivityMonitor:
    """
    Emits "became reachable" / "became unreachable" events.

    A background loop probes the remote host every ``interval`` seconds.
    Listeners are only called on transitions. Other components that learn
    about reachability on their own (a request that failed, a fetch that
    succeeded) report it with ``record`` so the next probe is compared
    against the latest known state.
    """

    def __init__(self, probe: Callable[[], Awaitable[bool]], interval: float = 5.0) -> None:
        """
        Args:
            probe: Coroutine function returning True if the remote is reachable
            interval: Seconds between probes
        """
        self._probe = probe
        self.interval = interval
        self._listeners: list[ConnectivityListener] = []
        self._state: Connectivity | None = None

    @property
    def state(self) -> Connectivity | None:
        """Last known connectivity, None before the first observation."""
        return self._state

    def subscribe(self, listener: ConnectivityListener) -> None:
        """Register a listener for connectivity transitions."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ConnectivityListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def record(self, state: Connectivity) -> None:
        """Update the known state without notifying listeners."""
        self._state = state

    def notify(self, state: Connectivity) -> None:
        """Set the state and notify listeners if it changed."""
        if state == self._state:
            return
        previous = self._state
        self._state = state
        logger.info("Connectivity changed: %s -> %s", previous, state.value)
        for listener in list(self._listeners):
            listener(state)

    async def check(self) -> Connectivity:
        """Probe once and notify on a transition."""
        reachable = await self._probe()
        state = Connectivity.ONLINE if reachable else Connectivity.OFFLINE
        self.notify(state)
        return state

    async def run(self) -> None:
        """Probe forever. Stops when the surrounding task is cancelled."""
        logger.debug("Connectivity monitor started (interval=%.1fs)", self.interval)
        while True:
            await asyncio.sleep(self.interval)
            await self.check()
