"""
Connectivity monitoring for the backend collaborator.

Exposes a tri-state status refreshed on a fixed timer and whenever the
host surface becomes visible again. The status is an indicator only; it
never gates the generation flow.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 30.0
CHECK_TIMEOUT_SECONDS = 4.0


class ConnectionStatus(Enum):
    """Backend reachability as seen by the client."""
    CHECKING = "checking"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class ConnectivityMonitor:
    """Polls a health probe and exposes the latest status.

    The polling task and any visibility-triggered checks are owned
    together: ``stop()`` releases all of them.
    """

    def __init__(
        self,
        probe: Callable[[], Awaitable[bool]],
        interval: float = POLL_INTERVAL_SECONDS,
        timeout: float = CHECK_TIMEOUT_SECONDS,
        on_change: Optional[Callable[[ConnectionStatus], None]] = None,
    ):
        """Initialize the monitor.

        Args:
            probe: Coroutine function returning True when the backend is healthy
            interval: Seconds between scheduled checks
            timeout: Seconds after which a pending check counts as failed
            on_change: Optional callback invoked on every status transition
        """
        if interval <= 0:
            raise ValueError("interval must be > 0")
        if timeout <= 0:
            raise ValueError("timeout must be > 0")

        self._probe = probe
        self.interval = interval
        self.timeout = timeout
        self._on_change = on_change
        self._status = ConnectionStatus.CHECKING
        self._poll_task: Optional[asyncio.Task] = None
        self._checks: Set[asyncio.Task] = set()

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def running(self) -> bool:
        return self._poll_task is not None

    async def check(self) -> ConnectionStatus:
        """Run one health check and update the status.

        Never raises for probe failures: errors and timeouts resolve to
        ``DISCONNECTED``.
        """
        try:
            healthy = bool(await asyncio.wait_for(self._probe(), self.timeout))
        except asyncio.TimeoutError:
            logger.debug("Health check timed out after %.1fs", self.timeout)
            healthy = False
        except Exception as e:
            logger.debug("Health check failed: %s", e.__class__.__name__)
            healthy = False

        self._set_status(ConnectionStatus.CONNECTED if healthy else ConnectionStatus.DISCONNECTED)
        return self._status

    async def start(self) -> None:
        """Check immediately, then keep checking every ``interval`` seconds."""
        if self._poll_task is not None:
            return
        self._poll_task = asyncio.create_task(self._poll())

    def notify_visibility(self, visible: bool) -> None:
        """Re-check right away when the host surface regains visibility."""
        if not visible or self._poll_task is None:
            return
        task = asyncio.create_task(self.check())
        self._checks.add(task)
        task.add_done_callback(self._checks.discard)

    async def stop(self) -> None:
        """Cancel the timer and any in-flight checks."""
        tasks = list(self._checks)
        if self._poll_task is not None:
            tasks.append(self._poll_task)
        self._poll_task = None
        self._checks.clear()

        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "ConnectivityMonitor":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def _poll(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self.interval)

    def _set_status(self, status: ConnectionStatus) -> None:
        if status is self._status:
            return
        logger.info("Backend connectivity: %s -> %s", self._status.value, status.value)
        self._status = status
        if self._on_change is not None:
            try:
                self._on_change(status)
            except Exception:
                logger.exception("Connectivity change callback failed")
