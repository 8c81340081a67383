"""
Usage accounting for the session.

Keeps an append-only log of generations made in this session and a cached
copy of the historical snapshot owned by the collaborator.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from .models import SessionUsageRecord, UsageStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageTotals:
    """Request and token totals for one provider/model pair."""
    requests: int
    total_tokens: int


class UsageAccountant:
    """Owns the session usage log and the last fetched snapshot.

    The session log only grows; entries are never modified or removed.
    The snapshot is replaced wholesale on each successful refresh.
    """

    def __init__(self, fetch_snapshot: Optional[Callable[[], Awaitable[UsageStats]]] = None):
        """Initialize the accountant.

        Args:
            fetch_snapshot: Coroutine function returning the historical
                snapshot; refreshes are no-ops without one
        """
        self._fetch_snapshot = fetch_snapshot
        self._log: List[SessionUsageRecord] = []
        self._snapshot: Optional[UsageStats] = None
        self._refreshing = False

    def record(self, entry: SessionUsageRecord) -> None:
        """Append one usage record to the session log."""
        self._log.append(entry)
        logger.debug(
            "Recorded usage: %s/%s %d tokens",
            entry.provider.value, entry.model, entry.tokens_used,
        )

    @property
    def session_log(self) -> Tuple[SessionUsageRecord, ...]:
        """Session records in append order."""
        return tuple(self._log)

    @property
    def total_session_requests(self) -> int:
        return len(self._log)

    @property
    def total_session_tokens(self) -> int:
        return sum(entry.tokens_used for entry in self._log)

    def session_breakdown(self) -> Dict[Tuple[str, str], UsageTotals]:
        """Totals per (provider, model) for this session, in first-seen order."""
        totals: Dict[Tuple[str, str], UsageTotals] = {}
        for entry in self._log:
            key = (entry.provider.value, entry.model)
            current = totals.get(key, UsageTotals(0, 0))
            totals[key] = UsageTotals(
                requests=current.requests + 1,
                total_tokens=current.total_tokens + entry.tokens_used,
            )
        return totals

    @property
    def snapshot(self) -> Optional[UsageStats]:
        return self._snapshot

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    async def refresh_snapshot(self) -> bool:
        """Fetch the historical snapshot and replace the cached copy.

        A refresh requested while another is outstanding is skipped.
        Failures are logged and leave the previous snapshot in place.

        Returns:
            True if the snapshot was replaced
        """
        if self._fetch_snapshot is None or self._refreshing:
            return False

        self._refreshing = True
        try:
            self._snapshot = await self._fetch_snapshot()
            return True
        except Exception as e:
            logger.warning("Usage snapshot refresh failed: %s", e)
            return False
        finally:
            self._refreshing = False


def format_tokens(n: int) -> str:
    """Render a token count compactly, e.g. ``1.2K`` or ``3.4M``."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)
