# Savesync Reconciliation Sweep
# Retries remote calls for records left in a pending status

import asyncio
import logging
from dataclasses import dataclass, field

from savesync.sync.handlers import ActionHandlers, ActionResult, ResultStatus
from savesync.sync.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Result of a reconciliation sweep."""

    scanned: int = 0
    confirmed: int = 0
    still_pending: int = 0
    skipped: int = 0  # Settled by another action before the retry ran
    results: list[ActionResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every pending record was settled."""
        return self.still_pending == 0

    @property
    def removed(self) -> int:
        return sum(1 for r in self.results if r.status == ResultStatus.REMOVED)


class ReconciliationSweep:
    """
    Rescans the store for pending records and re-runs their action.

    Re-running goes through the same handlers as a user action, so it
    takes the same per-record lock and follows the same reconcile rules.
    """

    def __init__(self, store: RecordStore, handlers: ActionHandlers):
        self.store = store
        self.handlers = handlers

    async def run(self) -> SweepResult:
        """
        Run one sweep over all pending records.

        Returns:
            SweepResult with per-record results.
        """
        result = SweepResult()
        # Ids only; each retry re-reads its record under the id lock
        work = [self.handlers.retry(item.id) for item in self.store.pending()]

        result.scanned = len(work)
        if not work:
            logger.debug("No pending records")
            return result

        logger.info("Retrying %d pending records", result.scanned)
        for action_result in await asyncio.gather(*work):
            if action_result is None:
                result.skipped += 1
                continue
            result.results.append(action_result)
            if action_result.status == ResultStatus.PENDING:
                result.still_pending += 1
            else:
                result.confirmed += 1

        logger.info(
            "Sweep done: %d confirmed, %d still pending, %d skipped",
            result.confirmed,
            result.still_pending,
            result.skipped,
        )
        return result
