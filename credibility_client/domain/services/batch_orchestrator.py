"""Service for evaluating several submissions in one scorer request."""

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import BatchValidationError, TransportError
from ..models.batch_report import BatchReport
from ..models.submission import Submission, validate_submission
from ..ports.scorer import Scorer
from .action_state import ActionState
from .history_store import HistoryStore

logger = logging.getLogger(__name__)

MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 10

BATCH_FAILURE_MESSAGE = "Failed to evaluate batch. Please try again later."


class BatchOrchestrator:
    """Coordinates batch evaluation between the scorer and the history.

    The scorer's report is relayed as received; only items it marks as
    successful are recorded in history, and only when the whole request
    succeeded.
    """

    def __init__(self, scorer: Scorer, history: HistoryStore):
        """Initialize the orchestrator.

        Args:
            scorer: Scorer port implementation
            history: History store receiving successful results
        """
        self._scorer = scorer
        self._history = history
        self.state = ActionState("batch_evaluation")

    def validate_batch(self, items: Sequence[Submission]) -> None:
        """Check batch preconditions without touching the network.

        Raises:
            BatchValidationError: If the size is out of range or an item is invalid
        """
        if len(items) < MIN_BATCH_SIZE:
            raise BatchValidationError("At least one item is required.")

        if len(items) > MAX_BATCH_SIZE:
            raise BatchValidationError(
                f"Maximum of {MAX_BATCH_SIZE} items allowed for batch evaluation."
            )

        field_errors: Dict[str, str] = {}
        for i, item in enumerate(items):
            validation = validate_submission(item)
            for field, message in validation.field_errors.items():
                field_errors[f"items[{i}].{field}"] = message

        if field_errors:
            if any(field.endswith(".content") for field in field_errors):
                message = "All items must have content to evaluate."
            else:
                message = "Some items are invalid."
            raise BatchValidationError(message, field_errors)

    async def evaluate_batch(self, items: Sequence[Submission]) -> BatchReport:
        """Evaluate all items in a single scorer request.

        Args:
            items: Submissions in request order

        Returns:
            The scorer's report, unchanged

        Raises:
            BatchValidationError: If preconditions fail (nothing is sent)
            TransportError: If the request as a whole fails (nothing is recorded)
        """
        items = list(items)
        self.validate_batch(items)

        logger.info(f"🔍 Dispatching batch of {len(items)} items to {self._scorer.provider_name}")
        try:
            report = await self._scorer.evaluate_batch(items)
        except TransportError as e:
            logger.error(f"❌ Batch evaluation failed: {e}")
            raise

        if not report.is_consistent:
            logger.warning(
                f"⚠️ Inconsistent batch report: total={report.total}, "
                f"successful={report.successful}, failed={report.failed}, "
                f"results={len(report.results)}"
            )

        recorded = self._record_successes(items, report)
        logger.info(
            f"✅ Batch complete: {report.successful}/{report.total} successful, "
            f"{recorded} recorded in history"
        )
        return report

    def _record_successes(self, items: List[Submission], report: BatchReport) -> int:
        recorded = 0
        for outcome in report.results:
            if not outcome.success or outcome.data is None:
                continue
            if not 0 <= outcome.index < len(items):
                logger.warning(f"⚠️ Batch result refers to unknown item index {outcome.index}")
                continue
            self._history.append(items[outcome.index], outcome.data)
            recorded += 1
        return recorded

    async def submit(self, items: Sequence[Submission]) -> Optional[BatchReport]:
        """Evaluate a batch as a user action.

        Failures are recorded on ``self.state`` instead of being raised.

        Returns:
            The report, or None if validation or transport failed

        Raises:
            ActionInProgressError: If a previous submit is still running
        """
        async with self.state.track(BATCH_FAILURE_MESSAGE):
            return await self.evaluate_batch(items)
        return None
