"""Service for single evaluations, canned scenarios and re-evaluation."""

import logging
import re
from typing import Dict, Optional

from ..errors import TransportError
from ..models.evaluation_result import EvaluationResult
from ..models.submission import Submission, validate_submission
from ..ports.scorer import Scorer
from .action_state import ActionState
from .history_store import HistoryStore

logger = logging.getLogger(__name__)

EVALUATE_FAILURE_MESSAGE = "Failed to evaluate information. Please try again later."
SCENARIO_FAILURE_MESSAGE = "Failed to evaluate scenario. Please try again later."
RE_EVALUATE_FAILURE_MESSAGE = "Failed to re-evaluate information. Please try again later."

_CASE_SUFFIX = re.compile(r"case\d+", re.IGNORECASE)


def scenario_title(name: str) -> str:
    """Human-readable title for a scenario key, e.g. ``fake_news_case2`` -> ``fake news``."""
    return _CASE_SUFFIX.sub("", name.replace("_", " "), count=1).strip()


class EvaluationService:
    """Coordinates single-item evaluation between the scorer and the history.

    Every submission that reaches the scorer is recorded, with its result
    when one was received and without one when the request failed.
    """

    def __init__(self, scorer: Scorer, history: HistoryStore):
        """Initialize the service.

        Args:
            scorer: Scorer port implementation
            history: History store recording every sent submission
        """
        self._scorer = scorer
        self._history = history
        self.evaluate_state = ActionState("evaluate")
        self.scenario_state = ActionState("evaluate_scenario")
        self.re_evaluate_state = ActionState("re_evaluate")

    async def evaluate(self, submission: Submission) -> EvaluationResult:
        """Validate, score and record one submission.

        Raises:
            SubmissionValidationError: If the submission is invalid (nothing is sent)
            TransportError: If the scorer request fails
        """
        validate_submission(submission).raise_for_errors()

        logger.info(f"🔍 Evaluating: {submission.content[:100]}...")
        try:
            result = await self._scorer.evaluate(submission)
        except TransportError as e:
            logger.error(f"❌ Evaluation failed: {e}")
            self._history.append(submission, None)
            raise

        self._history.append(submission, result)
        logger.info(f"✅ Evaluation complete: score={result.score}, level={result.level.value}")
        return result

    async def get_test_scenarios(self) -> Dict[str, Submission]:
        """Get the scorer's canned scenarios keyed by name."""
        return await self._scorer.get_test_scenarios()

    async def re_evaluate(self, entry_id: str) -> EvaluationResult:
        """Evaluate a past entry's submission again as a new entry.

        Raises:
            KeyError: If no entry has this id
        """
        entry = self._history.get(entry_id)
        if entry is None:
            raise KeyError(f"History entry '{entry_id}' not found")
        return await self.evaluate(entry.input)

    async def check_health(self) -> bool:
        """Return whether the scorer reports itself alive."""
        try:
            return await self._scorer.check_health()
        except TransportError as e:
            logger.warning(f"⚠️ Scorer health check failed: {e}")
            return False

    @property
    def scorer_name(self) -> str:
        """Get the scorer name."""
        return self._scorer.provider_name

    @property
    def scorer_available(self) -> bool:
        """Check if the scorer is ready for requests."""
        return self._scorer.is_available

    async def submit(self, submission: Submission) -> Optional[EvaluationResult]:
        """Evaluate as a user action; failures land on ``evaluate_state``."""
        async with self.evaluate_state.track(EVALUATE_FAILURE_MESSAGE):
            return await self.evaluate(submission)
        return None

    async def submit_scenario(self, submission: Submission) -> Optional[EvaluationResult]:
        """Evaluate a canned scenario as a user action."""
        async with self.scenario_state.track(SCENARIO_FAILURE_MESSAGE):
            return await self.evaluate(submission)
        return None

    async def submit_re_evaluation(self, entry_id: str) -> Optional[EvaluationResult]:
        """Re-evaluate a history entry as a user action."""
        async with self.re_evaluate_state.track(RE_EVALUATE_FAILURE_MESSAGE):
            return await self.re_evaluate(entry_id)
        return None
