"""Per-action loading flag and user-facing error state."""

import contextlib
import logging
from typing import AsyncIterator, Dict, Optional

from ..errors import ActionInProgressError, SubmissionValidationError, TransportError

logger = logging.getLogger(__name__)

VALIDATION_FAILURE = "validation"
TRANSPORT_FAILURE = "transport"


class ActionState:
    """Tracks one user action (submit, batch submit, re-evaluate, ...).

    A second trigger while a request is in flight is refused rather than
    queued or cancelled.
    """

    def __init__(self, name: str):
        self.name = name
        self.is_loading = False
        self.error: Optional[str] = None
        self.error_kind: Optional[str] = None
        self.field_errors: Dict[str, str] = {}

    def reset(self) -> None:
        """Forget the last error."""
        self.error = None
        self.error_kind = None
        self.field_errors = {}

    @contextlib.asynccontextmanager
    async def track(self, failure_message: str) -> AsyncIterator[None]:
        """Run the body as this action.

        Validation failures are recorded inline and transport failures are
        recorded as ``failure_message``; neither propagates.

        Raises:
            ActionInProgressError: If the action is already running
        """
        if self.is_loading:
            raise ActionInProgressError(self.name)

        self.is_loading = True
        self.reset()
        try:
            yield
        except SubmissionValidationError as e:
            logger.info(f"⚠️ {self.name}: validation failed: {e.message}")
            self.error = e.message
            self.error_kind = VALIDATION_FAILURE
            self.field_errors = dict(e.field_errors)
        except TransportError as e:
            logger.error(f"❌ {self.name} failed: {e}")
            self.error = failure_message
            self.error_kind = TRANSPORT_FAILURE
        finally:
            self.is_loading = False

    def to_dict(self) -> Dict[str, object]:
        """Convert state to dictionary for API responses."""
        return {
            "action": self.name,
            "is_loading": self.is_loading,
            "error": self.error,
            "error_kind": self.error_kind,
            "field_errors": dict(self.field_errors),
        }
