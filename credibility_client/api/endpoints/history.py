"""Evaluation history endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ...domain.errors import ActionInProgressError
from ...domain.models.evaluation_result import EvaluationResult
from ...domain.models.history_entry import HistoryEntry
from ...domain.services.evaluation_service import EvaluationService
from ...domain.services.history_store import HistoryStore
from ...infrastructure.dependencies import get_evaluation_service, get_history_store
from ..errors import action_failure, action_in_progress

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def list_history(history: HistoryStore = Depends(get_history_store)) -> List[HistoryEntry]:
    """List past evaluations, most recent first."""
    return history.list()


@router.delete("", status_code=204)
async def clear_history(history: HistoryStore = Depends(get_history_store)) -> None:
    """Remove every history entry."""
    history.clear()


@router.post("/{entry_id}/re-evaluate")
async def re_evaluate(
    entry_id: str,
    service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResult:
    """Evaluate a past submission again; the result becomes a new entry."""
    try:
        result = await service.submit_re_evaluation(entry_id)
    except ActionInProgressError as e:
        raise action_in_progress(e.action)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")

    if result is None:
        raise action_failure(service.re_evaluate_state)
    return result
