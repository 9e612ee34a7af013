"""Evaluation API endpoints."""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.errors import ActionInProgressError, TransportError
from ...domain.models.batch_report import BatchReport
from ...domain.models.evaluation_result import EvaluationResult
from ...domain.models.submission import Submission
from ...domain.services.batch_orchestrator import BatchOrchestrator
from ...domain.services.evaluation_service import EvaluationService, scenario_title
from ...infrastructure.dependencies import get_batch_orchestrator, get_evaluation_service
from ..errors import action_failure, action_in_progress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evaluate", tags=["evaluation"])


class BatchRequest(BaseModel):
    """Request model for batch evaluation."""

    items: List[Submission] = Field(..., description="Submissions in request order")


class Scenario(BaseModel):
    """A canned submission with its display title."""

    name: str
    title: str
    submission: Submission


@router.post("")
async def evaluate(
    submission: Submission,
    service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResult:
    """Evaluate one submission and record it in history."""
    try:
        result = await service.submit(submission)
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if result is None:
        raise action_failure(service.evaluate_state)
    return result


@router.get("/scenarios")
async def list_scenarios(
    service: EvaluationService = Depends(get_evaluation_service),
) -> List[Scenario]:
    """List the scorer's canned test scenarios."""
    try:
        scenarios: Dict[str, Submission] = await service.get_test_scenarios()
    except TransportError as e:
        logger.error(f"❌ Failed to fetch test scenarios: {e}")
        return []

    return [
        Scenario(name=name, title=scenario_title(name), submission=submission)
        for name, submission in scenarios.items()
    ]


@router.post("/scenarios/{name}")
async def evaluate_scenario(
    name: str,
    service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResult:
    """Evaluate a canned scenario by name."""
    try:
        scenarios = await service.get_test_scenarios()
    except TransportError as e:
        logger.error(f"❌ Failed to fetch test scenarios: {e}")
        scenarios = {}

    if name not in scenarios:
        raise HTTPException(status_code=404, detail=f"Scenario not found: {name}")

    try:
        result = await service.submit_scenario(scenarios[name])
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if result is None:
        raise action_failure(service.scenario_state)
    return result


@router.post("/batch")
async def evaluate_batch(
    request: BatchRequest,
    orchestrator: BatchOrchestrator = Depends(get_batch_orchestrator),
) -> BatchReport:
    """Evaluate up to ten submissions in one scorer request."""
    try:
        report = await orchestrator.submit(request.items)
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if report is None:
        raise action_failure(orchestrator.state)
    return report
