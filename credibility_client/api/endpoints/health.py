"""Health check endpoints."""

from typing import Dict, List, Union

from fastapi import APIRouter, Depends

from ...domain.services.batch_orchestrator import BatchOrchestrator
from ...domain.services.evaluation_service import EvaluationService
from ...domain.services.knowledge_service import KnowledgeService
from ...infrastructure.dependencies import (
    get_batch_orchestrator,
    get_evaluation_service,
    get_knowledge_service,
)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    service: EvaluationService = Depends(get_evaluation_service),
) -> Dict[str, Union[str, bool]]:
    """Check the local service and the scorer backend.

    Returns:
        Local status, scorer readiness and the backend's liveness flag
    """
    backend_alive = await service.check_health()
    return {
        "status": "healthy",
        "scorer": service.scorer_name,
        "scorer_available": service.scorer_available,
        "backend_alive": backend_alive,
    }


@router.get("/health/actions")
async def action_status(
    service: EvaluationService = Depends(get_evaluation_service),
    orchestrator: BatchOrchestrator = Depends(get_batch_orchestrator),
    knowledge: KnowledgeService = Depends(get_knowledge_service),
) -> List[dict]:
    """Loading flag and last error of every user action."""
    states = [
        service.evaluate_state,
        service.scenario_state,
        service.re_evaluate_state,
        orchestrator.state,
        knowledge.fetch_state,
        knowledge.add_state,
    ]
    return [state.to_dict() for state in states]
