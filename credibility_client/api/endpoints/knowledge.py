"""Knowledge base endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from ...domain.errors import ActionInProgressError
from ...domain.models.knowledge_fact import AddFactsRequest, DisplayFact, KnowledgeFact
from ...domain.services.knowledge_service import KnowledgeService
from ...infrastructure.dependencies import get_knowledge_service
from ..errors import action_failure, action_in_progress

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.get("/facts")
async def list_facts(service: KnowledgeService = Depends(get_knowledge_service)) -> List[DisplayFact]:
    """List distinct evaluation facts, decoded for display."""
    try:
        facts = await service.refresh()
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if facts is None:
        raise action_failure(service.fetch_state)
    return facts


@router.get("/facts/raw")
async def list_raw_facts(service: KnowledgeService = Depends(get_knowledge_service)) -> List[KnowledgeFact]:
    """List facts exactly as stored, any predicate."""
    try:
        facts = await service.refresh_raw()
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if facts is None:
        raise action_failure(service.fetch_state)
    return facts


@router.post("/facts")
async def add_facts(
    request: AddFactsRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
) -> List[DisplayFact]:
    """Add facts and return the refreshed, decoded listing."""
    try:
        facts = await service.submit_facts(request.facts, request.source, request.expiration)
    except ActionInProgressError as e:
        raise action_in_progress(e.action)

    if facts is None:
        raise action_failure(service.add_state)
    return facts
