"""Service for browsing and extending the shared knowledge base."""

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import SubmissionValidationError, TransportError
from ..models.knowledge_fact import AddFactsRequest, DisplayFact, KnowledgeFact
from ..ports.knowledge_repository import KnowledgeRepository
from .action_state import ActionState
from .fact_decoder import decode_facts

logger = logging.getLogger(__name__)

FETCH_FAILURE_MESSAGE = "Failed to fetch knowledge base facts"
ADD_FAILURE_MESSAGE = "Failed to add facts to knowledge base"


def validate_facts(facts: Sequence[KnowledgeFact]) -> Dict[str, str]:
    """Check that every fact has a predicate and non-empty arguments."""
    errors: Dict[str, str] = {}
    if not facts:
        errors["facts"] = "At least one fact is required"
    for i, fact in enumerate(facts):
        if not fact.predicate.strip():
            errors[f"facts[{i}].predicate"] = "Predicate is required"
        if not fact.arguments or any(not argument.strip() for argument in fact.arguments):
            errors[f"facts[{i}].arguments"] = "Arguments must not be empty"
    return errors


class KnowledgeService:
    """Knowledge store: fetches, adds and decodes knowledge base facts."""

    def __init__(self, repository: KnowledgeRepository):
        self._repository = repository
        self.fetch_state = ActionState("fetch_facts")
        self.add_state = ActionState("add_facts")

    async def list_facts(self) -> List[KnowledgeFact]:
        """Get every stored fact, undecoded."""
        facts = await self._repository.list_facts()
        logger.info(f"📚 Fetched {len(facts)} knowledge facts")
        return facts

    async def list_display_facts(self) -> List[DisplayFact]:
        """Get the distinct evaluation facts in displayable form."""
        return decode_facts(await self.list_facts())

    async def add_facts(
        self,
        facts: Sequence[KnowledgeFact],
        source: Optional[str] = None,
        expiration: Optional[str] = None,
    ) -> List[KnowledgeFact]:
        """Store facts, then return the refreshed listing.

        Raises:
            SubmissionValidationError: If a fact is incomplete (nothing is sent)
            TransportError: If either request fails
        """
        errors = validate_facts(facts)
        if errors:
            raise SubmissionValidationError("Facts are incomplete", errors)

        request = AddFactsRequest(facts=list(facts), source=source, expiration=expiration)
        try:
            await self._repository.add_facts(request)
        except TransportError as e:
            logger.error(f"❌ Adding facts failed: {e}")
            raise

        logger.info(f"✅ Added {len(request.facts)} facts")
        return await self.list_facts()

    async def refresh(self) -> Optional[List[DisplayFact]]:
        """Fetch and decode facts as a user action; failures land on ``fetch_state``."""
        async with self.fetch_state.track(FETCH_FAILURE_MESSAGE):
            return await self.list_display_facts()
        return None

    async def refresh_raw(self) -> Optional[List[KnowledgeFact]]:
        """Like ``refresh`` but returns the undecoded facts."""
        async with self.fetch_state.track(FETCH_FAILURE_MESSAGE):
            return await self.list_facts()
        return None

    async def submit_facts(
        self,
        facts: Sequence[KnowledgeFact],
        source: Optional[str] = None,
        expiration: Optional[str] = None,
    ) -> Optional[List[DisplayFact]]:
        """Add facts as a user action and return the refreshed decoded listing."""
        async with self.add_state.track(ADD_FAILURE_MESSAGE):
            return decode_facts(await self.add_facts(facts, source, expiration))
        return None
