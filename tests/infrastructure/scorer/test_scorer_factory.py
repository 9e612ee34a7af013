"""Tests for the scorer factory."""

import pytest

from credibility_client.infrastructure.scorer.factory import ScorerFactory
from credibility_client.infrastructure.scorer.http_scorer import HttpScorerAdapter


@pytest.fixture
def factory() -> ScorerFactory:
    return ScorerFactory()


def test_default_registration(factory: ScorerFactory):
    """Test that the HTTP scorer is registered by default."""
    assert factory.get_scorer("http") is None


def test_duplicate_registration(factory: ScorerFactory):
    with pytest.raises(ValueError, match="already registered"):
        factory.register_scorer("http", HttpScorerAdapter)


@pytest.mark.asyncio
async def test_create_unknown_scorer(factory: ScorerFactory):
    with pytest.raises(ValueError, match="not found"):
        await factory.create_scorer("rules")


@pytest.mark.asyncio
async def test_create_http_scorer(factory: ScorerFactory):
    """Test creation, reuse and shutdown of the HTTP scorer."""
    scorer = await factory.create_scorer("http", base_url="http://test-backend", timeout=5.0)

    assert isinstance(scorer, HttpScorerAdapter)
    assert scorer.is_available
    assert await factory.create_scorer("http") is scorer

    await factory.shutdown()

    assert not scorer.is_available
    assert factory.get_scorer("http") is None


@pytest.mark.asyncio
async def test_create_registered_scorer(factory: ScorerFactory, fake_scorer_class):
    factory.register_scorer("fake", fake_scorer_class)

    scorer = await factory.create_scorer("fake")

    assert scorer.provider_name == "Fake"
    assert scorer.is_available
    await factory.shutdown()
