"""Decoding of knowledge base evaluation facts into displayable records.

Evaluation facts carry their reasoning as a single semicolon-delimited
string produced by the knowledge base, e.g.::

    Source type: news (score: 0.6); Citations: true (3 found, score: 0.8)

The producer is fixed, so the matching below mirrors its format exactly.
Segments that match none of the patterns pass through untouched.
"""

import logging
import math
import re
from datetime import datetime
from typing import Iterable, List, Optional

from ..models.knowledge_fact import DisplayFact, KnowledgeFact, ReasoningPoint

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"score: ([\d.]+)")
CITATIONS_PATTERN = re.compile(r"Citations: (YES|NO) \((\d+) found, score: [\d.]+\)")
SOURCE_TYPE_PATTERN = re.compile(r"Source type: ([a-z]+) \(score: ([\d.]+)\)")
SCORE_PLACEHOLDER_PATTERN = re.compile(r"\(score: [\d.]+\)")
NUMBER_PREFIX_PATTERN = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")

TIMESTAMP_SEPARATOR = " at "


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def parse_float_prefix(text: str) -> float:
    """Parse the longest numeric prefix of a string, ignoring what follows.

    ``"0.5.5"`` gives 0.5 and ``"72%"`` gives 72.0.

    Raises:
        ValueError: If the string does not start with a number
    """
    match = NUMBER_PREFIX_PATTERN.match(text)
    if match is None:
        raise ValueError(f"No number at the start of {text!r}")
    return float(match.group(1).replace("Infinity", "inf"))


def _to_percentage(raw: str) -> Optional[int]:
    try:
        return round_half_up(parse_float_prefix(raw) * 100)
    except (ValueError, OverflowError):
        return None


def _format_source_type(match: re.Match) -> str:
    source_type, raw_score = match.group(1), match.group(2)
    percentage = _to_percentage(raw_score)
    if percentage is None:
        percentage = "NaN"
    return f"Source: {source_type[:1].upper() + source_type[1:]} ({percentage}%)"


def parse_reasoning_point(segment: str) -> ReasoningPoint:
    """Decode one reasoning segment.

    Args:
        segment: A single ``;``-separated piece of the reasoning string

    Returns:
        Display text plus the percentage extracted from ``score: <f>``
    """
    point = segment.strip()

    score_match = SCORE_PATTERN.search(point)
    score = _to_percentage(score_match.group(1)) if score_match else None

    text = point.replace(": true", ": YES").replace(": false", ": NO")
    text = CITATIONS_PATTERN.sub(lambda m: f"Citations: {m.group(2)} references found", text)
    text = SOURCE_TYPE_PATTERN.sub(_format_source_type, text)
    # A zero score is treated like a missing one: the placeholder is dropped.
    text = SCORE_PLACEHOLDER_PATTERN.sub(f"({score}%)" if score else "", text)

    return ReasoningPoint(text=text, score=score)


def parse_reasoning_points(reasoning: str) -> List[ReasoningPoint]:
    """Split a reasoning string on ``;`` and decode every segment."""
    return [parse_reasoning_point(segment) for segment in reasoning.split(";")]


def format_score(score: str) -> int:
    """Parse the headline score argument into an integer percentage.

    Raises:
        ValueError: If the argument does not start with a number
    """
    return round_half_up(parse_float_prefix(score))


def extract_timestamp(comment: Optional[str]) -> Optional[str]:
    """Return the text following the first ``" at "`` of a comment, if any."""
    if not comment:
        return None
    parts = comment.split(TIMESTAMP_SEPARATOR)
    return parts[1] if len(parts) > 1 else None


def parse_timestamp(timestamp: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None when absent or malformed."""
    if not timestamp:
        return None
    try:
        return datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _dedup_key(fact: KnowledgeFact) -> Optional[str]:
    return fact.arguments[0] if fact.arguments else None


def distinct_facts(facts: Iterable[KnowledgeFact]) -> List[KnowledgeFact]:
    """Drop evaluation facts whose content repeats an earlier evaluation fact.

    The first occurrence wins and the relative order of the kept facts is
    preserved. Facts with other predicates are never dropped.
    """
    kept: List[KnowledgeFact] = []
    seen_contents = set()

    for fact in facts:
        if fact.is_evaluation:
            key = _dedup_key(fact)
            if key in seen_contents:
                continue
            seen_contents.add(key)
        kept.append(fact)

    return kept


def decode_fact(fact: KnowledgeFact) -> Optional[DisplayFact]:
    """Decode an evaluation fact.

    Args:
        fact: Raw knowledge base fact

    Returns:
        The display record, or None for non-evaluation facts and for
        evaluation facts that do not have the expected shape
    """
    if not fact.is_evaluation:
        return None

    if len(fact.arguments) < 4:
        logger.debug(f"Skipping evaluation fact with {len(fact.arguments)} arguments")
        return None

    content, level, raw_score, reasoning = fact.arguments[:4]

    try:
        score = format_score(raw_score)
    except (ValueError, OverflowError):
        logger.debug(f"Skipping evaluation fact with non-numeric score: {raw_score!r}")
        return None

    timestamp = extract_timestamp(fact.comment)

    return DisplayFact(
        content=content,
        level=level,
        score=score,
        reasoning=parse_reasoning_points(reasoning),
        timestamp=timestamp,
        evaluated_at=parse_timestamp(timestamp),
    )


def decode_facts(facts: Iterable[KnowledgeFact]) -> List[DisplayFact]:
    """Deduplicate a fact listing and decode every evaluation fact in it."""
    decoded = []
    for fact in distinct_facts(facts):
        display = decode_fact(fact)
        if display is not None:
            decoded.append(display)
    return decoded
