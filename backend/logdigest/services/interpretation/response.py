import json
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from logdigest.core.logging import get_logger
from logdigest.models.schemas import AISummary

logger = get_logger(__name__)


def extract_json_array(text: str) -> Optional[List[Any]]:
    """Extract the JSON array from model response text."""
    if not text:
        return None

    # Try direct parse first
    try:
        parsed = json.loads(text)
        return parsed if isinstance(parsed, list) else None
    except json.JSONDecodeError:
        pass

    text = text.strip()

    # Remove markdown code blocks if present
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        text = "\n".join(lines).strip()
        try:
            parsed = json.loads(text)
            if isinstance(parsed, list):
                return parsed
        except json.JSONDecodeError:
            pass

    # Find array boundaries
    start = text.find("[")
    end = text.rfind("]") + 1

    if start != -1 and end > start:
        try:
            parsed = json.loads(text[start:end])
            return parsed if isinstance(parsed, list) else None
        except json.JSONDecodeError:
            pass

    return None


def _index_of(item: Dict[str, Any]) -> Optional[int]:
    try:
        return int(item.get("index"))
    except (TypeError, ValueError):
        return None


def map_summaries(count: int, raw_items: List[Any]) -> List[AISummary]:
    """
    Line model answers up with digest positions 1..count.

    Missing or malformed answers become the pending placeholder; scores are
    clamped into [1, 10]. The result always has exactly `count` items.
    """
    by_index: Dict[int, Dict[str, Any]] = {}
    for item in raw_items or []:
        if not isinstance(item, dict):
            continue
        idx = _index_of(item)
        if idx is not None and idx not in by_index:
            by_index[idx] = item

    summaries: List[AISummary] = []
    missing = 0
    for i in range(1, count + 1):
        item = by_index.get(i)
        if item is None:
            missing += 1
            summaries.append(AISummary())
            continue
        try:
            summaries.append(AISummary(
                human_meaning=item.get("humanMeaning", item.get("human_meaning")),
                severity_score=item.get("severityScore", item.get("severity_score")),
            ))
        except ValidationError as e:
            logger.warning(f"Discarding malformed summary #{i}: {e.errors()}")
            missing += 1
            summaries.append(AISummary())

    if missing:
        logger.warning(f"{missing}/{count} digest entries had no usable summary")
    return summaries
