"""Interpretation of raw model replies into categories, insights and answers"""

import json
import logging
import math
import re
from typing import Any, Dict, List

from expense_ai.domain.exceptions import MalformedReplyError
from expense_ai.domain.models import ExpenseCategory, Insight, InsightType

logger = logging.getLogger(__name__)

# Fixed fallbacks returned when the model cannot be used
FALLBACK_CATEGORY = ExpenseCategory.OTHER

FALLBACK_INSIGHT = Insight(
    id="fallback-1",
    type=InsightType.INFO,
    title="AI Analysis Unavailable",
    message="Unable to generate personalized insights at this time. Please try again later.",
    action="Refresh insights",
    confidence=0.5,
)

FALLBACK_ANSWER = (
    "I'm unable to provide a detailed answer at the moment. "
    "Please try refreshing the insights or check your connection."
)

# Per-field defaults for insight objects
DEFAULT_INSIGHT_TYPE = InsightType.INFO
DEFAULT_INSIGHT_TITLE = "AI Insight"
DEFAULT_INSIGHT_MESSAGE = "Analysis complete"
DEFAULT_INSIGHT_CONFIDENCE = 0.8

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


def require_text(reply: str | None) -> str:
    """Return the trimmed reply, rejecting empty output"""
    text = (reply or "").strip()
    if not text:
        raise MalformedReplyError("No response from AI")
    return text


def parse_category(reply: str | None) -> ExpenseCategory:
    """
    Strictly parse a category label.

    The trimmed reply must equal one of the enumeration values exactly.
    Anything else is malformed; mapping it to the catch-all is the caller's call.
    """
    text = require_text(reply)
    try:
        return ExpenseCategory(text)
    except ValueError as e:
        raise MalformedReplyError(f"Unknown category label: {text[:50]!r}") from e


def strip_code_fences(text: str) -> str:
    """Remove optional surrounding ``` or ```json fences"""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned)
        cleaned = _CLOSING_FENCE.sub("", cleaned)
    return cleaned


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _confidence_or_default(value: Any) -> float:
    # bool is an int subclass; "true" is not a confidence
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_INSIGHT_CONFIDENCE
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        return DEFAULT_INSIGHT_CONFIDENCE
    return float(value)


def _type_or_default(value: Any) -> InsightType:
    if isinstance(value, str):
        try:
            return InsightType(value.strip().lower())
        except ValueError:
            pass
    return DEFAULT_INSIGHT_TYPE


def build_insight(raw: Dict[str, Any], insight_id: str) -> Insight:
    """Build an Insight from one reply object, defaulting missing or invalid fields"""
    action = raw.get("action")
    return Insight(
        id=insight_id,
        type=_type_or_default(raw.get("type")),
        title=_text_or_default(raw.get("title"), DEFAULT_INSIGHT_TITLE),
        message=_text_or_default(raw.get("message"), DEFAULT_INSIGHT_MESSAGE),
        action=action if isinstance(action, str) and action.strip() else None,
        confidence=_confidence_or_default(raw.get("confidence")),
    )


def parse_insights(reply: str | None, batch_timestamp_ms: int) -> List[Insight]:
    """
    Parse a JSON array of insight objects.

    Rules:
    - Reply must be a JSON array (optionally wrapped in code fences)
    - Object elements are kept, with per-field defaults
    - Non-object elements are dropped
    - A non-empty array without a single object is malformed

    IDs are "ai-{batch_timestamp_ms}-{index}", unique within the batch.
    """
    cleaned = strip_code_fences(require_text(reply))

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedReplyError(f"Invalid JSON response from AI: {e}") from e

    if not isinstance(data, list):
        raise MalformedReplyError(f"Expected a JSON array, got {type(data).__name__}")

    insights = []
    for index, element in enumerate(data):
        if not isinstance(element, dict):
            logger.warning(
                "Dropping non-object insight element",
                extra={"index": index, "element_type": type(element).__name__},
            )
            continue
        insights.append(build_insight(element, f"ai-{batch_timestamp_ms}-{index}"))

    if data and not insights:
        raise MalformedReplyError("Insight array contains no objects")

    return insights
