"""Unit tests for model reply interpretation"""

import json
import pytest
from expense_ai.domain.exceptions import MalformedReplyError
from expense_ai.domain.interpretation import (
    FALLBACK_INSIGHT,
    build_insight,
    parse_category,
    parse_insights,
    require_text,
    strip_code_fences,
)
from expense_ai.domain.models import ExpenseCategory, InsightType


@pytest.mark.parametrize("label", [c.value for c in ExpenseCategory])
def test_parse_category_accepts_every_member(label):
    """Every enumeration value parses to itself"""
    assert parse_category(label) == ExpenseCategory(label)


def test_parse_category_trims_whitespace():
    assert parse_category("  Transportation\n") == ExpenseCategory.TRANSPORTATION


@pytest.mark.parametrize("reply", ["food", "Food.", "Category: Food", "Groceries", "Food and Drink"])
def test_parse_category_rejects_non_members(reply):
    """Near misses are not silently accepted"""
    with pytest.raises(MalformedReplyError):
        parse_category(reply)


@pytest.mark.parametrize("reply", [None, "", "   \n"])
def test_require_text_rejects_empty(reply):
    with pytest.raises(MalformedReplyError):
        require_text(reply)


def test_strip_code_fences_json_fence():
    assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'


def test_strip_code_fences_plain_fence():
    assert strip_code_fences("```\n[]\n```") == "[]"


def test_strip_code_fences_leaves_bare_json():
    assert strip_code_fences('  [{"a": 1}]  ') == '[{"a": 1}]'


def test_parse_insights_full_objects():
    """Well-formed objects are carried over field by field"""
    reply = json.dumps([
        {"type": "warning", "title": "High dining", "message": "You spent $120 on food", "action": "Cook at home", "confidence": 0.9},
        {"type": "tip", "title": "Rides", "message": "Try transit", "action": "Buy a pass", "confidence": 0.6},
    ])

    insights = parse_insights(reply, batch_timestamp_ms=1700000000000)

    assert len(insights) == 2
    assert insights[0].type == InsightType.WARNING
    assert insights[0].title == "High dining"
    assert insights[0].action == "Cook at home"
    assert insights[0].confidence == 0.9
    assert insights[1].type == InsightType.TIP


def test_parse_insights_ids_are_distinct_within_batch():
    reply = json.dumps([{"title": f"Insight {i}"} for i in range(4)])

    insights = parse_insights(reply, batch_timestamp_ms=42)

    ids = [insight.id for insight in insights]
    assert ids == ["ai-42-0", "ai-42-1", "ai-42-2", "ai-42-3"]
    assert len(set(ids)) == len(ids)


def test_parse_insights_strips_code_fence():
    reply = '```json\n[{"type": "success", "title": "Nice", "message": "Under budget", "confidence": 0.7}]\n```'

    insights = parse_insights(reply, batch_timestamp_ms=1)

    assert insights[0].type == InsightType.SUCCESS


def test_build_insight_defaults_missing_fields():
    """Missing fields get the documented defaults"""
    insight = build_insight({}, "ai-1-0")

    assert insight.type == InsightType.INFO
    assert insight.title == "AI Insight"
    assert insight.message == "Analysis complete"
    assert insight.action is None
    assert insight.confidence == 0.8


@pytest.mark.parametrize("confidence", [1.5, -0.1, "high", True, None, float("nan")])
def test_build_insight_invalid_confidence_defaults(confidence):
    insight = build_insight({"confidence": confidence}, "ai-1-0")
    assert insight.confidence == 0.8


@pytest.mark.parametrize("confidence", [0, 0.0, 0.35, 1])
def test_build_insight_keeps_confidence_in_range(confidence):
    insight = build_insight({"confidence": confidence}, "ai-1-0")
    assert insight.confidence == float(confidence)


@pytest.mark.parametrize("kind", ["alert", "", 3, None])
def test_build_insight_invalid_type_defaults_to_info(kind):
    insight = build_insight({"type": kind}, "ai-1-0")
    assert insight.type == InsightType.INFO


def test_build_insight_type_is_case_insensitive():
    assert build_insight({"type": "Warning"}, "ai-1-0").type == InsightType.WARNING


def test_build_insight_non_string_text_defaults():
    insight = build_insight({"title": 12, "message": ["x"], "action": {"do": "it"}}, "ai-1-0")

    assert insight.title == "AI Insight"
    assert insight.message == "Analysis complete"
    assert insight.action is None


def test_parse_insights_invalid_json_raises():
    with pytest.raises(MalformedReplyError):
        parse_insights("Here are some insights: spend less", batch_timestamp_ms=1)


def test_parse_insights_non_array_raises():
    """A single object is not an array of insights"""
    with pytest.raises(MalformedReplyError):
        parse_insights('{"type": "info", "title": "One"}', batch_timestamp_ms=1)


def test_parse_insights_drops_non_object_elements():
    """Valid objects survive next to junk elements, keeping their original index in the ID"""
    reply = json.dumps(["oops", {"title": "Kept"}, 7])

    insights = parse_insights(reply, batch_timestamp_ms=5)

    assert len(insights) == 1
    assert insights[0].title == "Kept"
    assert insights[0].id == "ai-5-1"


def test_parse_insights_array_without_objects_raises():
    with pytest.raises(MalformedReplyError):
        parse_insights('["a", 1, null]', batch_timestamp_ms=1)


def test_parse_insights_empty_array_is_empty_result():
    assert parse_insights("[]", batch_timestamp_ms=1) == []


def test_fallback_insight_is_fixed():
    assert FALLBACK_INSIGHT.id == "fallback-1"
    assert FALLBACK_INSIGHT.type == InsightType.INFO
    assert FALLBACK_INSIGHT.action == "Refresh insights"
    assert FALLBACK_INSIGHT.confidence == 0.5
