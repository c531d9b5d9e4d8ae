"""
Tests for evaluate() and QuestionnaireEngine.

The engine holds only its inputs; every query is derived freshly, so
repeated calls with unchanged inputs must give identical results.
"""

from datetime import datetime, timezone

import pytest

from aqe import QuestionnaireEngine, evaluate
from aqe.conditions import ConditionalLogic, ConditionKind
from aqe.engine import utc_now
from aqe.examples import build_discovery_questionnaire
from aqe.model import Question, QuestionnaireConfig, QuestionType, Section
from aqe.rules import PredicateRegistry, RuleKind, ValidationRule
from aqe.serialization import entry_to_dict
from aqe.validation import REQUIRED_MESSAGE


def fixed_clock():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def build_config() -> QuestionnaireConfig:
    return QuestionnaireConfig(id="e", title="Engine", sections=[
        Section(id="s", title="s", questions=[
            Question(id="Q1", type=QuestionType.BOOLEAN, required=True),
            Question(
                id="Q2",
                type=QuestionType.TEXT,
                required=True,
                conditional_logic=[ConditionalLogic(depends_on="Q1", condition=ConditionKind.EQUALS, value=True)],
            ),
            Question(
                id="Q3",
                type=QuestionType.NUMBER,
                validation=[ValidationRule(kind=RuleKind.CUSTOM, predicate="is_even", message="Even please")],
            ),
        ]),
    ])


@pytest.fixture
def registry():
    reg = PredicateRegistry()
    reg.register("is_even", lambda v: v % 2 == 0)
    return reg


class TestEvaluate:

    def test_evaluation_fields(self, registry):
        result = evaluate(build_config(), {"Q1": True, "Q3": 3}, registry)
        assert [q.id for q in result.visible_questions] == ["Q1", "Q2", "Q3"]
        assert result.errors == {"Q2": REQUIRED_MESSAGE, "Q3": "Even please"}
        assert result.completion == 67
        assert result.is_complete is False

    def test_complete(self, registry):
        result = evaluate(build_config(), {"Q1": False, "Q3": 4}, registry)
        assert result.errors == {}
        assert result.completion == 100
        assert result.is_complete is True

    def test_without_registry_custom_rules_pass(self):
        result = evaluate(build_config(), {"Q1": False, "Q3": 3})
        assert result.is_complete is True


class TestEngine:

    def test_update_replaces_reference_without_mutation(self):
        first = {"Q1": False}
        engine = QuestionnaireEngine(build_config(), first)
        second = {"Q1": True}
        engine.update_responses(second)
        assert engine.responses is second
        assert first == {"Q1": False}
        assert [q.id for q in engine.get_visible_questions()] == ["Q1", "Q2", "Q3"]

    def test_default_responses_empty(self):
        engine = QuestionnaireEngine(build_config())
        assert engine.get_completion_percentage() == 0
        assert engine.validate_all_responses() == {"Q1": REQUIRED_MESSAGE}

    def test_navigation(self):
        engine = QuestionnaireEngine(build_config(), {"Q1": False})
        assert engine.get_next_visible_question(0).id == "Q3"
        assert engine.get_previous_visible_question(2).id == "Q1"
        assert engine.get_next_visible_question(2) is None

    def test_should_show_question(self):
        engine = QuestionnaireEngine(build_config(), {"Q1": True})
        q2 = engine.get_all_questions()[1]
        assert engine.should_show_question(q2) is True

    def test_validate_response_uses_registry(self, registry):
        engine = QuestionnaireEngine(build_config(), {}, predicates=registry)
        assert engine.validate_response("Q3", 5) == "Even please"
        assert engine.validate_response("Q3", 6) is None

    def test_response_array_uses_clock(self):
        engine = QuestionnaireEngine(build_config(), {"Q1": False, "Q2": "orphan", "Q3": 2}, clock=fixed_clock)
        entries = engine.to_response_array()
        assert [entry_to_dict(e) for e in entries] == [
            {"question_id": "Q1", "value": False, "timestamp": "2026-03-01T12:00:00.000Z"},
            {"question_id": "Q3", "value": 2, "timestamp": "2026-03-01T12:00:00.000Z"},
        ]

    def test_explicit_timestamp(self):
        engine = QuestionnaireEngine(build_config(), {"Q1": True})
        assert engine.to_response_array(timestamp="fixed")[0].timestamp == "fixed"


class TestIdempotence:
    """Every query gives identical results when called twice in a row."""

    @pytest.mark.parametrize("method,args", [
        ("get_visible_questions", ()),
        ("get_next_visible_question", (0,)),
        ("get_previous_visible_question", (5,)),
        ("validate_all_responses", ()),
        ("validate_response", ("weeks_since_surgery", -1)),
        ("get_completion_percentage", ()),
        ("get_summary", ()),
        ("to_response_array", ()),
        ("evaluate", ()),
    ])
    def test_repeated_calls_identical(self, method, args):
        responses = {
            "fitness_level": "light",
            "previous_injuries": True,
            "injury_type": "post_surgery",
            "weeks_since_surgery": 200,
            "primary_symptoms": ["numbness"],
        }
        engine = QuestionnaireEngine(build_discovery_questionnaire(), responses, clock=fixed_clock)
        first = getattr(engine, method)(*args)
        second = getattr(engine, method)(*args)
        assert first == second
        assert repr(first) == repr(second)

    def test_default_engine_export_identical(self):
        """Without a clock the export carries no timestamp and repeats exactly."""
        engine = QuestionnaireEngine(build_discovery_questionnaire(), {"fitness_level": "light"})
        first = engine.to_response_array()
        second = engine.to_response_array()
        assert first == second
        assert [e.timestamp for e in first] == [None]


def test_wall_clock_stamps_export():
    engine = QuestionnaireEngine(build_config(), {"Q1": True}, clock=utc_now)
    stamp = engine.to_response_array()[0].timestamp
    assert stamp is not None
    assert stamp.endswith("Z")
