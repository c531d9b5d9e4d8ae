"""
Tests for the Completion Accountant.

These tests verify:
    - Completion percentage over visible questions only
    - Vacuous completeness
    - Summary counts and the is_complete predicate
    - Response export dropping orphaned answers
"""

from datetime import datetime, timedelta, timezone

import pytest

from aqe.completion import (
    ResponseEntry,
    format_timestamp,
    get_completion_percentage,
    get_summary,
    responses_to_map,
    to_response_array,
)
from aqe.conditions import ConditionalLogic, ConditionKind
from aqe.model import Question, QuestionnaireConfig, QuestionType, Section
from aqe.rules import RuleKind, ValidationRule
from aqe.validation import REQUIRED_MESSAGE


def config_of(*questions) -> QuestionnaireConfig:
    return QuestionnaireConfig(id="c", title="c", sections=[Section(id="s", title="s", questions=list(questions))])


def four_questions() -> QuestionnaireConfig:
    return config_of(*(Question(id=f"Q{i}", type=QuestionType.TEXT) for i in range(1, 5)))


def gated_config() -> QuestionnaireConfig:
    """Q1 required boolean; Q2 required text shown when Q1 is True."""
    return config_of(
        Question(id="Q1", type=QuestionType.BOOLEAN, required=True),
        Question(
            id="Q2",
            type=QuestionType.TEXT,
            required=True,
            conditional_logic=[ConditionalLogic(depends_on="Q1", condition=ConditionKind.EQUALS, value=True)],
        ),
    )


class TestCompletionPercentage:

    def test_half_answered(self):
        assert get_completion_percentage(four_questions(), {"Q1": "a", "Q3": "b"}) == 50

    def test_empty_answers_do_not_count(self):
        responses = {"Q1": "", "Q2": [], "Q3": None, "Q4": "x"}
        assert get_completion_percentage(four_questions(), responses) == 25

    def test_zero_and_false_count(self):
        responses = {"Q1": 0, "Q2": False}
        assert get_completion_percentage(four_questions(), responses) == 50

    @pytest.mark.parametrize("responses", [{}, {"anything": 1}])
    def test_no_visible_questions_is_complete(self, responses):
        assert get_completion_percentage(config_of(), responses) == 100

    def test_rounds_half_up(self):
        config = config_of(*(Question(id=f"Q{i}", type=QuestionType.TEXT) for i in range(8)))
        assert get_completion_percentage(config, {"Q0": "a"}) == 13

    def test_rounds_to_nearest(self):
        config = config_of(*(Question(id=f"Q{i}", type=QuestionType.TEXT) for i in range(3)))
        assert get_completion_percentage(config, {"Q0": "a"}) == 33
        assert get_completion_percentage(config, {"Q0": "a", "Q1": "b"}) == 67

    def test_hidden_questions_excluded(self):
        config = gated_config()
        assert get_completion_percentage(config, {"Q1": False}) == 100
        assert get_completion_percentage(config, {"Q1": True}) == 50


class TestSummary:

    def test_incomplete_summary(self):
        summary = get_summary(gated_config(), {"Q1": True})
        assert summary.total_questions == 2
        assert summary.visible_questions == 2
        assert summary.answered_questions == 1
        assert summary.completion_percentage == 50
        assert summary.is_complete is False
        assert summary.errors == {"Q2": REQUIRED_MESSAGE}

    def test_complete_when_branch_closed(self):
        summary = get_summary(gated_config(), {"Q1": False})
        assert summary.visible_questions == 1
        assert summary.is_complete is True
        assert summary.errors == {}

    def test_errors_block_completion(self):
        config = config_of(Question(
            id="Q",
            type=QuestionType.NUMBER,
            validation=[ValidationRule(kind=RuleKind.MAX_VALUE, value=10, message="Too big")],
        ))
        summary = get_summary(config, {"Q": 11})
        assert summary.completion_percentage == 100
        assert summary.is_complete is False
        assert summary.errors == {"Q": "Too big"}


class TestResponseArray:

    def test_orphaned_answers_dropped(self):
        """Q2 still has a stored answer but its branch is closed."""
        responses = {"Q1": False, "Q2": "left over"}
        entries = to_response_array(gated_config(), responses, timestamp="t")
        assert entries == [ResponseEntry(question_id="Q1", value=False, timestamp="t")]
        assert responses == {"Q1": False, "Q2": "left over"}

    def test_unknown_ids_dropped(self):
        entries = to_response_array(gated_config(), {"ghost": 1, "Q1": True})
        assert [e.question_id for e in entries] == ["Q1"]

    def test_preserves_map_order(self):
        entries = to_response_array(gated_config(), {"Q2": "x", "Q1": True})
        assert [e.question_id for e in entries] == ["Q2", "Q1"]

    def test_back_to_map(self):
        entries = [
            ResponseEntry(question_id="Q1", value=True),
            ResponseEntry(question_id="Q2", value="first"),
            ResponseEntry(question_id="Q2", value="second"),
        ]
        assert responses_to_map(entries) == {"Q1": True, "Q2": "second"}


class TestTimestamp:

    def test_utc_millisecond_format(self):
        moment = datetime(2026, 1, 5, 9, 30, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2026-01-05T09:30:00.123Z"

    def test_converts_to_utc(self):
        moment = datetime(2026, 1, 5, 11, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2026-01-05T09:30:00.000Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2026, 1, 5)) == "2026-01-05T00:00:00.000Z"
