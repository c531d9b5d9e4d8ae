"""
Tests for serialization and deserialization of AQE objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `aqe.serialization`.
"""

import pytest

from aqe.completion import ResponseEntry
from aqe.conditions import ConditionAction, ConditionKind
from aqe.examples import build_discovery_questionnaire
from aqe.rules import RuleKind
from aqe.serialization import (
    condition_from_dict,
    config_from_dict,
    config_from_json,
    config_from_yaml,
    config_to_dict,
    config_to_json,
    config_to_yaml,
    entries_from_json,
    entries_to_json,
    question_from_dict,
    rule_from_dict,
    rule_to_dict,
)


def test_json_roundtrip():
    config = build_discovery_questionnaire()
    before = config_to_dict(config)
    restored = config_from_json(config_to_json(config))
    assert config_to_dict(restored) == before


def test_yaml_roundtrip():
    config = build_discovery_questionnaire()
    before = config_to_dict(config)
    restored = config_from_yaml(config_to_yaml(config))
    assert config_to_dict(restored) == before


def test_roundtrip_restores_equal_model():
    config = build_discovery_questionnaire()
    assert config_from_dict(config_to_dict(config)) == config


def test_array_condition_values_become_tuples():
    logic = condition_from_dict({"depends_on": "Q1", "condition": "in_array", "value": ["a", "b"]})
    assert logic.condition is ConditionKind.IN_ARRAY
    assert logic.value == ("a", "b")
    assert logic.action is ConditionAction.SHOW


def test_unknown_condition_kept_with_warning():
    with pytest.warns(UserWarning, match="Unknown condition 'sounds_like'"):
        logic = condition_from_dict({"depends_on": "Q1", "condition": "sounds_like", "value": "x"})
    assert logic.condition == "sounds_like"
    assert not logic.is_known


def test_unknown_rule_type_kept_with_warning():
    with pytest.warns(UserWarning, match="Unknown validation rule 'palindrome'"):
        rule = rule_from_dict({"type": "palindrome", "message": "m"})
    assert rule.kind == "palindrome"
    assert not rule.is_known
    assert rule_to_dict(rule)["type"] == "palindrome"


def test_numeric_string_threshold_becomes_number():
    rule = rule_from_dict({"type": "min_length", "message": "Too short", "value": "3"})
    assert rule.kind is RuleKind.MIN_LENGTH
    assert rule.value == 3


def test_unknown_question_type_rejected():
    with pytest.raises(ValueError):
        question_from_dict({"id": "Q", "type": "slider"})


def test_custom_rule_names_predicate():
    rule = rule_from_dict({"type": "custom", "message": "Even please", "predicate": "is_even"})
    assert rule.kind is RuleKind.CUSTOM
    assert rule.predicate == "is_even"


def test_minimal_question_defaults():
    question = question_from_dict({"id": "Q", "type": "text"})
    assert question.required is False
    assert question.options == []
    assert question.validation == []
    assert question.conditional_logic == []


def test_response_entries_roundtrip():
    entries = [
        ResponseEntry(question_id="demographics", value={"age": 34}, timestamp="2026-01-01T00:00:00.000Z"),
        ResponseEntry(question_id="primary_symptoms", value=["numbness"], timestamp="2026-01-01T00:00:00.000Z"),
    ]
    assert entries_from_json(entries_to_json(entries)) == entries
