"""
Visibility Resolver.

A question with no conditional logic is always visible. Otherwise it is
visible only when EVERY ConditionalLogic entry holds (logical AND).

Visibility is a pure function of (question, responses). Nothing here
remembers earlier answers or navigation order.

Type mismatches never raise: ordering comparisons need two numbers,
CONTAINS needs two strings, IN_ARRAY needs an array on the rule side.
Anything else evaluates to False. A condition kind this package does
not recognise evaluates to True.
"""

from typing import Any, Callable, Dict, Mapping

from aqe.conditions import ConditionalLogic, ConditionKind
from aqe.model import Question
from aqe.values import contains_strict, is_array, is_number, strict_equals

_MISSING = object()


def _equals(answer: Any, expected: Any) -> bool:
    return strict_equals(answer, expected)


def _not_equals(answer: Any, expected: Any) -> bool:
    return not strict_equals(answer, expected)


def _greater_than(answer: Any, expected: Any) -> bool:
    return is_number(answer) and is_number(expected) and answer > expected


def _less_than(answer: Any, expected: Any) -> bool:
    return is_number(answer) and is_number(expected) and answer < expected


def _contains(answer: Any, expected: Any) -> bool:
    if isinstance(answer, str) and isinstance(expected, str):
        return expected.lower() in answer.lower()
    return False


def _in_array(answer: Any, expected: Any) -> bool:
    if is_array(answer) and is_array(expected):
        # any shared element
        return any(contains_strict(answer, v) for v in expected)
    if is_array(expected):
        return contains_strict(expected, answer)
    return False


_EVALUATORS: Dict[ConditionKind, Callable[[Any, Any], bool]] = {
    ConditionKind.EQUALS: _equals,
    ConditionKind.NOT_EQUALS: _not_equals,
    ConditionKind.GREATER_THAN: _greater_than,
    ConditionKind.LESS_THAN: _less_than,
    ConditionKind.CONTAINS: _contains,
    ConditionKind.IN_ARRAY: _in_array,
}

assert set(_EVALUATORS) == set(ConditionKind), "every ConditionKind needs an evaluator"


def evaluate_condition(logic: ConditionalLogic, responses: Mapping[str, Any]) -> bool:
    """
    Evaluate one conditional-logic entry against the response map.

    An unanswered dependency is distinct from an explicit None answer:
    it equals nothing and is contained in nothing.
    """
    if not logic.is_known:
        return True
    answer = responses.get(logic.depends_on, _MISSING)
    return _EVALUATORS[logic.condition](answer, logic.value)


def should_show_question(question: Question, responses: Mapping[str, Any]) -> bool:
    """Return True if the question is currently visible."""
    if not question.conditional_logic:
        return True
    return all(evaluate_condition(logic, responses) for logic in question.conditional_logic)
