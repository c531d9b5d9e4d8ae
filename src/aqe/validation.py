"""
Validator.

validate_response() checks one answer:

    1. Hidden questions are never validated (returns None).
    2. A required question with an empty answer returns REQUIRED_MESSAGE.
       This check comes before, and independently of, the rule list.
    3. Otherwise the question's rules run in declared order and the
       message of the first failing rule is returned.

Errors are data (message strings), never exceptions. Rules only fail
for values of the type they apply to: length rules ignore non-strings,
value rules ignore non-numbers, EMAIL ignores non-strings.
"""

import re
from typing import Any, Callable, Dict, Mapping, Optional

from aqe.model import Question, QuestionnaireConfig
from aqe.rules import Predicate, RuleKind, ValidationRule
from aqe.traversal import get_visible_questions
from aqe.values import is_empty, is_falsy, is_number
from aqe.visibility import should_show_question

REQUIRED_MESSAGE = "This question is required"

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

RuleCheck = Callable[[ValidationRule, Any, Mapping[str, Predicate]], bool]


def _fails_required(rule: ValidationRule, value: Any, predicates) -> bool:
    # 0 is a valid answer; False and NaN are not
    return is_falsy(value) and not (is_number(value) and value == 0)


def _fails_min_length(rule: ValidationRule, value: Any, predicates) -> bool:
    return isinstance(value, str) and is_number(rule.value) and len(value) < rule.value


def _fails_max_length(rule: ValidationRule, value: Any, predicates) -> bool:
    return isinstance(value, str) and is_number(rule.value) and len(value) > rule.value


def _fails_min_value(rule: ValidationRule, value: Any, predicates) -> bool:
    return is_number(value) and is_number(rule.value) and value < rule.value


def _fails_max_value(rule: ValidationRule, value: Any, predicates) -> bool:
    return is_number(value) and is_number(rule.value) and value > rule.value


def _fails_email(rule: ValidationRule, value: Any, predicates) -> bool:
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is None


def _fails_custom(rule: ValidationRule, value: Any, predicates) -> bool:
    if rule.predicate is None or rule.predicate not in predicates:
        return False
    return not predicates[rule.predicate](value)


_RULE_CHECKS: Dict[RuleKind, RuleCheck] = {
    RuleKind.REQUIRED: _fails_required,
    RuleKind.MIN_LENGTH: _fails_min_length,
    RuleKind.MAX_LENGTH: _fails_max_length,
    RuleKind.MIN_VALUE: _fails_min_value,
    RuleKind.MAX_VALUE: _fails_max_value,
    RuleKind.EMAIL: _fails_email,
    RuleKind.CUSTOM: _fails_custom,
}

assert set(_RULE_CHECKS) == set(RuleKind), "every RuleKind needs a check"


def check_rule(rule: ValidationRule, value: Any, predicates: Optional[Mapping[str, Predicate]] = None) -> Optional[str]:
    """
    Return the rule's message if the value fails it, else None.

    Rules of an unknown kind never fail.
    """
    check = _RULE_CHECKS.get(rule.kind)
    if check is None:
        return None
    if check(rule, value, predicates or {}):
        return rule.message
    return None


def validate_question(
    question: Question,
    value: Any,
    responses: Mapping[str, Any],
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> Optional[str]:
    if not should_show_question(question, responses):
        return None

    if question.required and is_empty(value):
        return REQUIRED_MESSAGE

    for rule in question.validation:
        message = check_rule(rule, value, predicates)
        if message is not None:
            return message
    return None


def validate_response(
    config: QuestionnaireConfig,
    responses: Mapping[str, Any],
    question_id: str,
    value: Any,
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> Optional[str]:
    """
    Validate a candidate answer for one question.

    The value is checked as given; visibility is judged against the
    current response map. Unknown question IDs yield None.
    """
    question = config.get_question(question_id)
    if question is None:
        return None
    return validate_question(question, value, responses, predicates)


def validate_all_responses(
    config: QuestionnaireConfig,
    responses: Mapping[str, Any],
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> Dict[str, str]:
    """Error map (question ID -> message) over the visible questions."""
    errors: Dict[str, str] = {}
    for question in get_visible_questions(config, responses):
        message = validate_question(question, responses.get(question.id), responses, predicates)
        if message is not None:
            errors[question.id] = message
    return errors
