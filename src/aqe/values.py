"""
Response value shapes and primitive type guards.

Every QuestionType accepts exactly one ResponseShape:

    single_choice              -> CHOICE   (str or number)
    multiple_choice/body_areas -> LIST     (list of str or number)
    scale/pain_scale/number    -> NUMBER
    text                       -> TEXT
    boolean                    -> BOOLEAN
    demographics               -> BUNDLE   (str-keyed mapping)

Shape checks are opt-in (shape_errors). Visibility and validation
never consult them; they work on whatever value they are given and
fall back to their own type guards.
"""

from collections import abc
import math
from enum import Enum
from typing import Any, Dict, Mapping

from aqe.model import Question, QuestionnaireConfig, QuestionType


class ResponseShape(Enum):
    CHOICE = "choice"
    LIST = "list"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    BUNDLE = "bundle"


SHAPE_BY_TYPE: Dict[QuestionType, ResponseShape] = {
    QuestionType.SINGLE_CHOICE: ResponseShape.CHOICE,
    QuestionType.MULTIPLE_CHOICE: ResponseShape.LIST,
    QuestionType.BODY_AREAS: ResponseShape.LIST,
    QuestionType.SCALE: ResponseShape.NUMBER,
    QuestionType.PAIN_SCALE: ResponseShape.NUMBER,
    QuestionType.NUMBER: ResponseShape.NUMBER,
    QuestionType.TEXT: ResponseShape.TEXT,
    QuestionType.BOOLEAN: ResponseShape.BOOLEAN,
    QuestionType.DEMOGRAPHICS: ResponseShape.BUNDLE,
}

assert set(SHAPE_BY_TYPE) == set(QuestionType), "every QuestionType needs a ResponseShape"


# =========================================================================
# Primitive guards
# =========================================================================

def is_number(value: Any) -> bool:
    """True for int/float values. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_empty(value: Any) -> bool:
    """
    An answer counts as empty when it is None, "" or an empty list.

    0, False and {} are answers.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if is_array(value):
        return len(value) == 0
    return False


def is_falsy(value: Any) -> bool:
    """
    Falsiness used by the REQUIRED rule.

    None, False, "", 0 and NaN are falsy. Containers are never falsy,
    including empty ones.
    """
    if value is None or isinstance(value, bool):
        return not value
    if is_number(value):
        return value == 0 or math.isnan(value)
    if isinstance(value, str):
        return value == ""
    return False


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without cross-type coercion.

    True == 1 is False here, 1 == 1.0 is True. Arrays compare element-wise.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_array(left) and is_array(right):
        return len(left) == len(right) and all(strict_equals(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


def contains_strict(items: Any, needle: Any) -> bool:
    return any(strict_equals(item, needle) for item in items)


# =========================================================================
# Shape checks
# =========================================================================

def _is_scalar_choice(value: Any) -> bool:
    return isinstance(value, str) or is_number(value)


def value_matches_shape(question: Question, value: Any) -> bool:
    """
    Check an answer against the shape its question type accepts.

    Empty answers match every shape; they mean "not answered".
    """
    if is_empty(value):
        return True
    shape = SHAPE_BY_TYPE[question.type]
    if shape is ResponseShape.CHOICE:
        return _is_scalar_choice(value)
    if shape is ResponseShape.LIST:
        return is_array(value) and all(_is_scalar_choice(v) for v in value)
    if shape is ResponseShape.NUMBER:
        return is_number(value)
    if shape is ResponseShape.TEXT:
        return isinstance(value, str)
    if shape is ResponseShape.BOOLEAN:
        return isinstance(value, bool)
    if shape is ResponseShape.BUNDLE:
        return isinstance(value, abc.Mapping) and all(isinstance(k, str) for k in value)
    raise AssertionError(f"Unhandled ResponseShape: {shape}")


def _outside_options(question: Question, value: Any) -> bool:
    if not question.options or is_empty(value):
        return False
    allowed = [opt.value for opt in question.options]
    selected = value if is_array(value) else [value]
    return any(not contains_strict(allowed, v) for v in selected)


def shape_errors(config: QuestionnaireConfig, responses: Mapping[str, Any]) -> Dict[str, str]:
    """
    Report answers whose shape does not fit their question.

    Returns a dict of question ID -> message. Answers for IDs the
    configuration does not define are reported as unknown.
    """
    by_id = {q.id: q for q in config.all_questions()}
    errors: Dict[str, str] = {}
    for question_id, value in responses.items():
        question = by_id.get(question_id)
        if question is None:
            errors[question_id] = "Unknown question"
        elif not value_matches_shape(question, value):
            shape = SHAPE_BY_TYPE[question.type]
            errors[question_id] = f"Expected a {shape.value} answer for {question.type.value} question"
        elif _outside_options(question, value):
            errors[question_id] = "Answer is not one of the available options"
    return errors
