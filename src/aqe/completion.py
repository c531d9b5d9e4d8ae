"""
Completion Accountant.

Completion is a predicate over (config, responses), not a state:
    - percentage = share of visible questions with a non-empty answer
    - complete   = no validation errors AND percentage == 100

Also builds the export form of a response map (ResponseEntry list),
which drops answers to questions that are currently hidden.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from aqe.model import QuestionnaireConfig
from aqe.rules import Predicate
from aqe.traversal import get_visible_questions
from aqe.validation import validate_all_responses
from aqe.values import is_empty
from aqe.visibility import should_show_question


@dataclass(frozen=True)
class ResponseEntry:
    """One exported answer, as handed to the persistence layer."""

    question_id: str
    value: Any
    timestamp: Optional[str] = None


@dataclass
class Summary:
    """
    Progress snapshot.

    Properties:
        total_questions: All questions, hidden ones included
        visible_questions: Currently visible questions
        answered_questions: Visible questions with a non-empty answer
        completion_percentage: 0-100, rounded half up
        is_complete: No errors and completion_percentage == 100
        errors: Question ID -> validation message
    """

    total_questions: int
    visible_questions: int
    answered_questions: int
    completion_percentage: int
    is_complete: bool
    errors: Dict[str, str] = field(default_factory=dict)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-01-05T09:30:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def count_answered(config: QuestionnaireConfig, responses: Mapping[str, Any]) -> int:
    return sum(1 for q in get_visible_questions(config, responses) if not is_empty(responses.get(q.id)))


def get_completion_percentage(config: QuestionnaireConfig, responses: Mapping[str, Any]) -> int:
    """Percent of visible questions answered; 100 when nothing is visible."""
    visible = get_visible_questions(config, responses)
    if not visible:
        return 100
    answered = sum(1 for q in visible if not is_empty(responses.get(q.id)))
    return _round_half_up(answered / len(visible) * 100)


def get_summary(
    config: QuestionnaireConfig,
    responses: Mapping[str, Any],
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> Summary:
    errors = validate_all_responses(config, responses, predicates)
    percentage = get_completion_percentage(config, responses)
    return Summary(
        total_questions=len(config.all_questions()),
        visible_questions=len(get_visible_questions(config, responses)),
        answered_questions=count_answered(config, responses),
        completion_percentage=percentage,
        is_complete=not errors and percentage == 100,
        errors=errors,
    )


def to_response_array(
    config: QuestionnaireConfig,
    responses: Mapping[str, Any],
    timestamp: Optional[str] = None,
) -> List[ResponseEntry]:
    """
    Export the response map in map order.

    Entries for unknown or currently hidden questions are dropped. The
    map itself is left untouched; only the exported form loses them.
    """
    by_id = {}
    for question in config.all_questions():
        by_id.setdefault(question.id, question)

    entries = []
    for question_id, value in responses.items():
        question = by_id.get(question_id)
        if question is None or not should_show_question(question, responses):
            continue
        entries.append(ResponseEntry(question_id=question_id, value=value, timestamp=timestamp))
    return entries


def responses_to_map(entries: Iterable[ResponseEntry]) -> Dict[str, Any]:
    """Rebuild a response map from exported entries. Later entries win."""
    result: Dict[str, Any] = {}
    for entry in entries:
        result[entry.question_id] = entry.value
    return result
