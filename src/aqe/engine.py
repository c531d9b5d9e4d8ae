"""
Evaluation entry points.

evaluate() is the pure form: give it a config and a response map, get
back everything the host UI needs for one render.

QuestionnaireEngine is a convenience holder for code that prefers
method calls. It keeps only its inputs (config, responses) and injected
collaborators (predicate registry, optional clock); every query is recomputed
from those on each call, so repeated calls with unchanged inputs return
identical results.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from aqe import completion, traversal, validation
from aqe.model import Question, QuestionnaireConfig
from aqe.rules import Predicate
from aqe.visibility import should_show_question

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Wall-clock reader for hosts that want real export timestamps."""
    return datetime.now(timezone.utc)


@dataclass
class Evaluation:
    """Result of evaluate()."""

    visible_questions: List[Question] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    completion: int = 100
    is_complete: bool = False


def evaluate(
    config: QuestionnaireConfig,
    responses: Mapping[str, Any],
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> Evaluation:
    visible = traversal.get_visible_questions(config, responses)
    errors = validation.validate_all_responses(config, responses, predicates)
    percentage = completion.get_completion_percentage(config, responses)
    logger.debug(
        "evaluate config=%s visible=%d errors=%d completion=%d",
        config.id, len(visible), len(errors), percentage,
    )
    return Evaluation(
        visible_questions=visible,
        errors=errors,
        completion=percentage,
        is_complete=not errors and percentage == 100,
    )


class QuestionnaireEngine:
    """
    Method-style access to the evaluators for one (config, responses) pair.

    The response mapping is owned by the caller and is never mutated;
    update_responses() only swaps the reference.
    """

    def __init__(
        self,
        config: QuestionnaireConfig,
        responses: Optional[Mapping[str, Any]] = None,
        predicates: Optional[Mapping[str, Predicate]] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.responses: Mapping[str, Any] = responses if responses is not None else {}
        self.predicates: Mapping[str, Predicate] = predicates if predicates is not None else {}
        self.clock = clock

    def update_responses(self, responses: Mapping[str, Any]) -> None:
        self.responses = responses

    # Visibility and traversal

    def get_all_questions(self) -> List[Question]:
        return traversal.get_all_questions(self.config)

    def should_show_question(self, question: Question) -> bool:
        return should_show_question(question, self.responses)

    def get_visible_questions(self) -> List[Question]:
        return traversal.get_visible_questions(self.config, self.responses)

    def get_next_visible_question(self, current_index: int) -> Optional[Question]:
        return traversal.get_next_visible_question(self.config, self.responses, current_index)

    def get_previous_visible_question(self, current_index: int) -> Optional[Question]:
        return traversal.get_previous_visible_question(self.config, self.responses, current_index)

    # Validation

    def validate_response(self, question_id: str, value: Any) -> Optional[str]:
        return validation.validate_response(self.config, self.responses, question_id, value, self.predicates)

    def validate_all_responses(self) -> Dict[str, str]:
        return validation.validate_all_responses(self.config, self.responses, self.predicates)

    # Completion

    def get_completion_percentage(self) -> int:
        return completion.get_completion_percentage(self.config, self.responses)

    def get_summary(self) -> completion.Summary:
        return completion.get_summary(self.config, self.responses, self.predicates)

    def to_response_array(self, timestamp: Optional[str] = None) -> List[completion.ResponseEntry]:
        """
        Export visible answers.

        All entries of one export share a timestamp: the given one, or
        the injected clock read once per call. Without either, entries
        carry no timestamp, so repeated exports are identical.
        """
        if timestamp is None and self.clock is not None:
            timestamp = completion.format_timestamp(self.clock())
        return completion.to_response_array(self.config, self.responses, timestamp)

    def evaluate(self) -> Evaluation:
        return evaluate(self.config, self.responses, self.predicates)
