"""
Traversal over the flattened question list.

Indices always refer to the FULL flattened list (config.all_questions()),
never to the visible subset. The visible subset changes as answers
change; positions in the full list do not.
"""

from typing import Any, List, Mapping, Optional

from aqe.model import Question, QuestionnaireConfig
from aqe.visibility import should_show_question


def get_all_questions(config: QuestionnaireConfig) -> List[Question]:
    return config.all_questions()


def get_visible_questions(config: QuestionnaireConfig, responses: Mapping[str, Any]) -> List[Question]:
    """All currently visible questions, in configuration order."""
    return [q for q in config.all_questions() if should_show_question(q, responses)]


def get_next_visible_question(
    config: QuestionnaireConfig, responses: Mapping[str, Any], current_index: int
) -> Optional[Question]:
    """
    First visible question after current_index, or None at the end.

    current_index may be -1 to start from the beginning.
    """
    questions = config.all_questions()
    for index in range(max(current_index + 1, 0), len(questions)):
        if should_show_question(questions[index], responses):
            return questions[index]
    return None


def get_previous_visible_question(
    config: QuestionnaireConfig, responses: Mapping[str, Any], current_index: int
) -> Optional[Question]:
    """First visible question before current_index, or None at the start."""
    questions = config.all_questions()
    for index in range(min(current_index - 1, len(questions) - 1), -1, -1):
        if should_show_question(questions[index], responses):
            return questions[index]
    return None
