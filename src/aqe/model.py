"""
Core Questionnaire Model Objects

Defines the data structures a questionnaire is built from:
    - Questions (with options, scale bounds, rules, conditional logic)
    - Sections (ordered groups of questions)
    - Settings and metadata
    - QuestionnaireConfig (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about rendering or persistence
        - Are treated as immutable once built
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .conditions import ConditionalLogic
from .rules import ValidationRule


class QuestionType(Enum):
    """
    Kinds of question a configuration may contain.

    The value shape each type accepts is declared in aqe.values.
    """

    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"
    PAIN_SCALE = "pain_scale"
    TEXT = "text"
    NUMBER = "number"
    BODY_AREAS = "body_areas"
    BOOLEAN = "boolean"
    DEMOGRAPHICS = "demographics"


@dataclass(frozen=True)
class QuestionOption:
    """
    A selectable option of a choice question.

    Properties:
        label: Text shown to the user
        value: Value stored in the response map when selected
        id: Optional stable identifier
        description: Optional longer explanation
        icon: Optional icon name
    """

    label: str
    value: Union[str, int, float]
    id: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class ScaleBounds:
    """Numeric bounds of a scale question (e.g. 1-10 motivation)."""

    min: Union[int, float]
    max: Union[int, float]
    step: Optional[Union[int, float]] = None
    min_label: Optional[str] = None
    max_label: Optional[str] = None


@dataclass
class Question:
    """
    A single question.

    Properties:
        id:
            Unique identifier across the whole questionnaire
            Examples: "fitness_level", "current_pain_level"

        type:
            QuestionType

        title:
            Main question text

        required:
            Whether an empty answer is an error (only while visible)

        options:
            Choices for choice-based questions

        scale:
            Bounds for scale questions

        validation:
            Ordered ValidationRule list; first failing rule wins

        conditional_logic:
            Ordered ConditionalLogic list; ALL entries must hold
            for the question to be visible

        default_value:
            Suggested initial answer (never read by the evaluator)

        metadata:
            Free-form key/value bag

    ARCHITECTURAL RULE:
        - conditional_logic is about showing the question
        - validation is about accepting the answer
        - These are separate concerns
    """

    id: str
    type: QuestionType
    title: str = ""
    subtitle: Optional[str] = None
    help_text: Optional[str] = None
    required: bool = False
    options: List[QuestionOption] = field(default_factory=list)
    scale: Optional[ScaleBounds] = None
    validation: List[ValidationRule] = field(default_factory=list)
    conditional_logic: List[ConditionalLogic] = field(default_factory=list)
    default_value: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Section:
    """An ordered group of questions, e.g. "About Your Injury"."""

    id: str
    title: str
    questions: List[Question] = field(default_factory=list)
    description: Optional[str] = None
    optional: bool = False


@dataclass(frozen=True)
class QuestionnaireSettings:
    """Global behaviour flags read by the host UI."""

    allow_back: bool = True
    show_progress: bool = True
    auto_save: bool = False
    completion_message: Optional[str] = None


@dataclass
class QuestionnaireMetadata:
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    last_modified: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class QuestionnaireConfig:
    """
    Root container for a questionnaire definition.

    Built once by an external collaborator (code, YAML or JSON) and
    treated as read-only by every evaluator in this package.

    INVARIANTS:
        - Question IDs are unique across all sections
        - Conditional logic should only depend on questions that are
          asked earlier (checked by aqe.analyzer, not enforced here)
    """

    id: str
    title: str
    version: str = "1.0.0"
    description: Optional[str] = None
    sections: List[Section] = field(default_factory=list)
    settings: QuestionnaireSettings = field(default_factory=QuestionnaireSettings)
    metadata: QuestionnaireMetadata = field(default_factory=QuestionnaireMetadata)

    def all_questions(self) -> List[Question]:
        """Return every question, flattened across sections in order."""
        return [q for section in self.sections for q in section.questions]

    def get_question(self, question_id: str) -> Optional[Question]:
        """
        Retrieve a question by ID.

        Returns:
            The first Question with that ID, or None if not found
        """
        for question in self.all_questions():
            if question.id == question_id:
                return question
        return None

    def get_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def index_of(self, question_id: str) -> Optional[int]:
        """Position of a question in the flattened list, or None."""
        for index, question in enumerate(self.all_questions()):
            if question.id == question_id:
                return index
        return None
