"""
Conditional Logic for AQE

A question's visibility may depend on other questions' answers.
Each dependency is declared as a ConditionalLogic entry:

    ConditionalLogic(
        depends_on="previous_injuries",
        condition=ConditionKind.EQUALS,
        value=True,
    )

ARCHITECTURAL RULE:
    This module is structure only.
    Evaluation lives in aqe.visibility.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class ConditionKind(Enum):
    """
    Comparison applied between the dependency's answer and the entry value.

    Keep this minimal. Every kind here must have an evaluator
    registered in aqe.visibility (checked at import time).
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    IN_ARRAY = "in_array"


class ConditionAction(Enum):
    """
    What happens when the condition holds.

    Only SHOW takes part in the visibility decision today.
    HIDE, SKIP and REQUIRE are carried through serialization
    so configurations using them round-trip unchanged.
    """

    SHOW = "show"
    HIDE = "hide"
    SKIP = "skip"
    REQUIRE = "require"


_KIND_VALUES = {kind.value for kind in ConditionKind}


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


ConditionValue = Union[str, int, float, bool, None, Tuple[Any, ...]]


@dataclass(frozen=True)
class ConditionalLogic:
    """
    One visibility dependency of a question.

    Properties:
        depends_on:
            ID of the question whose answer is inspected

        condition:
            ConditionKind, or the raw string when a configuration
            names a kind this package does not know. Unknown kinds
            are kept so they can be reported by the analyzer; they
            evaluate as visible.

        value:
            Comparison value. Arrays are stored as tuples so the
            entry stays hashable.

        action:
            ConditionAction (default SHOW)

    IMPORTANT:
        This object does NOT validate that depends_on exists.
        Reference checks belong in aqe.analyzer.
    """

    depends_on: str
    condition: Union[ConditionKind, str]
    value: ConditionValue = None
    action: ConditionAction = ConditionAction.SHOW

    def __post_init__(self):
        # plain strings are accepted for known kinds and for actions
        if isinstance(self.condition, str) and self.condition in _KIND_VALUES:
            object.__setattr__(self, "condition", ConditionKind(self.condition))
        if isinstance(self.action, str):
            object.__setattr__(self, "action", ConditionAction(self.action))
        if isinstance(self.value, list):
            object.__setattr__(self, "value", _freeze(self.value))

    @property
    def is_known(self) -> bool:
        return isinstance(self.condition, ConditionKind)
