"""
Validation Rules for AQE

A question carries an ordered list of ValidationRule objects.
Rules are declarative data: a kind, an optional threshold and
the message shown when the rule fails.

Custom checks do not embed code in the configuration. A CUSTOM
rule names a predicate, and the predicate itself is looked up in
a PredicateRegistry supplied by the host application:

    registry = PredicateRegistry()
    registry.register("is_even", lambda v: isinstance(v, int) and v % 2 == 0)

    ValidationRule(kind=RuleKind.CUSTOM, predicate="is_even",
                   message="Enter an even number")

ARCHITECTURAL RULE:
    Structure only. Evaluation lives in aqe.validation.
"""

from dataclasses import dataclass
import math
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union

Predicate = Callable[[Any], bool]


class RuleKind(Enum):
    """Kinds of validation rule. Every kind needs an evaluator in aqe.validation."""

    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    EMAIL = "email"
    CUSTOM = "custom"


_KIND_VALUES = {kind.value for kind in RuleKind}

THRESHOLD_KINDS = frozenset({
    RuleKind.MIN_LENGTH,
    RuleKind.MAX_LENGTH,
    RuleKind.MIN_VALUE,
    RuleKind.MAX_VALUE,
})


def _parse_number(text: str) -> Optional[Union[int, float]]:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    # "nan" and "inf" are not thresholds
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class ValidationRule:
    """
    A single declarative check on an answer.

    Properties:
        kind: RuleKind, or the raw string when a configuration names
            a kind this package does not know. Unknown kinds never fail.
        message: Human-readable message returned when the rule fails
        value: Threshold for length/value rules (ignored otherwise).
            Numeric strings such as "3" are converted to numbers.
        predicate: Registry name for CUSTOM rules
    """

    kind: Union[RuleKind, str]
    message: str
    value: Optional[Union[int, float, str]] = None
    predicate: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.kind, str) and self.kind in _KIND_VALUES:
            object.__setattr__(self, "kind", RuleKind(self.kind))
        if self.kind in THRESHOLD_KINDS and isinstance(self.value, str):
            number = _parse_number(self.value)
            if number is not None:
                object.__setattr__(self, "value", number)

    @property
    def is_known(self) -> bool:
        return isinstance(self.kind, RuleKind)


class PredicateRegistry(Mapping[str, Predicate]):
    """
    Named predicates available to CUSTOM validation rules.

    Behaves as a read-only mapping for lookups; predicates are added
    with register(), which also works as a decorator:

        @registry.register("non_blank")
        def _non_blank(value):
            return bool(str(value).strip())
    """

    def __init__(self, predicates: Optional[Mapping[str, Predicate]] = None):
        self._predicates: Dict[str, Predicate] = dict(predicates or {})

    def register(self, name: str, predicate: Optional[Predicate] = None):
        if predicate is None:
            def decorator(func: Predicate) -> Predicate:
                self._predicates[name] = func
                return func
            return decorator
        self._predicates[name] = predicate
        return predicate

    def __getitem__(self, name: str) -> Predicate:
        return self._predicates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)
