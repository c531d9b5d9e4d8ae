"""
Questionnaire Analyzer — load-time diagnostics for AQE configurations.

The evaluators deliberately never reject a configuration. This module
is where structural problems are found, before a config is used:
    - Duplicate question IDs
    - Conditional logic depending on unknown questions
    - Dependency cycles and forward references
    - Condition kinds the visibility resolver does not recognise
    - Custom rules whose predicate is missing or unregistered
    - Unknown rule kinds and non-numeric rule thresholds
    - Question statistics (by type, by section, required/optional)

IMPORTANT: This is read-only. It never modifies the configuration.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
import logging
from typing import Dict, List, Mapping, Optional, Set, Tuple

from aqe.conditions import ConditionAction
from aqe.model import QuestionnaireConfig
from aqe.rules import THRESHOLD_KINDS, Predicate, RuleKind
from aqe.values import is_number

logger = logging.getLogger(__name__)


@dataclass
class QuestionnaireStats:
    """Question counts for a configuration."""

    total_questions: int = 0
    questions_by_type: Dict[str, int] = field(default_factory=dict)
    questions_by_section: Dict[str, int] = field(default_factory=dict)
    required_questions: int = 0
    optional_questions: int = 0


def generate_stats(config: QuestionnaireConfig) -> QuestionnaireStats:
    stats = QuestionnaireStats()
    by_type: Dict[str, int] = defaultdict(int)
    for section in config.sections:
        stats.questions_by_section[section.title] = len(section.questions)
        for question in section.questions:
            by_type[question.type.value] += 1
            if question.required:
                stats.required_questions += 1
    stats.total_questions = len(config.all_questions())
    stats.optional_questions = stats.total_questions - stats.required_questions
    stats.questions_by_type = dict(by_type)
    return stats


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


@dataclass
class QuestionnaireReport:
    """Analysis report for a questionnaire configuration."""

    questionnaire_id: str
    total_sections: int = 0
    stats: QuestionnaireStats = field(default_factory=QuestionnaireStats)

    # Identity
    duplicate_ids: Set[str] = field(default_factory=set)

    # Dependency graph: question -> questions it depends on
    dependencies: Dict[str, List[str]] = field(default_factory=dict)
    undefined_dependencies: Dict[str, List[str]] = field(default_factory=dict)
    forward_references: List[Tuple[str, str]] = field(default_factory=list)
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    # Conditions and rules
    unknown_conditions: Dict[str, List[str]] = field(default_factory=dict)
    inert_actions: Dict[str, List[str]] = field(default_factory=dict)
    missing_predicates: List[str] = field(default_factory=list)
    unregistered_predicates: Dict[str, List[str]] = field(default_factory=dict)
    unknown_rules: Dict[str, List[str]] = field(default_factory=dict)
    bad_thresholds: Dict[str, List[str]] = field(default_factory=dict)

    # Errors block loading; warnings do not
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        if msg not in self.errors:
            self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_questionnaire(
    config: QuestionnaireConfig,
    predicates: Optional[Mapping[str, Predicate]] = None,
) -> QuestionnaireReport:
    """
    Analyze a QuestionnaireConfig for structural problems.

    Args:
        config: Configuration to inspect
        predicates: Registry the config will be evaluated with. When
            given, CUSTOM rules naming predicates absent from it are
            reported.

    Returns a QuestionnaireReport with errors and warnings.
    """
    report = QuestionnaireReport(questionnaire_id=config.id)
    report.total_sections = len(config.sections)
    report.stats = generate_stats(config)

    questions = config.all_questions()

    # =========================================================================
    # 1. IDENTITY
    # =========================================================================

    position: Dict[str, int] = {}
    for index, question in enumerate(questions):
        if question.id in position:
            report.duplicate_ids.add(question.id)
        else:
            position[question.id] = index

    # =========================================================================
    # 2. DEPENDENCY GRAPH
    # =========================================================================

    for index, question in enumerate(questions):
        if not question.conditional_logic:
            continue
        deps = report.dependencies.setdefault(question.id, [])
        for logic in question.conditional_logic:
            target = logic.depends_on
            if target not in deps:
                deps.append(target)
            if target not in position:
                report.undefined_dependencies.setdefault(question.id, []).append(target)
            elif position[target] >= index and target != question.id:
                report.forward_references.append((question.id, target))

            if not logic.is_known:
                report.unknown_conditions.setdefault(question.id, []).append(str(logic.condition))
            if logic.action is not ConditionAction.SHOW:
                report.inert_actions.setdefault(question.id, []).append(logic.action.value)

    visited: Set[str] = set()
    for question_id in report.dependencies:
        if question_id not in visited:
            cycle = _find_cycles_dfs(report.dependencies, question_id, visited, set(), [])
            if cycle:
                report.has_cycles = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 3. RULES AND CUSTOM PREDICATES
    # =========================================================================

    for question in questions:
        for rule in question.validation:
            if not rule.is_known:
                report.unknown_rules.setdefault(question.id, []).append(str(rule.kind))
                continue
            if rule.kind in THRESHOLD_KINDS and rule.value is not None and not is_number(rule.value):
                report.bad_thresholds.setdefault(question.id, []).append(rule.kind.value)
            if rule.kind is not RuleKind.CUSTOM:
                continue
            if not rule.predicate:
                if question.id not in report.missing_predicates:
                    report.missing_predicates.append(question.id)
            elif predicates is not None and rule.predicate not in predicates:
                report.unregistered_predicates.setdefault(question.id, []).append(rule.predicate)

    # =========================================================================
    # 4. ERRORS AND WARNINGS
    # =========================================================================

    if report.duplicate_ids:
        report.add_error(f"Duplicate question IDs: {', '.join(sorted(report.duplicate_ids))}")

    for question_id, missing in report.undefined_dependencies.items():
        report.add_error(f"Question {question_id} depends on undefined questions: {', '.join(missing)}")

    if report.has_cycles:
        report.add_error(f"Dependency cycle detected: {' -> '.join(report.cycle_example)}")

    for question_id, target in report.forward_references:
        report.add_warning(f"Question {question_id} depends on later question {target}")

    for question_id, kinds in report.unknown_conditions.items():
        report.add_warning(
            f"Question {question_id} uses unknown conditions ({', '.join(kinds)}); they always pass"
        )

    for question_id, actions in report.inert_actions.items():
        report.add_warning(
            f"Question {question_id} uses actions {', '.join(actions)}; only 'show' affects visibility"
        )

    if report.missing_predicates:
        report.add_warning(
            f"Custom rules without a predicate never fail: {', '.join(report.missing_predicates)}"
        )

    for question_id, names in report.unregistered_predicates.items():
        report.add_warning(f"Question {question_id} names unregistered predicates: {', '.join(names)}")

    for question_id, kinds in report.unknown_rules.items():
        report.add_warning(
            f"Question {question_id} uses unknown validation rules ({', '.join(kinds)}); they never fail"
        )

    for question_id, kinds in report.bad_thresholds.items():
        report.add_warning(
            f"Question {question_id} has non-numeric thresholds on {', '.join(kinds)}; those rules never fail"
        )

    logger.info(
        "analyzed questionnaire=%s questions=%d errors=%d warnings=%d",
        config.id, report.stats.total_questions, len(report.errors), len(report.warnings),
    )
    return report
