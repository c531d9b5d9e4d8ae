"""
Demo: Analyze the discovery questionnaire, walk a sample session and print the summary.
"""

import logging

from aqe.analyzer import analyze_questionnaire
from aqe.engine import QuestionnaireEngine
from aqe.examples import build_discovery_questionnaire
from aqe.serialization import config_to_yaml


def print_report(report):
    """Pretty-print a QuestionnaireReport."""
    print()
    print("=" * 70)
    print(f"QUESTIONNAIRE ANALYSIS REPORT: {report.questionnaire_id}")
    print("=" * 70)
    print()

    stats = report.stats
    print("📊 BASIC METRICS")
    print(f"  Total Sections:        {report.total_sections}")
    print(f"  Total Questions:       {stats.total_questions}")
    print(f"  Required / Optional:   {stats.required_questions} / {stats.optional_questions}")
    print()

    print("  Questions by Type:")
    for qtype, count in sorted(stats.questions_by_type.items()):
        print(f"    {qtype}: {count}")
    print()

    print("🔗 DEPENDENCIES")
    for question_id, deps in report.dependencies.items():
        print(f"  {question_id} <- {', '.join(deps)}")
    print(f"  Has Cycles:            {'YES' if report.has_cycles else 'NO'}")
    if report.has_cycles and report.cycle_example:
        print(f"    Example: {' -> '.join(report.cycle_example)}")
    print()

    for title, items in (("❌ ERRORS", report.errors), ("⚠️  WARNINGS", report.warnings)):
        if items:
            print(title)
            for i, msg in enumerate(items, 1):
                print(f"  {i}. {msg}")
            print()
    if report.is_valid and not report.warnings:
        print("✨ NO ISSUES - Questionnaire looks clean!")
        print()


def print_summary(engine):
    summary = engine.get_summary()
    print("✅ SESSION SUMMARY")
    print(f"  Visible Questions:     {summary.visible_questions}/{summary.total_questions}")
    print(f"  Answered:              {summary.answered_questions}")
    print(f"  Completion:            {summary.completion_percentage}%")
    print(f"  Complete:              {'YES' if summary.is_complete else 'NO'}")
    for question_id, message in summary.errors.items():
        print(f"    {question_id}: {message}")
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    config = build_discovery_questionnaire()
    print_report(analyze_questionnaire(config))

    engine = QuestionnaireEngine(config)
    engine.update_responses({
        "demographics": {"age": 34, "gender": "female"},
        "fitness_level": "moderate",
        "previous_injuries": True,
        "injury_type": "post_surgery",
        "weeks_since_surgery": 6,
        "current_pain_level": 8,
    })
    print_summary(engine)

    print("➡️  VISIBLE QUESTIONS")
    for question in engine.get_visible_questions():
        print(f"  {question.id}")
    print()

    with open("discovery_questionnaire.yaml", "w") as f:
        f.write(config_to_yaml(config))
    print("✅ Questionnaire exported to discovery_questionnaire.yaml")
