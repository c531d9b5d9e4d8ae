"""
Adaptive Questionnaire Engine (AQE) Package

Decides, for a fixed questionnaire definition and a response map:
    - which questions are currently visible
    - which answers are invalid
    - how complete the session is

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - UI rendering
    - Response persistence
    - AI question generation
    - Authentication

Structure (model, conditions, rules) and evaluation (visibility,
traversal, validation, completion) live in separate modules.
Evaluation is pure: same inputs, same outputs.
"""

from aqe.engine import Evaluation, QuestionnaireEngine, evaluate

__version__ = "0.1.0"

__all__ = ["Evaluation", "QuestionnaireEngine", "evaluate"]
