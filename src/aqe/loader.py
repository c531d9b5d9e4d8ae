"""
Config loader (file -> checked QuestionnaireConfig).

Reads YAML or JSON, builds the model through aqe.serialization and runs
aqe.analyzer over the result. Structural errors (duplicate IDs, unknown
or cyclic dependencies) stop the load with ConfigurationError; analyzer
warnings are emitted as UserWarning and logged.

This is the only place in the package that raises for bad input.
Evaluators downstream never do.
"""

import json
import logging
from pathlib import Path
from typing import Mapping, Optional, Union
import warnings

import yaml

from aqe.analyzer import QuestionnaireReport, analyze_questionnaire
from aqe.model import QuestionnaireConfig
from aqe.rules import Predicate
from aqe.serialization import config_from_dict

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


class ConfigurationError(Exception):
    """Raised when a questionnaire configuration cannot be loaded."""

    def __init__(self, message: str, report: Optional[QuestionnaireReport] = None):
        super().__init__(message)
        self.report = report


def parse_config(
    text: str,
    fmt: str = "yaml",
    predicates: Optional[Mapping[str, Predicate]] = None,
    strict: bool = True,
) -> QuestionnaireConfig:
    """
    Parse and check a configuration held in a string.

    Args:
        text: YAML or JSON document
        fmt: "yaml" or "json"
        predicates: Registry the config will run with (for predicate checks)
        strict: Raise on analyzer errors (otherwise only log them)

    Raises:
        ConfigurationError: If the document is malformed or structurally invalid
    """
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise ConfigurationError(f"Unsupported config format: {fmt}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to parse {fmt} config: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Config document must be a mapping at the top level")

    try:
        config = config_from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid questionnaire config: {e!r}") from e

    check_config(config, predicates=predicates, strict=strict)
    return config


def check_config(
    config: QuestionnaireConfig,
    predicates: Optional[Mapping[str, Predicate]] = None,
    strict: bool = True,
) -> QuestionnaireReport:
    """Analyze a config, surface warnings, and raise on errors when strict."""
    report = analyze_questionnaire(config, predicates)
    for msg in report.warnings:
        logger.warning("questionnaire=%s %s", config.id, msg)
        warnings.warn(msg, UserWarning)
    if report.errors:
        summary = "; ".join(report.errors)
        if strict:
            raise ConfigurationError(f"Questionnaire {config.id} is invalid: {summary}", report)
        logger.error("questionnaire=%s loaded with errors: %s", config.id, summary)
    return report


def load_config(
    path: Union[str, Path],
    predicates: Optional[Mapping[str, Predicate]] = None,
    strict: bool = True,
) -> QuestionnaireConfig:
    """
    Load a questionnaire configuration file.

    The format follows the suffix: .yaml/.yml or .json.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        fmt = "yaml"
    elif suffix in _JSON_SUFFIXES:
        fmt = "json"
    else:
        raise ConfigurationError(f"Unsupported config file type: {path.name}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    logger.info("loading questionnaire config from %s", path)
    return parse_config(text, fmt=fmt, predicates=predicates, strict=strict)
