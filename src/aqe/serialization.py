"""
Serialization helpers for AQE objects (QuestionnaireConfig, Question, rules, responses).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List
import warnings

import yaml

from aqe.completion import ResponseEntry
from aqe.conditions import ConditionAction, ConditionalLogic, ConditionKind
from aqe.model import (
    Question,
    QuestionnaireConfig,
    QuestionnaireMetadata,
    QuestionnaireSettings,
    QuestionOption,
    QuestionType,
    ScaleBounds,
    Section,
)
from aqe.rules import RuleKind, ValidationRule


def _plain(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _frozen(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_frozen(v) for v in value)
    return value


def condition_to_dict(c: ConditionalLogic) -> Dict[str, Any]:
    condition = c.condition.value if isinstance(c.condition, ConditionKind) else c.condition
    return {
        "depends_on": c.depends_on,
        "condition": condition,
        "value": _plain(c.value),
        "action": c.action.value,
    }


def condition_from_dict(d: Dict[str, Any]) -> ConditionalLogic:
    raw = d["condition"]
    try:
        condition = ConditionKind(raw)
    except ValueError:
        warnings.warn(
            f"Unknown condition '{raw}' on dependency {d['depends_on']}; it will always pass",
            UserWarning,
        )
        condition = raw
    return ConditionalLogic(
        depends_on=d["depends_on"],
        condition=condition,
        value=_frozen(d.get("value")),
        action=ConditionAction(d.get("action", "show")),
    )


def rule_to_dict(r: ValidationRule) -> Dict[str, Any]:
    kind = r.kind.value if isinstance(r.kind, RuleKind) else r.kind
    return {"type": kind, "message": r.message, "value": r.value, "predicate": r.predicate}


def rule_from_dict(d: Dict[str, Any]) -> ValidationRule:
    raw = d["type"]
    try:
        kind = RuleKind(raw)
    except ValueError:
        warnings.warn(f"Unknown validation rule '{raw}'; it will never fail", UserWarning)
        kind = raw
    return ValidationRule(
        kind=kind,
        message=d.get("message", ""),
        value=d.get("value"),
        predicate=d.get("predicate"),
    )


def option_to_dict(o: QuestionOption) -> Dict[str, Any]:
    return {"id": o.id, "label": o.label, "value": o.value, "description": o.description, "icon": o.icon}


def option_from_dict(d: Dict[str, Any]) -> QuestionOption:
    return QuestionOption(
        label=d["label"],
        value=d["value"],
        id=d.get("id"),
        description=d.get("description"),
        icon=d.get("icon"),
    )


def scale_to_dict(s: ScaleBounds | None) -> Dict[str, Any] | None:
    if s is None:
        return None
    return {"min": s.min, "max": s.max, "step": s.step, "min_label": s.min_label, "max_label": s.max_label}


def scale_from_dict(d: Dict[str, Any] | None) -> ScaleBounds | None:
    if d is None:
        return None
    return ScaleBounds(
        min=d["min"],
        max=d["max"],
        step=d.get("step"),
        min_label=d.get("min_label"),
        max_label=d.get("max_label"),
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {
        "id": q.id,
        "type": q.type.value,
        "title": q.title,
        "subtitle": q.subtitle,
        "help_text": q.help_text,
        "required": q.required,
        "options": [option_to_dict(o) for o in q.options],
        "scale": scale_to_dict(q.scale),
        "validation": [rule_to_dict(r) for r in q.validation],
        "conditional_logic": [condition_to_dict(c) for c in q.conditional_logic],
        "default_value": _plain(q.default_value),
        "metadata": q.metadata,
    }


def question_from_dict(d: Dict[str, Any]) -> Question:
    return Question(
        id=d["id"],
        type=QuestionType(d["type"]),
        title=d.get("title", ""),
        subtitle=d.get("subtitle"),
        help_text=d.get("help_text"),
        required=bool(d.get("required", False)),
        options=[option_from_dict(o) for o in d.get("options") or []],
        scale=scale_from_dict(d.get("scale")),
        validation=[rule_from_dict(r) for r in d.get("validation") or []],
        conditional_logic=[condition_from_dict(c) for c in d.get("conditional_logic") or []],
        default_value=d.get("default_value"),
        metadata=d.get("metadata") or {},
    )


def section_to_dict(s: Section) -> Dict[str, Any]:
    return {
        "id": s.id,
        "title": s.title,
        "description": s.description,
        "optional": s.optional,
        "questions": [question_to_dict(q) for q in s.questions],
    }


def section_from_dict(d: Dict[str, Any]) -> Section:
    return Section(
        id=d["id"],
        title=d.get("title", ""),
        description=d.get("description"),
        optional=bool(d.get("optional", False)),
        questions=[question_from_dict(q) for q in d.get("questions") or []],
    )


def settings_to_dict(s: QuestionnaireSettings) -> Dict[str, Any]:
    return {
        "allow_back": s.allow_back,
        "show_progress": s.show_progress,
        "auto_save": s.auto_save,
        "completion_message": s.completion_message,
    }


def settings_from_dict(d: Dict[str, Any] | None) -> QuestionnaireSettings:
    d = d or {}
    return QuestionnaireSettings(
        allow_back=d.get("allow_back", True),
        show_progress=d.get("show_progress", True),
        auto_save=d.get("auto_save", False),
        completion_message=d.get("completion_message"),
    )


def metadata_to_dict(m: QuestionnaireMetadata) -> Dict[str, Any]:
    return {
        "created_by": m.created_by,
        "created_at": m.created_at,
        "last_modified": m.last_modified,
        "tags": list(m.tags),
    }


def metadata_from_dict(d: Dict[str, Any] | None) -> QuestionnaireMetadata:
    d = d or {}
    return QuestionnaireMetadata(
        created_by=d.get("created_by"),
        created_at=d.get("created_at"),
        last_modified=d.get("last_modified"),
        tags=list(d.get("tags") or []),
    )


def config_to_dict(c: QuestionnaireConfig) -> Dict[str, Any]:
    return {
        "id": c.id,
        "title": c.title,
        "version": c.version,
        "description": c.description,
        "sections": [section_to_dict(s) for s in c.sections],
        "settings": settings_to_dict(c.settings),
        "metadata": metadata_to_dict(c.metadata),
    }


def config_from_dict(d: Dict[str, Any]) -> QuestionnaireConfig:
    return QuestionnaireConfig(
        id=d["id"],
        title=d.get("title", ""),
        version=str(d.get("version", "1.0.0")),
        description=d.get("description"),
        sections=[section_from_dict(s) for s in d.get("sections") or []],
        settings=settings_from_dict(d.get("settings")),
        metadata=metadata_from_dict(d.get("metadata")),
    )


def config_to_json(c: QuestionnaireConfig) -> str:
    return json.dumps(config_to_dict(c), sort_keys=True)


def config_from_json(s: str) -> QuestionnaireConfig:
    d = json.loads(s)
    return config_from_dict(d)


def config_to_yaml(c: QuestionnaireConfig) -> str:
    return yaml.safe_dump(config_to_dict(c), sort_keys=False)


def config_from_yaml(s: str) -> QuestionnaireConfig:
    d = yaml.safe_load(s)
    return config_from_dict(d)


def entry_to_dict(e: ResponseEntry) -> Dict[str, Any]:
    return {"question_id": e.question_id, "value": e.value, "timestamp": e.timestamp}


def entry_from_dict(d: Dict[str, Any]) -> ResponseEntry:
    return ResponseEntry(question_id=d["question_id"], value=d.get("value"), timestamp=d.get("timestamp"))


def entries_to_json(entries: List[ResponseEntry]) -> str:
    return json.dumps([entry_to_dict(e) for e in entries])


def entries_from_json(s: str) -> List[ResponseEntry]:
    return [entry_from_dict(d) for d in json.loads(s)]
