"""Reading raw rule files and rendering results as JSON-ready payloads."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from . import ExtractionRule, WeightedRule
from .clustering import Cluster
from .tokenizer import parse_rule

__all__ = [
    "load_rules",
    "parse_rules_payload",
    "rule_to_dict",
    "weighted_rule_to_dict",
    "cluster_to_dict",
]

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_rules(path: Path) -> list[ExtractionRule]:
    """Load raw extraction rules from a JSON or YAML file."""

    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Rule file '{resolved}' does not exist")

    raw = resolved.read_text(encoding="utf-8")
    if resolved.suffix.lower() in _YAML_SUFFIXES:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Rule file '{resolved}' is not valid YAML: {exc}") from exc
    else:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Rule file '{resolved}' is not valid JSON: {exc}") from exc
    return parse_rules_payload(payload)


def parse_rules_payload(payload: Any) -> list[ExtractionRule]:
    """Convert a decoded rules document into extraction rules.

    Accepts a list of ``{"subject": ..., "object": ...}`` mappings or
    two-element lists, optionally wrapped in a mapping under ``rules``.
    """

    if isinstance(payload, Mapping):
        payload = payload.get("rules")
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise ValueError("Rules document must be a list of rules or a mapping with a 'rules' list")

    rules: list[ExtractionRule] = []
    for index, entry in enumerate(payload):
        rules.append(_parse_entry(entry, index))
    return rules


def _parse_entry(entry: Any, index: int) -> ExtractionRule:
    if isinstance(entry, Mapping):
        subject = entry.get("subject")
        object_ = entry.get("object")
    elif isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)) and len(entry) == 2:
        subject, object_ = entry
    else:
        raise ValueError(f"Rule #{index} must be a mapping or a [subject, object] pair: {entry!r}")

    if not isinstance(subject, str) or not isinstance(object_, str):
        raise ValueError(f"Rule #{index} requires string 'subject' and 'object' paths: {entry!r}")
    return parse_rule(subject, object_)


def rule_to_dict(rule: ExtractionRule) -> dict[str, str]:
    return {"subject": str(rule.subject), "object": str(rule.object)}


def weighted_rule_to_dict(entry: WeightedRule) -> dict[str, Any]:
    payload: dict[str, Any] = rule_to_dict(entry.rule)
    payload["support"] = entry.support
    return payload


def cluster_to_dict(cluster: Cluster) -> dict[str, Any]:
    return {
        "size": cluster.size,
        "subject_shape": "/" + "/".join(cluster.signature.subject_tags),
        "object_shape": "/" + "/".join(cluster.signature.object_tags),
        "members": [rule_to_dict(rule) for rule in cluster.members],
    }
