"""Configuration helpers for rule generalization."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .rules import COLLISION_POLICIES, COLLISION_SUM

_DEFAULT_CONFIG_PATH = Path("config/generalization.yaml")
_SECTION_KEY = "generalization"


@dataclass(slots=True)
class GeneralizationConfig:
    collision_policy: str = COLLISION_SUM
    max_workers: int | None = None
    weighted: bool = True

    @classmethod
    def default(cls) -> "GeneralizationConfig":
        return cls()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "GeneralizationConfig":
        section = payload.get(_SECTION_KEY, payload)
        if section is None:
            section = {}
        if not isinstance(section, Mapping):
            raise ValueError(f"'{_SECTION_KEY}' section must be a mapping")

        policy = str(section.get("collision_policy", COLLISION_SUM)).strip().lower()
        if policy not in COLLISION_POLICIES:
            raise ValueError(
                f"Unknown collision policy '{policy}'. Expected one of: {', '.join(COLLISION_POLICIES)}"
            )

        return cls(
            collision_policy=policy,
            max_workers=_parse_workers(section.get("max_workers")),
            weighted=_parse_flag(section.get("weighted", True), "weighted"),
        )


def load_generalization_config(config_path: Path | None) -> GeneralizationConfig:
    """Load generalization configuration from YAML or fallback to defaults."""

    if config_path is not None:
        resolved = Path(config_path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Generalization config '{resolved}' does not exist")
        return GeneralizationConfig.from_dict(_load_yaml(resolved))

    if _DEFAULT_CONFIG_PATH.exists():
        return GeneralizationConfig.from_dict(_load_yaml(_DEFAULT_CONFIG_PATH))

    return GeneralizationConfig.default()


def _load_yaml(path: Path) -> Mapping[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Generalization config '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("Generalization config must be a mapping")
    return data


def _parse_flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _parse_workers(value: Any) -> int | None:
    if value is None:
        return None
    try:
        workers = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"max_workers must be an integer, got {value!r}") from exc
    if workers < 1:
        raise ValueError(f"max_workers must be a positive integer, got {workers}")
    return workers


__all__ = [
    "GeneralizationConfig",
    "load_generalization_config",
]
