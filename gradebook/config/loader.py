from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.component import Component
from ..models.config_models import (
    DEFAULT_SUBGROUP_RULES,
    DEFAULT_TOLERANCE,
    DEFAULT_TOP_N,
    AnalysisConfig,
    SubgroupRule,
    duplicate_labels,
)

"""Config loader for the gradebook analyzer.

Responsibilities:
- Load an optional YAML config (all keys optional)
- Validate it against config_schema.json shipped beside this module
- Apply defaults (built-in branch table, tolerance 0.05, top 3, all components)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or not valid JSON, or the
            config data violates it (unknown keys, wrong types, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def default_config() -> AnalysisConfig:
    return AnalysisConfig()


def config_from_dict(data: dict[str, Any]) -> AnalysisConfig:
    """Build AnalysisConfig from already validated config data."""
    raw_groups = data.get("subgroups")
    if raw_groups:
        rules = tuple(SubgroupRule(str(label), str(sub)) for label, sub in raw_groups.items())
        dup = duplicate_labels(rules)
        if dup:
            raise ConfigError(f"subgroups: duplicate label(s): {', '.join(dup)}")
    else:
        rules = DEFAULT_SUBGROUP_RULES

    names = data.get("rank_components")
    if names is None:
        components = tuple(Component)
    else:
        try:
            components = tuple(Component.parse(n) for n in names)
        except ValueError as e:
            raise ConfigError(f"rank_components: {e}") from e

    return AnalysisConfig(
        subgroups=rules,
        mismatch_tolerance=float(data.get("mismatch_tolerance", DEFAULT_TOLERANCE)),
        top_n=int(data.get("top_n", DEFAULT_TOP_N)),
        rank_components=components,
        subgroup_rankings=bool(data.get("subgroup_rankings", False)),
    )


def load_config(path: Path) -> AnalysisConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return config_from_dict(data)
