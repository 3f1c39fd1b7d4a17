"""
Orchestrator - Configuration Loading.

============================================================
RESPONSIBILITY
============================================================
Reads the scrape configuration file and maps it onto the
immutable ScrapeConfig structure.

- JSON (.json) and YAML (.yaml, .yml) files
- Presence of a metric key enables that collector; null disables
- Label names validated against Prometheus rules
- Every failure raised as ConfigurationError

============================================================
FILE FORMAT
============================================================
default_labels:
  team: platform
groups:
  - id: "42"
    project_count:
      include_subgroups: true
    member_count: {}

============================================================
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from core.exceptions import ConfigurationError
from core.models import (
    GroupConfig,
    MemberCountSpec,
    MetricKind,
    ProjectCountSpec,
    ScrapeConfig,
)


logger = logging.getLogger(__name__)


LABEL_NAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")

KNOWN_GROUP_KEYS = {"id"} | {kind.config_key for kind in MetricKind}


# ============================================================
# FILE READING
# ============================================================

def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a config file into a raw mapping.

    Raises:
        ConfigurationError: If the file is unreadable, malformed or not a mapping
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported config file format '{suffix or path.name}' "
            f"(expected .json, .yaml or .yml)",
            path=str(path),
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix in JSON_SUFFIXES:
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {e}",
            path=str(path),
            cause=e,
        ) from e
    except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to parse config file: {e}",
            path=str(path),
            cause=e,
        ) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(data).__name__}",
            path=str(path),
        )

    logger.debug(f"Read config file {path}")
    return data


# ============================================================
# STRUCTURE MAPPING
# ============================================================

def _to_label_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigurationError(
        f"Label '{key}' must have a scalar value, got {type(value).__name__}",
        config_key=f"default_labels.{key}",
    )


def parse_labels(raw: Any, config_key: str = "default_labels") -> Dict[str, str]:
    """Validate and stringify a label mapping."""
    if raw is None:
        return {}

    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"'{config_key}' must be a mapping, got {type(raw).__name__}",
            config_key=config_key,
        )

    labels: Dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not LABEL_NAME_PATTERN.match(key) or key.startswith("__"):
            raise ConfigurationError(
                f"Invalid label name {key!r}",
                config_key=f"{config_key}.{key}",
            )
        labels[key] = _to_label_value(key, value)

    return labels


def _parse_group_id(raw: Any, index: int) -> str:
    key = f"groups[{index}].id"

    if isinstance(raw, bool) or raw is None:
        raise ConfigurationError("Group id is required", config_key=key)
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()

    raise ConfigurationError(
        f"Group id must be a non-empty string or integer, got {raw!r}",
        config_key=key,
    )


def _spec_mapping(raw: Any, key: str) -> Optional[Mapping[str, Any]]:
    """None when the spec is absent or null; mapping otherwise."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"'{key}' must be a mapping, got {type(raw).__name__}",
            config_key=key,
        )
    return raw


def parse_group(raw: Any, index: int) -> GroupConfig:
    """Map one raw group entry onto GroupConfig."""
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Group entry must be a mapping, got {type(raw).__name__}",
            config_key=f"groups[{index}]",
        )

    group_id = _parse_group_id(raw.get("id"), index)

    unknown = sorted(str(k) for k in raw if k not in KNOWN_GROUP_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown keys in group {group_id}: {', '.join(unknown)}")

    project_count = None
    pc_key = f"groups[{index}].{MetricKind.PROJECT_COUNT.config_key}"
    pc_raw = _spec_mapping(raw.get(MetricKind.PROJECT_COUNT.config_key), pc_key)
    if pc_raw is not None:
        include_subgroups = pc_raw.get("include_subgroups")
        if include_subgroups is None:
            include_subgroups = False
        elif not isinstance(include_subgroups, bool):
            raise ConfigurationError(
                f"'include_subgroups' must be a boolean, got {include_subgroups!r}",
                config_key=f"{pc_key}.include_subgroups",
            )
        project_count = ProjectCountSpec(include_subgroups=include_subgroups)

    member_count = None
    mc_key = f"groups[{index}].{MetricKind.MEMBER_COUNT.config_key}"
    if _spec_mapping(raw.get(MetricKind.MEMBER_COUNT.config_key), mc_key) is not None:
        member_count = MemberCountSpec()

    return GroupConfig(
        id=group_id,
        project_count=project_count,
        member_count=member_count,
    )


def parse_config(raw: Mapping[str, Any]) -> ScrapeConfig:
    """
    Map a raw configuration mapping onto ScrapeConfig.

    Raises:
        ConfigurationError: If the structure does not match
    """
    default_labels = parse_labels(raw.get("default_labels"))

    raw_groups = raw.get("groups")
    if raw_groups is None:
        raw_groups = []
    if not isinstance(raw_groups, list):
        raise ConfigurationError(
            f"'groups' must be a list, got {type(raw_groups).__name__}",
            config_key="groups",
        )

    groups: List[GroupConfig] = [parse_group(g, i) for i, g in enumerate(raw_groups)]

    if not groups:
        logger.warning("No groups configured; the pushed batch will be empty")

    for group in groups:
        if group.is_noop:
            logger.info(f"Group {group.id} has no metrics enabled, skipping collection")

    return ScrapeConfig(default_labels=default_labels, groups=tuple(groups))


def load_config(path: Union[str, Path]) -> ScrapeConfig:
    """Read and map a config file in one step."""
    return parse_config(read_config_file(path))
