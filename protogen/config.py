"""Configuration loading for protogen (.protogen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .constants import (
    CONFIG_FILENAME,
    CONSISTENCY_POLICIES,
    DEFAULT_CONSISTENCY_POLICY,
    DEFAULT_LOOKAHEAD_LINES,
    DEFAULT_TEMPLATE_LOOKBEHIND_LINES,
    KNOWN_TAG_KINDS,
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ParserSettings:
    """Tag kinds accepted by the kind filter."""

    known_kinds: List[str] = field(default_factory=lambda: sorted(KNOWN_TAG_KINDS))


@dataclass
class ConsistencySettings:
    """Heuristic used to drop declarations that do not match the source."""

    policy: str = DEFAULT_CONSISTENCY_POLICY
    lookahead_lines: int = DEFAULT_LOOKAHEAD_LINES


@dataclass
class SourceSettings:
    """Limits for reading around a tagged line."""

    template_lookbehind_lines: int = DEFAULT_TEMPLATE_LOOKBEHIND_LINES


@dataclass
class PrototypeSettings:
    """Rendering of the prototype section."""

    skip_default_arguments: bool = True
    line_directives: bool = True


@dataclass
class ProtogenConfig:
    """Represents the settings defined in .protogen.yml."""

    root: Path
    parser: ParserSettings = field(default_factory=ParserSettings)
    consistency: ConsistencySettings = field(default_factory=ConsistencySettings)
    source: SourceSettings = field(default_factory=SourceSettings)
    prototypes: PrototypeSettings = field(default_factory=PrototypeSettings)


def default_config(root: Path | None = None) -> ProtogenConfig:
    return ProtogenConfig(root=(root or Path.cwd()).resolve())


def load_config(config_path: Path) -> ProtogenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProtogenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    parser = ParserSettings()
    parser_data = _as_dict(data.get("parser"))
    if "known_kinds" in parser_data:
        kinds = _as_str_list(parser_data.get("known_kinds"))
        if not kinds:
            raise ConfigError("parser.known_kinds must list at least one kind")
        parser.known_kinds = kinds

    consistency = ConsistencySettings()
    consistency_data = _as_dict(data.get("consistency"))
    if consistency_data:
        policy = _as_str(consistency_data.get("policy"))
        if policy is not None:
            policy = policy.lower()
            if policy not in CONSISTENCY_POLICIES:
                raise ConfigError(
                    f"consistency.policy must be one of {', '.join(CONSISTENCY_POLICIES)}, got '{policy}'"
                )
            consistency.policy = policy
        lookahead = _as_positive_int(consistency_data.get("lookahead_lines"), "consistency.lookahead_lines")
        if lookahead is not None:
            consistency.lookahead_lines = lookahead

    source = SourceSettings()
    source_data = _as_dict(data.get("source"))
    lookbehind = _as_positive_int(
        source_data.get("template_lookbehind_lines"), "source.template_lookbehind_lines"
    )
    if lookbehind is not None:
        source.template_lookbehind_lines = lookbehind

    prototypes = PrototypeSettings()
    prototypes_data = _as_dict(data.get("prototypes"))
    skip_defaults = _as_bool(prototypes_data.get("skip_default_arguments"))
    if skip_defaults is not None:
        prototypes.skip_default_arguments = skip_defaults
    line_directives = _as_bool(prototypes_data.get("line_directives"))
    if line_directives is not None:
        prototypes.line_directives = line_directives

    return ProtogenConfig(
        root=root,
        parser=parser,
        consistency=consistency,
        source=source,
        prototypes=prototypes,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a positive integer")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            raise ConfigError(f"{key} must be a positive integer") from None
    if not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer")
    return value


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
