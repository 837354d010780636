"""Load and merge configuration from .eolguard.toml, CLI flags, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from eolguard.config.schema import (
    OUTPUT_FORMATS,
    CheckConfig,
    EolGuardConfig,
    IgnoreConfig,
    OutputConfig,
    PoliciesConfig,
)

CONFIG_FILENAME = ".eolguard.toml"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def split_list(value: str) -> List[str]:
    """Split a comma separated CLI / env value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_bool(name: str) -> Optional[bool]:
    val = os.environ.get(name)
    if val is None:
        return None
    if val.lower() in _TRUE:
        return True
    if val.lower() in _FALSE:
        return False
    return None


def _merge_env_overrides(cfg: EolGuardConfig) -> None:
    """Apply EOLGUARD_* environment variable overrides."""
    if val := os.environ.get("EOLGUARD_CRLF"):
        cfg.policies.crlf.extend(split_list(val))
    if val := os.environ.get("EOLGUARD_LF"):
        cfg.policies.lf.extend(split_list(val))
    if val := os.environ.get("EOLGUARD_CR"):
        cfg.policies.cr.extend(split_list(val))
    if val := os.environ.get("EOLGUARD_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if (flag := _env_bool("EOLGUARD_CASE_SENSITIVE")) is not None:
        cfg.check.case_sensitive = flag
    if (flag := _env_bool("EOLGUARD_VERBOSE")) is not None:
        cfg.output.verbose = flag
    if val := os.environ.get("EOLGUARD_IGNORE_FILES"):
        cfg.ignore.files.extend(split_list(val))


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: EolGuardConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {cfg.output.format!r}"
        )
    for name in ("crlf", "lf", "cr", "disable"):
        value = getattr(cfg.policies, name)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"policies.{name} must be a list of strings")
    if not isinstance(cfg.check.chunk_size_kb, int) or cfg.check.chunk_size_kb < 1:
        raise ConfigError("check.chunk_size_kb must be a positive integer")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> EolGuardConfig:
    """Load, validate, and return an EolGuardConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = EolGuardConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = EolGuardConfig(
            version=raw.get("version", "1.0"),
            check=_build_section(raw, CheckConfig, "check"),
            policies=_build_section(raw, PoliciesConfig, "policies"),
            output=_build_section(raw, OutputConfig, "output"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
