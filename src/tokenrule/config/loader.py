"""Load configuration from .tokenrule.toml and TOKENRULE_* env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from tokenrule.config.schema import (
    LOG_LEVELS,
    DraftConfig,
    LoggingConfig,
    OutputConfig,
    StoreConfig,
    TokenRuleConfig,
)

CONFIG_FILENAME = ".tokenrule.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate_draft(draft: DraftConfig) -> None:
    if draft.expression_type not in ("regular", "literal"):
        raise ConfigError(f"Invalid draft.expression_type: {draft.expression_type!r}")
    if draft.case_sensitivity not in ("match", "ignore", "match-unicode"):
        raise ConfigError(f"Invalid draft.case_sensitivity: {draft.case_sensitivity!r}")
    for name in ("token_range_from", "token_range_to"):
        value = getattr(draft, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"draft.{name} must be an integer")


def _merge_env_overrides(cfg: TokenRuleConfig) -> None:
    """Apply TOKENRULE_* environment variable overrides."""
    if val := os.environ.get("TOKENRULE_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("TOKENRULE_STORE"):
        cfg.store.path = val
    if val := os.environ.get("TOKENRULE_LOG_LEVEL"):
        if val.upper() in LOG_LEVELS:
            cfg.logging.level = val.upper()


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> TokenRuleConfig:
    """Load, validate, and return a TokenRuleConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = TokenRuleConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = TokenRuleConfig(
                version=raw.get("version", "1.0"),
                draft=_build_section(raw, DraftConfig, "draft"),
                store=_build_section(raw, StoreConfig, "store"),
                output=_build_section(raw, OutputConfig, "output"),
                logging=_build_section(raw, LoggingConfig, "logging"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _validate_draft(cfg.draft)
        if cfg.output.format not in ("terminal", "json"):
            raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")

    _merge_env_overrides(cfg)
    return cfg
