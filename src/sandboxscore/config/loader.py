"""Load and merge configuration from .sandboxscore.toml and env vars."""

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

from sandboxscore.config.defaults import CONFIG_FILENAME
from sandboxscore.config.schema import (
    OUTPUT_FORMATS,
    OutputConfig,
    SandboxScoreConfig,
    ScanConfig,
)
from sandboxscore.findings.loader import parse_categories
from sandboxscore.scoring.policy import Profile, ProfileError


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or names an unknown profile."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: SandboxScoreConfig) -> None:
    """Apply SANDBOXSCORE_* environment variable overrides."""
    if val := os.environ.get("SANDBOXSCORE_PROFILE"):
        cfg.scan.profile = val
    if val := os.environ.get("SANDBOXSCORE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    val = os.environ.get("SANDBOXSCORE_FAIL_ON")
    if val is not None:
        cfg.scan.fail_on = val
    if val := os.environ.get("SANDBOXSCORE_CATEGORIES"):
        cfg.scan.categories = parse_categories(val) or []


def validate_config(cfg: SandboxScoreConfig) -> SandboxScoreConfig:
    """Normalise the profile name; an unknown profile or an empty gate is a hard error."""
    try:
        cfg.scan.profile = Profile.parse(cfg.scan.profile).value
    except ProfileError as exc:
        raise ConfigError(str(exc)) from exc
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format '{cfg.output.format}'. Valid: {', '.join(OUTPUT_FORMATS)}"
        )
    if cfg.scan.fail_on is not None:
        if not isinstance(cfg.scan.fail_on, str) or not cfg.scan.fail_on.strip():
            raise ConfigError("fail_on must be a non-empty gate expression such as 'score>=50'")
    if isinstance(cfg.scan.categories, str):
        cfg.scan.categories = parse_categories(cfg.scan.categories) or []
    return cfg


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
    profile_override: Optional[str] = None,
) -> SandboxScoreConfig:
    """Load, validate, and return a SandboxScoreConfig.

    Precedence is *profile_override* (the --profile flag), then env vars, then
    the file. Only the winning profile is validated.
    """
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = SandboxScoreConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = SandboxScoreConfig(
                version=raw.get("version", "1.0"),
                scan=_build_section(raw, ScanConfig, "scan"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except (AttributeError, TypeError) as exc:
            raise ConfigError(f"Malformed section in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    if profile_override is not None:
        cfg.scan.profile = profile_override
    return validate_config(cfg)
