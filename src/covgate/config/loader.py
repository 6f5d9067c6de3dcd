"""Load and merge configuration from .covgate.toml, action inputs, and env vars."""

from __future__ import annotations

import dataclasses
import logging
import math
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import yaml

from covgate.comparison.exclusion import split_list
from covgate.config.schema import (
    DEFAULT_GENERAL_TOLERANCE,
    DEFAULT_NEW_FILE_THRESHOLD,
    DEFAULT_SINGLE_FILE_TOLERANCE,
    OUTPUT_FORMATS,
    CIConfig,
    CovGateConfig,
    ExcludeConfig,
    InputConfig,
    OutputConfig,
    ToleranceConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".covgate.toml"


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


def _parse_file(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse {path}: expected a table at the top level")
    return data


def parse_number(raw: Optional[str], default: float) -> float:
    """Parse a numeric input, silently falling back to *default*."""
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _input(env: Mapping[str, str], name: str) -> Optional[str]:
    """Read a GitHub Actions input (``INPUT_<NAME>``); blank counts as unset."""
    value = env.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    return value or None


def _merge_action_inputs(cfg: CovGateConfig, env: Mapping[str, str]) -> None:
    """Apply the action's ``with:`` inputs."""
    tol = cfg.tolerance
    if (raw := _input(env, "generalCoverageTolerance")) is not None:
        tol.general_coverage_tolerance = parse_number(raw, DEFAULT_GENERAL_TOLERANCE)
    if (raw := _input(env, "singleLineCoverageTolerance")) is not None:
        tol.single_line_coverage_tolerance = parse_number(raw, DEFAULT_SINGLE_FILE_TOLERANCE)
    if (raw := _input(env, "newFileCoverageThreshold")) is not None:
        tol.new_file_coverage_threshold = parse_number(raw, DEFAULT_NEW_FILE_THRESHOLD)
    if (raw := _input(env, "ignoredPaths")) is not None:
        cfg.exclude.ignored_paths.extend(split_list(raw))
    if (raw := _input(env, "excludeFilePatterns")) is not None:
        cfg.exclude.file_patterns.extend(split_list(raw))


def _merge_env_overrides(cfg: CovGateConfig, env: Mapping[str, str]) -> None:
    """Apply CI_COVGATE_* environment variable overrides."""
    if val := env.get("CI_COVGATE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := env.get("CI_COVGATE_BASE"):
        cfg.input.base_path = val
    if val := env.get("CI_COVGATE_CANDIDATE"):
        cfg.input.candidate_path = val
    if val := env.get("CI_COVGATE_FAIL_ON_ISSUES"):
        cfg.ci.fail_on_issues = _truthy(val)


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a config section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Section [{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _coerce_tolerance(tol: ToleranceConfig) -> None:
    """Numbers in the file get the same lenient treatment as action inputs."""
    for f in dataclasses.fields(ToleranceConfig):
        value = getattr(tol, f.name)
        raw = None if isinstance(value, bool) else str(value)
        setattr(tol, f.name, parse_number(raw, f.default))


def _coerce_exclude(exclude: ExcludeConfig) -> None:
    """Accept either a list or a comma-separated string for each exclude key."""
    for name in ("ignored_paths", "file_patterns"):
        value = getattr(exclude, name)
        if isinstance(value, str):
            value = split_list(value)
        setattr(exclude, name, [str(v).strip() for v in value if str(v).strip()])


def log_config(cfg: CovGateConfig) -> None:
    """Log the effective configuration."""
    tol = cfg.tolerance
    logger.info("General coverage tolerance: %.2f%%", tol.general_coverage_tolerance)
    logger.info("Single file coverage tolerance: %.2f%%", tol.single_line_coverage_tolerance)
    logger.info("New file coverage threshold: %.2f%%", tol.new_file_coverage_threshold)
    for path in cfg.exclude.ignored_paths:
        logger.info("Ignoring files in %s", path)
    for pattern in cfg.exclude.file_patterns:
        logger.info("Excluding files matching pattern: %s", pattern)


def load_config(
    root: Path,
    config_override: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> CovGateConfig:
    """Load, validate, and return a CovGateConfig.

    Precedence, lowest first: defaults, config file, action inputs,
    ``CI_COVGATE_*`` variables.
    """
    env = os.environ if env is None else env
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = CovGateConfig()
    else:
        raw = _parse_file(config_path)
        try:
            cfg = CovGateConfig(
                version=str(raw.get("version", "1.0")),
                tolerance=_build_section(raw, ToleranceConfig, "tolerance"),
                exclude=_build_section(raw, ExcludeConfig, "exclude"),
                input=_build_section(raw, InputConfig, "input"),
                output=_build_section(raw, OutputConfig, "output"),
                ci=_build_section(raw, CIConfig, "ci"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _coerce_tolerance(cfg.tolerance)
        _coerce_exclude(cfg.exclude)
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format in {config_path}: {cfg.output.format}")
        logger.debug("Loaded config from %s", config_path)

    _merge_action_inputs(cfg, env)
    _merge_env_overrides(cfg, env)
    return cfg
