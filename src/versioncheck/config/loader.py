"""Load and merge configuration from the config file, action inputs, and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import yaml

from versioncheck.config.schema import (
    ASSUME_SAME_VERSION_VALUES,
    STATIC_CHECKING_VALUES,
    CheckConfig,
    GitHubContext,
    VersionCheckConfig,
)

CONFIG_FILE_NAMES = (".versioncheck.toml", ".versioncheck.yml", ".versioncheck.yaml")

_TRUTHY = ("true", "1", "yes", "on")


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or holds an unknown value."""


def find_config_file(workspace: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    for name in CONFIG_FILE_NAMES:
        candidate = workspace / name
        if candidate.is_file():
            return candidate
    return None


def _parse_file(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix in (".yml", ".yaml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except (OSError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse {path}: top level must be a table")
    return data


def _input(env: Mapping[str, str], name: str) -> Optional[str]:
    """Read an action input; the runner keeps hyphens in the variable name."""
    upper = name.upper()
    for key in (f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"):
        val = env.get(key)
        if val is not None and val.strip():
            return val.strip()
    return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _apply(check: CheckConfig, values: Mapping[str, Any]) -> None:
    """Copy known keys onto *check*. Keys may use hyphens or underscores."""
    for raw_key, value in values.items():
        if value is None:
            continue
        key = str(raw_key).replace("-", "_")
        if key == "diff_search":
            check.diff_search = _as_bool(value)
        elif key in ("file_name", "file_url", "assume_same_version", "static_checking", "token", "version_key"):
            setattr(check, key, str(value))


def _merge_input_overrides(check: CheckConfig, env: Mapping[str, str]) -> None:
    """Apply INPUT_* environment variables (GitHub Actions inputs)."""
    names = (
        "file-name",
        "file-url",
        "diff-search",
        "assume-same-version",
        "static-checking",
        "token",
    )
    _apply(check, {name: _input(env, name) for name in names})


def validate(cfg: VersionCheckConfig) -> None:
    """Raise ConfigError for option values outside their allowed set."""
    check = cfg.check
    if check.assume_same_version is not None and check.assume_same_version not in ASSUME_SAME_VERSION_VALUES:
        raise ConfigError(
            f"Invalid assume-same-version input: {check.assume_same_version} "
            f"(expected one of: {', '.join(ASSUME_SAME_VERSION_VALUES)})"
        )
    if check.static_checking is not None and check.static_checking not in STATIC_CHECKING_VALUES:
        raise ConfigError(
            f"Invalid static-checking input: {check.static_checking} "
            f"(expected one of: {', '.join(STATIC_CHECKING_VALUES)})"
        )
    if check.static_checking is not None and not check.file_url:
        raise ConfigError("Invalid static-checking input: a file-url is needed to compare against")
    if not check.file_name:
        raise ConfigError("Invalid file-name input: empty value")


def github_context(env: Mapping[str, str]) -> GitHubContext:
    return GitHubContext(
        workspace=env.get("GITHUB_WORKSPACE") or ".",
        event_path=env.get("GITHUB_EVENT_PATH") or None,
        event_name=env.get("GITHUB_EVENT_NAME") or None,
        repository=env.get("GITHUB_REPOSITORY") or None,
        api_url=env.get("GITHUB_API_URL") or "https://api.github.com",
        output_file=env.get("GITHUB_OUTPUT") or None,
    )


def load_config(
    workspace: Optional[Path] = None,
    config_override: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> VersionCheckConfig:
    """Load, validate, and return a VersionCheckConfig.

    Precedence, lowest first: defaults, config file, INPUT_* variables,
    *overrides* (CLI flags).
    """
    env = os.environ if env is None else env
    context = github_context(env)
    root = workspace or Path(context.workspace)
    context.workspace = str(root)

    check = CheckConfig()
    config_path = find_config_file(root, config_override)
    if config_path is not None:
        raw = _parse_file(config_path)
        _apply(check, raw.get("check", {}))

    _merge_input_overrides(check, env)
    if overrides:
        _apply(check, overrides)

    cfg = VersionCheckConfig(check=check, github=context)
    validate(cfg)
    return cfg
