"""Repository configuration for hookscope.

Reads the .hookscope/config.yaml file at the repository root. The file is
optional; missing keys fall back to DEFAULT_CONFIG. Nothing here writes to
the repository.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from hookscope.diagnostics import DiagnosticPattern


class ConfigError(Exception):
    """Raised when the repository configuration cannot be loaded."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    "git": {
        # Seconds to wait for a git query; null waits forever
        "timeout": None,
    },
    "patterns": {
        "xmllint": r"^(?P<file>[^:]+):(?P<line>\d+):",
    },
}


class GitSettings(BaseModel):
    """Settings for git queries."""

    timeout: Optional[float] = Field(default=None, gt=0)


class HookscopeConfig(BaseModel):
    """Validated repository configuration."""

    git: GitSettings = GitSettings()
    patterns: dict[str, str] = {}


def get_config_dir(repo_root: Path) -> Path:
    """Get the repository config directory.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hookscope/
    """
    return repo_root / ".hookscope"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hookscope/config.yaml
    """
    return get_config_dir(repo_root) / "config.yaml"


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(repo_root: Path) -> HookscopeConfig:
    """Load the hookscope configuration from config.yaml.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The configuration, with defaults for anything not set.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values.
    """
    config_file = get_config_file(repo_root)

    raw: dict[str, Any] = {}
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {config_file}: {e}")
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")

    try:
        return HookscopeConfig.model_validate(_merge(DEFAULT_CONFIG, raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}:\n{e}")


def get_git_timeout(repo_root: Path) -> Optional[float]:
    """Get the git query timeout in seconds, or None for no timeout."""
    return load_config(repo_root).git.timeout


def get_pattern(repo_root: Path, name: str) -> DiagnosticPattern:
    """Get a named diagnostic pattern from config.

    Args:
        repo_root: The root directory of the git repository.
        name: Pattern name (e.g., "xmllint").

    Returns:
        The compiled DiagnosticPattern.

    Raises:
        ConfigError: If no pattern with that name is configured.
        PatternError: If the configured pattern is malformed.
    """
    patterns = load_config(repo_root).patterns
    if name not in patterns:
        available = ", ".join(sorted(patterns)) or "none"
        raise ConfigError(f"Unknown pattern '{name}'. Available: {available}")
    return DiagnosticPattern(patterns[name])
