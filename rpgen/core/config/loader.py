"""
Configuration loader — reads rust-project-gen.yml into GeneratorConfig.

The file is optional.  Without it the generator runs with the pinned
defaults from ``rpgen.core.models.config``.  When present, it is read as
YAML, validated against the Pydantic schema, and any problem is fatal.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from rpgen.core.errors import ConfigError
from rpgen.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "rust-project-gen.yml"

__all__ = ["CONFIG_FILE", "ConfigError", "find_config_file", "load_config"]


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Look for rust-project-gen.yml in the given directory (default: cwd).

    Unlike a project root search this does not walk upward: every path in
    the config is relative to the directory the generator runs in.
    """
    candidate = (start_dir or Path.cwd()) / CONFIG_FILE
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to a config file. If None, uses
            rust-project-gen.yml in the working directory when it exists,
            otherwise the built-in defaults.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return GeneratorConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = GeneratorConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info(
        "Loaded config from %s (exercises=%s, runtime=%s)",
        path, config.exercises_root, config.runtime.package_dir,
    )
    return config
