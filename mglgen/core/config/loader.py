"""
Configuration loader — reads codegen.yml into a CodegenConfig.

The file is optional. When none is found the defaults describe the
stock mgl32 → mgl64 setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from mglgen.core.models.config import CodegenConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "codegen.yml"


class ConfigError(Exception):
    """Raised when codegen configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for codegen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to codegen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> CodegenConfig:
    """Load and validate codegen configuration.

    Args:
        path: Explicit path to codegen.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated CodegenConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return CodegenConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading codegen config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return CodegenConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "codegen" key or be flat
    if "codegen" in data:
        data = data["codegen"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'codegen' in {path}")

    try:
        config = CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid codegen configuration in {path}: {e}") from e

    logger.info("Loaded codegen config from %s", path)
    return config
