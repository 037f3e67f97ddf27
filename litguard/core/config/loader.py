"""
Configuration loader — reads litguard.yml into the Project model.

The repository root is the directory holding litguard.yml. Without a
config file the current directory is the root and the built-in
defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from litguard.core.errors import ConfigError
from litguard.core.models.project import Project

logger = logging.getLogger(__name__)

# Default config filename
PROJECT_CONFIG_FILE = "litguard.yml"


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Search for litguard.yml starting from the given directory, walking up.

    This allows running commands from subdirectories and still finding
    the repository root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to litguard.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_project(path: Path) -> Project:
    """Load and validate litguard.yml.

    An empty file yields the default project.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        project = Project.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded project '%s' with %d literate source(s)", project.name, len(project.sources))
    return project


def project_root(config_path: Path) -> Path:
    """Get the repository root from a config file path."""
    return config_path.parent.resolve()


def resolve_project(config_path: Path | None = None) -> tuple[Project, Path]:
    """Load the project and its root, falling back to defaults in cwd.

    Raises:
        ConfigError: If an explicit or discovered config file is invalid.
    """
    if config_path is None:
        config_path = find_project_file()

    if config_path is None:
        root = Path.cwd().resolve()
        logger.info("No %s found — using defaults in %s", PROJECT_CONFIG_FILE, root)
        return Project(), root

    return load_project(config_path), project_root(config_path)
