"""
Config check use case — validate litguard.yml and report issues.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from litguard.core.config.loader import (
    PROJECT_CONFIG_FILE,
    find_project_file,
    load_project,
    project_root,
)
from litguard.core.errors import ConfigError
from litguard.core.models.project import Project


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    project: Project | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.project.name if self.project else None,
            "source_count": len(self.project.sources) if self.project else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate project configuration and report issues.

    Args:
        config_path: Optional explicit path to litguard.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_project_file()

    if config_path is None:
        result.errors.append(f"No {PROJECT_CONFIG_FILE} found.")
        return result

    result.config_path = config_path

    try:
        project = load_project(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.project = project
    result.valid = True
    root = project_root(config_path)

    # ── Warnings (non-fatal) ─────────────────────────────────────
    if not project.sources:
        result.warnings.append("No literate sources configured; the guard has nothing to check")

    for source in project.sources:
        if not (root / source.path).is_file():
            result.warnings.append(f"Literate source '{source.path}' does not exist")
        elif source.workdir and not (root / source.workdir).is_dir():
            result.warnings.append(f"Workdir '{source.workdir}' of '{source.path}' does not exist")

    for tool in (project.generator, project.diff_command[0]):
        if shutil.which(tool) is None:
            result.warnings.append(f"'{tool}' is not on PATH")
    if project.test_command and shutil.which(project.test_command[0]) is None:
        result.warnings.append(f"'{project.test_command[0]}' is not on PATH")

    return result
