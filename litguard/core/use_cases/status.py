"""
Status use case — show the configured sources and the persisted state.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from litguard.core.config.loader import find_project_file, resolve_project
from litguard.core.errors import LitguardError
from litguard.core.models.project import Project
from litguard.core.models.state import BuildState
from litguard.core.persistence.state_file import StateStore


@dataclass
class StatusResult:
    """Project status summary."""

    project: Project | None = None
    project_root: Path | None = None
    config_path: Path | None = None
    state_path: Path | None = None
    state_file_exists: bool = False
    state: BuildState | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}

        assert self.project is not None
        return {
            "project": {
                "name": self.project.name,
                "root": str(self.project_root),
                "config": str(self.config_path) if self.config_path else None,
                "generator": self.project.generator,
            },
            "state": {
                "file": str(self.state_path),
                "exists": self.state_file_exists,
                "value": self.state.value if self.state else None,
            },
            "sources": [
                {
                    "path": s.path,
                    "workdir": s.workdir,
                    "output": s.output,
                    "generate": s.generate,
                    "present": bool(self.project_root and (self.project_root / s.path).is_file()),
                }
                for s in self.project.sources
            ],
        }


def get_status(config_path: Path | None = None) -> StatusResult:
    """Load configuration and the persisted build state."""
    result = StatusResult()

    if config_path is None:
        config_path = find_project_file()
    result.config_path = config_path

    try:
        project, root = resolve_project(config_path)
    except LitguardError as e:
        result.error = str(e)
        return result

    result.project = project
    result.project_root = root

    store = StateStore.for_project(root, project.state_file)
    result.state_path = store.path
    result.state_file_exists = store.path.is_file()
    result.state = store.load()
    return result
