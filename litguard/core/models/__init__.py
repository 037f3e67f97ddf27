"""
Domain models — Pydantic types for litguard.

All models are re-exported here for convenient access:

    from litguard.core.models import Project, LiterateSource, BuildState, CommandResult
"""

from litguard.core.models.command import CommandResult
from litguard.core.models.project import LiterateSource, Project, default_sources
from litguard.core.models.state import BuildState

__all__ = [
    "BuildState",
    "CommandResult",
    "LiterateSource",
    "Project",
    "default_sources",
]
