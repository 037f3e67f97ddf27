"""
BuildState — the persisted three-valued record of the last known change.

Stored as a bare token in the state file (``.litstate`` by default).
"""

from __future__ import annotations

from enum import Enum


class BuildState(str, Enum):
    """Where the working tree stands relative to its literate sources."""

    SYNC = "sync"
    LITERATE_CHANGES = "literate source changes"
    MANUAL_CHANGES = "manual code changes"

    @classmethod
    def parse(cls, raw: str) -> BuildState | None:
        """Map a persisted token to a state, or None if it is not one."""
        token = raw.strip()
        for state in cls:
            if state.value == token:
                return state
        return None

    def __str__(self) -> str:
        return self.value
