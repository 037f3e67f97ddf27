"""
CommandResult — what an external command left behind.

The shell runner returns one of these for every process it spawns.
Callers decide whether a non-zero exit is fatal by calling ``check()``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from litguard.core.errors import ExternalProcessFailure


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class CommandResult(BaseModel):
    """Captured outcome of one external command."""

    argv: list[str]
    cwd: str | None = None
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def command(self) -> str:
        return " ".join(self.argv)

    def check(self) -> CommandResult:
        """Return self, or raise ExternalProcessFailure on a non-zero exit."""
        if not self.ok:
            raise ExternalProcessFailure(self.argv, self.returncode, self.stderr)
        return self
