"""
Test suite adapter — run the downstream test runner after generation.

The output is forwarded to the operator verbatim and never interpreted;
a failing suite does not undo the generation that preceded it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from litguard.adapters.base import Adapter
from litguard.adapters.shell.command import CommandRunner
from litguard.core.models.command import CommandResult

logger = logging.getLogger(__name__)


class SuiteAdapter(Adapter):
    """Runs the configured test command (``cargo test`` by default)."""

    def __init__(self, command: list[str], runner: CommandRunner | None = None):
        super().__init__(runner)
        if not command:
            raise ValueError("test command must not be empty")
        self.command = list(command)

    @property
    def name(self) -> str:
        return "tests"

    @property
    def binary(self) -> str:
        return self.command[0]

    def run(self, project_root: Path) -> CommandResult:
        """Run the suite in the repository root; the exit code is not checked."""
        result = self.runner.run(self.command, cwd=project_root)
        if not result.ok:
            logger.info("%s exited with %d", self.binary, result.returncode)
        return result
