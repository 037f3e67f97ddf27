"""
Git adapter — the diff provider.

Lists files with uncommitted modifications. Uses the git CLI, never a
library binding. A failing diff is fatal: a conflict decision made on a
partial change set could let the generator destroy manual edits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from litguard.adapters.base import Adapter
from litguard.adapters.shell.command import CommandRunner
from litguard.core.models.project import DEFAULT_DIFF_COMMAND

logger = logging.getLogger(__name__)


class GitAdapter(Adapter):
    """Version-control queries needed by the guard."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        diff_command: list[str] | None = None,
    ):
        super().__init__(runner)
        self.diff_command = list(diff_command or DEFAULT_DIFF_COMMAND)

    @property
    def name(self) -> str:
        return "git"

    @property
    def binary(self) -> str:
        return self.diff_command[0]

    def diff_names(self, project_root: Path) -> str:
        """Raw name-only listing of files with uncommitted edits, staged or not.

        Raises:
            ExternalProcessFailure: git could not run or exited non-zero.
        """
        return self.runner.run(self.diff_command, cwd=project_root).check().stdout
