"""
Lisi adapter — the literate-source code generator.

Two invocations are supported:

    lisi --dry-run <document>        report files that would be written (JSON)
    lisi [-o <output>] <document>    write them

Both run in the source's working directory with the document path
relative to it. Any non-zero exit is raised as ``ExternalProcessFailure``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from litguard.adapters.base import Adapter
from litguard.adapters.shell.command import CommandRunner
from litguard.core.models.command import CommandResult
from litguard.core.models.project import LiterateSource

logger = logging.getLogger(__name__)


class LisiAdapter(Adapter):
    """Drives the generator for one literate source at a time."""

    def __init__(self, runner: CommandRunner | None = None, executable: str = "lisi"):
        super().__init__(runner)
        self.executable = executable

    @property
    def name(self) -> str:
        return "lisi"

    @property
    def binary(self) -> str:
        return self.executable

    def dry_run(self, source: LiterateSource, project_root: Path) -> CommandResult:
        """Ask the generator which files it would write for ``source``."""
        argv = [self.executable, "--dry-run", source.document]
        return self.runner.run(argv, cwd=source.cwd(project_root)).check()

    def generate(self, source: LiterateSource, project_root: Path) -> CommandResult:
        """Regenerate the files derived from ``source``."""
        argv = [self.executable]
        if source.output:
            argv += ["-o", source.output]
        argv.append(source.document)
        logger.info("Generating from %s", source.path)
        return self.runner.run(argv, cwd=source.cwd(project_root)).check()
