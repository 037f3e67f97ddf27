"""
Check use case — run the guard without generating anything.

Loads the previous build state, collects the uncommitted change set and
the generator's dry-run answer, reconciles them and persists the new
state. The caller maps a ``Blocked`` decision to
``ERR_CONFLICTING_MODIFICATIONS``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from litguard.adapters.generator.lisi import LisiAdapter
from litguard.adapters.shell.command import CommandRunner
from litguard.adapters.vcs.git import GitAdapter
from litguard.core.config.loader import resolve_project
from litguard.core.engine.reconciler import Decision, reconcile
from litguard.core.errors import (
    ERR_CONFLICTING_MODIFICATIONS,
    EXIT_OK,
    LitguardError,
)
from litguard.core.models.project import Project
from litguard.core.models.state import BuildState
from litguard.core.persistence.state_file import StateStore
from litguard.core.services.changes import collect_modified_files
from litguard.core.services.dry_run import collect_dry_run

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Outcome of one guard run."""

    project: Project | None = None
    project_root: Path | None = None
    state_path: Path | None = None
    prior_state: BuildState | None = None
    modified: frozenset[str] = frozenset()
    would_write: dict[str, Any] = field(default_factory=dict)
    decision: Decision | None = None
    state_saved: bool = False
    error: str | None = None
    exit_code: int = EXIT_OK

    @property
    def blocked(self) -> bool:
        return self.decision is not None and self.decision.blocked

    @property
    def new_state(self) -> BuildState | None:
        return self.decision.new_state if self.decision else None

    def to_dict(self) -> dict:
        result: dict = {"exit_code": self.exit_code}
        if self.error:
            result["error"] = self.error
            return result

        result["project_name"] = self.project.name if self.project else ""
        result["project_root"] = str(self.project_root)
        result["state_file"] = str(self.state_path) if self.state_path else None
        result["prior_state"] = self.prior_state.value if self.prior_state else None
        result["modified"] = sorted(self.modified)
        result["would_write"] = sorted(self.would_write)
        result["state_saved"] = self.state_saved
        if self.decision:
            result.update(self.decision.to_dict())
        return result


def guard(
    project: Project,
    project_root: Path,
    runner: CommandRunner | None = None,
    use_state: bool = True,
) -> CheckResult:
    """Run the guard against ``project_root``.

    Args:
        project: Loaded configuration.
        project_root: Repository root; all reported paths are relative to it.
        runner: Command runner shared by all adapters.
        use_state: If False, ignore and never write the state file; prior
            state is then always ``manual code changes``.

    Raises:
        ExternalProcessFailure: git or the generator failed.
        MalformedDryRunOutput: The generator's dry-run answer was not JSON.
    """
    runner = runner or CommandRunner(timeout=project.timeout)
    git = GitAdapter(runner, diff_command=project.diff_command)
    lisi = LisiAdapter(runner, executable=project.generator)

    result = CheckResult(project=project, project_root=project_root)

    store = StateStore.for_project(project_root, project.state_file)
    if use_state:
        result.state_path = store.path
        result.prior_state = store.load()
    else:
        result.prior_state = BuildState.MANUAL_CHANGES

    result.modified = collect_modified_files(git, project_root)
    result.would_write = collect_dry_run(project.sources, lisi, project_root)

    decision = reconcile(
        result.modified,
        result.would_write,
        project.source_paths,
        result.prior_state,
    )
    result.decision = decision

    for path in sorted(decision.touched_sources):
        logger.info("Literate source modified: %s", path)

    if use_state:
        store.save(decision.new_state)
        result.state_saved = True

    if decision.blocked:
        logger.info("Blocked: %d conflicting file(s)", len(decision.conflicts))
        result.exit_code = ERR_CONFLICTING_MODIFICATIONS
    else:
        logger.info("Proceeding, state is now %r", decision.new_state.value)
    return result


def run_check(
    config_path: Path | None = None,
    use_state: bool = True,
    runner: CommandRunner | None = None,
) -> CheckResult:
    """Load configuration and run the guard, capturing failures in the result."""
    try:
        project, root = resolve_project(config_path)
    except LitguardError as e:
        return CheckResult(error=str(e), exit_code=e.exit_code)

    try:
        return guard(project, root, runner=runner, use_state=use_state)
    except LitguardError as e:
        logger.debug("Guard failed", exc_info=True)
        return CheckResult(
            project=project,
            project_root=root,
            error=str(e),
            exit_code=e.exit_code,
        )
