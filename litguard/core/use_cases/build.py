"""
Build use case — guard, regenerate, test.

The full pipeline: run the guard, and only if it lets generation
proceed, regenerate every literate source marked ``generate`` and then
run the test suite. There is no rollback: a generator failure stops the
build before the tests, a failing test suite is reported as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from litguard.adapters.generator.lisi import LisiAdapter
from litguard.adapters.shell.command import CommandRunner
from litguard.adapters.shell.suite import SuiteAdapter
from litguard.core.config.loader import resolve_project
from litguard.core.errors import EXIT_OK, LitguardError
from litguard.core.models.command import CommandResult
from litguard.core.use_cases.check import CheckResult, guard

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a guarded build."""

    check: CheckResult | None = None
    generated: list[CommandResult] = field(default_factory=list)
    tests: CommandResult | None = None
    error: str | None = None
    exit_code: int = EXIT_OK

    @property
    def blocked(self) -> bool:
        return self.check is not None and self.check.blocked

    @property
    def tests_passed(self) -> bool | None:
        return self.tests.ok if self.tests else None

    def to_dict(self) -> dict:
        result: dict = {"exit_code": self.exit_code}
        if self.check:
            result["check"] = self.check.to_dict()
        if self.error:
            result["error"] = self.error
        result["generated"] = [
            {"command": r.command, "cwd": r.cwd, "returncode": r.returncode}
            for r in self.generated
        ]
        if self.tests:
            result["tests"] = {
                "command": self.tests.command,
                "returncode": self.tests.returncode,
                "passed": self.tests.ok,
                "duration_ms": self.tests.duration_ms,
            }
        return result


def run_build(
    config_path: Path | None = None,
    use_state: bool = True,
    run_tests: bool = True,
    runner: CommandRunner | None = None,
) -> BuildResult:
    """Run the guard and, if allowed, generation and the test suite.

    Args:
        config_path: Optional explicit path to litguard.yml.
        use_state: Read and persist the build state file.
        run_tests: Run the configured test command after generation.
        runner: Optional pre-configured command runner.

    Returns:
        BuildResult; ``exit_code`` is what the process should exit with.
    """
    result = BuildResult()

    # ── Load config ──────────────────────────────────────────────
    try:
        project, root = resolve_project(config_path)
    except LitguardError as e:
        result.error = str(e)
        result.exit_code = e.exit_code
        return result

    runner = runner or CommandRunner(timeout=project.timeout)

    # ── Guard ────────────────────────────────────────────────────
    try:
        result.check = guard(project, root, runner=runner, use_state=use_state)
    except LitguardError as e:
        logger.debug("Guard failed", exc_info=True)
        result.error = str(e)
        result.exit_code = e.exit_code
        return result

    if result.check.blocked:
        result.exit_code = result.check.exit_code
        return result

    # ── Generate ─────────────────────────────────────────────────
    lisi = LisiAdapter(runner, executable=project.generator)
    logger.info("Start generating source files ...")
    try:
        for source in project.sources:
            if not source.generate:
                logger.debug("Skipping %s (dry-run only)", source.path)
                continue
            result.generated.append(lisi.generate(source, root))
    except LitguardError as e:
        result.error = str(e)
        result.exit_code = e.exit_code
        return result
    logger.info("Generating source files done!")

    # ── Test ─────────────────────────────────────────────────────
    if run_tests and project.test_command:
        try:
            result.tests = SuiteAdapter(project.test_command, runner).run(root)
        except LitguardError as e:
            # exit code unaffected
            result.error = str(e)

    return result
