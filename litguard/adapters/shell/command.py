"""
Shell command runner — execute external commands and capture output.

This is the most fundamental piece: every adapter runs its tool through
here. Commands are run synchronously, one child process per call, with
stdout/stderr captured as text. A non-empty stderr is forwarded to the
operator as a diagnostic but never treated as failure by itself; the
exit code is returned to the caller, who decides what is fatal.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from litguard.core.errors import ExternalProcessFailure
from litguard.core.models.command import CommandResult

logger = logging.getLogger(__name__)


class CommandRunner:
    """Run commands and return a ``CommandResult``.

    Args:
        timeout: Seconds before a command is abandoned (None = wait forever).
        echo_stderr: Forward non-empty stderr to the console log.
    """

    def __init__(self, timeout: float | None = None, echo_stderr: bool = True):
        self.timeout = timeout
        self.echo_stderr = echo_stderr

    def run(
        self,
        argv: Sequence[str],
        cwd: Path | str | None = None,
        echo_stderr: bool | None = None,
    ) -> CommandResult:
        """Execute ``argv`` in ``cwd`` and wait for it to finish.

        Raises:
            ExternalProcessFailure: The command could not be started
                (missing binary or working directory) or timed out.
        """
        argv = list(argv)
        workdir = str(cwd) if cwd is not None else None
        logger.debug("Executing: %s (cwd=%s)", " ".join(argv), workdir or ".")
        start = time.monotonic()

        try:
            proc = subprocess.run(
                argv,
                cwd=workdir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalProcessFailure(
                argv, None, f"timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise ExternalProcessFailure(argv, None, str(e)) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        result = CommandResult(
            argv=argv,
            cwd=workdir,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=elapsed_ms,
        )

        if echo_stderr is None:
            echo_stderr = self.echo_stderr
        if echo_stderr and result.stderr.strip():
            logger.warning("%s", result.stderr.rstrip())

        logger.debug(
            "%s exited with %d after %dms", argv[0], result.returncode, elapsed_ms
        )
        return result
