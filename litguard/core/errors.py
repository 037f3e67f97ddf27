"""
Error taxonomy and process exit codes.

Everything litguard raises on purpose derives from ``LitguardError`` so
entry points can catch the whole family in one place. A detected
conflict is NOT an error: it is the ``Blocked`` decision returned by
the reconciler.
"""

from __future__ import annotations

from collections.abc import Sequence

# ── Exit codes ──────────────────────────────────────────────────

EXIT_OK = 0
ERR_CONFLICTING_MODIFICATIONS = 1
ERR_EXTERNAL_PROCESS = 2
ERR_CONFIG = 3


class LitguardError(Exception):
    """Base class for all litguard failures."""

    exit_code: int = ERR_EXTERNAL_PROCESS


class ConfigError(LitguardError):
    """Raised when litguard.yml is invalid or unreadable."""

    exit_code = ERR_CONFIG


class ExternalProcessFailure(LitguardError):
    """An external command could not run or exited non-zero."""

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int | None,
        detail: str = "",
    ):
        self.argv = list(argv)
        self.returncode = returncode
        self.detail = detail.strip()
        command = " ".join(self.argv)
        if returncode is None:
            message = f"{command}: {self.detail or 'could not be executed'}"
        else:
            message = f"{command} exited with code {returncode}"
            if self.detail:
                message += f": {self.detail}"
        super().__init__(message)


class MalformedDryRunOutput(LitguardError):
    """The generator's dry-run output is not a JSON object."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Malformed dry-run output for {source}: {detail}")
