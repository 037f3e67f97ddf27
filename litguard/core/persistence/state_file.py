"""
State file persistence — atomic read/write of the build state token.

The state is a single bare token (see ``BuildState``) in ``.litstate``
at the repository root. Reads never fail: a missing, unreadable or
unrecognized file means the history is unknown, and unknown history is
treated as manual code changes. Writes are atomic (write to temp file,
then rename).
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from litguard.core.models.state import BuildState

logger = logging.getLogger(__name__)

# Default state file (relative to project root)
DEFAULT_STATE_FILE = ".litstate"

# Assumed whenever the persisted state cannot be trusted
FALLBACK_STATE = BuildState.MANUAL_CHANGES


def default_state_path(project_root: Path) -> Path:
    """Get the default state file path for a project."""
    return project_root / DEFAULT_STATE_FILE


def load_state(path: Path) -> BuildState:
    """Load the build state from ``path``.

    Returns:
        The persisted BuildState, or ``manual code changes`` if the file
        is missing, unreadable or holds an unknown token.
    """
    if not path.is_file():
        logger.info("No state file at %s — assuming %s", path, FALLBACK_STATE)
        return FALLBACK_STATE

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read state from %s: %s — assuming %s", path, e, FALLBACK_STATE)
        return FALLBACK_STATE

    state = BuildState.parse(raw)
    if state is None:
        logger.warning("Unknown state %r in %s — assuming %s", raw.strip(), path, FALLBACK_STATE)
        return FALLBACK_STATE

    logger.debug("Loaded state %r from %s", state.value, path)
    return state


def save_state(state: BuildState, path: Path) -> None:
    """Save the build state token to ``path`` (atomic write).

    The file holds exactly the token, without a trailing newline.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".litstate_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(state.value)
            tmp.replace(path)
            logger.debug("State %r saved to %s", state.value, path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save state to %s: %s", path, e)
        raise


class StateStore:
    """The persisted build state behind a load/save interface."""

    def __init__(self, path: Path):
        self.path = path

    @classmethod
    def for_project(cls, project_root: Path, state_file: str = DEFAULT_STATE_FILE) -> StateStore:
        return cls(project_root / state_file)

    def load(self) -> BuildState:
        return load_state(self.path)

    def save(self, state: BuildState) -> None:
        save_state(state, self.path)

    def __repr__(self) -> str:
        return f"<StateStore path={str(self.path)!r}>"
