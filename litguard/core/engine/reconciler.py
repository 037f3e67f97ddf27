"""
Conflict reconciler — the decision core of the guard.

Given the files with uncommitted edits, the files the generator would
rewrite, the literate documents themselves and the previously persisted
state, decide whether generation may proceed and which state to record.

Decision table (evaluated in order):

    conflicts, prior == literate source changes  → proceed, literate source changes
    conflicts, any other prior                   → block,   manual code changes
    no conflicts, nothing modified               → proceed, sync
    no conflicts, no literate document touched   → proceed, sync
    no conflicts, literate document touched      → proceed, literate source changes

The reconciler is pure: it reads nothing, writes nothing and never
exits the process. Callers persist ``decision.new_state`` and map
``Blocked`` to ``ERR_CONFLICTING_MODIFICATIONS``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from litguard.core.models.state import BuildState


@dataclass(frozen=True)
class Proceed:
    """Generation may run; ``new_state`` is recorded first."""

    new_state: BuildState
    conflicts: frozenset[str] = frozenset()
    touched_sources: frozenset[str] = frozenset()

    blocked = False

    def to_dict(self) -> dict:
        return {
            "decision": "proceed",
            "new_state": self.new_state.value,
            "conflicts": sorted(self.conflicts),
            "touched_sources": sorted(self.touched_sources),
        }


@dataclass(frozen=True)
class Blocked:
    """Generation would destroy manual edits to ``conflicts``."""

    conflicts: frozenset[str]
    touched_sources: frozenset[str] = frozenset()
    new_state: BuildState = field(default=BuildState.MANUAL_CHANGES, init=False)

    blocked = True

    def to_dict(self) -> dict:
        return {
            "decision": "blocked",
            "new_state": self.new_state.value,
            "conflicts": sorted(self.conflicts),
            "touched_sources": sorted(self.touched_sources),
        }


Decision = Union[Proceed, Blocked]


def find_conflicts(modified: Iterable[str], would_write: Mapping[str, Any]) -> frozenset[str]:
    """Modified files that the generator would overwrite."""
    return frozenset(path for path in modified if path in would_write)


def reconcile(
    modified: frozenset[str],
    would_write: Mapping[str, Any],
    source_paths: Iterable[str],
    prior: BuildState,
) -> Decision:
    """Decide whether generation may proceed.

    Args:
        modified: Repository-relative paths with uncommitted edits.
        would_write: Merged dry-run result; only its keys are used.
        source_paths: Repository-relative paths of the literate documents.
        prior: Build state persisted by the previous run.
    """
    conflicts = find_conflicts(modified, would_write)
    touched = frozenset(modified) & frozenset(source_paths)

    if conflicts:
        if prior is BuildState.LITERATE_CHANGES:
            return Proceed(
                new_state=BuildState.LITERATE_CHANGES,
                conflicts=conflicts,
                touched_sources=touched,
            )
        return Blocked(conflicts=conflicts, touched_sources=touched)

    if not modified or not touched:
        return Proceed(new_state=BuildState.SYNC)
    return Proceed(new_state=BuildState.LITERATE_CHANGES, touched_sources=touched)
