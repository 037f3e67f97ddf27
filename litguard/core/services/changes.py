"""
Change-set collection — which files carry uncommitted edits?

The default diff command emits NUL-separated names (``-z``), which git
never quotes. Newline-separated listings from a custom ``diff_command``
may still carry git's C-style quoting (``core.quotePath``) and are
unquoted here so they compare equal to the generator's paths.
"""

from __future__ import annotations

import logging
from pathlib import Path

from litguard.adapters.vcs.git import GitAdapter

logger = logging.getLogger(__name__)


def unquote_path(name: str) -> str:
    """Undo git's quoting of ``"src/gr\\303\\274n.rs"`` style names."""
    if len(name) < 2 or not (name.startswith('"') and name.endswith('"')):
        return name
    # octal escapes are UTF-8 bytes; unescaped text is re-encoded so both agree
    raw = name[1:-1].encode("utf-8").decode("unicode_escape")
    return raw.encode("latin-1").decode("utf-8", errors="replace")


def parse_name_only(output: str) -> frozenset[str]:
    """Turn a name-only diff listing into a set of paths.

    NUL-separated output is taken verbatim; line-separated output is
    trimmed and unquoted. Empty entries are dropped, so an empty
    listing is the empty set.
    """
    if "\0" in output:
        return frozenset(name for name in output.split("\0") if name.strip())
    return frozenset(
        unquote_path(line.strip()) for line in output.splitlines() if line.strip()
    )


def collect_modified_files(git: GitAdapter, project_root: Path) -> frozenset[str]:
    """Run the diff provider once and return the modified paths."""
    modified = parse_name_only(git.diff_names(project_root))
    logger.debug("%d file(s) modified in %s", len(modified), project_root)
    return modified
