"""
Dry-run aggregation — which files would the generator write?

Runs the generator in dry-run mode once per literate source, parses
each JSON answer, and merges them into one mapping keyed by
repository-relative path. Values are the generator's own bookkeeping
and are never inspected.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from litguard.adapters.generator.lisi import LisiAdapter
from litguard.core.errors import MalformedDryRunOutput
from litguard.core.models.project import LiterateSource

logger = logging.getLogger(__name__)


def parse_dry_run(output: str, source: str) -> dict[str, Any]:
    """Parse one dry-run answer into a path → descriptor mapping.

    Raises:
        MalformedDryRunOutput: The output is not a JSON object.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise MalformedDryRunOutput(source, str(e)) from e

    if not isinstance(data, dict):
        raise MalformedDryRunOutput(
            source, f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def prefix_keys(mapping: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    """Rewrite every key as ``prefix/key`` with exactly one separator."""
    if not prefix:
        return dict(mapping)
    prefix = prefix.rstrip("/") + "/"
    return {prefix + key.lstrip("/"): value for key, value in mapping.items()}


def collect_dry_run(
    sources: Iterable[LiterateSource],
    generator: LisiAdapter,
    project_root: Path,
) -> dict[str, Any]:
    """Merge the dry-run results of all sources (later sources win on collisions).

    Raises:
        ExternalProcessFailure: The generator failed for a source.
        MalformedDryRunOutput: A dry-run answer could not be parsed.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        result = generator.dry_run(source, project_root)
        files = prefix_keys(parse_dry_run(result.stdout, source.path), source.prefix)
        logger.debug("%s would write %d file(s)", source.path, len(files))
        merged.update(files)
    return merged
