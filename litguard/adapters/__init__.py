"""Adapters — bindings for the external tools litguard drives.

Public re-exports for convenient access.
"""

from litguard.adapters.base import Adapter
from litguard.adapters.generator.lisi import LisiAdapter
from litguard.adapters.shell.command import CommandRunner
from litguard.adapters.shell.suite import SuiteAdapter
from litguard.adapters.vcs.git import GitAdapter

__all__ = [
    "Adapter",
    "CommandRunner",
    "GitAdapter",
    "LisiAdapter",
    "SuiteAdapter",
]
