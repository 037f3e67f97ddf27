"""
Adapter base — the contract between litguard and the tools it drives.

Each adapter wraps one external collaborator (git, the generator, the
test runner). Adapters never spawn processes themselves; they build an
argv and hand it to the shared ``CommandRunner`` so that stderr echo,
timeouts and missing-binary handling behave the same everywhere.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod

from litguard.adapters.shell.command import CommandRunner


class Adapter(ABC):
    """Abstract base class for all adapters.

    To create a new adapter:
        1. Subclass Adapter
        2. Implement name and binary
        3. Add methods that build argv lists and call ``self.runner.run``
    """

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'git', 'lisi')."""

    @property
    @abstractmethod
    def binary(self) -> str:
        """The executable this adapter invokes."""

    def is_available(self) -> bool:
        """Check if the underlying executable is on PATH.

        Should be fast and never raise.
        """
        return shutil.which(self.binary) is not None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
