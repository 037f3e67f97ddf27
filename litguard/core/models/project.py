"""
Project model — the literate sources litguard guards and the tools it drives.

Loaded from litguard.yml. When no config file exists the defaults below
describe the asciidoctrine/lisi repository layout.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field, field_validator, model_validator

# Staged and unstaged edits against HEAD, relative to the working
# directory, NUL-separated so git neither quotes nor escapes paths.
DEFAULT_DIFF_COMMAND = ["git", "diff", "HEAD", "--name-only", "--relative", "-z"]


class LiterateSource(BaseModel):
    """A literate document and the directory the generator runs in.

    ``path`` is relative to the repository root. ``workdir`` is the
    directory (also repository-relative) the generator is started in;
    every path the generator reports for this source is relative to it.
    """

    path: str
    workdir: str = ""
    output: str | None = None   # passed as ``-o`` on real generation
    generate: bool = True       # False = dry-run checked only

    @field_validator("path", "workdir")
    @classmethod
    def _relative_posix(cls, value: str) -> str:
        value = value.strip().replace("\\", "/")
        if value.startswith("/"):
            raise ValueError(f"must be relative to the repository root: {value!r}")
        while value.startswith("./"):
            value = value[2:]
        return value.rstrip("/")

    @model_validator(mode="after")
    def _path_inside_workdir(self) -> LiterateSource:
        if not self.path:
            raise ValueError("source path must not be empty")
        if self.workdir and (
            self.path == self.workdir
            or not PurePosixPath(self.path).is_relative_to(self.workdir)
        ):
            raise ValueError(
                f"source {self.path!r} is not inside its workdir {self.workdir!r}"
            )
        return self

    @property
    def prefix(self) -> str:
        """Workdir normalized to end with exactly one separator ('' for root)."""
        if not self.workdir:
            return ""
        return self.workdir.rstrip("/") + "/"

    @property
    def document(self) -> str:
        """The document path as the generator sees it, relative to workdir."""
        if not self.workdir:
            return self.path
        return str(PurePosixPath(self.path).relative_to(self.workdir))

    def cwd(self, project_root: Path) -> Path:
        """Absolute working directory for generator invocations."""
        return project_root / self.workdir if self.workdir else project_root


def default_sources() -> list[LiterateSource]:
    """Sources of the asciidoctrine/lisi repository."""
    return [
        LiterateSource(path="README.adoc", generate=False),
        LiterateSource(
            path="asciidoctrine/asciidoctrine.adoc",
            workdir="asciidoctrine",
            output="../docs/asciidoctrine/asciidoctrine.lisi.html",
        ),
        LiterateSource(path="lisi/lisi.adoc", workdir="lisi"),
    ]


class Project(BaseModel):
    """Root configuration — loaded from litguard.yml."""

    name: str = "litguard"
    state_file: str = ".litstate"
    generator: str = "lisi"
    diff_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DIFF_COMMAND)
    )
    test_command: list[str] = Field(
        default_factory=lambda: ["cargo", "test", "--color=always"]
    )
    timeout: float | None = None
    sources: list[LiterateSource] = Field(default_factory=default_sources)

    @field_validator("diff_command")
    @classmethod
    def _non_empty_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("diff_command must not be empty")
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @model_validator(mode="after")
    def _unique_sources(self) -> Project:
        seen: set[str] = set()
        for source in self.sources:
            if source.path in seen:
                raise ValueError(f"duplicate literate source: {source.path!r}")
            seen.add(source.path)
        return self

    @property
    def source_paths(self) -> frozenset[str]:
        """Repository-relative paths of every literate document."""
        return frozenset(s.path for s in self.sources)

    def get_source(self, path: str) -> LiterateSource | None:
        """Look up a literate source by its repository-relative path."""
        for source in self.sources:
            if source.path == path:
                return source
        return None

    def state_path(self, project_root: Path) -> Path:
        """Absolute location of the persisted build state."""
        return project_root / self.state_file
