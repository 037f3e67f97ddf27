"""
Shared test fixtures and configuration.

No real git, lisi or cargo is needed: ``fake_tools`` patches
subprocess.run with a scripted stand-in for all three. Tests using the
``git_project`` fixture let a real git answer the diff query instead.
"""

import json
import logging
import shutil
import subprocess
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

RUN_TARGET = "litguard.adapters.shell.command.subprocess.run"

# The unpatched function, for tests that drive a real git
_REAL_RUN = subprocess.run

DEMO_CONFIG = textwrap.dedent("""\
    name: demo
    sources:
      - path: README.adoc
        generate: false
      - path: asciidoctrine/asciidoctrine.adoc
        workdir: asciidoctrine
        output: ../docs/asciidoctrine/asciidoctrine.lisi.html
      - path: lisi/lisi.adoc
        workdir: lisi
""")


class FakeTools:
    """Scripted stand-in for git, lisi and the test runner.

    ``modified`` is what the diff command reports (NUL-separated, as
    with ``-z``), unless ``real_git`` is set, in which case git runs
    for real. ``dry_runs`` maps the document argument of
    ``lisi --dry-run`` to its answer (a dict is JSON-encoded, a str is
    returned verbatim).
    """

    def __init__(self):
        self.modified: list[str] = []
        self.dry_runs: dict[str, object] = {}
        self.returncodes: dict[str, int] = {}
        self.stderr: dict[str, str] = {}
        self.test_output = "test result: ok. 3 passed\n"
        self.calls: list[tuple[list[str], str | None]] = []
        self.real_git = False

    def __call__(self, argv, cwd=None, **kwargs):
        argv = list(argv)
        self.calls.append((argv, cwd))
        tool = argv[0]
        key = tool
        if tool == "git" and self.real_git:
            return _REAL_RUN(argv, cwd=cwd, **kwargs)
        if tool == "git":
            stdout = "".join(f"{path}\0" for path in self.modified)
        elif tool == "lisi" and "--dry-run" in argv:
            key = "lisi --dry-run"
            answer = self.dry_runs.get(argv[-1], {})
            stdout = answer if isinstance(answer, str) else json.dumps(answer)
        elif tool == "lisi":
            stdout = ""
        else:
            stdout = self.test_output
        return subprocess.CompletedProcess(
            args=argv,
            returncode=self.returncodes.get(key, 0),
            stdout=stdout,
            stderr=self.stderr.get(key, ""),
        )

    def commands(self, tool: str) -> list[list[str]]:
        """All argv lists sent to ``tool``."""
        return [argv for argv, _ in self.calls if argv[0] == tool]

    def generate_calls(self) -> list[tuple[list[str], str | None]]:
        """Real (non dry-run) generator invocations with their cwd."""
        return [
            (argv, cwd) for argv, cwd in self.calls
            if argv[0] == "lisi" and "--dry-run" not in argv
        ]


@pytest.fixture
def fake_tools():
    """Patch subprocess.run with a FakeTools instance."""
    tools = FakeTools()
    with patch(RUN_TARGET, side_effect=tools):
        yield tools


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository root with litguard.yml and the demo literate sources."""
    (tmp_path / "litguard.yml").write_text(DEMO_CONFIG)
    (tmp_path / "README.adoc").write_text("= Demo\n")
    (tmp_path / "asciidoctrine").mkdir()
    (tmp_path / "asciidoctrine" / "asciidoctrine.adoc").write_text("= asciidoctrine\n")
    (tmp_path / "lisi").mkdir()
    (tmp_path / "lisi" / "lisi.adoc").write_text("= lisi\n")
    return tmp_path


@pytest.fixture
def config_path(repo: Path) -> Path:
    return repo / "litguard.yml"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers and level setup_logging() installs on the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    raise_exceptions = logging.raiseExceptions
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.raiseExceptions = raise_exceptions


GIT_PROJECT_CONFIG = textwrap.dedent("""\
    name: nested
    sources:
      - path: lisi/lisi.adoc
        workdir: lisi
""")


def _git(cwd: Path, *args: str) -> None:
    _REAL_RUN(
        [
            "git",
            "-c", "user.name=litguard",
            "-c", "user.email=litguard@example.invalid",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def git():
    """Run a real git command: ``git(cwd, "add", "file")``."""
    return _git


@pytest.fixture
def git_project(tmp_path: Path) -> Path:
    """A litguard project one level below the top of a real git repository.

    Layout: ``<top>/proj/litguard.yml`` with ``lisi/lisi.adoc`` and two
    committed generated files, ``lisi/src/gen.rs`` and ``lisi/src/grün.rs``.
    Returns the project directory.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    top = tmp_path / "top"
    project = top / "proj"
    (project / "lisi" / "src").mkdir(parents=True)
    (project / "litguard.yml").write_text(GIT_PROJECT_CONFIG)
    (project / "lisi" / "lisi.adoc").write_text("= lisi\n")
    (project / "lisi" / "src" / "gen.rs").write_text("fn generated() {}\n")
    (project / "lisi" / "src" / "grün.rs").write_text("fn grün() {}\n", encoding="utf-8")

    _git(top, "init", "--quiet")
    _git(top, "add", ".")
    _git(top, "commit", "--quiet", "-m", "initial")
    (project / ".litstate").write_text("sync")
    return project
