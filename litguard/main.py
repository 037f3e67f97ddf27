"""
litguard — CLI entrypoint.

Usage:
    litguard --help
    litguard check
    litguard build
    litguard status
    litguard config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from litguard import __version__
from litguard.core.errors import ERR_CONFIG
from litguard.core.models.state import BuildState
from litguard.core.observability.logging_config import setup_cli_logging
from litguard.core.use_cases.check import CheckResult


@click.group()
@click.version_option(version=__version__, prog_name="litguard")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to litguard.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """litguard — keep lisi from overwriting manual edits."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_cli_logging(debug=debug, verbose=verbose, quiet=quiet)


# ── Shared output ───────────────────────────────────────────────


def _echo_check(result: CheckResult, quiet: bool = False) -> None:
    """Print the guard's narrative for a completed check."""
    decision = result.decision
    assert decision is not None

    if not quiet:
        for path in sorted(decision.touched_sources):
            click.echo(f"   found {path}")

    if decision.blocked:
        click.secho(
            "❌ could not build because some changes would be overwritten",
            fg="red",
            bold=True,
        )
        for path in sorted(decision.conflicts):
            click.echo(f"   • {path}")
        click.echo()
        click.echo("   Commit or revert these files, then run again.")
    elif decision.new_state is BuildState.SYNC:
        if not quiet:
            click.secho("✅ everything is in sync", fg="green")
    elif not quiet:
        click.secho("✏️  changing files:", fg="cyan")
        for path in sorted(result.would_write):
            marker = " (modified)" if path in decision.conflicts else ""
            click.echo(f"   • {path}{marker}")

    if not quiet:
        if result.state_saved:
            click.secho(f"   💾 State '{decision.new_state.value}' saved", fg="cyan")
        click.echo("checking done")


def _fail(message: str, code: int) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(code)


# ── Commands ────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-state", is_flag=True, help="Neither read nor write the state file.")
@click.pass_context
def check(ctx: click.Context, as_json: bool, no_state: bool) -> None:
    """Check whether generation would overwrite manual edits.

    Records the new build state but never runs the generator for real.
    Exits 1 when conflicting modifications are found.
    """
    from litguard.core.use_cases.check import run_check

    result = run_check(
        config_path=ctx.obj.get("config_path"),
        use_state=not no_state,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if result.error:
        _fail(result.error, result.exit_code)

    _echo_check(result, quiet=ctx.obj.get("quiet", False))
    sys.exit(result.exit_code)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-state", is_flag=True, help="Neither read nor write the state file.")
@click.option("--skip-tests", is_flag=True, help="Don't run the test suite after generation.")
@click.pass_context
def build(ctx: click.Context, as_json: bool, no_state: bool, skip_tests: bool) -> None:
    """Check, regenerate all literate sources, then run the tests.

    Examples:

        litguard build

        litguard build --skip-tests
    """
    from litguard.core.use_cases.build import run_build

    result = run_build(
        config_path=ctx.obj.get("config_path"),
        use_state=not no_state,
        run_tests=not skip_tests,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    quiet = ctx.obj.get("quiet", False)

    if result.check is None:
        _fail(result.error or "check failed", result.exit_code)
    assert result.check is not None

    _echo_check(result.check, quiet=quiet)
    if result.blocked:
        sys.exit(result.exit_code)

    if not quiet:
        click.echo()
        click.echo("Start generating source files ...")
    for gen in result.generated:
        click.secho("   ✓ ", fg="green", nl=False)
        click.echo(f"{gen.command}  (in {gen.cwd})")
        if ctx.obj.get("verbose") and gen.stdout.strip():
            for line in gen.stdout.rstrip().split("\n")[:10]:
                click.echo(f"     │ {line}")

    if result.error and result.exit_code:
        _fail(result.error, result.exit_code)
    if not quiet:
        click.echo("Generating source files done!")

    if result.error:
        click.secho(f"⚠️  {result.error}", fg="yellow", err=True)
    if result.tests is not None:
        click.echo(result.tests.stdout, nl=False)
        if not result.tests.ok:
            click.secho(
                f"⚠️  {result.tests.command} exited with code {result.tests.returncode}",
                fg="yellow",
            )

    sys.exit(result.exit_code)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show literate sources and the persisted build state."""
    from litguard.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(ERR_CONFIG if result.error else 0)

    if result.error:
        _fail(result.error, ERR_CONFIG)

    project = result.project
    assert project is not None  # guaranteed after error check above

    click.secho(f"\n📋 {project.name}", fg="cyan", bold=True)
    click.echo(f"   Root: {result.project_root}")
    if result.config_path is None:
        click.echo("   (no litguard.yml, using defaults)")
    click.echo()

    state_color = {
        BuildState.SYNC: "green",
        BuildState.LITERATE_CHANGES: "yellow",
        BuildState.MANUAL_CHANGES: "red",
    }
    click.secho("   State: ", fg="white", bold=True, nl=False)
    if result.state_file_exists:
        assert result.state is not None
        click.secho(result.state.value, fg=state_color[result.state])
    else:
        click.secho("unknown (no state file)", fg="red")

    click.echo()
    click.secho(f"   Literate sources: {len(project.sources)}", fg="white", bold=True)
    for source in project.sources:
        where = f" [{source.workdir}]" if source.workdir else ""
        mode = "" if source.generate else " (check only)"
        click.echo(f"     • {source.path}{where}{mode}")

    click.echo()


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate litguard.yml configuration."""
    from litguard.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else ERR_CONFIG)

    if result.valid:
        assert result.project is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.project.name}")
        click.echo(f"   Sources: {len(result.project.sources)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(ERR_CONFIG)

    click.echo()


if __name__ == "__main__":
    cli()
