"""CLI entry point for the visual snapshot runner."""

from __future__ import annotations

import logging
import shlex
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from src.builder import MODE_COMBINED, OUTPUT_MODES, SnapshotJob, SnapshotJobBuilder
from src.models.config import MissingConfigError, RunnerConfig
from src.runner import SnapshotRunner, SnapshotToolError

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def load_config(**overrides) -> RunnerConfig:
    """Read the environment once; exit 1 on anything missing or malformed."""
    try:
        return RunnerConfig.from_env(**overrides)
    except MissingConfigError as e:
        err_console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)
    except ValidationError as e:
        err_console.print("[red]❌ Invalid configuration:[/red]")
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            err_console.print(f"  {field}: {err['msg']}")
        sys.exit(1)


def split_command(ctx: click.Context, param: click.Parameter, value: str | None) -> list[str] | None:
    if value is None:
        return None
    try:
        parts = shlex.split(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    if not parts:
        raise click.BadParameter("must not be empty")
    return parts


mode_option = click.option(
    "--mode",
    type=click.Choice(OUTPUT_MODES),
    default=MODE_COMBINED,
    show_default=True,
    help="combined: one urls.yml; split: snapshots.yml plus percy-config.yml",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--env-file", default=".env", show_default=True, help="dotenv file to load")
def cli(verbose: bool, env_file: str) -> None:
    """Percy visual snapshots for a fixed set of site pages"""
    setup_logging(verbose)
    if Path(env_file).is_file():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def _report_written(job: SnapshotJob, paths: list[Path]) -> None:
    console.print(f"📝 {len(job.urls)} URLs written to {', '.join(str(p) for p in paths)}")


@cli.command()
@mode_option
@click.option(
    "--percy-command",
    default=None,
    callback=split_command,
    help='Command that launches Percy (default: "npx percy")',
)
def run(mode: str, percy_command: list[str] | None) -> None:
    """Build the snapshot files, run percy snapshot, and clean up."""
    cfg = load_config(percy_command=percy_command)
    job = SnapshotJobBuilder(cfg, mode=mode).build()

    console.print(f"🌍 Testing site: {cfg.base_url}")
    console.print(
        f"⚙️ Config: Timeout={cfg.network_idle_timeout}ms, "
        f"PageLoad={cfg.page_load_timeout}ms, Workers={cfg.parallel_workers}"
    )

    try:
        SnapshotRunner(cfg).run(job, on_written=lambda paths: _report_written(job, paths))
    except SnapshotToolError as e:
        err_console.print("[red]❌ Percy failed:[/red]")
        err_console.print(str(e), markup=False)
        sys.exit(1)

    console.print("[green]✅ Percy completed successfully.[/green]")


@cli.command()
def urls() -> None:
    """Print the resolved page URLs."""
    cfg = load_config()
    job = SnapshotJobBuilder(cfg).build()
    for url in job.urls:
        click.echo(url)


@cli.command()
@mode_option
def render(mode: str) -> None:
    """Print the YAML that 'run' would write, without running Percy."""
    cfg = load_config()
    job = SnapshotJobBuilder(cfg, mode=mode).build()
    for name, text in job.render().items():
        click.echo(f"# {name}")
        click.echo(text)


if __name__ == "__main__":
    cli()
