"""loghooks CLI for inspecting configured hook pipelines - Tyro implementation."""

import json
import logging
import sys
from builtins import print as builtin_print
from pathlib import Path
from typing import Annotated, Literal

import attrs
import tyro
import yaml
from rich import print
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from loghooks.chain import describe_pipeline, flatten_hooks
from loghooks.config import CONFIG_FILENAME, LogHooksConfig, get_config
from loghooks.hooks import FileLifecycleHooks

OutputFormat = Literal["ascii", "json"]


@attrs.define
class Pipeline:
    """Show the configured hook pipeline in invocation order."""

    output: Annotated[OutputFormat, tyro.conf.arg(aliases=["-o"])] = "ascii"
    """Output format: ascii or json."""


@attrs.define
class Check:
    """Load every configured hook and report whether the pipeline builds."""


# Type alias for all subcommands
Command = (
    Annotated[Pipeline, tyro.conf.subcommand(name="pipeline")]
    | Annotated[Check, tyro.conf.subcommand(name="check")]
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with 100-character text width."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)-20s - %(levelname)-8s - %(message).100s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config(config_dir: Path | None) -> LogHooksConfig:
    """Load configuration from ``config_dir`` or through discovery.

    Args:
        config_dir: Explicit configuration directory, or None to discover

    Returns:
        LogHooksConfig instance
    """
    if config_dir is None:
        return get_config()
    return LogHooksConfig.from_yaml(config_dir / CONFIG_FILENAME)


def build_or_exit(config: LogHooksConfig) -> FileLifecycleHooks | None:
    """Build the pipeline, exiting with status 1 on any configuration error."""
    try:
        return config.build_pipeline()
    except (ImportError, TypeError, ValueError) as e:
        print(f"[red]Error building pipeline from {config.config_path}: {e}[/red]")
        sys.exit(1)


def handle_pipeline(config: LogHooksConfig, cmd: Pipeline) -> None:
    """Handle pipeline subcommand to display stage order."""
    pipeline = build_or_exit(config)
    stages = flatten_hooks(pipeline) if pipeline is not None else []

    if cmd.output == "json":
        data = {
            "config_path": str(config.config_path),
            "stages": [f"{type(s).__module__}.{type(s).__qualname__}" for s in stages],
        }
        builtin_print(json.dumps(data, indent=2))
        return

    console = Console()
    console.print(Panel("[bold cyan]File Lifecycle Hook Pipeline[/bold cyan]", expand=False))

    if pipeline is None:
        console.print(f"[yellow]No hooks configured in {config.config_path}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim")
    table.add_column("Hook", style="cyan")
    table.add_column("Module", style="green")
    for i, stage in enumerate(stages, start=1):
        table.add_row(str(i), type(stage).__qualname__, type(stage).__module__)
    console.print(table)

    console.print("\n[bold]Invocation Order:[/bold]")
    console.print(describe_pipeline(pipeline))


def handle_check(config: LogHooksConfig) -> None:
    """Handle check subcommand."""
    pipeline = build_or_exit(config)
    if pipeline is None:
        print(f"[green]No hooks configured in {config.config_path}[/green]")
        return
    print(f"[green]Pipeline OK: {len(flatten_hooks(pipeline))} stage(s)[/green]")


def main(
    cmd: Annotated[Command, tyro.conf.arg(name="")],
    *,
    config_dir: Annotated[Path | None, tyro.conf.arg(help="Configuration directory")] = None,
    verbose: Annotated[bool, tyro.conf.arg(aliases=["-v"])] = False,
) -> None:
    """loghooks - composable file lifecycle hooks for log file writers."""
    setup_logging(verbose)

    try:
        config = load_config(config_dir)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if isinstance(cmd, Pipeline):
        handle_pipeline(config, cmd)

    elif isinstance(cmd, Check):
        handle_check(config)


def entry_point() -> None:
    """Entry point for the loghooks command."""
    tyro.cli(main)


if __name__ == "__main__":
    entry_point()
