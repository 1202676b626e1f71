"""Command-line interface for modorder."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import click
import typer

from modorder.config import Config
from modorder.errors import ConfigError, ExitCodes, ModorderError
from modorder.loader import load_records
from modorder.resolver import resolve_load_order
from modorder.version import is_compatible

app = typer.Typer(
    name="modorder",
    help="Compute a load order for interdependent modules",
    add_completion=False,
    no_args_is_help=True,
)


def _configure_logging(level: str) -> None:
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(message=f"Unknown log level: {level}")
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(error: ModorderError) -> typer.Exit:
    typer.echo(error.message, err=True)
    return typer.Exit(error.exit_code)


@app.command(name="resolve")
def resolve_cmd(
    directory: Annotated[Path, typer.Argument(help="Directory containing module descriptors")],
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML configuration file"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the load order as a JSON array"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level (overrides config)"),
    ] = None,
) -> None:
    """Print modules in load order, one 'id#source' per line."""
    try:
        config = Config.from_yaml(config_file) if config_file is not None else Config()
        _configure_logging(log_level or config.get("logging.level", "WARNING"))
        order = resolve_load_order(load_records(directory, config))
    except ModorderError as e:
        raise _fail(e) from e

    if as_json:
        typer.echo(json.dumps([{"id": m.module_id, "source": m.source_label} for m in order], indent=2))
        return
    for module in order:
        typer.echo(f"{module.module_id}#{module.source_label}")


@app.command(name="check")
def check_cmd(
    version: Annotated[str, typer.Argument(help="Candidate version, e.g. 2.4.1")],
    constraint: Annotated[str, typer.Argument(help="Constraint expression, e.g. '2+.[1,5]|3'")],
) -> None:
    """Test a single version against a constraint expression."""
    try:
        compatible = is_compatible("<version>", version, "<constraint>", constraint)
    except ModorderError as e:
        raise _fail(e) from e

    if compatible:
        typer.echo("compatible")
        return
    typer.echo("incompatible")
    raise typer.Exit(ExitCodes.INCOMPATIBLE_DEPENDENCY)


def main(argv: list[str] | None = None) -> None:
    """Console-script entry point. Usage errors exit with 1."""
    command = typer.main.get_command(app)
    try:
        exit_code = command.main(args=argv, prog_name="modorder", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(ExitCodes.USAGE)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(ExitCodes.USAGE)
    sys.exit(exit_code if isinstance(exit_code, int) else ExitCodes.OK)


if __name__ == "__main__":
    main()
