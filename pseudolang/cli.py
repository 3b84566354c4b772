"""CLI entrypoint for pseudolang."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import LOG_LEVELS, Config, load_config
from .errors import ConfigError
from .log import configure_logging


@click.group()
@click.version_option(__version__, prog_name="pseudolang")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a pseudolang.toml or pyproject.toml (defaults to auto-detected)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """pseudolang - Editor tooling for the pseudo description language.

    Completion and structural diagnostics over LSP, plus batch checking.
    """
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if log_level:
        config.log_level = log_level.upper()
    configure_logging(config.log_level, config.log_file)

    ctx.obj["config"] = config


@cli.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=False, path_type=Path),
)
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning"]),
    default="warning",
    show_default=True,
    help="Exit with error if this level or higher found",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.option(
    "--watch",
    is_flag=True,
    help="Keep running and report diagnostics whenever a file changes",
)
@click.pass_context
def check(ctx: click.Context, paths: tuple[Path, ...], fail_on: str, output_json: bool, watch: bool) -> None:
    """Check pseudo files for structural problems.

    Directories are searched recursively for the configured extensions.

    Examples:

        pseudolang check app.pseudo

        pseudolang check specs/ --json
    """
    from .commands.check import run_check

    config: Config = ctx.obj["config"]
    exit_code = run_check(list(paths), config=config, fail_on=fail_on, output_json=output_json, watch=watch)
    sys.exit(exit_code)


@cli.command()
@click.option(
    "--category",
    type=str,
    default=None,
    metavar="NAME",
    help="Only print one category (e.g., --category declarations)",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output the catalog as JSON (for grammar generators)",
)
def keywords(category: str | None, output_json: bool) -> None:
    """Print the keyword catalog."""
    from .commands.keywords_cmd import run_keywords

    sys.exit(run_keywords(category=category, output_json=output_json))


# -----------------------------------------------------------------------------
# LSP server command
# -----------------------------------------------------------------------------


@cli.command("lsp")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "tcp"]),
    default="stdio",
    show_default=True,
    help="Transport method (stdio for editors, tcp for debugging)",
)
@click.option("--host", default="localhost", show_default=True, help="TCP host")
@click.option("--port", default=2087, show_default=True, type=int, help="TCP port")
@click.pass_context
def lsp(ctx: click.Context, transport: str, host: str, port: int) -> None:
    """Start the LSP server.

    The LSP server provides:

    \b
    - Real-time structural diagnostics (on every change)
    - Context-aware keyword completion

    For VSCode, configure the extension to use:

        pseudolang lsp --transport stdio

    For debugging with a TCP connection:

        pseudolang lsp --transport tcp --port 2087
    """
    from .lsp import start_server

    start_server(config=ctx.obj["config"], transport=transport, host=host, port=port)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
