"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from stardestroyer import __version__
from stardestroyer.cli.commands import blocks, clean, destroy
from stardestroyer.utils.formatting import err_console, set_quiet

app = typer.Typer(
    name="sd",
    help="Remove marked code blocks from a JavaScript project.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stardestroyer version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to the error console.

    Args:
        verbose: If True, show debug records; otherwise warnings only.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug log records on stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print warnings, errors and tables.",
        ),
    ] = False,
    project_dir: Annotated[
        Path | None,
        typer.Option(
            "--project-dir",
            "-C",
            help="Project root containing destroy.config.json (default: current directory).",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """sd - Remove marked code blocks from a JavaScript project.

    Blocks are declared in destroy.config.json and marked in source files
    with $$BLOCKNAME comments. [bold]destroy[/bold] comments them out,
    [bold]clean[/bold] deletes them for good.
    """
    configure_logging(verbose)
    set_quiet(quiet)

    # Read by project_root_from_context() in every command
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["project_dir"] = project_dir


# Register commands
app.command(name="destroy")(destroy.destroy)
app.command(name="clean")(clean.clean)
app.command(name="blocks")(blocks.list_blocks)


if __name__ == "__main__":
    app()
