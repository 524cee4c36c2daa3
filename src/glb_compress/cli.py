"""Command-line interface for glb-compress."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

try:
    __version__ = version("glb-compress")
except PackageNotFoundError:
    __version__ = "unknown"

from glb_compress.command import compress_glb_files
from glb_compress.compressor import GltfTransform
from glb_compress.pipeline import ConsoleReporter
from glb_compress.selection import AcceptAllSelector, PromptSelector, Selector
from glb_compress.utils.constants import DEFAULT_CONFIG, load_config
from glb_compress.utils.logging import log_error, log_info, log_ok, set_verbose

app = typer.Typer(
    name="glb-compress",
    help="Compress GLB files with gltf-transform (ETC1S textures + Draco geometry)",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        print(f"glb-compress {__version__}")
        raise typer.Exit()


@app.command()
def compress(
    root: Annotated[
        Path,
        typer.Argument(
            help="Folder to scan for [bold green].glb[/] files",
            metavar="ROOT",
        ),
    ] = Path("."),
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            "-d",
            help=f"Directory levels below ROOT to scan "
            f"(default: {DEFAULT_CONFIG['max_depth']})",
            rich_help_panel="Discovery",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Compress every discovered file without prompting",
            rich_help_panel="Discovery",
        ),
    ] = False,
    suffix: Annotated[
        str | None,
        typer.Option(
            "--suffix",
            help=f"Intermediate file suffix "
            f"(default: {DEFAULT_CONFIG['intermediate_suffix']})",
            rich_help_panel="Compression",
        ),
    ] = None,
    tool: Annotated[
        str | None,
        typer.Option(
            "--tool",
            help=f"gltf-transform executable (default: {DEFAULT_CONFIG['executable']})",
            rich_help_panel="Compression",
        ),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option(
            "--timeout",
            help=f"Seconds per external process (default: {DEFAULT_CONFIG['timeout']})",
            rich_help_panel="Compression",
        ),
    ] = None,
    continue_on_error: Annotated[
        bool,
        typer.Option(
            "--continue-on-error/--fail-fast",
            help="Keep compressing remaining files after a failure",
            rich_help_panel="Compression",
        ),
    ] = DEFAULT_CONFIG["continue_on_error"],
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="List discovered and selected files",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """
    Find GLB files under ROOT and compress the selected ones in place.
    """
    try:
        config = load_config(
            max_depth=max_depth,
            intermediate_suffix=suffix,
            executable=tool,
            timeout=timeout,
            continue_on_error=continue_on_error,
            verbose=verbose,
        )
    except ValueError as e:
        console.print(f"[bold red][ERROR][/] {e}")
        raise typer.Exit(code=1) from None

    set_verbose(config["verbose"])

    selector: Selector = AcceptAllSelector() if yes else PromptSelector(console)
    outcome = compress_glb_files(
        root.absolute(),
        compressor=GltfTransform(config["executable"], config["timeout"]),
        selector=selector,
        reporter=ConsoleReporter(),
        config=config,
    )

    if outcome.status == "ok":
        log_ok(outcome.message)
    elif outcome.status == "info":
        log_info(outcome.message)
    else:
        log_error(outcome.message)
        raise typer.Exit(code=1)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
