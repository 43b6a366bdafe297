"""Thin CLI wrapper for dockerbuild.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dockerbuild import __version__
from dockerbuild.builds.service import run_pipeline
from dockerbuild.config import get_settings, print_settings_json
from dockerbuild.engine.runner import DockerEngine
from dockerbuild.errors import DockerBuildError
from dockerbuild.types import BuildOptions

app = typer.Typer(
    name="dockerbuild",
    help="Docker Build Script - build and push container images for project folders",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

USAGE = "usage: dockerbuild [-aelprh] folder"

HELP_MENU = """
Docker Build Script
----------------------------
  -a build for current arch
  -e pull existing image
  -l tag also as latest
  -p push image to registry
  -r rebuild existing image
----------------------------
  -h print this menu
"""


def print_help_menu() -> None:
    """Print the short flag summary."""
    console.print(HELP_MENU, markup=False, highlight=False)


def configure_logging(level: str) -> None:
    """Send package log records to the console through rich."""
    package_logger = logging.getLogger("dockerbuild")
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=console, show_time=False, show_path=False)
        )
    package_logger.setLevel(level)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dockerbuild version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    folder: Annotated[
        Path | None,
        typer.Argument(
            help="Project folder containing a Dockerfile",
            show_default=False,
        ),
    ] = None,
    current_arch: Annotated[
        bool,
        typer.Option("-a", "--current-arch", help="Build for current arch only"),
    ] = False,
    pull_existing: Annotated[
        bool,
        typer.Option("-e", "--pull-existing", help="Pull existing image"),
    ] = False,
    latest: Annotated[
        bool,
        typer.Option("-l", "--latest", help="Tag also as latest"),
    ] = False,
    push: Annotated[
        bool,
        typer.Option("-p", "--push", help="Push image to registry"),
    ] = False,
    rebuild: Annotated[
        bool,
        typer.Option("-r", "--rebuild", help="Rebuild existing image"),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config-file",
            help="Registry config file (DOCKER_REGISTRY, DOCKER_NAMESPACE)",
            envvar="DOCKERBUILD_CONFIG_FILE",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option("--show-config", help="Show effective configuration as JSON"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build a container image for FOLDER, optionally pushing it.

    Image name and version are read from package.json, pom.xml,
    build.gradle or build.gradle.kts. Without -a the image is built for
    linux/amd64 and linux/arm64 with docker buildx.
    """
    configure_logging("INFO")
    try:
        settings = get_settings(config_file)
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1) from None
    configure_logging(settings.log_level)

    if show_config:
        console.print(print_settings_json(settings))
        return

    if folder is None:
        console.print()
        console.print(USAGE, markup=False, highlight=False)
        print_help_menu()
        raise typer.Exit(code=1)

    options = BuildOptions(
        current_arch_only=current_arch,
        pull_existing=pull_existing,
        tag_latest=latest,
        push_image=push,
        force_rebuild=rebuild,
    )
    engine = DockerEngine(settings.docker_bin)

    try:
        run_pipeline(folder, options, settings=settings, engine=engine)
    except DockerBuildError as e:
        console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
