"""Command-line interface for Wisp.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="wisp")
def cli():
    """Wisp static site generator."""


@cli.command()
@click.option(
    "--minify/--no-minify",
    default=None,
    help="Minify rendered HTML (overrides wisp.yaml)",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Directory to write the site into (overrides wisp.yaml output_dir)",
)
@click.option("--verbose", "-v", is_flag=True, help="List every written file")
def build(minify: bool | None, output_dir: Path | None, verbose: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(
            project_root, minify=minify, output_dir_override=output_dir
        )
    except BuildError as exc:
        try:
            shown = exc.source_path.relative_to(project_root)
        except ValueError:
            shown = exc.source_path
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {shown}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    if verbose:
        for path in result.outputs:
            click.echo(f"  wrote {path}")
    click.echo(
        click.style(
            f"Built {len(result.outputs)} documents "
            f"({len(result.pages)} pages, {len(result.posts)} posts) "
            f"into {result.output_dir}",
            fg="green",
        )
    )


def main():
    """Entry point for the CLI application."""
    cli()
