"""CLI entry point for the Job Description Renderer."""

from typing import Annotated

import typer
from rich.console import Console

from jd_renderer.cli.commands import render

# Version from pyproject.toml
__version__ = "1.0.0"

# Create main app
app = typer.Typer(
    name="jd-renderer",
    help="Job Description Renderer CLI - Render job postings to PDF",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("render", help="Render a job description PDF")(render.render_pdf)
app.command("preview", help="Write the HTML markup of a job description")(render.preview_html)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"jd-renderer version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """
    Job Description Renderer CLI.

    [bold]Quick Start:[/bold]

        # Render a PDF next to the job file
        jd-renderer render job.json --company company.json

        # Inspect the markup the PDF is built from
        jd-renderer preview job.json -o preview.html

    [bold]Environment Variables:[/bold]

        API_BASE_URL  - Platform API serving the image proxy
        API_TOKEN     - Bearer token for the image proxy
        SETTLE_DELAY  - Seconds to wait before capture
    """


if __name__ == "__main__":
    app()
