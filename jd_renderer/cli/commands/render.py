"""Document rendering commands."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import httpx
import typer
from pydantic import ValidationError

from jd_renderer.cli.output import print_document_summary, print_error, print_success
from jd_renderer.core.config import settings
from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.document import RenderedDocument
from jd_renderer.models.job import JobRecord
from jd_renderer.services.browser import BrowserSession
from jd_renderer.services.pdf_service import JobDescriptionPdfService, build_pdf_service

JobFile = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, readable=True, help="Job record as JSON"),
]
CompanyFile = Annotated[
    Path | None,
    typer.Option("--company", "-c", exists=True, dir_okay=False, readable=True, help="Company profile as JSON"),
]


def _load_inputs(job_file: Path, company_file: Path | None) -> tuple[JobRecord, CompanyProfile | None]:
    """Read and validate the input records; exits with status 1 on bad input."""
    try:
        job = JobRecord.model_validate(json.loads(job_file.read_text(encoding="utf-8")))
        company = None
        if company_file is not None:
            company = CompanyProfile.model_validate(json.loads(company_file.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as e:
        print_error("Invalid input file", {"reason": str(e)})
        raise typer.Exit(1)
    return job, company


async def _with_service(settle: bool, work):
    """Run ``work(service)`` with a browser and HTTP client that are always released."""
    browser = BrowserSession()
    async with httpx.AsyncClient(timeout=settings.image_strategy_timeout) as http_client:
        try:
            return await work(build_pdf_service(http_client, browser, settle=settle))
        finally:
            await browser.stop()


def render_pdf(
    job_file: JobFile,
    company_file: CompanyFile = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: derived from the job title)"),
    ] = None,
    no_settle: Annotated[
        bool,
        typer.Option("--no-settle", help="Capture without waiting for the page to settle"),
    ] = False,
) -> None:
    """
    Render a job description PDF.
    """
    job, company = _load_inputs(job_file, company_file)

    async def work(service: JobDescriptionPdfService) -> RenderedDocument | None:
        return await service.try_generate(job, company)

    document = asyncio.run(_with_service(not no_settle, work))
    if document is None:
        print_error("Could not generate the job description document. Please try again.")
        raise typer.Exit(1)

    path = output or Path(document.filename)
    path.write_bytes(document.content)
    print_document_summary(document, path, job.title)


def preview_html(
    job_file: JobFile,
    company_file: CompanyFile = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: stdout)"),
    ] = None,
) -> None:
    """
    Write the HTML markup the PDF is rendered from.

    If no output file is specified, prints to stdout.
    """
    job, company = _load_inputs(job_file, company_file)

    async def work(service: JobDescriptionPdfService) -> str:
        return await service.build_markup(job, company)

    markup = asyncio.run(_with_service(False, work))
    if output:
        output.write_text(markup, encoding="utf-8")
        print_success(f"Preview written to {output}")
    else:
        typer.echo(markup)
