"""
Job description document endpoints.

Provides:
- POST /jobs/pdf: Render the job description as a downloadable PDF
- POST /jobs/pdf/preview: Return the HTML markup the PDF is rendered from
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from jd_renderer.core.exceptions import DocumentGenerationError
from jd_renderer.log.logging import logger
from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.job import JobRecord
from jd_renderer.services.pdf_service import JobDescriptionPdfService

router = APIRouter(prefix="/jobs", tags=["job-pdf"])


class JobPdfRequest(BaseModel):
    """Job and optional company profile to render."""

    job: JobRecord
    company: CompanyProfile | None = None


def get_pdf_service(request: Request) -> JobDescriptionPdfService:
    return request.app.state.pdf_service


@router.post(
    "/pdf",
    summary="Download job description PDF",
    description="Render the job description as a multi-page A4 PDF attachment.",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The generated PDF"},
        500: {"description": "Document generation failed"},
    },
)
async def download_job_pdf(
    payload: JobPdfRequest,
    service: JobDescriptionPdfService = Depends(get_pdf_service),
):
    """
    Generate the job description PDF.

    Args:
        payload: Job record and optional company profile.
        service: PDF generation service.

    Returns:
        PDF file download with the page count in ``X-Page-Count``.
    """
    logger.info(
        "Job description PDF requested",
        job_id=payload.job.id,
        title=payload.job.title,
        event_type="pdf_requested",
    )
    document = await service.try_generate(payload.job, payload.company)
    if document is None:
        raise DocumentGenerationError()

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Page-Count": str(document.page_count),
        },
    )


@router.post(
    "/pdf/preview",
    summary="Preview job description markup",
    description="Return the HTML the PDF is rendered from, with the logo already inlined.",
    response_class=HTMLResponse,
)
async def preview_job_pdf(
    payload: JobPdfRequest,
    service: JobDescriptionPdfService = Depends(get_pdf_service),
):
    markup = await service.build_markup(payload.job, payload.company)
    return HTMLResponse(content=markup)
