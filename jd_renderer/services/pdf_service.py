# jd_renderer/services/pdf_service.py

import asyncio

import httpx

from jd_renderer.core.config import settings
from jd_renderer.log.logging import logger
from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.document import RenderedDocument, build_pdf_filename
from jd_renderer.models.job import JobRecord
from jd_renderer.services.browser import BrowserSession
from jd_renderer.services.image_resolver import (
    DirectFetchStrategy,
    ImageElementStrategy,
    ImageResolver,
    ProxyImageStrategy,
)
from jd_renderer.services.rasterizer import PageRasterizer, Paginator
from jd_renderer.services.stabilizer import NoopStabilizer, PageStabilizer
from jd_renderer.services.template_builder import TemplateBuilder


class JobDescriptionPdfService:
    """
    Generates job description PDFs: logo resolution, templating, capture and pagination.
    """

    def __init__(
        self,
        resolver: ImageResolver,
        builder: TemplateBuilder,
        rasterizer: PageRasterizer,
        paginator: Paginator,
        render_timeout: float | None = None,
    ):
        self.resolver = resolver
        self.builder = builder
        self.rasterizer = rasterizer
        self.paginator = paginator
        self.render_timeout = settings.render_timeout if render_timeout is None else render_timeout

    async def build_markup(self, job: JobRecord, company: CompanyProfile | None = None) -> str:
        """
        Resolve the company logo and render the document markup.

        Logo problems never fail this call; the placeholder is rendered instead.
        """
        logo = await self.resolver.resolve(company.company_logo if company else None)
        return self.builder.build(job, company, logo)

    async def generate(self, job: JobRecord, company: CompanyProfile | None = None) -> RenderedDocument:
        """
        Produce the PDF for a job.

        Args:
            job: The job to describe.
            company: Optional company profile.

        Returns:
            RenderedDocument: PDF bytes, filename and page count.

        Raises:
            RasterizationError: If capture or pagination fails.
            asyncio.TimeoutError: If capture exceeds the render timeout.
        """
        markup = await self.build_markup(job, company)
        if self.render_timeout:
            png = await asyncio.wait_for(self.rasterizer.capture(markup), timeout=self.render_timeout)
        else:
            png = await self.rasterizer.capture(markup)
        # CPU-bound; runs in a worker thread
        content, page_count = await asyncio.to_thread(self.paginator.paginate, png)

        document = RenderedDocument(
            content=content,
            filename=build_pdf_filename(job.title),
            page_count=page_count,
        )
        logger.info(
            "Generated job description PDF",
            job_id=job.id,
            filename=document.filename,
            pages=page_count,
            size_mb=round(document.size_mb, 2),
            event_type="pdf_generated",
        )
        return document

    async def try_generate(
        self, job: JobRecord, company: CompanyProfile | None = None
    ) -> RenderedDocument | None:
        """Like generate(), but any failure is logged and reported as None."""
        try:
            return await self.generate(job, company)
        except Exception as e:
            logger.error(
                "Job description PDF generation failed: {error}",
                error=str(e) or type(e).__name__,
                error_type=type(e).__name__,
                job_id=job.id,
                event_type="pdf_generation_failed",
            )
            return None


def build_pdf_service(
    http_client: httpx.AsyncClient,
    browser: BrowserSession,
    settle: bool = True,
    builder: TemplateBuilder | None = None,
) -> JobDescriptionPdfService:
    """Wire the default pipeline around a shared HTTP client and browser."""
    resolver = ImageResolver(
        strategies=[
            ProxyImageStrategy(http_client, settings.proxy_url, token=settings.api_token),
            DirectFetchStrategy(http_client),
            ImageElementStrategy(browser),
        ],
        timeout=settings.image_strategy_timeout,
    )
    stabilizer = PageStabilizer() if settle else NoopStabilizer()
    return JobDescriptionPdfService(
        resolver=resolver,
        builder=builder or TemplateBuilder(),
        rasterizer=PageRasterizer(browser, stabilizer),
        paginator=Paginator(),
    )
