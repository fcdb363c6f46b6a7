from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from jd_renderer.core.config import settings
from jd_renderer.log.logging import logger
from jd_renderer.routers.healthcheck_router import router as healthcheck_router
from jd_renderer.routers.job_pdf_router import router as job_pdf_router
from jd_renderer.routers.proxy_router import router as proxy_router
from jd_renderer.services.browser import BrowserSession
from jd_renderer.services.pdf_service import build_pdf_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Job Description Renderer...", environment=settings.environment)

    http_client = httpx.AsyncClient(timeout=settings.image_strategy_timeout)
    browser = BrowserSession()
    app.state.http_client = http_client
    app.state.browser = browser
    app.state.pdf_service = build_pdf_service(http_client, browser)

    yield

    # Shutdown
    logger.info("Shutting down Job Description Renderer...")
    await browser.stop()
    await http_client.aclose()
    logger.info("Shutdown complete")


# Initialize FastAPI
app = FastAPI(
    title="Job Description Renderer",
    description="Renders job postings into paginated A4 PDF documents",
    version="1.0.0",
    lifespan=lifespan,
)


# Root endpoint for testing
@app.get("/")
async def root():
    return {"message": "Job Description Renderer is running!"}


app.include_router(healthcheck_router)
app.include_router(job_pdf_router)
app.include_router(proxy_router)
