import re

from pydantic import BaseModel, Field

PDF_MEDIA_TYPE = "application/pdf"
PDF_FILENAME_SUFFIX = "_job_description.pdf"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)


def build_pdf_filename(title: str) -> str:
    """
    Derive the download filename from a job title.

    Every character outside [A-Za-z0-9] becomes one underscore, then the
    result is lowercased and suffixed.
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", title).lower() + PDF_FILENAME_SUFFIX


class RenderedDocument(BaseModel):
    """A generated PDF and the name it should be saved under."""

    content: bytes = Field(..., description="The PDF document bytes.")
    filename: str = Field(..., description="Suggested download filename.")
    page_count: int = Field(..., description="Number of pages in the document.")
    media_type: str = Field(PDF_MEDIA_TYPE, description="MIME type of the content.")

    @property
    def size_mb(self) -> float:
        return len(self.content) / (1024 * 1024)
