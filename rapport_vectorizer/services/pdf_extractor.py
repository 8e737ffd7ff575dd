"""Plain-text extraction from PDF report bytes.

Reads the document with PyMuPDF (fitz) directly from memory, page by page,
and joins the page texts with blank lines.  Scanned PDFs without an
embedded text layer yield empty text, which the pipeline rejects.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from rapport_vectorizer.utils.errors import DocumentExtractionError

logger = structlog.get_logger(logger_name=__name__)


class PDFTextExtractor:
    """Turns the raw bytes of a PDF report into a single text string."""

    async def extract_text(self, data: bytes) -> str:
        """Extract the text of every page of the PDF in *data*.

        Parsing runs in a worker thread; PyMuPDF is CPU-bound and synchronous.

        Returns
        -------
        str
            Page texts joined with ``"\\n\\n"``.  May be empty or whitespace
            only; deciding whether that is an error is up to the caller.

        Raises
        ------
        DocumentExtractionError
            If *data* is empty or is not a readable PDF.
        """
        if not data:
            raise DocumentExtractionError(
                message="Report object is empty",
                provider_name="pymupdf",
            )
        return await asyncio.to_thread(self._extract_sync, data)

    @staticmethod
    def _extract_sync(data: bytes) -> str:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:  # noqa: BLE001
            raise DocumentExtractionError(
                message=f"Unreadable PDF: {exc}",
                provider_name="pymupdf",
            ) from exc

        pages: list[str] = []
        try:
            for page in doc:
                pages.append(page.get_text("text"))
            page_count = len(doc)
        finally:
            doc.close()

        text = "\n\n".join(pages)
        logger.info("pdf_text_extracted", pages=page_count, chars=len(text.strip()))
        if not text.strip():
            logger.warning("pdf_no_text_extracted", pages=page_count)
        return text
