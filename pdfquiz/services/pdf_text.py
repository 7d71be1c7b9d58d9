"""PDF text extraction with pdfplumber."""

import logging

import pdfplumber

from pdfquiz.services.errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(source) -> str:
    """Read every page of a PDF and return the page texts joined by newlines.

    Args:
        source: Path or binary file-like object (e.g. an uploaded FileStorage stream)

    Raises:
        ExtractionError: the document could not be opened or read
    """
    pages = []
    try:
        with pdfplumber.open(source) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                if text:
                    pages.append(text)
    except Exception as exc:
        logger.exception("PDF text extraction failed")
        raise ExtractionError("Error parsing PDF") from exc

    return "\n".join(pages)
