import io

import pdfplumber

from docanalyzer.extraction.base import BaseTextExtractor
from docanalyzer.extraction.exceptions import NativeExtractionError


class PdfPlumberAdapter(BaseTextExtractor):
    """Reads the embedded text layer of a PDF using pdfplumber."""

    def extract(self, content: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise NativeExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(page.strip() for page in pages if page.strip())
