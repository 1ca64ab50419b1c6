import pymupdf

from docanalyzer.extraction.base import BaseTextExtractor
from docanalyzer.extraction.exceptions import NativeExtractionError


class PyMuPdfAdapter(BaseTextExtractor):
    """Reads the embedded text layer of a PDF using PyMuPDF."""

    def extract(self, content: bytes) -> str:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise NativeExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return "\n".join(page.strip() for page in pages if page.strip())
