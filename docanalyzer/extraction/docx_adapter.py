import io

from docx import Document

from docanalyzer.extraction.base import BaseTextExtractor
from docanalyzer.extraction.exceptions import NativeExtractionError


class DocxAdapter(BaseTextExtractor):
    """Reads paragraphs and table cells from an OOXML wordprocessing document."""

    def extract(self, content: bytes) -> str:
        try:
            document = Document(io.BytesIO(content))
        except Exception as exc:
            raise NativeExtractionError(f"python-docx extraction failed: {exc}") from exc

        lines = [p.text.strip() for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))
        return "\n".join(lines)
