from docanalyzer.extraction.base import BaseTextExtractor
from docanalyzer.extraction.exceptions import NativeExtractionError
from docanalyzer.ingestion.encoder import decode_text
from docanalyzer.ingestion.exceptions import FileEncodingError


class PlainTextAdapter(BaseTextExtractor):
    """Decodes text/plain content."""

    def extract(self, content: bytes) -> str:
        try:
            text = decode_text(content)
        except FileEncodingError as exc:
            raise NativeExtractionError(str(exc)) from exc
        return text.replace("\r\n", "\n").strip()
