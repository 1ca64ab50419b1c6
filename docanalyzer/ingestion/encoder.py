import base64
import codecs

from docanalyzer.config.settings import TEN_MIB
from docanalyzer.ingestion.exceptions import FileEncodingError
from docanalyzer.ingestion.models import IngestedFile

_FALLBACK_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def decode_text(data: bytes) -> str:
    """Decode plain-text bytes, honouring a BOM and falling back to legacy code pages."""
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8):].decode("utf-8", errors="replace")
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    for encoding in _FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise FileEncodingError("Unable to decode text content")


class ContentEncoder:
    """Turns raw files into payloads that remote services accept."""

    def __init__(self, max_size_bytes: int = TEN_MIB) -> None:
        self._max_size_bytes = max_size_bytes

    def encode_base64(self, file: IngestedFile) -> str:
        """Return the file content as a bare base64 string (no data-URL prefix).

        Raises:
            FileEncodingError: if the file exceeds the size ceiling.
        """
        self._check_size(file)
        return base64.b64encode(file.content).decode("ascii")

    def read_text(self, file: IngestedFile) -> str:
        """Decode the file content as text.

        Raises:
            FileEncodingError: if the file exceeds the size ceiling or cannot be decoded.
        """
        self._check_size(file)
        return decode_text(file.content)

    def _check_size(self, file: IngestedFile) -> None:
        if file.size > self._max_size_bytes:
            raise FileEncodingError(
                f"{file.name}: File size exceeds {self._max_size_bytes} bytes limit"
            )
