from abc import ABC, abstractmethod
from collections.abc import Callable

PageCallback = Callable[[int, int], None]


class BaseTextExtractor(ABC):
    """Contract for all native (structured-format) text extraction adapters."""

    @abstractmethod
    def extract(self, content: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            content: Raw file content.

        Returns:
            Extracted text as a single normalized string. May be empty when the
            document has no text layer.

        Raises:
            NativeExtractionError: if the file cannot be parsed.
        """


class BaseOcrEngine(ABC):
    """Contract for OCR backends that render pages and recognize their text."""

    @abstractmethod
    def supports(self, mime_type: str) -> bool:
        """Return True if the backend can render files of this MIME type."""

    @abstractmethod
    def recognize(
        self,
        content: bytes,
        mime_type: str,
        on_page: PageCallback | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> str:
        """Render every page/frame and return the recognized text.

        Args:
            content: Raw file content.
            mime_type: Declared MIME type of the content.
            on_page: Called as ``on_page(done, total)`` after each page.
            should_stop: Polled between pages; a True result aborts the pass.

        Raises:
            OcrError: if rendering or recognition fails.
            ExtractionCancelledError: if ``should_stop`` returned True.
        """
