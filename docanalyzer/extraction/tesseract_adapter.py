import io
from collections.abc import Callable, Iterator

import pymupdf
import pytesseract
from PIL import Image, ImageSequence

from docanalyzer.extraction.base import BaseOcrEngine, PageCallback
from docanalyzer.extraction.exceptions import ExtractionCancelledError, OcrError
from docanalyzer.ingestion.models import GIF, JPEG, PDF, PNG

_IMAGE_TYPES = frozenset({JPEG, PNG, GIF})


class TesseractOcrAdapter(BaseOcrEngine):
    """OCR backend: PyMuPDF renders PDF pages, Pillow opens images, Tesseract reads them."""

    def __init__(self, language: str = "eng", dpi: int = 300, tesseract_cmd: str = "") -> None:
        self._language = language
        self._dpi = dpi
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def supports(self, mime_type: str) -> bool:
        return mime_type == PDF or mime_type in _IMAGE_TYPES

    def recognize(
        self,
        content: bytes,
        mime_type: str,
        on_page: PageCallback | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> str:
        if not self.supports(mime_type):
            raise OcrError(f"OCR cannot render '{mime_type}'")
        pages = self._render_pdf(content) if mime_type == PDF else self._open_image(content)
        texts: list[str] = []
        try:
            for done, (total, image) in enumerate(pages, start=1):
                if should_stop is not None and should_stop():
                    raise ExtractionCancelledError("OCR cancelled")
                texts.append(self._recognize_image(image).strip())
                if on_page is not None:
                    on_page(done, total)
        except ExtractionCancelledError:
            raise
        except Exception as exc:
            raise OcrError(f"tesseract OCR failed: {exc}") from exc
        finally:
            pages.close()
        return "\n".join(text for text in texts if text)

    def _recognize_image(self, image: Image.Image) -> str:
        return pytesseract.image_to_string(image, lang=self._language)

    def _render_pdf(self, content: bytes) -> Iterator[tuple[int, Image.Image]]:
        """Yield (page_count, image) for every page, rendered at the configured DPI."""
        with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            total = doc.page_count
            for page in doc:
                pixmap = page.get_pixmap(dpi=self._dpi, alpha=False)
                image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
                yield total, image

    @staticmethod
    def _open_image(content: bytes) -> Iterator[tuple[int, Image.Image]]:
        """Yield (frame_count, image) for every frame; stills have one frame."""
        with Image.open(io.BytesIO(content)) as image:
            total = getattr(image, "n_frames", 1)
            for frame in ImageSequence.Iterator(image):
                yield total, frame.convert("RGB")
