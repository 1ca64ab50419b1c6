from unittest.mock import MagicMock, patch

import pytest

from docanalyzer.extraction.exceptions import ExtractionCancelledError, OcrError
from docanalyzer.extraction.tesseract_adapter import TesseractOcrAdapter
from docanalyzer.ingestion.models import DOC, DOCX, GIF, JPEG, PDF, PLAIN_TEXT, PNG

_TARGET = "docanalyzer.extraction.tesseract_adapter.pytesseract.image_to_string"


class TestSupports:
    @pytest.mark.parametrize("mime_type", [PDF, JPEG, PNG, GIF])
    def test_supports_renderable_types(self, mime_type: str) -> None:
        assert TesseractOcrAdapter().supports(mime_type)

    @pytest.mark.parametrize("mime_type", [DOC, DOCX, PLAIN_TEXT])
    def test_does_not_support_other_types(self, mime_type: str) -> None:
        assert not TesseractOcrAdapter().supports(mime_type)

    def test_recognize_rejects_unsupported_type(self) -> None:
        with pytest.raises(OcrError, match="cannot render"):
            TesseractOcrAdapter().recognize(b"...", DOC)


class TestRecognizePdf:
    def test_renders_every_page_and_reports_progress(self, scanned_pdf_bytes: bytes) -> None:
        pages: list[tuple[int, int]] = []
        with patch(_TARGET, side_effect=["Page one text", "Page two text"]) as mock_ocr:
            text = TesseractOcrAdapter(dpi=72).recognize(
                scanned_pdf_bytes, PDF, on_page=lambda done, total: pages.append((done, total))
            )
        assert text == "Page one text\nPage two text"
        assert pages == [(1, 2), (2, 2)]
        assert mock_ocr.call_count == 2

    def test_passes_language(self, scanned_pdf_bytes: bytes) -> None:
        with patch(_TARGET, return_value="x") as mock_ocr:
            TesseractOcrAdapter(language="pol", dpi=72).recognize(scanned_pdf_bytes, PDF)
        assert mock_ocr.call_args.kwargs["lang"] == "pol"

    def test_wraps_tesseract_failure(self, scanned_pdf_bytes: bytes) -> None:
        with patch(_TARGET, side_effect=RuntimeError("tesseract is not installed")):
            with pytest.raises(OcrError, match="tesseract is not installed"):
                TesseractOcrAdapter(dpi=72).recognize(scanned_pdf_bytes, PDF)

    def test_wraps_render_failure(self) -> None:
        with pytest.raises(OcrError):
            TesseractOcrAdapter(dpi=72).recognize(b"not a pdf", PDF)

    def test_stops_when_asked(self, scanned_pdf_bytes: bytes) -> None:
        should_stop = MagicMock(side_effect=[False, True])
        with patch(_TARGET, return_value="x"):
            with pytest.raises(ExtractionCancelledError):
                TesseractOcrAdapter(dpi=72).recognize(
                    scanned_pdf_bytes, PDF, should_stop=should_stop
                )


class TestRecognizeImages:
    def test_single_image_is_one_page(self, png_bytes: bytes) -> None:
        pages: list[tuple[int, int]] = []
        with patch(_TARGET, return_value=" Signed by both parties \n"):
            text = TesseractOcrAdapter().recognize(
                png_bytes, PNG, on_page=lambda done, total: pages.append((done, total))
            )
        assert text == "Signed by both parties"
        assert pages == [(1, 1)]

    def test_gif_frames_are_pages(self, gif_bytes: bytes) -> None:
        pages: list[tuple[int, int]] = []
        with patch(_TARGET, return_value="frame"):
            TesseractOcrAdapter().recognize(
                gif_bytes, GIF, on_page=lambda done, total: pages.append((done, total))
            )
        assert pages[-1] == (3, 3)

    def test_blank_pages_are_skipped_in_output(self, png_bytes: bytes) -> None:
        with patch(_TARGET, return_value="   "):
            assert TesseractOcrAdapter().recognize(png_bytes, PNG) == ""
