import pytest

from docanalyzer.extraction.docx_adapter import DocxAdapter
from docanalyzer.extraction.exceptions import NativeExtractionError
from docanalyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docanalyzer.extraction.plain_text_adapter import PlainTextAdapter
from docanalyzer.extraction.pymupdf_adapter import PyMuPdfAdapter

PDF_ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", PDF_ADAPTERS)
class TestPdfAdapters:
    def test_extract_returns_text(self, adapter_cls: type, sample_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert isinstance(result, str)
        assert "terminated on 30 days notice" in result

    def test_extract_multi_page(self, adapter_cls: type, multi_page_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(multi_page_pdf_bytes)
        assert "Page one content" in result
        assert "Page two content" in result

    def test_scanned_pdf_returns_empty_string(
        self, adapter_cls: type, scanned_pdf_bytes: bytes
    ) -> None:
        assert adapter_cls().extract(scanned_pdf_bytes) == ""

    def test_extract_raises_on_invalid_bytes(self, adapter_cls: type) -> None:
        with pytest.raises(NativeExtractionError):
            adapter_cls().extract(b"not a pdf")

    def test_extract_result_is_stripped(self, adapter_cls: type, sample_pdf_bytes: bytes) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert result == result.strip()


class TestDocxAdapter:
    def test_reads_paragraphs_and_tables(self, docx_bytes: bytes) -> None:
        result = DocxAdapter().extract(docx_bytes)
        assert "Confidentiality" in result
        assert "keep all information secret" in result
        assert "Term | Two years" in result

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(NativeExtractionError, match="python-docx"):
            DocxAdapter().extract(b"not a zip archive")


class TestPlainTextAdapter:
    def test_normalizes_line_endings_and_strips(self) -> None:
        assert PlainTextAdapter().extract(b"  line one\r\nline two\r\n") == "line one\nline two"

    def test_empty_file_returns_empty_string(self) -> None:
        assert PlainTextAdapter().extract(b"") == ""
