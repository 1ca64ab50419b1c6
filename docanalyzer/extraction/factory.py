from docanalyzer.config.settings import Settings
from docanalyzer.extraction.base import BaseTextExtractor
from docanalyzer.extraction.docx_adapter import DocxAdapter
from docanalyzer.extraction.engine import TextExtractionEngine
from docanalyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docanalyzer.extraction.plain_text_adapter import PlainTextAdapter
from docanalyzer.extraction.pymupdf_adapter import PyMuPdfAdapter
from docanalyzer.extraction.tesseract_adapter import TesseractOcrAdapter
from docanalyzer.ingestion.models import DOCX, PDF, PLAIN_TEXT


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


class ExtractionEngineFactory:
    """Wires native readers per MIME type and the OCR backend into an engine."""

    @classmethod
    def create(cls, settings: Settings) -> TextExtractionEngine:
        native_extractors: dict[str, BaseTextExtractor] = {
            PDF: PdfExtractorFactory.create(settings),
            DOCX: DocxAdapter(),
            PLAIN_TEXT: PlainTextAdapter(),
        }
        ocr_engine = TesseractOcrAdapter(
            language=settings.ocr_language,
            dpi=settings.ocr_dpi,
            tesseract_cmd=settings.tesseract_cmd,
        )
        return TextExtractionEngine(
            native_extractors=native_extractors,
            ocr_engine=ocr_engine,
            min_native_text_chars=settings.min_native_text_chars,
        )
