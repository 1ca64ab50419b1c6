from collections.abc import Mapping
from dataclasses import dataclass

from docanalyzer.cancellation import CancellationToken
from docanalyzer.extraction.base import BaseOcrEngine, BaseTextExtractor
from docanalyzer.extraction.exceptions import (
    ExtractionCancelledError,
    ExtractionError,
    NativeExtractionError,
)
from docanalyzer.extraction.progress import ProgressCallback, ProgressReporter
from docanalyzer.ingestion.models import ExtractionSource, IngestedFile, UnifiedExtractionResult
from docanalyzer.logging.logger import Log


@dataclass(frozen=True)
class ExtractionOptions:
    fallback_to_ocr: bool = True
    on_progress: ProgressCallback | None = None
    cancel_token: CancellationToken | None = None


class TextExtractionEngine:
    """Produces plain text for a file: native reader first, OCR as the fallback.

    Every call ends in exactly one of two outcomes: a complete
    UnifiedExtractionResult with non-empty text, or an ExtractionError
    carrying the file name.
    """

    def __init__(
        self,
        native_extractors: Mapping[str, BaseTextExtractor],
        ocr_engine: BaseOcrEngine | None = None,
        min_native_text_chars: int = 1,
    ) -> None:
        self._native_extractors = dict(native_extractors)
        self._ocr_engine = ocr_engine
        self._min_native_text_chars = max(1, min_native_text_chars)

    def has_native_extractor(self, mime_type: str) -> bool:
        return mime_type in self._native_extractors

    def extract(
        self,
        file: IngestedFile,
        options: ExtractionOptions | None = None,
    ) -> UnifiedExtractionResult:
        """Extract text from a file.

        Raises:
            ExtractionCancelledError: if the cancellation token was set.
            ExtractionError: if neither strategy produced text.
        """
        options = options or ExtractionOptions()
        reporter = ProgressReporter(options.on_progress)
        self._check_cancelled(file, options.cancel_token)

        native_text = self._extract_native(file)
        if self._is_sufficient(native_text):
            reporter.finish()
            Log.info(f"Extracted {len(native_text)} chars natively", file_name=file.name)
            return UnifiedExtractionResult(text=native_text, source=ExtractionSource.NATIVE)

        if not options.fallback_to_ocr:
            raise ExtractionError(
                f"No native text found in {file.name} and OCR fallback is disabled",
                file_name=file.name,
            )
        ocr_engine = self._ocr_engine
        if ocr_engine is None or not ocr_engine.supports(file.mime_type):
            raise ExtractionError(
                f"No native text found in {file.name} and OCR cannot read "
                f"'{file.mime_type}'",
                file_name=file.name,
            )

        self._check_cancelled(file, options.cancel_token)
        return self._extract_ocr(file, ocr_engine, reporter, options.cancel_token)

    def _extract_native(self, file: IngestedFile) -> str:
        extractor = self._native_extractors.get(file.mime_type)
        if extractor is None:
            Log.debug(f"No native extractor for '{file.mime_type}'", file_name=file.name)
            return ""
        try:
            return extractor.extract(file.content)
        except NativeExtractionError as exc:
            Log.warning(f"Native extraction failed: {exc}", file_name=file.name)
            return ""

    def _extract_ocr(
        self,
        file: IngestedFile,
        ocr_engine: BaseOcrEngine,
        reporter: ProgressReporter,
        cancel_token: CancellationToken | None,
    ) -> UnifiedExtractionResult:
        Log.info("Falling back to OCR", file_name=file.name)
        page_count = 0

        def on_page(done: int, total: int) -> None:
            nonlocal page_count
            page_count = total
            reporter.report(round(done * 100 / total) if total else 100)

        reporter.report(0)
        try:
            text = ocr_engine.recognize(
                file.content,
                file.mime_type,
                on_page=on_page,
                should_stop=(lambda: cancel_token.is_cancelled) if cancel_token else None,
            )
        except ExtractionCancelledError as exc:
            raise ExtractionCancelledError(str(exc), file_name=file.name) from exc
        except ExtractionError as exc:
            raise ExtractionError(f"OCR failed for {file.name}: {exc}", file_name=file.name) from exc

        text = text.strip()
        if not text:
            raise ExtractionError(f"OCR found no text in {file.name}", file_name=file.name)
        reporter.finish()
        Log.info(f"Extracted {len(text)} chars via OCR from {page_count} page(s)", file_name=file.name)
        return UnifiedExtractionResult(
            text=text,
            source=ExtractionSource.OCR,
            page_count=page_count,
        )

    def _is_sufficient(self, text: str) -> bool:
        return len("".join(text.split())) >= self._min_native_text_chars

    @staticmethod
    def _check_cancelled(file: IngestedFile, cancel_token: CancellationToken | None) -> None:
        if cancel_token is not None and cancel_token.is_cancelled:
            raise ExtractionCancelledError(
                f"Extraction of {file.name} was cancelled", file_name=file.name
            )
