from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from docanalyzer.config.settings import Settings


@pytest.fixture
def test_settings() -> Settings:
    return Settings(analysis_provider="example", fallback_to_ocr=True, ocr_dpi=50)


@pytest.fixture
def fake_tesseract() -> Iterator[MagicMock]:
    """Replace the Tesseract binary call; page images are still rendered for real."""
    pages = iter(f"Scanned page {n}: Liability is unlimited." for n in range(1, 100))
    with patch(
        "docanalyzer.extraction.tesseract_adapter.pytesseract.image_to_string",
        side_effect=lambda image, lang: next(pages),
    ) as image_to_string:
        yield image_to_string
