from docanalyzer.analysis.models import AnalysisContent
from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.ingestion.models import FileRecord


def resolve_content(record: FileRecord, encoder: ContentEncoder) -> AnalysisContent:
    """Pick what to send for analysis: edited text, else extracted text, else raw bytes.

    Empty strings count as absent. Exactly one representation is returned.

    Raises:
        FileEncodingError: if the raw bytes are needed but cannot be encoded.
    """
    if record.edited_text:
        return AnalysisContent(text=record.edited_text, file_name=record.name)
    if record.extracted_text:
        return AnalysisContent(text=record.extracted_text, file_name=record.name)
    return AnalysisContent(
        file_base64=encoder.encode_base64(record.file),
        file_name=record.name,
        mime_type=record.file.mime_type,
    )
