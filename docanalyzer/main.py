import argparse
import json
import sys
from pathlib import Path

from docanalyzer.config.settings import Settings
from docanalyzer.ingestion.models import FileStatus, IngestedFile
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.session import build_session
from docanalyzer.reporting.formatter import format_batch, to_export_dict


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docanalyzer",
        description="Extract key clauses and assess risks in legal documents.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF, DOCX, DOC, TXT or image files")
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument(
        "--no-ocr",
        action="store_true",
        help="do not fall back to OCR when a file has no text layer",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate -> extract -> analyze -> print."""
    args = parse_args(argv)
    settings = Settings()
    if args.no_ocr:
        settings = settings.model_copy(update={"fallback_to_ocr": False})
    Log.configure(settings.log_level)

    files: list[IngestedFile] = []
    for path in args.files:
        try:
            files.append(IngestedFile.from_path(path))
        except OSError as exc:
            Log.error(f"Cannot read {path}: {exc}")

    session = build_session(settings)
    session.add_files(files)
    Log.info(session.summary())
    results = session.analyze_all()

    if args.json:
        payload = [to_export_dict(name, result) for name, result in results.items()]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(format_batch(results))

    done = sum(1 for record in session.records() if record.status is FileStatus.DONE)
    return 0 if done and done == len(args.files) else 1


if __name__ == "__main__":
    sys.exit(main())
