"""
Command-line interface for document analysis.

Usage:
    # Single file with the default template and provider
    python -m doc_insight.cli.analyze report.txt

    # Choose template, provider and depth
    python -m doc_insight.cli.analyze paper.md --template academic-research \\
        --provider gemini --depth expert --focus methodology --focus results

    # Directory batch processing
    python -m doc_insight.cli.analyze documents/ --output results.jsonl

    # Single-call full report instead of per-section analysis
    python -m doc_insight.cli.analyze report.txt --full-report

    # With environment variable
    export DEEPSEEK_API_KEY="sk-..."
    python -m doc_insight.cli.analyze report.txt
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from doc_insight.analysis.analyzer import DocumentAnalyzer
from doc_insight.analysis.progress import ProgressEvent
from doc_insight.analysis.report import ReportService
from doc_insight.canonicalization.decoding import decode_document_bytes
from doc_insight.config import settings
from doc_insight.logging_config import setup_logging
from doc_insight.models.document import DocumentMetadata, FileType
from doc_insight.models.template import AnalysisDepth
from doc_insight.templates.registry import default_registry


logger = structlog.get_logger(__name__)

SUPPORTED_SUFFIXES = {".pdf", ".txt", ".md", ".markdown", ".docx", ".csv", ".json"}


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def load_document(path: Path) -> tuple:
    """
    Read a document and build its upload metadata.

    PDF and DOCX files are expected to hold already-extracted text.

    Returns:
        (content, DocumentMetadata) tuple
    """
    data = path.read_bytes()
    content, encoding = decode_document_bytes(data)
    metadata = DocumentMetadata(
        title=path.stem,
        file_type=FileType.from_filename(path.name),
        file_size=len(data),
        encoding=encoding,
    )
    return content, metadata


def print_progress(event: ProgressEvent) -> None:
    """Progress line on stderr."""
    print(f"[{event.progress:5.1f}%] {event.stage.value}: {event.message}", file=sys.stderr)


def process_single_file(
    path: Path,
    analyzer: DocumentAnalyzer,
    args: argparse.Namespace,
) -> dict:
    """
    Analyze one file.

    Args:
        path: Document path
        analyzer: Shared analyzer
        args: Parsed CLI arguments

    Returns:
        Analysis result (or full report) as a JSON-ready dict

    Raises:
        AnalysisError: On analysis failure
    """
    content, metadata = load_document(path)
    listener = print_progress if args.verbose else None

    if args.full_report:
        report = ReportService(client_factory=analyzer.client_factory).generate(
            content,
            provider=args.provider,
            api_key=args.api_key,
            listener=listener,
        )
        return {"file": str(path), **report.model_dump(mode="json")}

    configuration = analyzer.build_configuration(
        args.template,
        depth=AnalysisDepth(args.depth),
        focus=args.focus or [],
        exclude_topics=args.exclude or None,
        output_language=args.language,
        include_visualization=not args.no_visualization,
    )
    result = analyzer.analyze(
        content=content,
        metadata=metadata,
        configuration=configuration,
        api_key=args.api_key,
        provider=args.provider,
        listener=listener,
    )
    return result.model_dump(mode="json")


def process_directory(
    dir_path: Path,
    analyzer: DocumentAnalyzer,
    args: argparse.Namespace,
) -> List[dict]:
    """
    Analyze every supported file in a directory (recursively).

    Failed files are logged and skipped.
    """
    files = sorted(
        p for p in dir_path.glob("**/*") if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
    )

    if not files:
        logger.warning("no_documents_found", directory=str(dir_path))
        return []

    logger.info("processing_directory", files_count=len(files))

    results = []
    errors = []
    for idx, path in enumerate(files, 1):
        try:
            if args.verbose:
                print(f"[{idx}/{len(files)}] Processing {path.name}...", file=sys.stderr)
            results.append(process_single_file(path, analyzer, args))
        except Exception as e:
            logger.error("file_processing_failed", file=str(path), error=str(e))
            errors.append({"file": str(path), "error": str(e)})

    logger.info(
        "directory_processing_completed",
        total=len(files),
        success=len(results),
        errors=len(errors),
    )
    return results


def write_output(results: List[dict], output_path: Optional[Path], format: str = "jsonl"):
    """
    Write results to a file or stdout.

    Args:
        results: JSON-ready results
        output_path: Output file path (None = stdout)
        format: "json" or "jsonl"
    """
    if format == "jsonl":
        text = "".join(json.dumps(r, ensure_ascii=False) + "\n" for r in results)
    else:
        text = json.dumps(results, ensure_ascii=False, indent=2) + "\n"

    if output_path is None:
        sys.stdout.write(text)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("output_written", path=str(output_path), count=len(results))


def list_templates() -> None:
    """Print the template catalog."""
    for template in default_registry().list_templates():
        print(f"{template.id:<26} {template.category.value:<10} {template.name}")


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Document Analysis CLI - analyze documents with DeepSeek or Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report.txt
  %(prog)s paper.md --template academic-research --provider gemini
  %(prog)s documents/ --output results.jsonl
  %(prog)s --list-templates

API keys are read from DEEPSEEK_API_KEY / GEMINI_API_KEY unless --api-key is given.
        """,
    )
    parser.add_argument("input", nargs="?", help="Document file or directory")
    parser.add_argument("--template", "-t", default=None, help="Template id (default: %s)" % settings.default_template_id)
    parser.add_argument(
        "--provider", "-p", choices=["deepseek", "gemini"], default=None,
        help="AI provider (default: %s)" % settings.default_provider,
    )
    parser.add_argument("--api-key", default=None, help="Provider API key")
    parser.add_argument(
        "--depth", "-d", choices=[d.value for d in AnalysisDepth],
        default=AnalysisDepth.STANDARD.value, help="Analysis depth",
    )
    parser.add_argument("--focus", action="append", help="Focus area (repeatable)")
    parser.add_argument("--exclude", action="append", help="Topic to avoid (repeatable)")
    parser.add_argument("--language", "-l", default="en", help="Output language code")
    parser.add_argument("--no-visualization", action="store_true", help="Skip chart payloads")
    parser.add_argument("--full-report", action="store_true", help="Single-call full report")
    parser.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")
    parser.add_argument("--format", "-f", choices=["json", "jsonl"], default=None, help="Output format")
    parser.add_argument("--list-templates", action="store_true", help="List templates and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        json_output=False,
        level="DEBUG" if args.verbose else "WARNING",
        file=sys.stderr,
    )

    if args.list_templates:
        list_templates()
        return 0

    if not args.input:
        parser.error("input is required unless --list-templates is given")

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Path not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else None
    format = args.format or ("json" if output_path and output_path.suffix == ".json" else "jsonl")

    analyzer = DocumentAnalyzer()
    try:
        if input_path.is_dir():
            results = process_directory(input_path, analyzer, args)
        else:
            results = [process_single_file(input_path, analyzer, args)]

        write_output(results, output_path, format)

    except Exception as e:
        logger.error("cli_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
