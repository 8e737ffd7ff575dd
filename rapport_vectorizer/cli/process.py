# =============================================================================
# rapport_vectorizer/cli/process.py -- Operator CLI
# =============================================================================
#
# Runs the report pipeline outside the storage trigger, for replaying failed
# uploads and for checking a PDF locally before it is uploaded.
#
#   event  -- Run the handler on a saved notification JSON file
#   s3     -- Run the handler for an object already in the bucket
#   pdf    -- Extract, summarize and tag a local PDF (nothing is persisted)
#   split  -- Print the word-wrapped segments of a text file
#
# Usage examples:
#   python -m rapport_vectorizer.cli event --file tests/fixtures/event.json
#   python -m rapport_vectorizer.cli s3 --bucket pfe-rapports --key "reports/42_7.pdf"
#   python -m rapport_vectorizer.cli pdf --file ./rapport.pdf
#   python -m rapport_vectorizer.cli pdf --file ./rapport.pdf --no-llm
#   python -m rapport_vectorizer.cli split --file ./rapport.txt --max-length 500
# =============================================================================

"""Command-line entry points for rapport-vectorizer.

Usage::

    python -m rapport_vectorizer.cli event --file event.json
    python -m rapport_vectorizer.cli s3 --bucket BUCKET --key KEY
    python -m rapport_vectorizer.cli pdf --file report.pdf [--no-llm]
    python -m rapport_vectorizer.cli split --file report.txt --max-length 500
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rapport_vectorizer.config.settings import Settings, load_settings
from rapport_vectorizer.utils.errors import ConfigurationError, RapportVectorizerError
from rapport_vectorizer.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _run_event(event: dict, settings: Settings) -> int:
    """Run the full pipeline for *event* and print the platform response."""
    from rapport_vectorizer.handler import handle_event

    response = await handle_event(event, settings=settings)
    if response is None:
        print("Event key is not a report key; nothing was processed.", file=sys.stderr)
        return 2
    body = json.loads(response["body"])
    print(f"Status:        {response['statusCode']}")
    print(f"Technologies:  {', '.join(body['technologies']) or '(none)'}")
    print()
    print(body["resume"])
    return 0


async def _cmd_event(args: argparse.Namespace, settings: Settings) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: event file not found: {path}", file=sys.stderr)
        return 1
    try:
        event = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        print(f"Error: invalid event JSON in {path}: {exc}", file=sys.stderr)
        return 1
    return await _run_event(event, settings)


async def _cmd_s3(args: argparse.Namespace, settings: Settings) -> int:
    from rapport_vectorizer.pipeline.events import build_s3_event

    return await _run_event(build_s3_event(args.bucket, args.key), settings)


async def _cmd_pdf(args: argparse.Namespace, settings: Settings) -> int:
    """Analyze a local PDF without touching storage or either database."""
    from rapport_vectorizer.services.pdf_extractor import PDFTextExtractor

    path = Path(args.file)
    if not path.is_file():
        print(f"Error: PDF not found: {path}", file=sys.stderr)
        return 1

    text = await PDFTextExtractor().extract_text(path.read_bytes())
    words = len(text.split())
    print(f"Extracted {len(text.strip())} characters ({words} words) from {path.name}")
    if not text.strip():
        print("No text layer found; the pipeline would reject this report.", file=sys.stderr)
        return 1
    if args.no_llm:
        return 0

    if not settings.openai_api_key:
        print("Error: OPENAI_API_KEY is required unless --no-llm is given.", file=sys.stderr)
        return 1

    from rapport_vectorizer.providers.llm.openai_provider import OpenAILLMProvider
    from rapport_vectorizer.services.report_analyzer import ReportAnalyzer

    analyzer = ReportAnalyzer(
        llm=OpenAILLMProvider(settings=settings),
        temperature=settings.llm_temperature,
        summary_max_tokens=settings.summary_max_tokens,
        max_input_chars=settings.llm_max_input_chars,
    )
    resume = await analyzer.summarize(text)
    technologies = await analyzer.extract_technologies(text)

    print(f"Resume:        {resume.outcome.value}")
    print(f"Technologies:  {technologies.outcome.value} {', '.join(technologies.technologies)}")
    if resume.resume:
        print()
        print(resume.resume)
    return 0 if resume.ok else 1


def _cmd_split(args: argparse.Namespace) -> int:
    from rapport_vectorizer.services.text_splitter import split_text

    path = Path(args.file)
    if not path.is_file():
        print(f"Error: text file not found: {path}", file=sys.stderr)
        return 1
    chunks = split_text(path.read_text(encoding="utf-8"), args.max_length)
    for index, chunk in enumerate(chunks, start=1):
        print(f"--- chunk {index} ({len(chunk)} chars) ---")
        print(chunk)
    print(f"{len(chunks)} chunk(s)", file=sys.stderr)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rapport-vectorizer",
        description="Summarize, tag and vectorize project reports.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_event = sub.add_parser("event", help="Run the pipeline on a saved storage notification")
    p_event.add_argument("--file", required=True, help="Path to the notification JSON")

    p_s3 = sub.add_parser("s3", help="Run the pipeline for an object already in the bucket")
    p_s3.add_argument("--bucket", required=True)
    p_s3.add_argument("--key", required=True, help='Object key, e.g. "reports/42_7.pdf"')

    p_pdf = sub.add_parser("pdf", help="Analyze a local PDF without persisting anything")
    p_pdf.add_argument("--file", required=True, help="Path to the PDF report")
    p_pdf.add_argument("--no-llm", action="store_true", help="Only extract text")

    p_split = sub.add_parser("split", help="Print word-wrapped segments of a text file")
    p_split.add_argument("--file", required=True)
    p_split.add_argument("--max-length", type=int, default=500)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "split":
        if args.max_length < 1:
            print("Error: --max-length must be at least 1", file=sys.stderr)
            return 1
        return _cmd_split(args)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    configure_logging(log_level=settings.log_level)

    commands = {"event": _cmd_event, "s3": _cmd_s3, "pdf": _cmd_pdf}
    try:
        return asyncio.run(commands[args.command](args, settings))
    except RapportVectorizerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
