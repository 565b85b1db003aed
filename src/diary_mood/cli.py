"""Command-line entry point for analyzing a diary.

Usage:
    diary-mood --title "월요일" --file diary.txt
    cat diary.txt | diary-mood --title "월요일" --format text
    diary-mood --file diary.txt --mood-only --sequential
"""

import argparse
import asyncio
import json
import sys
import uuid
from typing import List, Optional

from diary_mood.config import get_settings
from diary_mood.services.mood_classifier import classify
from diary_mood.services.mood_pipeline import DiaryMoodPipeline
from diary_mood.utils.errors import DiaryMoodException
from diary_mood.utils.logging import get_logger, log_error, set_request_id, setup_logging

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diary-mood",
        description="Compute the mood degree and summary of a diary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Mood and summary for a diary file
  diary-mood --title "Monday" --file diary.txt

  # Mood only, reading the diary from stdin
  cat diary.txt | diary-mood --mood-only

  # Analyze chunks one at a time
  diary-mood --file diary.txt --sequential
        """,
    )
    parser.add_argument("--title", default="", help="Diary title (used for the summary)")
    parser.add_argument(
        "--file",
        help="Path to the diary content (default: read from stdin)",
    )
    parser.add_argument(
        "--mood-only",
        action="store_true",
        help="Skip the summary request and only classify the mood",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Analyze chunks strictly one at a time, in order",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )
    return parser


def read_content(path: Optional[str]) -> str:
    if path:
        with open(path, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


async def run(args: argparse.Namespace, content: str) -> dict:
    pipeline = DiaryMoodPipeline.from_settings(get_settings())
    if args.sequential:
        pipeline.sequential = True

    logger.info(f"Analyzing diary: {len(content)} chars, mood_only={args.mood_only}")

    if args.mood_only:
        stats = await pipeline.analyze_statistics(content)
        mood = classify(stats, threshold=pipeline.strong_threshold)
        return {"mood": mood.value, "statistics": stats.model_dump()}

    fields = await pipeline.compute_diary_derived_fields(args.title, content)
    return {"mood": fields.mood.value, "summary": fields.summary}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        # stdout carries the result
        setup_logging(force=True, stream=sys.stderr)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    set_request_id(uuid.uuid4().hex[:12])

    try:
        content = read_content(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(run(args, content))
    except DiaryMoodException as e:
        log_error(e, context={"file": args.file, "title": args.title})
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        print(f"mood: {result['mood']}")
        if "summary" in result:
            print(f"summary: {result['summary']}")
        if "statistics" in result:
            stats = result["statistics"]
            print(
                f"chunks: {stats['chunk_count']} "
                f"(positive={stats['positive']}, negative={stats['negative']}, "
                f"neutral={stats['neutral']})"
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
