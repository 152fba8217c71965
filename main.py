#!/usr/bin/env python3
"""
Main entry point for the Review Insight Service.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from src.logging_config import configure_logging, get_logger


def run_api():
    """Start the FastAPI server."""
    import uvicorn
    from src.config import settings

    uvicorn.run(
        "src.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


def read_reviews(path: Path) -> list:
    """Read one review per line, dropping blank lines."""
    with path.open(encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def keyword_reviews(result, batch) -> dict:
    """Map each keyword to the texts of the reviews it was found in."""
    return {k.keyword: batch.reviews_for(k.review_indices) for k in result.keywords}


async def analyze_file(path: Path, locale: str) -> dict:
    """Run the analysis pipeline once on a text file."""
    from src.modules.review_analysis import OpenAIInferenceClient, Orchestrator, ReviewBatch
    from src.utils import generate_correlation_id

    generate_correlation_id()
    reviews = read_reviews(path)
    client = OpenAIInferenceClient()
    try:
        result = await Orchestrator(inference_client=client).analyze(reviews, locale)
    finally:
        await client.close()

    return {
        "result": result.to_response(),
        "keywordShares": result.summary(),
        "keywordReviews": keyword_reviews(result, ReviewBatch.from_raw(reviews)),
    }


def run_analyze(args):
    """Analyze a review file and print the result as JSON."""
    from src.modules.review_analysis import AnalysisError

    logger = get_logger(__name__)
    try:
        output = asyncio.run(analyze_file(args.file, args.locale))
    except AnalysisError as e:
        logger.error("analysis_failed", kind=e.kind.value, error=e.message)
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, ensure_ascii=False, indent=2))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Review Insight Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  api       Start the FastAPI server
  analyze   Analyze a text file of reviews (one per line)

Examples:
  python main.py api
  python main.py analyze reviews.txt --locale ko
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("api", help="Start the FastAPI server")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a review file")
    analyze_parser.add_argument("file", type=Path, help="Text file, one review per line")
    analyze_parser.add_argument("--locale", default="en", help="Locale code (default: en)")

    args = parser.parse_args()

    configure_logging()

    if args.command == "api":
        run_api()
    elif args.command == "analyze":
        run_analyze(args)


if __name__ == "__main__":
    main()
