#!/usr/bin/env python3
"""Command-line job recommendations.

Usage:
    python cli.py query "react developer seattle"
    python cli.py resume [path/to/resume.pdf]
    python cli.py load jobPostings.json [--if-empty]
"""

import argparse
import logging
import sys

from config import settings
from models.responses import RecommendationResponse
from services.embedding_gateway import EmbeddingGateway
from services.errors import EmbeddingError, StoreConnectionError, StoreOperationError
from services.job_loader import load_jobs, read_postings, seed_if_empty
from services.job_store import JobStore
from services.recommender import NO_RESULTS_MESSAGE, Recommender

logger = logging.getLogger(__name__)


def print_recommendations(response: RecommendationResponse) -> None:
    if not response.results:
        print(NO_RESULTS_MESSAGE)
        return
    print("Top Job Recommendations:")
    for index, item in enumerate(response.results, start=1):
        print(f"{index}. {item.job_name} (Score: {item.score:.2f})")


def cmd_query(args: argparse.Namespace, store: JobStore, gateway: EmbeddingGateway) -> int:
    response = Recommender(store, gateway).recommend_for_query(args.text)
    print_recommendations(response)
    return 0


def cmd_resume(args: argparse.Namespace, store: JobStore, gateway: EmbeddingGateway) -> int:
    path = args.path or input("Enter file path to PDF: ").strip()
    response = Recommender(store, gateway).recommend_for_resume_file(path)
    print_recommendations(response)
    return 0


def cmd_load(args: argparse.Namespace, store: JobStore, gateway: EmbeddingGateway) -> int:
    # json.JSONDecodeError and pydantic's ValidationError are ValueErrors
    try:
        postings = read_postings(args.jobs_file)
    except (OSError, ValueError) as e:
        logger.error("Could not read job postings from %s: %s", args.jobs_file, e)
        return 1

    try:
        if args.if_empty:
            inserted = seed_if_empty(store, gateway, postings)
        else:
            inserted = load_jobs(store, gateway, postings)
    except EmbeddingError as e:
        logger.error("Embedding generation failed, nothing inserted: %s", e)
        return 1
    except StoreOperationError as e:
        logger.error("Loading job postings failed: %s", e)
        return 1
    print(f"Inserted {inserted} job postings")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job recommendations via vector search")
    sub = parser.add_subparsers(dest="command", required=True)

    query = sub.add_parser("query", help="Recommend jobs for a short free-text query")
    query.add_argument("text")
    query.set_defaults(func=cmd_query)

    resume = sub.add_parser("resume", help="Recommend jobs for a resume file")
    resume.add_argument("path", nargs="?", help="Resume path (prompted if omitted)")
    resume.set_defaults(func=cmd_resume)

    load = sub.add_parser("load", help="Embed and insert job postings from a JSON file")
    load.add_argument("jobs_file")
    load.add_argument("--if-empty", action="store_true", help="Only load into an empty collection")
    load.set_defaults(func=cmd_load)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")

    gateway = EmbeddingGateway.from_settings(settings)
    try:
        with JobStore.from_settings(settings) as store:
            return args.func(args, store, gateway)
    except StoreConnectionError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
