import argparse
from pathlib import Path
from typing import List, Optional

from config import settings


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sff",
        description=(
            "sff (SemanticFileFinder) searches a directory by the meaning of a query. "
            "It reads text files, chunks their content and ranks the chunks by "
            "similarity to find the most relevant snippets."
        ),
    )
    parser.add_argument("query", nargs="+", help="The semantic search query")
    parser.add_argument("-p", "--path", type=Path, default=Path("."),
                        help="The directory to search in")
    parser.add_argument("-m", "--model", default=settings.EMBEDDING_MODEL_NAME,
                        help="Model to use for embeddings, from Hugging Face Hub or local path")
    parser.add_argument("-l", "--limit", type=_non_negative_int,
                        default=settings.DEFAULT_RESULT_LIMIT,
                        help="Number of top results to display")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Search recursively through all subdirectories")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print stage timings and skipped files")
    parser.add_argument("--json", action="store_true",
                        help="Output results in JSON format instead of a table")
    parser.add_argument("-e", "--extension", action="append", default=None,
                        help="File extension to search; repeat for several (default: %s)"
                        % " ".join(settings.DEFAULT_EXTENSIONS))
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {settings.APP_VERSION}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    args.query = " ".join(args.query)
    args.extension = args.extension or list(settings.DEFAULT_EXTENSIONS)
    return args
