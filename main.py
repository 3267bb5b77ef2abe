# main.py
"""Command line entry point: sff <query words> [options]"""
import logging
import sys
from typing import List, Optional

from config import settings
from core.domain import SearchPipelineError
from services.logger_config import setup_logging
from services.factory import get_search_service
from cli.arguments import parse_args
from cli.formatters import no_files_message, render_json, render_summary, render_table
from cli.progress import progress_for

logger = logging.getLogger(settings.LOGGER_NAME)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    service = get_search_service(args.model)
    try:
        report = service.search(
            root=args.path,
            query=args.query,
            limit=args.limit,
            recursive=args.recursive,
            extensions=args.extension,
            progress_factory=progress_for(args.verbose)
        )
    except SearchPipelineError as e:
        logger.debug("Search failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if report.nothing_to_search:
        print(no_files_message(str(args.path), args.extension))
        return 0

    if args.json:
        print(render_json(report))
    else:
        print(render_summary(report, args.limit))
        print(render_table(report.results))
    return 0

if __name__ == "__main__":
    sys.exit(main())
