"""Command-line interface for Print Gallery.

Generates one printable HTML page per subfolder of ROOT. Each page is
written next to its folder (``ROOT/<name>.html``) and lists the folder's
images ordered by the first number found in each file or subfolder name.
"""

import argparse
import sys
from typing import List, Optional

from .builder import build_galleries
from .errors import WalkError
from .status import StatusReporter, printable


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="print-gallery",
        description="Create printable HTML galleries from folders of images",
    )
    parser.add_argument(
        "root",
        nargs="?",
        help="Folder whose subfolders are turned into galleries",
    )
    parser.add_argument(
        "--nested",
        action="store_true",
        help="Also write a gallery for every folder below the subfolders",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.root is None:
        parser.print_usage()
        return

    disable = True if args.no_progress else None
    with StatusReporter(description="Galleries", disable=disable) as reporter:
        try:
            summary = build_galleries(args.root, nested=args.nested, reporter=reporter)
        except WalkError as exc:
            message = printable(str(exc))
            print(f"Error processing folder: {message}", file=sys.stderr)
            sys.exit(1)

    if summary.written:
        print(f"Generated {len(summary.written)} gallery page(s).")
    else:
        print("No gallery generated (no images found).")
    if summary.failed:
        print(f"{len(summary.failed)} folder(s) could not be processed.")


if __name__ == "__main__":
    main()
