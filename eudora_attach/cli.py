#!/usr/bin/env python3
"""
EMPTI - Eudora Mailboxes Preparer for Thunderbird's Importer

Copies every Eudora .mbx file from an origin folder tree into a
destination tree, adding "Attachment Converted" lines for the
attachments of sent messages so Thunderbird's importer keeps them.
Always work on a backup of your Eudora folder.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from eudora_attach.config import load_settings
from eudora_attach.fixer import MailboxFixer
from eudora_attach.walker import MailboxWalker


logger = logging.getLogger(__name__)

BANNER = "=====EMPTI V.1.2====="


def validate_paths(origin: str, destination: str) -> None:
    """
    Checks the two folders before anything is written.

    Raises:
        ValueError: if either path is not a directory, both are the same
            directory, or the destination lies inside the origin
    """
    if not (os.path.isdir(origin) and os.path.isdir(destination)):
        raise ValueError("paths have to point to directories.")

    origin = os.path.realpath(origin)
    destination = os.path.realpath(destination)

    if origin == destination:
        raise ValueError("origin directory has to be different from destination directory.")

    if os.path.commonpath([origin, destination]) == origin:
        raise ValueError("origin directory cannot contain destination directory.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eudora-attach",
        description="Prepare Eudora mailboxes so Thunderbird's importer keeps the attachments of sent messages.",
        epilog="The origin directory cannot contain the destination directory.",
    )
    parser.add_argument("origin", help="Eudora mail folder holding the original .mbx files")
    parser.add_argument("destination", help="Existing folder where the fixed .mbx files are written")
    parser.add_argument(
        "--line-ending",
        choices=["auto", "cr", "crlf"],
        help="Line ending of the written files (default: auto, CRLF on Windows, CR elsewhere)",
    )
    parser.add_argument("--encoding", help="Text encoding of the mailboxes (default: latin-1)")
    parser.add_argument(
        "--extension",
        action="append",
        dest="extensions",
        help="Mailbox file extension; may be repeated (default: .mbx)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_summary(walker: MailboxWalker) -> None:
    added = sum(stats["attachments_added"] for stats in walker.processed)

    print()
    print(f"Mailboxes processed: {len(walker.processed)}")
    print(f"Attachment lines added: {added}")

    if walker.failures:
        print(f"Failures: {len(walker.failures)}")
        for path, error in walker.failures:
            print(f"   {path}: {error}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print()
    print(BANNER)

    try:
        settings = load_settings(
            line_ending=args.line_ending,
            encoding=args.encoding,
            extensions=",".join(args.extensions) if args.extensions else None,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValueError as e:
        print(f"Failure: {e}")
        return 2

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        validate_paths(args.origin, args.destination)
    except ValueError as e:
        print(f"Failure: {e}")
        return 2

    logger.info(
        "Fixing mailboxes from %s into %s (line ending: %s)",
        args.origin, args.destination, settings.line_ending,
    )

    walker = MailboxWalker(MailboxFixer(settings), settings.extensions)
    walker.run(args.origin, args.destination)

    print_summary(walker)
    return 1 if walker.failures else 0


if __name__ == "__main__":
    sys.exit(main())
