from __future__ import annotations

"""Command line front-end: convert AppData files to JSON records."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from appdata_toolkit.core.exceptions import AppdataError
from appdata_toolkit.core.models import DirectoryOptions, ParseOptions
from appdata_toolkit.core.services import AppdataService
from appdata_toolkit.logging_config import setup_logging
from appdata_toolkit.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appdata2json",
        description="Parse AppData/metainfo XML files and print the resulting records as JSON.",
    )
    parser.add_argument("files", nargs="*", help="AppData files to parse (stdin when omitted)")
    parser.add_argument("-d", "--directory", help="Parse every *.appdata.xml/*.metainfo.xml file in this directory")
    parser.add_argument("-r", "--root", help="Root prefix for directory and desktop-file lookups")
    parser.add_argument("--desktop-fallback", action="store_true",
                        help="Fill missing name/summary from the companion .desktop file")
    parser.add_argument("--log-level", default=None, help="Console log level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    service = AppdataService()
    failures = 0

    if args.directory:
        report = service.parse_directory(
            args.directory, DirectoryOptions(root_path_prefix=args.root, defer_finalize=True)
        )
        failures += len(report.failed)
        for error in report.failed:
            print(f"appdata2json: {error}", file=sys.stderr)

    sources = args.files if (args.files or args.directory) else [sys.stdin.buffer]
    for source in sources:
        options = ParseOptions(
            root_path_prefix=args.root,
            enable_legacy_fallback=args.desktop_fallback,
            defer_finalize=True,
        )
        try:
            service.parse_document(source, options)
        except AppdataError as e:
            failures += 1
            print(f"appdata2json: {e}", file=sys.stderr)

    service.store.finalize_batch()
    records = [record.to_dict() for record in service.store.records()]
    json.dump(records, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
