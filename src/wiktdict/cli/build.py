#!/usr/bin/env python3
"""
wiktdict - Build a Kindle dictionary source tree from a wiktextract dump.

Usage:
    wiktdict DEFINITIONS.jsonl [TITLE] [AUTHOR]

Writes ./output/ (recreated on every run):
    dictionary.opf, cover.html, copyright.html, content_1.html ...
"""

import argparse
import logging
import sys
from pathlib import Path

from wiktdict.config import DEFAULT_AUTHOR, DEFAULT_TITLE, BuildConfig
from wiktdict.errors import OutputDirectoryError, OutputWriteError
from wiktdict.pipeline import build_dictionary


logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='wiktdict',
        description='Build a Kindle dictionary source tree from a wiktextract JSONL dump'
    )
    parser.add_argument('definitions', type=Path,
                        help='Input JSONL file (one dictionary entry per line)')
    parser.add_argument('title', nargs='?', default=DEFAULT_TITLE,
                        help=f'Book title (default: {DEFAULT_TITLE})')
    parser.add_argument('author', nargs='?', default=DEFAULT_AUTHOR,
                        help=f'Book author (default: {DEFAULT_AUTHOR})')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    args = parse_args(argv)

    if not args.definitions.exists():
        logger.error(f"Input file not found: {args.definitions}")
        return 1

    config = BuildConfig(definitions_path=args.definitions, title=args.title, author=args.author)

    try:
        build_dictionary(config)
    except OutputDirectoryError as e:
        logger.error(f"Cannot prepare output directory: {e}")
        return 1
    except OutputWriteError as e:
        logger.error(f"Build aborted: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
