"""
reader.py — Stream wiktextract JSONL into Entry objects.

Reads:
  - a JSONL dump, one dictionary entry per line

Produces:
  - every parsed Entry, in input order
  - the inflection index: every forms[*].form string seen in the file

The file is read line by line; only the parsed entries are kept in memory
so the filter/sort stage can reorder them.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Set

import orjson

from wiktdict.entry import Entry
from wiktdict.errors import MalformedRecord
from wiktdict.progress_display import ProgressDisplay


logger = logging.getLogger(__name__)


@dataclass
class EntryCollection:
    """All parsed entries plus the inflection index built while reading."""
    entries: List[Entry] = field(default_factory=list)
    inflection_index: Set[str] = field(default_factory=set)
    malformed: int = 0

    def add(self, entry: Entry):
        self.entries.append(entry)
        self.inflection_index.update(entry.inflected_forms())


def parse_line(line: bytes, line_num: int) -> Entry:
    """Parse one raw JSONL line, raising MalformedRecord on any failure (invalid UTF-8 included)."""
    try:
        record = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        raise MalformedRecord(f"invalid JSON: {e}", line_num) from e

    try:
        return Entry.from_record(record)
    except MalformedRecord as e:
        raise MalformedRecord(str(e), line_num) from e


def iter_records(input_file: Path, stats: Optional[EntryCollection] = None) -> Iterator[Entry]:
    """
    Yield entries from a JSONL file, skipping blank and malformed lines.

    Malformed lines are logged and counted on `stats` when given.
    """
    with open(input_file, 'rb') as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                entry = parse_line(line, line_num)
            except MalformedRecord as e:
                logger.warning(f"Skipping malformed record: {e}")
                if stats is not None:
                    stats.malformed += 1
                continue

            yield entry


def read_entries(input_file: Path) -> EntryCollection:
    """Load all entries and build the inflection index."""
    collection = EntryCollection()

    logger.info(f"Reading {input_file.name}...")

    with ProgressDisplay("Reading entries", update_interval=1000) as progress:
        for entry in iter_records(input_file, stats=collection):
            collection.add(entry)
            progress.update(
                Entries=len(collection.entries),
                Forms=len(collection.inflection_index),
                Malformed=collection.malformed,
            )

    logger.info(f"  -> Read {len(collection.entries):,} entries "
                f"({collection.malformed:,} malformed, "
                f"{len(collection.inflection_index):,} inflected forms)")
    return collection
