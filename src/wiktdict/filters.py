"""
filters.py — Drop redundant inflected-form entries and order the rest.

Filter rule:
  Keep an entry if it declares its own forms, or if its word is not an
  inflected form of any entry in the dump. A plural such as "cats" that only
  exists as a form of "cat" adds nothing the lookup index of "cat" does not
  already cover.

  Known tradeoff: a genuine headword that happens to equal an unrelated
  entry's inflected form, and has no forms of its own, is also dropped.

Sort rule:
  Ascending by word using Python's code point ordering. sorted() is stable,
  so entries sharing a word keep their input order.
"""

import logging
from typing import Iterable, List, Set

from wiktdict.entry import Entry
from wiktdict.reader import EntryCollection


logger = logging.getLogger(__name__)


def is_redundant_form(entry: Entry, inflection_index: Set[str]) -> bool:
    """True if the entry is only an inflected form of another entry."""
    return not entry.forms and entry.word in inflection_index


def filter_entries(entries: Iterable[Entry], inflection_index: Set[str]) -> List[Entry]:
    """Remove entries whose headword is purely another entry's inflected form."""
    kept = []
    dropped = 0

    for entry in entries:
        if is_redundant_form(entry, inflection_index):
            dropped += 1
            continue
        kept.append(entry)

    logger.info(f"  -> Kept {len(kept):,} entries, dropped {dropped:,} inflected forms")
    return kept


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Sort entries lexicographically by word (stable)."""
    sorted_entries = sorted(entries, key=lambda e: e.word)

    if sorted_entries:
        unique_words = len(set(e.word for e in sorted_entries))
        duplicates = len(sorted_entries) - unique_words
        logger.info(f"  Unique words: {unique_words:,}")
        logger.info(f"  Duplicate entries: {duplicates:,} "
                    f"({duplicates / len(sorted_entries) * 100:.1f}%)")

    return sorted_entries


def sorted_entry_source(collection: EntryCollection) -> List[Entry]:
    """
    Filter then sort a collection into render order.

    Downstream stages only consume the returned sequence, so an external
    (disk-backed) sort can replace this function for larger dumps.
    """
    logger.info("Filtering...")
    kept = filter_entries(collection.entries, collection.inflection_index)

    logger.info("Sorting...")
    return sort_entries(kept)
