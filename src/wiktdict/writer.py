"""
writer.py — Paginate rendered entries into standalone content documents.

Outputs:
  - content_1.html, content_2.html, ... in the output directory

Each document holds at most `page_size` entries. A document is written
completely (closed, normalized, persisted) before the next one starts, so
document numbers follow flush order.

Normalization runs in two passes over every flushed document:
  1. reformat: parse with lxml, drop comments, pretty-print
  2. compact: strip whitespace between tags and any leftover comments
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from lxml import etree

from wiktdict.config import PAGE_SIZE
from wiktdict.entry import Entry
from wiktdict.errors import EntryRenderError, OutputWriteError
from wiktdict.render import render_entry


logger = logging.getLogger(__name__)


KINDLE_NS = 'https://kindlegen.s3.amazonaws.com/AmazonKindlePublishingGuidelines.pdf'

DOCUMENT_HEADER = f"""<html xmlns:math="http://exslt.org/math" xmlns:svg="http://www.w3.org/2000/svg"
    xmlns:tl="{KINDLE_NS}"
    xmlns:saxon="http://saxon.sf.net/" xmlns:xs="http://www.w3.org/2001/XMLSchema"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
    xmlns:cx="{KINDLE_NS}"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:mbp="{KINDLE_NS}"
    xmlns:mmc="{KINDLE_NS}"
    xmlns:idx="{KINDLE_NS}">
  <head>
    <meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
    <!-- entry layout -->
    <style>
      dt {{ font-weight: bold; }}
      dd {{ padding: 0; margin: 0; }}
      ol, ul {{ padding: 0; padding-left: 20px; }}
      p.etym, p.forms, p.syn {{ margin: 0.2em 0; }}
    </style>
  </head>
  <body>
    <mbp:frameset>
"""

DOCUMENT_FOOTER = """
    </mbp:frameset>
  </body>
</html>
"""

COMMENT = re.compile(r'<!--.*?-->', re.DOTALL)
INTER_TAG_WHITESPACE = re.compile(r'>\s+<')

FRAGMENT_WRAPPER = f'<entry xmlns:idx="{KINDLE_NS}">{{}}</entry>'


def content_filename(number: int) -> str:
    return f"content_{number}.html"


def check_fragment(word: str, fragment: str):
    """Raise EntryRenderError unless the fragment parses on its own."""
    try:
        etree.fromstring(FRAGMENT_WRAPPER.format(fragment).encode('utf-8'))
    except (etree.XMLSyntaxError, UnicodeEncodeError) as e:
        raise EntryRenderError(word, f"not well-formed: {e}") from e


def reformat(text: str) -> str:
    """Parse and pretty-print a document; raises etree.XMLSyntaxError if malformed."""
    parser = etree.XMLParser(remove_comments=True, remove_blank_text=True)
    root = etree.fromstring(text.encode('utf-8'), parser)
    return etree.tostring(root, pretty_print=True, encoding='unicode')


def compact(text: str) -> str:
    """Remove comments and whitespace-only runs between tags."""
    text = COMMENT.sub('', text)
    text = INTER_TAG_WHITESPACE.sub('><', text)
    return text.strip()


def normalize(text: str) -> str:
    return compact(reformat(text))


class PaginatedWriter:
    """
    Accumulates rendered entries and flushes them as numbered documents.

    Usage:
        with PaginatedWriter(output_dir) as writer:
            for entry in entries:
                writer.add(entry)
        writer.document_count

    The buffer is private; callers only append, flush and close.
    """

    def __init__(self, output_dir: Path, page_size: int = PAGE_SIZE):
        self.output_dir = Path(output_dir)
        self.page_size = page_size
        self.document_count = 0
        self.entries_written = 0
        self.skipped = 0
        self._parts: List[str] = []
        self._buffered = 0
        self._reset()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
        return False

    @property
    def buffered(self) -> int:
        """Entries waiting in the current document."""
        return self._buffered

    def _reset(self):
        self._parts = [DOCUMENT_HEADER]
        self._buffered = 0

    def add(self, entry: Entry) -> bool:
        """Render and buffer one entry. Returns False if it was skipped."""
        if not entry.word.strip():
            self.skipped += 1
            return False

        try:
            fragment = render_entry(entry)
            check_fragment(entry.word, fragment)
        except EntryRenderError as e:
            logger.warning(f"Skipping entry: {e}")
            self.skipped += 1
            return False

        logger.info(f'Adding "{entry.word}"')
        self.append(fragment)
        return True

    def append(self, fragment: str):
        """Buffer a rendered fragment, flushing when the page is full."""
        self._parts.append(fragment)
        self._buffered += 1
        if self._buffered >= self.page_size:
            self.flush()

    def flush(self) -> Optional[Path]:
        """Write the buffered entries as the next document; no-op when empty."""
        if self._buffered == 0:
            return None

        number = self.document_count + 1
        path = self.output_dir / content_filename(number)

        self._parts.append(DOCUMENT_FOOTER)
        try:
            document = normalize(''.join(self._parts))
        except etree.XMLSyntaxError as e:
            raise OutputWriteError(f"{path.name} is not well-formed: {e}") from e

        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(document)
        except OSError as e:
            logger.error(f"Cannot write {path}: {e}")
            raise OutputWriteError(f"cannot write {path}: {e}") from e

        self.document_count = number
        self.entries_written += self._buffered
        logger.info(f"✓ Wrote {path.name} ({self._buffered:,} entries)")
        self._reset()
        return path

    def close(self) -> int:
        """Flush any partial page and return the number of documents written."""
        self.flush()
        return self.document_count
