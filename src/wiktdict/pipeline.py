"""
pipeline.py — Build a Kindle dictionary source tree from a wiktextract dump.

Phases:
  1. Prepare ./output (wiped and recreated)
  2. Write cover.html and copyright.html
  3. Read entries and the inflection index
  4. Filter redundant inflected forms, sort by word
  5. Render and paginate into content_N.html
  6. Write dictionary.opf for the final document count
"""

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from wiktdict.config import BuildConfig
from wiktdict.errors import OutputDirectoryError, OutputWriteError
from wiktdict.filters import sorted_entry_source
from wiktdict.package import PackageDescriptor, write_manifest, write_static_pages
from wiktdict.progress_display import ProgressDisplay
from wiktdict.reader import read_entries
from wiktdict.writer import PaginatedWriter


logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    descriptor: PackageDescriptor
    entries_read: int
    malformed: int
    entries_written: int
    entries_skipped: int


def prepare_output_dir(output_dir: Path):
    """Remove any previous output and create an empty directory."""
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as e:
        raise OutputDirectoryError(f"cannot prepare {output_dir}: {e}") from e


def build_dictionary(config: BuildConfig,
                     id_factory: Callable[[], object] = uuid.uuid4) -> BuildResult:
    """Run every phase; raises OutputDirectoryError or OutputWriteError when fatal."""
    output_dir = Path(config.output_dir)

    logger.info("=" * 60)
    logger.info(f"Building '{config.title}' by {config.author}")
    logger.info("=" * 60)

    prepare_output_dir(output_dir)

    try:
        write_static_pages(output_dir, config.title, config.author)
    except OutputWriteError as e:
        # Content documents do not depend on the static pages
        logger.error(f"Static pages not written: {e}")

    collection = read_entries(Path(config.definitions_path))
    entries = sorted_entry_source(collection)

    logger.info("Creating...")
    with ProgressDisplay("Writing entries", update_interval=1000) as progress:
        with PaginatedWriter(output_dir, page_size=config.page_size) as writer:
            for entry in entries:
                writer.add(entry)
                progress.update(Entries=writer.entries_written + writer.buffered,
                                Documents=writer.document_count,
                                Skipped=writer.skipped)

    descriptor = PackageDescriptor.create(writer.document_count, config.title,
                                          config.author, id_factory)
    write_manifest(output_dir, descriptor)

    logger.info("")
    logger.info("✓ Dictionary build complete")
    logger.info(f"  Entries written: {writer.entries_written:,}")
    logger.info(f"  Entries skipped: {writer.skipped:,}")

    return BuildResult(
        descriptor=descriptor,
        entries_read=len(collection.entries),
        malformed=collection.malformed,
        entries_written=writer.entries_written,
        entries_skipped=writer.skipped,
    )
