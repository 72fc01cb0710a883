"""
package.py — Kindle package manifest and static pages.

Outputs:
  - dictionary.opf (title, author, identifier, manifest + spine)
  - cover.html
  - copyright.html

The manifest lists the documents in reading order:
  cover -> copyright -> content_1 ... content_N
"""

import html
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List

from wiktdict.errors import OutputWriteError
from wiktdict.writer import content_filename


logger = logging.getLogger(__name__)


MANIFEST_FILENAME = 'dictionary.opf'
COVER_FILENAME = 'cover.html'
COPYRIGHT_FILENAME = 'copyright.html'

LANGUAGE = 'en-us'

COPYRIGHT_NOTICE = (
    'The original texts of Wiktionary entries are dual-licensed to the public under both the '
    '<a href="https://en.wiktionary.org/wiki/Wiktionary:Text_of_Creative_Commons_Attribution-ShareAlike_3.0_Unported_License">'
    'Creative Commons Attribution-ShareAlike 3.0 Unported License</a> (CC-BY-SA) and the '
    '<a href="https://en.wiktionary.org/wiki/Wiktionary:Text_of_the_GNU_Free_Documentation_License">'
    'GNU Free Documentation License (GFDL)</a>. This work adheres to the same licensing terms.'
)


@dataclass(frozen=True)
class PackageDescriptor:
    document_count: int
    title: str
    author: str
    identifier: str

    @classmethod
    def create(cls, document_count: int, title: str, author: str,
               id_factory: Callable[[], object] = uuid.uuid4) -> 'PackageDescriptor':
        return cls(document_count, title, author, str(id_factory()))

    def content_filenames(self) -> List[str]:
        return [content_filename(n) for n in range(1, self.document_count + 1)]


def render_manifest(descriptor: PackageDescriptor) -> str:
    """OPF package document for the descriptor."""
    items = [
        '    <item id="cover" href="cover.html" media-type="application/xhtml+xml"/>',
        '    <item id="copyright" href="copyright.html" media-type="application/xhtml+xml"/>',
    ]
    itemrefs = [
        '    <itemref idref="cover"/>',
        '    <itemref idref="copyright"/>',
    ]
    for n, filename in enumerate(descriptor.content_filenames(), start=1):
        items.append(f'    <item id="content_{n}" href="{filename}" media-type="application/xhtml+xml"/>')
        itemrefs.append(f'    <itemref idref="content_{n}"/>')

    guide = ''
    if descriptor.document_count:
        guide = ('  <guide>\n'
                 f'    <reference type="index" title="IndexName" href="{content_filename(1)}"/>\n'
                 '  </guide>\n')

    manifest_items = '\n'.join(items)
    spine_items = '\n'.join(itemrefs)

    return f"""<?xml version="1.0" encoding="utf-8"?>
<package version="2.0" xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>{html.escape(descriptor.title)}</dc:title>
    <dc:creator opf:role="aut">{html.escape(descriptor.author)}</dc:creator>
    <dc:language>{LANGUAGE}</dc:language>
    <dc:identifier id="BookId">urn:uuid:{descriptor.identifier}</dc:identifier>
    <x-metadata>
      <DictionaryInLanguage>{LANGUAGE}</DictionaryInLanguage>
      <DictionaryOutLanguage>{LANGUAGE}</DictionaryOutLanguage>
      <DefaultLookupIndex>default</DefaultLookupIndex>
    </x-metadata>
  </metadata>
  <manifest>
{manifest_items}
  </manifest>
  <spine>
{spine_items}
  </spine>
{guide}</package>
"""


def _static_page(body: str) -> str:
    return f"""<html>
  <head>
    <meta content="text/html; charset=utf-8" http-equiv="content-type"/>
  </head>
  <body>
{body}
  </body>
</html>
"""


def render_cover(title: str, author: str) -> str:
    return _static_page(f"    <h1>{html.escape(title)}</h1>\n"
                        f"    <h2><em>{html.escape(author)}</em></h2>")


def render_copyright() -> str:
    return _static_page(f"    <h1>Copyrights</h1>\n    <p>{COPYRIGHT_NOTICE}</p>")


def _write(path: Path, content: str):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Cannot write {path}: {e}")
        raise OutputWriteError(f"cannot write {path}: {e}") from e
    logger.info(f"✓ Wrote {path.name}")


def write_static_pages(output_dir: Path, title: str, author: str):
    """Write cover.html and copyright.html."""
    _write(output_dir / COVER_FILENAME, render_cover(title, author))
    _write(output_dir / COPYRIGHT_FILENAME, render_copyright())


def write_manifest(output_dir: Path, descriptor: PackageDescriptor) -> Path:
    """Write dictionary.opf for the final document count."""
    path = output_dir / MANIFEST_FILENAME
    _write(path, render_manifest(descriptor))

    logger.info("Manifest summary:")
    logger.info(f"  Title: {descriptor.title}")
    logger.info(f"  Author: {descriptor.author}")
    logger.info(f"  Content documents: {descriptor.document_count:,}")
    logger.info(f"  Identifier: {descriptor.identifier}")
    return path
