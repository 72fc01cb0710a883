"""Tests for the paginated content writer."""

import logging

import pytest
from lxml import etree

from wiktdict.entry import Entry
from wiktdict.errors import EntryRenderError, OutputWriteError
from wiktdict import writer as writer_module
from wiktdict.writer import (
    PaginatedWriter,
    check_fragment,
    compact,
    content_filename,
    normalize,
    reformat,
)


def make_entries(count, prefix="word"):
    return [Entry.from_record({"word": f"{prefix}{i:05d}", "senses": [[f"gloss {i}"]]})
            for i in range(count)]


def entry_count(path):
    return path.read_text(encoding='utf-8').count("<idx:entry ")


def test_content_filename():
    assert content_filename(1) == "content_1.html"
    assert content_filename(12) == "content_12.html"


class TestNormalize:
    def test_removes_comments_and_inter_tag_whitespace(self):
        text = "<html>\n  <!-- note -->\n  <body>\n    <p>a  b</p>\n  </body>\n</html>"

        assert normalize(text) == "<html><body><p>a  b</p></body></html>"

    def test_reformat_rejects_malformed_markup(self):
        with pytest.raises(etree.XMLSyntaxError):
            reformat("<html><body></html>")

    def test_compact_keeps_text_whitespace(self):
        assert compact("<p> <i>x</i> y </p>") == "<p><i>x</i> y </p>"


def test_full_pages_hold_page_size_entries(temp_dir):
    """Every document but the last is full; the last holds the remainder."""
    with PaginatedWriter(temp_dir, page_size=1000) as writer:
        for entry in make_entries(2500):
            writer.add(entry)

    assert writer.document_count == 3
    assert writer.entries_written == 2500
    assert [entry_count(temp_dir / content_filename(n)) for n in (1, 2, 3)] == [1000, 1000, 500]
    assert not (temp_dir / content_filename(4)).exists()


def test_exact_multiple_leaves_no_empty_page(temp_dir):
    writer = PaginatedWriter(temp_dir, page_size=3)
    for entry in make_entries(6):
        writer.add(entry)

    assert writer.close() == 2
    assert sorted(p.name for p in temp_dir.iterdir()) == ["content_1.html", "content_2.html"]


def test_no_entries_no_documents(temp_dir):
    with PaginatedWriter(temp_dir) as writer:
        pass

    assert writer.document_count == 0
    assert list(temp_dir.iterdir()) == []


def test_flush_on_empty_buffer_is_noop(temp_dir):
    writer = PaginatedWriter(temp_dir, page_size=5)

    assert writer.flush() is None
    assert writer.document_count == 0


def test_documents_are_standalone_and_ordered(temp_dir):
    """Each page parses on its own and entries appear in input order."""
    entries = make_entries(7)
    with PaginatedWriter(temp_dir, page_size=3) as writer:
        for entry in entries:
            writer.add(entry)

    words = []
    for n in range(1, writer.document_count + 1):
        root = etree.parse(str(temp_dir / content_filename(n))).getroot()
        assert root.tag == "html"
        words.extend(el.text for el in root.iter("{*}orth"))

    assert words == [e.word for e in entries]


def test_partial_last_page_is_closed(temp_dir):
    with PaginatedWriter(temp_dir, page_size=10) as writer:
        for entry in make_entries(4):
            writer.add(entry)

    text = (temp_dir / "content_1.html").read_text(encoding='utf-8')
    assert text.startswith("<html")
    assert text.endswith("</mbp:frameset></body></html>")
    assert "<!--" not in text


def test_blank_words_are_skipped(temp_dir):
    writer = PaginatedWriter(temp_dir, page_size=10)
    blank = Entry(word="   ")

    assert writer.add(blank) is False
    assert writer.skipped == 1
    assert writer.buffered == 0


def test_render_failure_skips_entry_and_continues(temp_dir, caplog):
    entries = [
        Entry.from_record({"word": "good", "senses": [["fine"]]}),
        Entry.from_record({"word": "bad", "senses": [7]}),
        Entry.from_record({"word": "next", "senses": [["also fine"]]}),
    ]

    with caplog.at_level(logging.WARNING, logger="wiktdict.writer"):
        with PaginatedWriter(temp_dir, page_size=10) as writer:
            for entry in entries:
                writer.add(entry)

    assert writer.skipped == 1
    assert writer.entries_written == 2
    assert "bad" in caplog.text
    assert entry_count(temp_dir / "content_1.html") == 2


def test_output_is_deterministic(temp_dir):
    entries = make_entries(5)
    for name in ("a", "b"):
        (temp_dir / name).mkdir()
        with PaginatedWriter(temp_dir / name, page_size=2) as writer:
            for entry in entries:
                writer.add(entry)

    for n in (1, 2, 3):
        first = (temp_dir / "a" / content_filename(n)).read_bytes()
        second = (temp_dir / "b" / content_filename(n)).read_bytes()
        assert first == second


def test_write_failure_raises(temp_dir):
    writer = PaginatedWriter(temp_dir / "missing", page_size=1)

    with pytest.raises(OutputWriteError):
        writer.add(make_entries(1)[0])


def test_noncharacter_gloss_does_not_poison_page(temp_dir):
    """Characters XML forbids are dropped; the page and its other entries are written."""
    entries = [
        Entry.from_record({"word": "good", "senses": [["fine"]]}),
        Entry.from_record({"word": "bad", "senses": [["x\uffffy"]]}),
    ]

    with PaginatedWriter(temp_dir, page_size=10) as writer:
        for entry in entries:
            writer.add(entry)

    assert writer.document_count == 1
    assert writer.entries_written == 2
    text = (temp_dir / "content_1.html").read_text(encoding="utf-8")
    assert "<li>xy</li>" in text
    etree.fromstring(text.encode("utf-8"))


def test_check_fragment():
    check_fragment("ok", '<idx:entry><dt>ok</dt></idx:entry>')

    with pytest.raises(EntryRenderError) as exc_info:
        check_fragment("broken", '<idx:entry><dt>broken</idx:entry>')

    assert exc_info.value.word == "broken"


def test_malformed_fragment_is_skipped_not_flushed(temp_dir, monkeypatch, caplog):
    """An entry whose markup does not parse is skipped; the rest of the page survives."""
    real_render = writer_module.render_entry

    def render(entry):
        if entry.word == "bad":
            return "<idx:entry><dd>unclosed</idx:entry>"
        return real_render(entry)

    monkeypatch.setattr(writer_module, "render_entry", render)
    entries = [Entry.from_record({"word": w, "senses": [["g"]]}) for w in ("a", "bad", "c")]

    with caplog.at_level(logging.WARNING, logger="wiktdict.writer"):
        with PaginatedWriter(temp_dir, page_size=10) as writer:
            for entry in entries:
                writer.add(entry)

    assert writer.skipped == 1
    assert writer.entries_written == 2
    assert "bad" in caplog.text
    assert entry_count(temp_dir / "content_1.html") == 2
