"""wiktdict: build Kindle dictionary sources from wiktextract JSONL dumps."""

__version__ = '0.1.0'
