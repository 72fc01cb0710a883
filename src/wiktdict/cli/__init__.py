"""
Command-line interface entry points for wiktdict.

Entry points:
- wiktdict: Build a Kindle dictionary source tree from a JSONL dump
"""
