"""Pytest configuration and shared fixtures."""
import json
import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_records():
    """A small wiktextract-shaped dump covering the filter and render cases."""
    return [
        {"word": "run", "lang_code": "en", "pos": "verb",
         "senses": [["move", "quickly"], ["move", "on foot"]],
         "forms": [{"form": "running", "tags": ["pres"]}, {"form": "ran", "tags": ["past"]}]},
        {"word": "cat", "lang_code": "en", "pos": "noun",
         "senses": [{"glosses": ["A small domesticated carnivore."]}],
         "forms": [{"form": "cats", "tags": ["plural"]}],
         "translations": [{"word": "gato", "lang_code": "es"}, {"word": "猫", "lang_code": "ja"}],
         "etymology_text": "From Old English catt."},
        # Only an inflected form of "cat": dropped
        {"word": "cats", "lang_code": "en", "pos": "noun",
         "senses": [["plural of cat"]]},
        # Inflected form of "run" but declares forms of its own: kept
        {"word": "ran", "lang_code": "en", "pos": "verb",
         "senses": [["simple past of run"]],
         "forms": [{"form": "ran", "tags": ["past"]}]},
        {"word": "apple", "lang_code": "en", "pos": "noun",
         "senses": [["A fruit."]]},
    ]


@pytest.fixture
def write_jsonl(temp_dir):
    """Write records (dicts or raw strings) as a JSONL file and return its path."""
    def _write(records, name="definitions.jsonl"):
        path = temp_dir / name
        with open(path, 'w', encoding='utf-8') as f:
            for record in records:
                if isinstance(record, str):
                    f.write(record + '\n')
                else:
                    f.write(json.dumps(record, ensure_ascii=False) + '\n')
        return path
    return _write
