"""
entry.py — Data model for one wiktextract dictionary record.

Only the keys the renderer needs are lifted out of the raw JSON object:

  word, lang_code, pos, senses, forms, translations,
  etymology_text, sounds, synonyms

Sequences are stored as tuples so an Entry can be shared freely between
stages without being mutated.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from wiktdict.errors import EntryRenderError, MalformedRecord


def _as_tuple(value: Any) -> Tuple:
    """Coerce a JSON list into a tuple; anything else becomes empty."""
    if isinstance(value, list):
        return tuple(value)
    return ()


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass(frozen=True)
class Entry:
    word: str
    lang_code: Optional[str] = None
    pos: Optional[str] = None
    senses: Tuple = field(default_factory=tuple)
    forms: Tuple = field(default_factory=tuple)
    translations: Tuple = field(default_factory=tuple)
    etymology_text: Optional[str] = None
    sounds: Tuple = field(default_factory=tuple)
    synonyms: Tuple = field(default_factory=tuple)

    @classmethod
    def from_record(cls, record: Any) -> 'Entry':
        """
        Build an Entry from a parsed JSON object.

        Raises MalformedRecord when the record is not an object or its
        word is missing, not a string, or blank.
        """
        if not isinstance(record, dict):
            raise MalformedRecord(f"expected a JSON object, got {type(record).__name__}")

        word = record.get('word')
        if not isinstance(word, str) or not word.strip():
            raise MalformedRecord("missing or blank 'word'")

        return cls(
            word=word,
            lang_code=_optional_str(record.get('lang_code')),
            pos=_optional_str(record.get('pos')),
            senses=_as_tuple(record.get('senses')),
            forms=_as_tuple(record.get('forms')),
            translations=_as_tuple(record.get('translations')),
            etymology_text=_optional_str(record.get('etymology_text')),
            sounds=_as_tuple(record.get('sounds')),
            synonyms=_as_tuple(record.get('synonyms')),
        )

    def inflected_forms(self) -> List[str]:
        """Non-empty form strings, in input order."""
        return [form for form, _ in self.tagged_forms()]

    def tagged_forms(self) -> List[Tuple[str, List[str]]]:
        """(form, tags) pairs for the non-empty forms; non-string tags are ignored."""
        result = []
        for form in self.forms:
            if isinstance(form, dict):
                text = form.get('form')
                if isinstance(text, str) and text:
                    tags = form.get('tags')
                    if not isinstance(tags, list):
                        tags = []
                    result.append((text, [t for t in tags if isinstance(t, str) and t]))
        return result

    def translation_words(self) -> List[str]:
        """Non-empty translation strings, in input order."""
        result = []
        for translation in self.translations:
            if isinstance(translation, dict):
                text = translation.get('word')
                if isinstance(text, str) and text:
                    result.append(text)
        return result

    def synonym_words(self) -> List[str]:
        result = []
        for synonym in self.synonyms:
            if isinstance(synonym, dict):
                text = synonym.get('word')
                if isinstance(text, str) and text:
                    result.append(text)
        return result

    def sense_glosses(self) -> List[List[Optional[str]]]:
        """
        Each sense as its ordered list of glosses.

        A sense is either a bare list of glosses or a wiktextract sense
        object carrying a 'glosses' list. Senses without glosses (wiktextract
        emits these for "no-gloss" senses) are left out so they do not cut
        the outline short. Any other shape raises EntryRenderError.
        """
        result = []
        for index, sense in enumerate(self.senses):
            if isinstance(sense, dict):
                glosses = sense.get('glosses', [])
            else:
                glosses = sense

            if glosses is None:
                glosses = []
            if not isinstance(glosses, list):
                raise EntryRenderError(
                    self.word, f"sense {index} has glosses of type {type(glosses).__name__}"
                )
            for gloss in glosses:
                if gloss is not None and not isinstance(gloss, str):
                    raise EntryRenderError(
                        self.word, f"sense {index} has a non-string gloss: {gloss!r}"
                    )
            if glosses:
                result.append(list(glosses))
        return result

