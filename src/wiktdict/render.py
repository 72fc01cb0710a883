"""
render.py — Render one Entry as a Kindle dictionary markup fragment.

Fragment layout:

  <idx:entry name="default" scriptable="yes" spell="yes">
    <dt><idx:orth>word<idx:infl><idx:iform value="..."/>...</idx:infl></idx:orth></dt>
    <dd>
      <i class="pos">v.</i>
      <ol><li>gloss<ol><li>subgloss</li>...</ol></li>...</ol>
      <p class="etym"><i>Etymology:</i> ...</p>
      <p class="forms"><i>Forms:</i> form (tag, tag), ...</p>
      <p class="syn"><i>Synonyms:</i> ...</p>
    </dd>
  </idx:entry>

Rendering is pure: no I/O and no shared state. All text is escaped, so
every fragment is well-formed on its own (the idx prefix is declared on
the document root).
"""

import html
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from wiktdict.entry import Entry
from wiktdict.errors import EntryRenderError


# Kindle rejects orth blocks with more inflections than this
MAX_INFLECTIONS = 254

# Translations outside Latin-compatible script are left out of the lookup index
LATIN_TEXT = re.compile(r'[\u0020-\u024f]+')

# Characters outside the XML 1.0 Char production
XML_INVALID_CHARS = re.compile(
    r'[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]'
)

# Part-of-speech tags from wiktextract and their display abbreviations
POS_ABBREVIATIONS = {
    'noun': 'n.',
    'verb': 'v.',
    'adj': 'adj.',
    'adv': 'adv.',
    'pron': 'pron.',
    'prep': 'prep.',
    'conj': 'conj.',
    'intj': 'interj.',
    'det': 'det.',
    'article': 'art.',
    'num': 'num.',
    'particle': 'part.',
    'name': 'prop. n.',
    'abbrev': 'abbr.',
    'phrase': 'phr.',
    'prep_phrase': 'prep. phr.',
    'proverb': 'prov.',
    'prefix': 'pref.',
    'suffix': 'suf.',
    'infix': 'inf.',
    'interfix': 'interf.',
    'circumfix': 'circumf.',
    'affix': 'aff.',
    'combining_form': 'comb. form',
    'contraction': 'contr.',
    'symbol': 'sym.',
    'character': 'char.',
    'postp': 'postp.',
    'punct': 'punct.',
}


def escape(text: str) -> str:
    return html.escape(XML_INVALID_CHARS.sub('', text), quote=True)


def abbreviate_pos(pos: str) -> str:
    """Short display form of a POS tag; unknown tags pass through."""
    return POS_ABBREVIATIONS.get(pos, pos)


def inflection_list(entry: Entry) -> List[str]:
    """Forms plus Latin-script translations, capped at MAX_INFLECTIONS."""
    inflections = entry.inflected_forms()
    inflections.extend(w for w in entry.translation_words() if LATIN_TEXT.fullmatch(w))
    return inflections[:MAX_INFLECTIONS]


# =============================================================================
# Sense outline
# =============================================================================

@dataclass
class SenseGroup:
    """One list item of the outline: a shared gloss and its refinements."""
    gloss: Optional[str]
    children: List['SenseGroup'] = field(default_factory=list)


def _gloss_at(sense: Sequence[Optional[str]], depth: int) -> Optional[str]:
    if depth < len(sense):
        return sense[depth]
    return None


def build_sense_outline(senses: Sequence[Sequence[Optional[str]]],
                        depth: int = 0) -> List[SenseGroup]:
    """
    Group senses by the gloss at `depth`, recursing into each group.

    Groups keep the order in which their gloss first appears; a missing or
    null gloss forms its own group. A branch ends once `depth` reaches the
    gloss count of the shallowest sense in the group.
    """
    if not senses or depth >= min(len(sense) for sense in senses):
        return []

    groups: Dict[Optional[str], List[Sequence[Optional[str]]]] = {}
    for sense in senses:
        groups.setdefault(_gloss_at(sense, depth), []).append(sense)

    return [
        SenseGroup(gloss, build_sense_outline(members, depth + 1))
        for gloss, members in groups.items()
    ]


def render_outline(groups: List[SenseGroup]) -> str:
    """Nested <ol> markup for an outline; empty string for no groups."""
    if not groups:
        return ''
    items = ''.join(
        f'<li>{escape(group.gloss or "")}{render_outline(group.children)}</li>'
        for group in groups
    )
    return f'<ol>{items}</ol>'


# =============================================================================
# Entry
# =============================================================================

def render_headword(entry: Entry) -> str:
    inflections = inflection_list(entry)
    infl = ''
    if inflections:
        iforms = ''.join(f'<idx:iform value="{escape(form)}"/>' for form in inflections)
        infl = f'<idx:infl>{iforms}</idx:infl>'
    return f'<dt><idx:orth>{escape(entry.word)}{infl}</idx:orth></dt>'


def render_forms(entry: Entry) -> str:
    """Visible list of forms with their grammatical tags."""
    items = []
    for form, tags in entry.tagged_forms():
        items.append(f'{form} ({", ".join(tags)})' if tags else form)
    if not items:
        return ''
    return f'<p class="forms"><i>Forms:</i> {escape(", ".join(items))}</p>'


def render_entry(entry: Entry) -> str:
    """Render an entry; any unexpected data shape raises EntryRenderError."""
    try:
        parts = ['<idx:entry name="default" scriptable="yes" spell="yes">',
                 render_headword(entry),
                 '<dd>']

        if entry.pos:
            parts.append(f'<i class="pos">{escape(abbreviate_pos(entry.pos))}</i> ')

        parts.append(render_outline(build_sense_outline(entry.sense_glosses())))

        if entry.etymology_text:
            parts.append(f'<p class="etym"><i>Etymology:</i> {escape(entry.etymology_text)}</p>')

        forms = render_forms(entry)
        if forms:
            parts.append(forms)

        synonyms = entry.synonym_words()
        if synonyms:
            parts.append(f'<p class="syn"><i>Synonyms:</i> {escape(", ".join(synonyms))}</p>')

        parts.append('</dd></idx:entry>')
    except EntryRenderError:
        raise
    except (TypeError, ValueError, AttributeError) as e:
        raise EntryRenderError(entry.word, f"{type(e).__name__}: {e}") from e

    return ''.join(parts)
