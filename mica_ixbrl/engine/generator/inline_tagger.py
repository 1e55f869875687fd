# Path: mica_ixbrl/engine/generator/inline_tagger.py
"""
Inline Tagger

Renders facts as inline XBRL elements.

- Numeric facts become ix:nonFraction, but only when the value matches
  the numeric grammar; prose in a numeric field becomes ix:nonNumeric.
- Text blocks are tagged with escape="true" and the fixed transform,
  other text with escape="false".
- Long text is split into fragments chained with ix:continuation.
- Enumeration facts live in ix:hidden; the visible label references
  them with -ix-hidden.
- Every value is HTML-escaped.
"""

import html
from dataclasses import dataclass, field

from ...constants import (
    CONTINUATION_ID_PREFIX,
    FRAGMENT_MIN_BREAK_RATIO,
    HIDDEN_FACT_STYLE,
    TEXT_BLOCK_CONTINUATION_THRESHOLD,
)
from ...models.xbrl import EscapeMode, Fact
from .numeric_grammar import is_value_numeric


NUMERIC_FORMAT = 'ixt:num-dot-decimal'
TEXT_BLOCK_FORMAT = 'ixt:fixed-true'

# Preferred fragment boundaries, best first
FRAGMENT_BREAKS = ('\n\n', '\n', ' ')


@dataclass
class RenderedFact:
    """Primary element and its continuation elements, in document order."""
    primary: str
    continuations: list[str] = field(default_factory=list)

    def to_markup(self, separator: str = '') -> str:
        return separator.join([self.primary] + self.continuations)


def escape_html(text) -> str:
    """Escape &, <, >, double and single quotes."""
    return html.escape(str(text), quote=True)


def continuation_id(fact_id: str, position: int) -> str:
    """ID of the position-th continuation (1-based) of a fact."""
    return f"{CONTINUATION_ID_PREFIX}{fact_id}_{position}"


def split_text_into_fragments(text: str, threshold: int = TEXT_BLOCK_CONTINUATION_THRESHOLD) -> list[str]:
    """
    Split long text into fragments of at most threshold characters.

    Cuts at the last paragraph break, else line break, else space inside
    the window, provided that boundary lies past 30% of the threshold;
    otherwise cuts hard at the threshold. Joining the fragments gives
    back the original text.

    Args:
        text: Text to split
        threshold: Maximum fragment length

    Returns:
        Fragments in order (a single fragment if text fits)

    Raises:
        ValueError: If threshold is below 1
    """
    if threshold < 1:
        raise ValueError(f"Fragment threshold must be at least 1, got {threshold}")
    if len(text) <= threshold:
        return [text]

    min_break = threshold * FRAGMENT_MIN_BREAK_RATIO
    fragments = []
    remaining = text

    while remaining:
        if len(remaining) <= threshold:
            fragments.append(remaining)
            break

        window = remaining[:threshold]
        split_at = threshold
        for separator in FRAGMENT_BREAKS:
            position = window.rfind(separator)
            if position > min_break:
                split_at = position + len(separator)
                break

        fragments.append(remaining[:split_at])
        remaining = remaining[split_at:]

    return fragments


def _attributes(pairs: list[tuple[str, object]]) -> str:
    return ''.join(f' {name}="{escape_html(value)}"' for name, value in pairs if value is not None)


def renders_as_numeric(fact: Fact) -> bool:
    """True if the fact is rendered as ix:nonFraction."""
    return fact.is_numeric() and is_value_numeric(fact.value)


def _render_non_fraction(fact: Fact) -> RenderedFact:
    value = str(fact.value).strip()
    sign = None
    if value.startswith('-'):
        sign = '-'
        value = value[1:].lstrip()
    elif value.startswith('+'):
        value = value[1:].lstrip()

    attributes = _attributes([
        ('id', fact.id),
        ('name', fact.name),
        ('contextRef', fact.context_ref),
        ('unitRef', fact.unit_ref),
        ('decimals', fact.decimals if fact.decimals is not None else 'INF'),
        ('format', NUMERIC_FORMAT),
        ('sign', sign),
    ])
    return RenderedFact(primary=f'<ix:nonFraction{attributes}>{escape_html(value)}</ix:nonFraction>')


def _text_attributes(fact: Fact) -> list[tuple[str, object]]:
    pairs = [
        ('id', fact.id),
        ('name', fact.name),
        ('contextRef', fact.context_ref),
    ]
    if fact.escape == EscapeMode.TEXT_BLOCK:
        pairs += [('escape', 'true'), ('format', TEXT_BLOCK_FORMAT)]
    else:
        pairs.append(('escape', 'false'))
    return pairs


def render_fragments(fact: Fact, fragments: list[str]) -> RenderedFact:
    """
    Render a text fact from an ordered list of fragments.

    The primary element holds the first fragment and points at the first
    continuation; each continuation points at the next; the last one has
    no continuedAt. No fragments gives an empty primary element.

    Args:
        fact: Text fact
        fragments: Ordered fragments of the fact value

    Returns:
        RenderedFact
    """
    pairs = _text_attributes(fact)
    if len(fragments) > 1:
        pairs.append(('continuedAt', continuation_id(fact.id, 1)))

    first = escape_html(fragments[0]) if fragments else ''
    primary = f'<ix:nonNumeric{_attributes(pairs)}>{first}</ix:nonNumeric>'

    continuations = []
    tail = fragments[1:]
    for position, fragment in enumerate(tail, start=1):
        next_ref = continuation_id(fact.id, position + 1) if position < len(tail) else None
        attributes = _attributes([
            ('id', continuation_id(fact.id, position)),
            ('continuedAt', next_ref),
        ])
        continuations.append(
            f'<ix:continuation{attributes}>{escape_html(fragment)}</ix:continuation>'
        )

    return RenderedFact(primary=primary, continuations=continuations)


def render_fact_parts(fact: Fact, threshold: int = TEXT_BLOCK_CONTINUATION_THRESHOLD) -> RenderedFact:
    """
    Render a fact into its primary element and continuations.

    Args:
        fact: Fact to render
        threshold: Continuation threshold for long text

    Returns:
        RenderedFact
    """
    if renders_as_numeric(fact):
        return _render_non_fraction(fact)
    return render_fragments(fact, split_text_into_fragments(str(fact.value), threshold))


def render_fact(fact: Fact, threshold: int = TEXT_BLOCK_CONTINUATION_THRESHOLD) -> str:
    """Render a fact (with any continuations) as markup."""
    return render_fact_parts(fact, threshold).to_markup()


def render_hidden_reference(fact: Fact) -> str:
    """Visible label of a hidden fact, linked to it by -ix-hidden."""
    label = fact.display_value if fact.display_value is not None else fact.value
    return f'<span style="{HIDDEN_FACT_STYLE}:{escape_html(fact.id)}">{escape_html(label)}</span>'


def wrap_exclude(content: str) -> str:
    """
    Mark content as excluded from XBRL extraction.

    The content is inserted as-is (it is already markup).
    """
    return f'<ix:exclude>{content}</ix:exclude>'


__all__ = [
    'RenderedFact',
    'escape_html',
    'continuation_id',
    'split_text_into_fragments',
    'renders_as_numeric',
    'render_fragments',
    'render_fact_parts',
    'render_fact',
    'render_hidden_reference',
    'wrap_exclude',
]
