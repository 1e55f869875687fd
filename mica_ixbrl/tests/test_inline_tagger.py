# Path: mica_ixbrl/tests/test_inline_tagger.py
"""
Unit tests for the inline tagger.

Tests:
- HTML escaping
- ix:nonFraction attributes (sign, decimals, format)
- ix:nonNumeric for text, text blocks and prose in numeric fields
- Fragment splitting and continuation chains
- Visible references to hidden facts
- ix:exclude wrapping
"""

import pytest

from mica_ixbrl.constants import (
    DATA_TYPE_DECIMAL,
    DATA_TYPE_INTEGER,
    DATA_TYPE_MONETARY,
    DATA_TYPE_TEXT_BLOCK,
)
from mica_ixbrl.engine.generator.inline_tagger import (
    continuation_id,
    escape_html,
    render_fact,
    render_fact_parts,
    render_hidden_reference,
    renders_as_numeric,
    split_text_into_fragments,
    wrap_exclude,
)
from mica_ixbrl.models.xbrl import EscapeMode, Fact


def _fact(value, **kwargs):
    defaults = {'id': 'f_1', 'name': 'mica:Example', 'context_ref': 'ctx_instant'}
    defaults.update(kwargs)
    return Fact(value=value, **defaults)


def test_escape_html():
    assert escape_html('<b>"A" & \'B\'</b>') == '&lt;b&gt;&quot;A&quot; &amp; &#x27;B&#x27;&lt;/b&gt;'
    assert escape_html(42) == '42'


def test_non_fraction():
    fact = _fact('0.10', unit_ref='unit_EUR', decimals=2, data_type=DATA_TYPE_MONETARY)
    markup = render_fact(fact)

    assert markup.startswith('<ix:nonFraction id="f_1" name="mica:Example" contextRef="ctx_instant"')
    assert 'unitRef="unit_EUR"' in markup
    assert 'decimals="2"' in markup
    assert 'format="ixt:num-dot-decimal"' in markup
    assert 'sign=' not in markup
    assert markup.endswith('>0.10</ix:nonFraction>')


def test_negative_non_fraction_uses_sign():
    fact = _fact('-3.5', unit_ref='unit_pure', decimals=1, data_type=DATA_TYPE_DECIMAL)
    markup = render_fact(fact)

    assert 'sign="-"' in markup
    assert '>3.5</ix:nonFraction>' in markup


def test_missing_decimals_rendered_as_inf():
    fact = _fact('7', unit_ref='unit_pure', data_type=DATA_TYPE_INTEGER)
    assert 'decimals="INF"' in render_fact(fact)


def test_prose_in_numeric_fact_is_non_numeric():
    fact = _fact('To be announced', data_type=DATA_TYPE_MONETARY)

    assert fact.is_numeric()
    assert not renders_as_numeric(fact)
    markup = render_fact(fact)
    assert markup.startswith('<ix:nonNumeric')
    assert 'escape="false"' in markup
    assert 'unitRef' not in markup


def test_text_fact_is_escaped():
    markup = render_fact(_fact('Smith & <Sons>'))

    assert 'escape="false"' in markup
    assert '>Smith &amp; &lt;Sons&gt;</ix:nonNumeric>' in markup


def test_text_block_attributes():
    fact = _fact('Risk one.', escape=EscapeMode.TEXT_BLOCK, data_type=DATA_TYPE_TEXT_BLOCK)
    markup = render_fact(fact)

    assert 'escape="true"' in markup
    assert 'format="ixt:fixed-true"' in markup
    assert 'continuedAt' not in markup


def test_split_short_text_is_single_fragment():
    assert split_text_into_fragments('short', 30) == ['short']


def test_split_prefers_paragraph_break():
    text = 'x' * 20 + '\n\n' + 'y' * 20
    assert split_text_into_fragments(text, 30) == ['x' * 20 + '\n\n', 'y' * 20]


def test_split_hard_cut_without_usable_break():
    text = 'ab ' + 'c' * 97
    fragments = split_text_into_fragments(text, 30)

    assert [len(f) for f in fragments] == [30, 30, 30, 10]
    assert ''.join(fragments) == text


def test_split_rejects_non_positive_threshold():
    for threshold in (0, -1):
        with pytest.raises(ValueError, match='at least 1'):
            split_text_into_fragments('abc', threshold)


def test_split_with_threshold_of_one():
    assert split_text_into_fragments('a b', 1) == ['a', ' ', 'b']


def test_split_rejoins_to_original():
    text = ' '.join(f'word{n}' for n in range(500)) + '\n\nSecond paragraph.\nLast line.'
    fragments = split_text_into_fragments(text, 120)

    assert ''.join(fragments) == text
    assert all(len(f) <= 120 for f in fragments)


def test_continuation_chain():
    fact = _fact('a' * 25, id='f_9', escape=EscapeMode.TEXT_BLOCK, data_type=DATA_TYPE_TEXT_BLOCK)
    rendered = render_fact_parts(fact, threshold=10)

    assert continuation_id('f_9', 1) == 'cont_f_9_1'
    assert 'continuedAt="cont_f_9_1"' in rendered.primary
    assert len(rendered.continuations) == 2
    assert rendered.continuations[0].startswith('<ix:continuation id="cont_f_9_1" continuedAt="cont_f_9_2">')
    assert rendered.continuations[1].startswith('<ix:continuation id="cont_f_9_2">')
    assert 'continuedAt' not in rendered.continuations[1]


def test_plain_text_also_continues():
    rendered = render_fact_parts(_fact('b' * 15), threshold=10)
    assert len(rendered.continuations) == 1
    assert 'escape="false"' in rendered.primary


def test_hidden_reference():
    fact = _fact('https://example.com/mica/#Member', id='f_3', escape=EscapeMode.HIDDEN,
                 display_value='Label & <more>')
    assert render_hidden_reference(fact) == (
        '<span style="-ix-hidden:f_3">Label &amp; &lt;more&gt;</span>'
    )


def test_wrap_exclude():
    assert wrap_exclude('<b>Label</b>') == '<ix:exclude><b>Label</b></ix:exclude>'
