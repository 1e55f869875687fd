# Path: mica_ixbrl/tests/test_document_generator.py
"""
Unit tests for the document generator.

Tests:
- Document skeleton (declaration, namespaces, schema reference)
- Contexts, units and facts in the hidden header and body
- Enumeration facts in ix:hidden with -ix-hidden references
- Token type normalization of the record value
- Defaults for missing date and language
- Escaping, label exclusion and text continuation
- Missing offeror LEI
"""

from datetime import date

import pytest
from lxml import etree

from mica_ixbrl.constants import ENTRY_POINTS, ENUMERATION_MEMBERS, NAMESPACES, XHTML_NAMESPACE
from mica_ixbrl.core.config_loader import ConfigLoader
from mica_ixbrl.engine.document_generator import (
    XML_DECLARATION,
    DocumentGenerator,
    build_document,
    generate_document,
    render_root_attributes,
    resolve_document_date,
)
from mica_ixbrl.errors import DocumentGenerationError


XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'
XPATH_NAMESPACES = dict(NAMESPACES, h=XHTML_NAMESPACE)


def _parse(xhtml: str):
    return etree.fromstring(xhtml.encode('utf-8'), etree.XMLParser(recover=False))


def test_resolve_document_date():
    assert resolve_document_date('2025-06-30') == '2025-06-30'
    assert resolve_document_date(date(2024, 1, 2)) == '2024-01-02'
    assert resolve_document_date(None) == date.today().isoformat()
    assert resolve_document_date('30/06/2025') == date.today().isoformat()


def test_resolve_document_date_rejects_compact_and_week_forms():
    assert resolve_document_date('20250630') == date.today().isoformat()
    assert resolve_document_date('2025-W26-1') == date.today().isoformat()
    assert resolve_document_date('2025-02-30') == date.today().isoformat()
    assert resolve_document_date(' 2025-06-30 ') == '2025-06-30'


def test_root_attributes_declare_each_prefix_once():
    attributes = render_root_attributes('de')
    for prefix in NAMESPACES:
        assert attributes.count(f'xmlns:{prefix}=') == 1
    assert attributes.startswith(f'xmlns="{XHTML_NAMESPACE}"')
    assert attributes.endswith('xml:lang="de"')


def test_build_document(sample_record, taxonomy_index):
    document = build_document(sample_record, taxonomy_index)

    assert document.token_type == 'OTHR'
    assert document.document_date == '2025-06-30'
    assert document.language == 'en'
    assert document.title == 'Example Token - MiCA Crypto-Asset White Paper'
    assert document.schema_ref == ENTRY_POINTS['OTHR']
    assert [c.id for c in document.contexts][:2] == ['ctx_instant', 'ctx_duration']
    assert [u.id for u in document.units] == ['unit_EUR', 'unit_pure']
    assert document.facts[0].name == 'mica:TokenType'


def test_document_skeleton(sample_record, taxonomy_index):
    xhtml = generate_document(sample_record, taxonomy_index)

    assert xhtml.startswith(XML_DECLARATION)
    root = _parse(xhtml)
    assert root.tag == f'{{{XHTML_NAMESPACE}}}html'
    assert root.get(XML_LANG) == 'en'
    for prefix, uri in NAMESPACES.items():
        assert root.nsmap[prefix] == uri

    head = xhtml.split('<body>')[0]
    assert '<style type="text/css">' in head
    assert not root.xpath('//h:script | //h:link', namespaces=XPATH_NAMESPACES)


def test_header_contents(sample_record, taxonomy_index):
    root = _parse(generate_document(sample_record, taxonomy_index, token_type='ART'))

    href = root.xpath('//link:schemaRef/@xlink:href', namespaces=XPATH_NAMESPACES)
    assert href == [ENTRY_POINTS['ART']]

    context_ids = root.xpath('//ix:header//xbrli:context/@id', namespaces=XPATH_NAMESPACES)
    assert context_ids.count('ctx_instant') == 1
    assert context_ids.count('ctx_duration') == 1
    assert 'ctx_mgmt_offeror_1' in context_ids

    instant = root.xpath('//xbrli:context[@id="ctx_instant"]//xbrli:instant/text()',
                         namespaces=XPATH_NAMESPACES)
    assert instant == ['2025-06-30']

    measures = root.xpath('//xbrli:unit/xbrli:measure/text()', namespaces=XPATH_NAMESPACES)
    assert measures == ['iso4217:EUR', 'xbrli:pure']

    members = root.xpath('//xbrldi:typedMember/@dimension', namespaces=XPATH_NAMESPACES)
    assert len(members) == 3


def test_token_type_fact_uses_override(sample_record, taxonomy_index):
    root = _parse(generate_document(sample_record, taxonomy_index, token_type='EMT'))
    token_type = root.xpath('//ix:nonNumeric[@name="mica:TokenType"]/text()', namespaces=XPATH_NAMESPACES)
    assert token_type == [ENUMERATION_MEMBERS['mica:TokenType']['EMT'][0]]


def test_enumeration_fact_in_hidden_block(sample_record, taxonomy_index):
    root = _parse(generate_document(sample_record, taxonomy_index))

    hidden = root.xpath('//ix:header/ix:hidden/ix:nonNumeric', namespaces=XPATH_NAMESPACES)
    assert [f.get('name') for f in hidden] == ['mica:TokenType']
    assert hidden[0].get('escape') == 'false'

    references = root.xpath(f'//h:span[@style="-ix-hidden:{hidden[0].get("id")}"]',
                            namespaces=XPATH_NAMESPACES)
    assert len(references) == 1
    assert references[0].text == 'Crypto-assets other than ART and EMT'


def test_hidden_block_precedes_references(sample_record, taxonomy_index):
    root = _parse(generate_document(sample_record, taxonomy_index))
    header = root.xpath('//ix:header', namespaces=XPATH_NAMESPACES)[0]
    assert [etree.QName(child).localname for child in header] == ['hidden', 'references', 'resources']


def test_lowercase_record_token_type(make_record, taxonomy_index):
    document = build_document(make_record(tokenType='art'), taxonomy_index)

    assert document.token_type == 'ART'
    assert document.schema_ref == ENTRY_POINTS['ART']
    assert len(document.facts) > 3
    assert document.facts[0].value == ENUMERATION_MEMBERS['mica:TokenType']['ART'][0]


def test_unknown_record_token_type_generates_othr(make_record, taxonomy_index):
    root = _parse(generate_document(make_record(tokenType='XYZ'), taxonomy_index))

    href = root.xpath('//link:schemaRef/@xlink:href', namespaces=XPATH_NAMESPACES)
    assert href == [ENTRY_POINTS['OTHR']]
    assert root.xpath('//ix:nonNumeric[@name="mica:OfferorLegalName"]', namespaces=XPATH_NAMESPACES)


def test_facts_in_body(sample_record, taxonomy_index):
    generator = DocumentGenerator(taxonomy_index)
    document = generator.build_document(sample_record)
    root = _parse(generator.render(document))

    facts = root.xpath('//ix:nonNumeric | //ix:nonFraction', namespaces=XPATH_NAMESPACES)
    assert len(facts) == len(document.facts)
    assert [f.get('id') for f in facts] == [f.id for f in document.facts]

    price = root.xpath('//ix:nonFraction[@name="mica:TokenPrice"]', namespaces=XPATH_NAMESPACES)[0]
    assert price.text == '0.10'
    assert price.get('unitRef') == 'unit_EUR'


def test_sections_and_labels(sample_record, taxonomy_index):
    root = _parse(generate_document(sample_record, taxonomy_index))

    headings = root.xpath('//h:h2/@id', namespaces=XPATH_NAMESPACES)
    assert headings == ['part-A', 'part-D', 'part-E', 'part-F', 'part-G', 'part-H', 'part-I', 'part-J']

    labels = root.xpath('//h:td[@class="field-label"]', namespaces=XPATH_NAMESPACES)
    excluded = root.xpath('//h:td[@class="field-label"]/ix:exclude', namespaces=XPATH_NAMESPACES)
    assert labels and len(labels) == len(excluded)


def test_missing_date_and_language_defaulted(make_record, taxonomy_index):
    record = make_record(documentDate=None, language=None)
    root = _parse(generate_document(record, taxonomy_index))

    assert root.get(XML_LANG) == 'en'
    instant = root.xpath('//xbrli:context[@id="ctx_instant"]//xbrli:instant/text()',
                         namespaces=XPATH_NAMESPACES)
    assert instant == [date.today().isoformat()]
    # caller's record is not modified
    assert record.document_date is None
    assert record.language is None


def test_special_characters_escaped(make_record, taxonomy_index):
    record = make_record(partA={'legalName': 'Smith & <Sons> "Tokens"'})
    xhtml = generate_document(record, taxonomy_index)

    assert 'Smith &amp; &lt;Sons&gt; &quot;Tokens&quot;' in xhtml
    root = _parse(xhtml)
    name = root.xpath('//ix:nonNumeric[@name="mica:OfferorLegalName"]/text()', namespaces=XPATH_NAMESPACES)
    assert name == ['Smith & <Sons> "Tokens"']


def test_long_text_is_continued(monkeypatch, make_record, taxonomy_index):
    monkeypatch.setenv('MICA_CONTINUATION_THRESHOLD', '200')
    ConfigLoader.reset()

    description = 'Lorem ipsum dolor sit amet. ' * 40
    record = make_record(partD={'projectDescription': description})
    root = _parse(DocumentGenerator(taxonomy_index).generate(record))

    fact = root.xpath('//ix:nonNumeric[@name="mica:ProjectDescription"]', namespaces=XPATH_NAMESPACES)[0]
    continuations = root.xpath('//ix:continuation', namespaces=XPATH_NAMESPACES)
    assert fact.get('continuedAt') == continuations[0].get('id')
    assert ''.join([fact.text] + [c.text for c in continuations]) == description


def test_missing_offeror_lei_raises(make_record, taxonomy_index):
    record = make_record(partA={'lei': None})
    with pytest.raises(DocumentGenerationError):
        generate_document(record, taxonomy_index)
