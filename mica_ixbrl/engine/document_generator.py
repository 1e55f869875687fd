# Path: mica_ixbrl/engine/document_generator.py
"""
Document Generator

Assembles the complete inline XBRL document for a whitepaper record:
XML declaration, root element with every namespace, head with inline
CSS, hidden ix:header (enumeration facts in ix:hidden, schema reference,
contexts, units) and one table per section holding the tagged facts.

The output references no external stylesheet or script.
"""

from dataclasses import replace
from datetime import date
from itertools import groupby
from typing import Optional

from ..constants import (
    ENTRY_POINTS,
    NAMESPACES,
    SECTIONS,
    TOKEN_TYPE_LABELS,
    XHTML_NAMESPACE,
    LOG_PROCESS,
)
from ..core.config_loader import ConfigLoader
from ..core.logger import get_process_logger
from ..models.whitepaper import WhitepaperRecord, resolve_token_type
from ..models.xbrl import Context, EscapeMode, Fact, IXBRLDocument, Unit
from .checks.field_values import parse_iso_date
from .generator.context_builder import ContextBuilder
from .generator.css_styles import generate_stylesheet
from .generator.fact_builder import FactBuilder, get_required_units
from .generator.inline_tagger import (
    escape_html,
    render_fact_parts,
    render_hidden_reference,
    wrap_exclude,
)
from .generator.language_support import (
    get_language_name,
    get_section_title,
    resolve_document_language,
)
from .taxonomy_index import TaxonomyIndex


XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
DOCUMENT_TITLE = 'MiCA Crypto-Asset White Paper'


def resolve_document_date(value) -> str:
    """Document date as YYYY-MM-DD; today when missing or unparseable."""
    parsed = parse_iso_date(value) if value is not None else None
    return (parsed or date.today()).isoformat()


def render_context(context: Context) -> str:
    """Serialize one xbrli:context."""
    if context.is_instant:
        period = f'<xbrli:instant>{escape_html(context.instant)}</xbrli:instant>'
    else:
        period = (
            f'<xbrli:startDate>{escape_html(context.start_date)}</xbrli:startDate>'
            f'<xbrli:endDate>{escape_html(context.end_date)}</xbrli:endDate>'
        )

    scenario = ''
    if context.scenario:
        members = ''.join(
            f'<xbrldi:typedMember dimension="{escape_html(m.dimension)}">'
            f'<{m.domain}>{escape_html(m.value)}</{m.domain}>'
            f'</xbrldi:typedMember>'
            for m in context.scenario
        )
        scenario = f'<xbrli:scenario>{members}</xbrli:scenario>'

    return (
        f'<xbrli:context id="{escape_html(context.id)}">'
        f'<xbrli:entity><xbrli:identifier scheme="{escape_html(context.entity_scheme)}">'
        f'{escape_html(context.entity_identifier)}</xbrli:identifier></xbrli:entity>'
        f'<xbrli:period>{period}</xbrli:period>'
        f'{scenario}'
        f'</xbrli:context>'
    )


def render_unit(unit: Unit) -> str:
    """Serialize one xbrli:unit."""
    return (
        f'<xbrli:unit id="{escape_html(unit.id)}">'
        f'<xbrli:measure>{escape_html(unit.measure)}</xbrli:measure>'
        f'</xbrli:unit>'
    )


def render_root_attributes(language: str) -> str:
    """xmlns declarations (each prefix once) and xml:lang for the root."""
    declarations = [f'xmlns="{XHTML_NAMESPACE}"']
    declarations += [f'xmlns:{prefix}="{uri}"' for prefix, uri in NAMESPACES.items()]
    declarations.append(f'xml:lang="{escape_html(language)}"')
    return ' '.join(declarations)


class DocumentGenerator:
    """
    Generates inline XBRL documents from whitepaper records.

    Example:
        generator = DocumentGenerator()
        xhtml = generator.generate(record)
    """

    def __init__(self, index: TaxonomyIndex = None, config: ConfigLoader = None):
        if index is None:
            from ..loaders.taxonomy_loader import default_index
            index = default_index()
        self.index = index
        self.config = config if config else ConfigLoader()
        self.threshold = self.config.get('continuation_threshold')
        self.logger = get_process_logger('document_generator')

    def build_document(self, record: WhitepaperRecord, token_type: Optional[str] = None) -> IXBRLDocument:
        """
        Build facts, contexts and units for a record.

        Missing document date and language are defaulted (today, English)
        on a copy; the caller's record is left untouched.

        Args:
            record: Whitepaper record
            token_type: Token type (defaults to the record's, then OTHR)

        Returns:
            IXBRLDocument

        Raises:
            DocumentGenerationError: If the offeror LEI is missing
        """
        token_type = resolve_token_type(record, token_type)
        document_date = resolve_document_date(record.document_date)
        language = resolve_document_language(record.language)
        prepared = replace(record, token_type=token_type, document_date=document_date, language=language)

        offeror_lei = prepared.get_field('partA.lei')
        contexts = ContextBuilder(offeror_lei, document_date).build_contexts(prepared)

        facts = FactBuilder(self.index, self.config).build_all_facts(prepared, token_type)
        units = get_required_units(facts)

        asset_name = prepared.get_field('partD.cryptoAssetName')
        title = f'{asset_name} - {DOCUMENT_TITLE}' if asset_name else DOCUMENT_TITLE

        self.logger.info(
            f"{LOG_PROCESS} Document built: {len(facts)} facts, "
            f"{len(contexts)} contexts, {len(units)} units"
        )
        return IXBRLDocument(
            token_type=token_type,
            language=language,
            document_date=document_date,
            title=title,
            schema_ref=ENTRY_POINTS[token_type],
            contexts=contexts,
            units=units,
            facts=facts,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_value_cell(self, fact: Fact) -> str:
        if fact.is_hidden():
            return render_hidden_reference(fact)
        rendered = render_fact_parts(fact, self.threshold)
        markup = rendered.to_markup('\n')
        if fact.escape == EscapeMode.TEXT_BLOCK:
            return f'<div class="text-block">{markup}</div>'
        return markup

    def _render_header(self, document: IXBRLDocument) -> str:
        contexts = '\n'.join(render_context(c) for c in document.contexts)
        units = '\n'.join(render_unit(u) for u in document.units)
        # ix:hidden precedes ix:references inside ix:header
        hidden = ''
        hidden_facts = [f for f in document.facts if f.is_hidden()]
        if hidden_facts:
            elements = '\n'.join(render_fact_parts(f, self.threshold).primary for f in hidden_facts)
            hidden = f'<ix:hidden>\n{elements}\n</ix:hidden>\n'

        return (
            '<div class="hidden-header" style="display: none">\n'
            '<ix:header>\n'
            f'{hidden}'
            '<ix:references>'
            f'<link:schemaRef xlink:type="simple" xlink:href="{escape_html(document.schema_ref)}"/>'
            '</ix:references>\n'
            '<ix:resources>\n'
            f'{contexts}\n{units}\n'
            '</ix:resources>\n'
            '</ix:header>\n'
            '</div>'
        )

    def _render_cover(self, document: IXBRLDocument, document_facts: list[Fact]) -> str:
        rows = []
        for fact in document_facts:
            element = self.index.by_name(fact.name)
            label = element.label if element else fact.name
            rows.append(
                f'<p class="meta">{escape_html(label)}: {self._render_value_cell(fact)}</p>'
            )
        subtitle = TOKEN_TYPE_LABELS.get(document.token_type, document.token_type)
        return (
            '<div class="page cover-page">\n'
            f'<h1 class="title">{escape_html(document.title)}</h1>\n'
            f'<p class="subtitle">{escape_html(subtitle)}</p>\n'
            f'<p class="meta">{escape_html(get_language_name(document.language))}</p>\n'
            + '\n'.join(rows) +
            '\n</div>'
        )

    def _render_section(self, section: str, facts: list[Fact], language: str) -> str:
        rows = []
        for fact in facts:
            element = self.index.by_name(fact.name)
            label = element.label if element else fact.name
            number = f'{section}.{element.order}' if element else section
            rows.append(
                '<tr>'
                f'<td class="field-number">{escape_html(number)}</td>'
                f'<td class="field-label">{wrap_exclude(escape_html(label))}</td>'
                f'<td class="field-value">{self._render_value_cell(fact)}</td>'
                '</tr>'
            )
        return (
            f'<h2 class="section-heading" id="part-{section}">'
            f'{escape_html(get_section_title(section, language))}</h2>\n'
            '<table class="accounts">\n'
            '<thead><tr><th>No</th><th>Field</th><th>Content</th></tr></thead>\n'
            '<tbody>\n' + '\n'.join(rows) + '\n</tbody>\n'
            '</table>'
        )

    def render(self, document: IXBRLDocument) -> str:
        """
        Serialize a built document to an XHTML string.

        Args:
            document: Built document

        Returns:
            Complete iXBRL document beginning with the XML declaration
        """
        def section_of(fact: Fact) -> Optional[str]:
            element = self.index.by_name(fact.name)
            return element.section if element else None

        document_facts = [f for f in document.facts if section_of(f) is None]
        section_facts = [f for f in document.facts if section_of(f) is not None]
        section_facts.sort(key=lambda f: SECTIONS.index(section_of(f)))

        sections = [
            self._render_section(section, list(facts), document.language)
            for section, facts in groupby(section_facts, key=section_of)
        ]

        return '\n'.join([
            XML_DECLARATION,
            f'<html {render_root_attributes(document.language)}>',
            '<head>',
            '<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>',
            '<meta name="generator" content="mica-ixbrl"/>',
            f'<title>{escape_html(document.title)}</title>',
            f'<style type="text/css">{generate_stylesheet()}</style>',
            '</head>',
            '<body>',
            self._render_header(document),
            self._render_cover(document, document_facts),
            '<div class="page">',
            '\n'.join(sections),
            '</div>',
            '</body>',
            '</html>',
            '',
        ])

    def generate(self, record: WhitepaperRecord, token_type: Optional[str] = None) -> str:
        """Build and render the iXBRL document for a record."""
        return self.render(self.build_document(record, token_type))


def build_document(record: WhitepaperRecord, index: TaxonomyIndex = None,
                   config: ConfigLoader = None, token_type: Optional[str] = None) -> IXBRLDocument:
    return DocumentGenerator(index, config).build_document(record, token_type)


def generate_document(record: WhitepaperRecord, index: TaxonomyIndex = None,
                      config: ConfigLoader = None, token_type: Optional[str] = None) -> str:
    """
    Generate the iXBRL document for a record.

    Args:
        record: Whitepaper record
        index: Taxonomy index (defaults to the shared index)
        config: Optional ConfigLoader instance
        token_type: Token type override

    Returns:
        XHTML string
    """
    return DocumentGenerator(index, config).generate(record, token_type)


__all__ = [
    'XML_DECLARATION',
    'resolve_document_date',
    'render_context',
    'render_unit',
    'render_root_attributes',
    'DocumentGenerator',
    'build_document',
    'generate_document',
]
