# Path: mica_ixbrl/engine/generator/fact_builder.py
"""
Fact Builder

Maps a whitepaper record to the flat, ordered list of XBRL facts.

Order: document facts (token type, date, language), then sections A to J.
Within a section, facts follow taxonomy declaration order, and the
section's management body members or project persons come last.
How a value is serialized follows the element's taxonomy data type.
Empty fields produce no fact.

Fact IDs come from a per-builder sequence that restarts on every build,
so building the same record twice yields the same IDs.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from ...constants import (
    SECTIONS,
    CONTEXT_INSTANT,
    CONTEXT_DURATION,
    PERIOD_TYPE_INSTANT,
    UNIT_PURE,
    DEFAULT_CURRENCY,
    SUPPORTED_CURRENCIES,
    FACT_ID_PREFIX,
    DATA_TYPE_BOOLEAN,
    DATA_TYPE_DATE,
    DATA_TYPE_ENUMERATION,
    DATA_TYPE_MONETARY,
    DATA_TYPE_INTEGER,
    DATA_TYPE_DECIMAL,
    DATA_TYPE_PERCENT,
    DATA_TYPE_TEXT_BLOCK,
    ENUMERATION_MEMBERS,
    LOG_PROCESS,
)
from ...core.config_loader import ConfigLoader, DEFAULT_DECIMALS
from ...core.logger import get_process_logger
from ...models.taxonomy import TaxonomyElement
from ...models.whitepaper import WhitepaperRecord, resolve_token_type
from ...models.xbrl import EscapeMode, Fact, Unit
from ..checks.field_values import is_present
from ..taxonomy_index import TaxonomyIndex
from .context_builder import member_context_id, person_context_id
from .numeric_grammar import parse_numeric_value


MONETARY_DECIMALS = 2

STANDARD_UNITS: dict[str, Unit] = {
    f'unit_{code}': Unit(id=f'unit_{code}', measure=f'iso4217:{code}')
    for code in SUPPORTED_CURRENCIES
}
STANDARD_UNITS[UNIT_PURE] = Unit(id=UNIT_PURE, measure='xbrli:pure')


@dataclass(frozen=True)
class FactMapping:
    """
    Binds a record field to a taxonomy element.

    Attributes:
        element_name: Qualified element name
        field_path: Record path of the value
        currency_path: Record path of the currency (monetary facts)
        decimals: Decimal precision overriding the default
    """
    element_name: str
    field_path: str
    currency_path: Optional[str] = None
    decimals: Optional[int] = None


DOCUMENT_MAPPINGS = (
    FactMapping('mica:TokenType', 'tokenType'),
    FactMapping('mica:DocumentDate', 'documentDate'),
    FactMapping('mica:DocumentLanguage', 'language'),
)

FACT_MAPPINGS = (
    # Part A
    FactMapping('mica:OfferorLegalName', 'partA.legalName'),
    FactMapping('mica:OfferorLEI', 'partA.lei'),
    FactMapping('mica:OfferorRegisteredAddress', 'partA.registeredAddress'),
    FactMapping('mica:OfferorCountry', 'partA.country'),
    FactMapping('mica:OfferorWebsite', 'partA.website'),
    FactMapping('mica:OfferorContactEmail', 'partA.contactEmail'),
    FactMapping('mica:OfferorContactPhone', 'partA.contactPhone'),
    # Part B
    FactMapping('mica:IssuerLegalName', 'partB.legalName'),
    FactMapping('mica:IssuerLEI', 'partB.lei'),
    FactMapping('mica:IssuerRegisteredAddress', 'partB.registeredAddress'),
    FactMapping('mica:IssuerCountry', 'partB.country'),
    # Part C
    FactMapping('mica:OperatorLegalName', 'partC.legalName'),
    FactMapping('mica:OperatorLEI', 'partC.lei'),
    FactMapping('mica:OperatorRegisteredAddress', 'partC.registeredAddress'),
    FactMapping('mica:OperatorCountry', 'partC.country'),
    # Part D
    FactMapping('mica:CryptoAssetName', 'partD.cryptoAssetName'),
    FactMapping('mica:CryptoAssetSymbol', 'partD.cryptoAssetSymbol'),
    FactMapping('mica:TotalSupply', 'partD.totalSupply'),
    FactMapping('mica:TokenStandard', 'partD.tokenStandard'),
    FactMapping('mica:BlockchainNetwork', 'partD.blockchainNetwork'),
    FactMapping('mica:ConsensusMechanism', 'partD.consensusMechanism'),
    FactMapping('mica:ProjectDescription', 'partD.projectDescription'),
    # Part E
    FactMapping('mica:IsPublicOffering', 'partE.isPublicOffering'),
    FactMapping('mica:PublicOfferingStartDate', 'partE.publicOfferingStartDate'),
    FactMapping('mica:PublicOfferingEndDate', 'partE.publicOfferingEndDate'),
    FactMapping('mica:TokenPrice', 'partE.tokenPrice', currency_path='partE.tokenPriceCurrency'),
    FactMapping('mica:MaxSubscriptionGoal', 'partE.maxSubscriptionGoal',
                currency_path='partE.tokenPriceCurrency'),
    FactMapping('mica:DistributionDate', 'partE.distributionDate'),
    FactMapping('mica:WithdrawalRights', 'partE.withdrawalRights'),
    FactMapping('mica:PaymentMethods', 'partE.paymentMethods'),
    # Part F
    FactMapping('mica:CryptoAssetClassification', 'partF.classification'),
    FactMapping('mica:RightsDescription', 'partF.rightsDescription'),
    FactMapping('mica:TechnicalSpecifications', 'partF.technicalSpecifications'),
    # Part G
    FactMapping('mica:PurchaseRights', 'partG.purchaseRights'),
    FactMapping('mica:OwnershipRights', 'partG.ownershipRights'),
    FactMapping('mica:TransferRestrictions', 'partG.transferRestrictions'),
    FactMapping('mica:LockUpPeriod', 'partG.lockUpPeriod'),
    FactMapping('mica:DynamicSupplyMechanism', 'partG.dynamicSupplyMechanism'),
    # Part H
    FactMapping('mica:BlockchainDescription', 'partH.blockchainDescription'),
    FactMapping('mica:SmartContractInformation', 'partH.smartContractInfo'),
    FactMapping('mica:SecurityAudits', 'partH.securityAudits'),
    FactMapping('mica:TechnicalCapacity', 'partH.technicalCapacity'),
    # Part I
    FactMapping('mica:OfferRisks', 'partI.offerRisks'),
    FactMapping('mica:IssuerRisks', 'partI.issuerRisks'),
    FactMapping('mica:MarketRisks', 'partI.marketRisks'),
    FactMapping('mica:TechnologyRisks', 'partI.technologyRisks'),
    FactMapping('mica:RegulatoryRisks', 'partI.regulatoryRisks'),
    # Part J
    FactMapping('mica:EnergyConsumption', 'partJ.energyConsumption'),
    FactMapping('mica:ConsensusMechanismType', 'partJ.consensusMechanismType'),
    FactMapping('mica:RenewableEnergyPercentage', 'partJ.renewableEnergyPercentage'),
    FactMapping('mica:GHGEmissions', 'partJ.ghgEmissions'),
)

# Section holding each management body role's member facts
MEMBER_SECTIONS = {'offeror': 'A', 'issuer': 'B', 'operator': 'C'}
MEMBER_ELEMENT_PREFIX = {'offeror': 'Offeror', 'issuer': 'Issuer', 'operator': 'Operator'}
PROJECT_PERSON_SECTION = 'D'


class FactIdSequence:
    """Sequential fact IDs: f_1, f_2, ..."""

    def __init__(self, prefix: str = FACT_ID_PREFIX):
        self.prefix = prefix
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}{self._counter}"

    def reset(self) -> None:
        self._counter = 0

    @property
    def current(self) -> int:
        return self._counter


def format_decimal(number: Decimal) -> str:
    """Plain positional notation, never exponent form."""
    return format(number, 'f')


def resolve_currency_unit(currency: Any, default_currency: str = DEFAULT_CURRENCY) -> str:
    """
    Unit ID for a currency code.

    Unrecognized or missing codes fall back to the default currency.
    """
    code = str(currency).strip().upper() if is_present(currency) else ''
    if code not in SUPPORTED_CURRENCIES:
        code = default_currency if default_currency in SUPPORTED_CURRENCIES else DEFAULT_CURRENCY
    return f'unit_{code}'


def get_required_units(facts: Iterable[Fact]) -> list[Unit]:
    """
    Units referenced by the given facts.

    Args:
        facts: Facts to scan

    Returns:
        Units from STANDARD_UNITS in catalog order
    """
    referenced = {fact.unit_ref for fact in facts if fact.unit_ref}
    return [unit for unit_id, unit in STANDARD_UNITS.items() if unit_id in referenced]


class FactBuilder:
    """
    Builds XBRL facts from a whitepaper record.

    Example:
        builder = FactBuilder(index)
        facts = builder.build_all_facts(record)
        units = get_required_units(facts)
    """

    def __init__(self, index: TaxonomyIndex = None, config: ConfigLoader = None):
        """
        Args:
            index: Taxonomy index (defaults to the shared index)
            config: Optional ConfigLoader instance
        """
        if index is None:
            from ...loaders.taxonomy_loader import default_index
            index = default_index()
        self.index = index
        self.config = config if config else ConfigLoader()
        self.default_currency = self.config.get('default_currency', DEFAULT_CURRENCY)
        self.default_decimals = self.config.get('default_decimals', DEFAULT_DECIMALS)
        self.ids = FactIdSequence()
        self.logger = get_process_logger('fact_builder')

    # ------------------------------------------------------------------
    # Typed fact constructors
    # ------------------------------------------------------------------

    def build_string_fact(self, name: str, value: Any, context_ref: str,
                          data_type: str = 'stringItemType') -> Fact:
        return Fact(
            id=self.ids.next_id(), name=name, value=str(value),
            context_ref=context_ref, escape=EscapeMode.ESCAPED, data_type=data_type,
        )

    def build_text_block_fact(self, name: str, value: Any, context_ref: str) -> Fact:
        if isinstance(value, (list, tuple)):
            value = '\n\n'.join(str(item) for item in value if is_present(item))
        return Fact(
            id=self.ids.next_id(), name=name, value=str(value),
            context_ref=context_ref, escape=EscapeMode.TEXT_BLOCK,
            data_type=DATA_TYPE_TEXT_BLOCK,
        )

    def build_boolean_fact(self, name: str, value: Any, context_ref: str) -> Fact:
        if isinstance(value, bool):
            token = 'true' if value else 'false'
        else:
            token = str(value).strip().lower()
        return Fact(
            id=self.ids.next_id(), name=name, value=token,
            context_ref=context_ref, escape=EscapeMode.RAW, data_type=DATA_TYPE_BOOLEAN,
        )

    def build_date_fact(self, name: str, value: Any, context_ref: str) -> Fact:
        text = value.isoformat() if hasattr(value, 'isoformat') else str(value).strip()
        return Fact(
            id=self.ids.next_id(), name=name, value=text,
            context_ref=context_ref, escape=EscapeMode.RAW, data_type=DATA_TYPE_DATE,
        )

    def build_monetary_fact(self, name: str, amount: Decimal, currency: Any,
                            context_ref: str, decimals: Optional[int] = None) -> Fact:
        return Fact(
            id=self.ids.next_id(), name=name, value=format_decimal(amount),
            context_ref=context_ref,
            unit_ref=resolve_currency_unit(currency, self.default_currency),
            decimals=MONETARY_DECIMALS if decimals is None else decimals,
            escape=EscapeMode.RAW, data_type=DATA_TYPE_MONETARY,
        )

    def build_integer_fact(self, name: str, number: Decimal, context_ref: str) -> Fact:
        rounded = number.quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return Fact(
            id=self.ids.next_id(), name=name, value=str(int(rounded)),
            context_ref=context_ref, unit_ref=UNIT_PURE, decimals=0,
            escape=EscapeMode.RAW, data_type=DATA_TYPE_INTEGER,
        )

    def build_decimal_fact(self, name: str, number: Decimal, context_ref: str,
                           decimals: Optional[int] = None,
                           data_type: str = DATA_TYPE_DECIMAL) -> Fact:
        return Fact(
            id=self.ids.next_id(), name=name, value=format_decimal(number),
            context_ref=context_ref, unit_ref=UNIT_PURE,
            decimals=self.default_decimals if decimals is None else decimals,
            escape=EscapeMode.RAW, data_type=data_type,
        )

    def build_enumeration_fact(self, name: str, value: Any, context_ref: str) -> Fact:
        """
        Build an enumeration fact valued with its taxonomy member URI.

        The fact is rendered in ix:hidden and shown through its label.
        A value with no known member is kept as plain text.

        Args:
            name: Element name
            value: Record value (e.g. 'ART')
            context_ref: Context ID

        Returns:
            Fact
        """
        key = str(value).strip()
        members = ENUMERATION_MEMBERS.get(name, {})
        member = members.get(key) or members.get(key.upper())
        if member is None:
            self.logger.debug(f"{LOG_PROCESS} No taxonomy member for {name} value '{key}'")
            return self.build_string_fact(name, key, context_ref, DATA_TYPE_ENUMERATION)

        uri, label = member
        return Fact(
            id=self.ids.next_id(), name=name, value=uri,
            context_ref=context_ref, escape=EscapeMode.HIDDEN,
            data_type=DATA_TYPE_ENUMERATION, display_value=label,
        )

    # ------------------------------------------------------------------
    # Record walk
    # ------------------------------------------------------------------

    def _context_for(self, element: TaxonomyElement) -> str:
        if element.period_type == PERIOD_TYPE_INSTANT:
            return CONTEXT_INSTANT
        return CONTEXT_DURATION

    def build_fact(self, element: TaxonomyElement, value: Any, context_ref: str,
                   mapping: Optional[FactMapping] = None,
                   record: Optional[WhitepaperRecord] = None) -> Optional[Fact]:
        """
        Build one fact according to the element's data type.

        Args:
            element: Taxonomy element
            value: Field value
            context_ref: Context ID
            mapping: Mapping that produced the value (currency, decimals)
            record: Record (to resolve the currency field)

        Returns:
            Fact, or None for empty values
        """
        if not is_present(value):
            return None

        data_type = element.data_type
        decimals = mapping.decimals if mapping else None

        if data_type == DATA_TYPE_TEXT_BLOCK:
            return self.build_text_block_fact(element.name, value, context_ref)
        if data_type == DATA_TYPE_BOOLEAN:
            return self.build_boolean_fact(element.name, value, context_ref)
        if data_type == DATA_TYPE_DATE:
            return self.build_date_fact(element.name, value, context_ref)
        if data_type == DATA_TYPE_ENUMERATION:
            return self.build_enumeration_fact(element.name, value, context_ref)

        if element.is_numeric:
            number = parse_numeric_value(value)
            if number is None:
                # Prose in a numeric field: keep it as text, no unit
                return self.build_string_fact(element.name, value, context_ref, data_type)
            if data_type == DATA_TYPE_MONETARY:
                currency = None
                if mapping and mapping.currency_path and record is not None:
                    currency = record.get_field(mapping.currency_path)
                return self.build_monetary_fact(element.name, number, currency, context_ref, decimals)
            if data_type == DATA_TYPE_INTEGER:
                return self.build_integer_fact(element.name, number, context_ref)
            return self.build_decimal_fact(
                element.name, number, context_ref, decimals,
                DATA_TYPE_PERCENT if data_type == DATA_TYPE_PERCENT else DATA_TYPE_DECIMAL,
            )

        if isinstance(value, (list, tuple)):
            value = ', '.join(str(item) for item in value if is_present(item))
        return self.build_string_fact(element.name, value, context_ref, data_type)

    def _element(self, name: str, token_type: str) -> Optional[TaxonomyElement]:
        element = self.index.by_name(name)
        if element is None:
            self.logger.debug(f"{LOG_PROCESS} Element not in taxonomy, skipped: {name}")
            return None
        if element.token_types and not element.applies_to(token_type):
            return None
        return element

    def _mapped_facts(self, record: WhitepaperRecord, mappings: Iterable[FactMapping],
                      token_type: str, overrides: dict[str, Any]) -> list[Fact]:
        facts = []
        for mapping in mappings:
            element = self._element(mapping.element_name, token_type)
            if element is None:
                continue
            if mapping.field_path in overrides:
                value = overrides[mapping.field_path]
            else:
                value = record.get_field(mapping.field_path)
            fact = self.build_fact(element, value, self._context_for(element), mapping, record)
            if fact is not None:
                facts.append(fact)
        return facts

    def _member_facts(self, record: WhitepaperRecord, section: str, token_type: str) -> list[Fact]:
        facts = []

        for role, role_section in MEMBER_SECTIONS.items():
            if role_section != section:
                continue
            prefix = MEMBER_ELEMENT_PREFIX[role]
            for index, member in enumerate(record.management_body_members.get(role, [])):
                context_ref = member_context_id(role, index)
                for suffix, value in (
                    ('Identity', member.identity),
                    ('BusinessAddress', member.business_address),
                    ('Function', member.function),
                ):
                    element = self._element(f'mica:{prefix}ManagementBodyMember{suffix}', token_type)
                    if element is not None:
                        fact = self.build_fact(element, value, context_ref)
                        if fact is not None:
                            facts.append(fact)

        if section == PROJECT_PERSON_SECTION:
            for index, person in enumerate(record.project_persons):
                context_ref = person_context_id(index)
                for suffix, value in (
                    ('Identity', person.identity),
                    ('BusinessAddress', person.business_address),
                    ('Role', person.role),
                ):
                    element = self._element(f'mica:ProjectPerson{suffix}', token_type)
                    if element is not None:
                        fact = self.build_fact(element, value, context_ref)
                        if fact is not None:
                            facts.append(fact)

        return facts

    def _section_mappings(self, section: str) -> list[FactMapping]:
        entries = []
        for mapping in FACT_MAPPINGS:
            element = self.index.by_name(mapping.element_name)
            if element is not None and element.section == section:
                entries.append((element.order, mapping))
        entries.sort(key=lambda entry: entry[0])
        return [mapping for _, mapping in entries]

    def build_all_facts(self, record: WhitepaperRecord, token_type: Optional[str] = None) -> list[Fact]:
        """
        Build every fact of a record.

        Restarts the ID sequence, so repeated calls give identical IDs.

        Args:
            record: Whitepaper record
            token_type: Token type (defaults to the record's, then OTHR)

        Returns:
            Facts in document order
        """
        self.ids.reset()
        token_type = resolve_token_type(record, token_type)

        facts = self._mapped_facts(record, DOCUMENT_MAPPINGS, token_type, {'tokenType': token_type})
        for section in SECTIONS:
            facts.extend(self._mapped_facts(record, self._section_mappings(section), token_type, {}))
            facts.extend(self._member_facts(record, section, token_type))

        self.logger.info(f"{LOG_PROCESS} Built {len(facts)} facts for {token_type} whitepaper")
        return facts


def build_all_facts(record: WhitepaperRecord, index: TaxonomyIndex = None,
                    token_type: Optional[str] = None) -> list[Fact]:
    """Build all facts of a record with a fresh builder."""
    return FactBuilder(index).build_all_facts(record, token_type)


__all__ = [
    'STANDARD_UNITS',
    'FactMapping',
    'DOCUMENT_MAPPINGS',
    'FACT_MAPPINGS',
    'FactIdSequence',
    'format_decimal',
    'resolve_currency_unit',
    'get_required_units',
    'FactBuilder',
    'build_all_facts',
]
