# Path: mica_ixbrl/models/whitepaper.py
"""
Whitepaper Record Model

Structured MiCA white paper data, one optional dataclass per section
(Part A offeror through Part J sustainability).

Each dataclass field carries its external camelCase key in the field
metadata. That metadata is the path table used to resolve field paths
such as 'partE.isPublicOffering' for error reporting.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

from ..constants import TOKEN_TYPE_OTHR, TOKEN_TYPES
from ..errors import RecordFormatError


Number = Union[int, float, str]


def _key(name: str, default: Any = None) -> Any:
    """Declare a section field bound to its external key."""
    return field(default=default, metadata={'key': name})


class RecordSection:
    """Shared behaviour for whitepaper section dataclasses."""

    @classmethod
    def field_keys(cls) -> dict[str, str]:
        """Map external key to attribute name."""
        return {f.metadata['key']: f.name for f in fields(cls) if 'key' in f.metadata}

    @classmethod
    def from_dict(cls, data: dict) -> 'RecordSection':
        """
        Build section from a dictionary keyed by external field names.

        Unknown keys are ignored.

        Args:
            data: Section dictionary

        Returns:
            Section instance
        """
        if not isinstance(data, dict):
            raise RecordFormatError(
                f"Section {cls.__name__} must be an object, got {type(data).__name__}"
            )
        kwargs = {
            attr: data[key]
            for key, attr in cls.field_keys().items()
            if key in data
        }
        return cls(**kwargs)

    def get(self, key: str) -> Any:
        """Get a field value by its external key."""
        attr = self.field_keys().get(key)
        if attr is None:
            return None
        return getattr(self, attr)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary keyed by external field names."""
        return {key: getattr(self, attr) for key, attr in self.field_keys().items()}


@dataclass
class EntityInformation(RecordSection):
    """Identity of a legal entity (issuer in Part B, operator in Part C)."""
    legal_name: Optional[str] = _key('legalName')
    lei: Optional[str] = _key('lei')
    registered_address: Optional[str] = _key('registeredAddress')
    country: Optional[str] = _key('country')


@dataclass
class OfferorInformation(EntityInformation):
    """Part A: offeror or person seeking admission to trading."""
    website: Optional[str] = _key('website')
    contact_email: Optional[str] = _key('contactEmail')
    contact_phone: Optional[str] = _key('contactPhone')


@dataclass
class ProjectInformation(RecordSection):
    """Part D: crypto-asset project."""
    crypto_asset_name: Optional[str] = _key('cryptoAssetName')
    crypto_asset_symbol: Optional[str] = _key('cryptoAssetSymbol')
    total_supply: Optional[Number] = _key('totalSupply')
    token_standard: Optional[str] = _key('tokenStandard')
    blockchain_network: Optional[str] = _key('blockchainNetwork')
    consensus_mechanism: Optional[str] = _key('consensusMechanism')
    project_description: Optional[str] = _key('projectDescription')


@dataclass
class OfferingInformation(RecordSection):
    """Part E: offer to the public or admission to trading."""
    is_public_offering: Optional[bool] = _key('isPublicOffering')
    public_offering_start_date: Optional[str] = _key('publicOfferingStartDate')
    public_offering_end_date: Optional[str] = _key('publicOfferingEndDate')
    token_price: Optional[Number] = _key('tokenPrice')
    token_price_currency: Optional[str] = _key('tokenPriceCurrency')
    max_subscription_goal: Optional[Number] = _key('maxSubscriptionGoal')
    distribution_date: Optional[str] = _key('distributionDate')
    withdrawal_rights: Optional[str] = _key('withdrawalRights')
    payment_methods: Optional[list[str]] = _key('paymentMethods')


@dataclass
class AssetCharacteristics(RecordSection):
    """Part F: crypto-asset characteristics."""
    classification: Optional[str] = _key('classification')
    rights_description: Optional[str] = _key('rightsDescription')
    technical_specifications: Optional[str] = _key('technicalSpecifications')


@dataclass
class RightsInformation(RecordSection):
    """Part G: rights and obligations attached to the crypto-asset."""
    purchase_rights: Optional[str] = _key('purchaseRights')
    ownership_rights: Optional[str] = _key('ownershipRights')
    transfer_restrictions: Optional[str] = _key('transferRestrictions')
    lock_up_period: Optional[str] = _key('lockUpPeriod')
    dynamic_supply_mechanism: Optional[str] = _key('dynamicSupplyMechanism')


@dataclass
class TechnologyInformation(RecordSection):
    """Part H: underlying technology."""
    blockchain_description: Optional[str] = _key('blockchainDescription')
    smart_contract_info: Optional[str] = _key('smartContractInfo')
    security_audits: Optional[list[str]] = _key('securityAudits')
    technical_capacity: Optional[str] = _key('technicalCapacity')


@dataclass
class RiskInformation(RecordSection):
    """Part I: risk factors."""
    offer_risks: Optional[list[str]] = _key('offerRisks')
    issuer_risks: Optional[list[str]] = _key('issuerRisks')
    market_risks: Optional[list[str]] = _key('marketRisks')
    technology_risks: Optional[list[str]] = _key('technologyRisks')
    regulatory_risks: Optional[list[str]] = _key('regulatoryRisks')


@dataclass
class SustainabilityInformation(RecordSection):
    """Part J: principal adverse impacts on climate and environment."""
    energy_consumption: Optional[Number] = _key('energyConsumption')
    energy_unit: Optional[str] = _key('energyUnit', 'kWh')
    consensus_mechanism_type: Optional[str] = _key('consensusMechanismType')
    renewable_energy_percentage: Optional[Number] = _key('renewableEnergyPercentage')
    ghg_emissions: Optional[Number] = _key('ghgEmissions')


@dataclass
class ManagementBodyMember:
    """Member of the management body of the offeror, issuer or operator."""
    identity: str
    business_address: Optional[str] = None
    function: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'ManagementBodyMember':
        return cls(
            identity=data.get('identity', ''),
            business_address=data.get('businessAddress'),
            function=data.get('function'),
        )


@dataclass
class ProjectPerson:
    """Person involved in the implementation of the crypto-asset project."""
    identity: str
    business_address: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'ProjectPerson':
        return cls(
            identity=data.get('identity', ''),
            business_address=data.get('businessAddress'),
            role=data.get('role'),
        )


# External section key -> (record attribute, section dataclass)
SECTION_TYPES: dict[str, tuple[str, type]] = {
    'partA': ('part_a', OfferorInformation),
    'partB': ('part_b', EntityInformation),
    'partC': ('part_c', EntityInformation),
    'partD': ('part_d', ProjectInformation),
    'partE': ('part_e', OfferingInformation),
    'partF': ('part_f', AssetCharacteristics),
    'partG': ('part_g', RightsInformation),
    'partH': ('part_h', TechnologyInformation),
    'partI': ('part_i', RiskInformation),
    'partJ': ('part_j', SustainabilityInformation),
}

TOP_LEVEL_FIELDS: dict[str, str] = {
    'tokenType': 'token_type',
    'documentDate': 'document_date',
    'language': 'language',
}

MANAGEMENT_BODY_ROLES = ['offeror', 'issuer', 'operator']


def _object_list(value: Any, path: str) -> list[dict]:
    """Check that a person list is a list of objects."""
    if not value:
        return []
    if not isinstance(value, list):
        raise RecordFormatError(f"{path} must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, dict):
            raise RecordFormatError(
                f"{path} entries must be objects, got {type(item).__name__}"
            )
    return value


def resolve_token_type(record: 'WhitepaperRecord', token_type: Optional[str] = None) -> str:
    """Explicit token type, else the record's, else OTHR."""
    candidate = token_type or record.token_type
    if candidate and str(candidate).upper() in TOKEN_TYPES:
        return str(candidate).upper()
    return TOKEN_TYPE_OTHR


def _build_field_paths() -> tuple[str, ...]:
    paths = list(TOP_LEVEL_FIELDS)
    for section_key, (_, section_type) in SECTION_TYPES.items():
        paths.extend(f'{section_key}.{key}' for key in section_type.field_keys())
    return tuple(paths)


@dataclass
class WhitepaperRecord:
    """
    Structured MiCA white paper.

    Every section is optional so partial records coming out of field
    mapping can still be validated; missing data is reported by the
    existence rules rather than rejected here.

    Example:
        record = WhitepaperRecord.from_dict(json.loads(text))
        record.get_field('partA.lei')
    """
    token_type: Optional[str] = None
    document_date: Optional[str] = None
    language: Optional[str] = None
    part_a: Optional[OfferorInformation] = None
    part_b: Optional[EntityInformation] = None
    part_c: Optional[EntityInformation] = None
    part_d: Optional[ProjectInformation] = None
    part_e: Optional[OfferingInformation] = None
    part_f: Optional[AssetCharacteristics] = None
    part_g: Optional[RightsInformation] = None
    part_h: Optional[TechnologyInformation] = None
    part_i: Optional[RiskInformation] = None
    part_j: Optional[SustainabilityInformation] = None
    management_body_members: dict[str, list[ManagementBodyMember]] = field(default_factory=dict)
    project_persons: list[ProjectPerson] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'WhitepaperRecord':
        """
        Build record from a dictionary using the external camelCase keys.

        Args:
            data: Record dictionary (e.g. parsed JSON)

        Returns:
            WhitepaperRecord

        Raises:
            RecordFormatError: If data or one of its sections is not an object
        """
        if not isinstance(data, dict):
            raise RecordFormatError(
                f"Whitepaper record must be an object, got {type(data).__name__}"
            )

        kwargs: dict[str, Any] = {
            attr: data.get(key) for key, attr in TOP_LEVEL_FIELDS.items()
        }

        for section_key, (attr, section_type) in SECTION_TYPES.items():
            section_data = data.get(section_key)
            if section_data is not None:
                kwargs[attr] = section_type.from_dict(section_data)

        members = data.get('managementBodyMembers') or {}
        if not isinstance(members, dict):
            raise RecordFormatError(
                f"managementBodyMembers must be an object, got {type(members).__name__}"
            )
        kwargs['management_body_members'] = {
            role: [
                ManagementBodyMember.from_dict(m)
                for m in _object_list(members.get(role), f'managementBodyMembers.{role}')
            ]
            for role in MANAGEMENT_BODY_ROLES
            if members.get(role)
        }
        kwargs['project_persons'] = [
            ProjectPerson.from_dict(p)
            for p in _object_list(data.get('projectPersons'), 'projectPersons')
        ]

        return cls(**kwargs)

    def get_section(self, section_key: str) -> Optional[RecordSection]:
        """Get a section by its external key (e.g. 'partA')."""
        entry = SECTION_TYPES.get(section_key)
        if entry is None:
            return None
        return getattr(self, entry[0])

    def get_field(self, path: str) -> Any:
        """
        Resolve a field path against the record.

        Args:
            path: Field path such as 'partA.lei', 'documentDate' or 'partE'

        Returns:
            Field value, section, or None when any step is missing
        """
        if path in TOP_LEVEL_FIELDS:
            return getattr(self, TOP_LEVEL_FIELDS[path])

        section_key, _, field_key = path.partition('.')
        section = self.get_section(section_key)
        if section is None or not field_key:
            return section
        return section.get(field_key)


FIELD_PATHS = _build_field_paths()


__all__ = [
    'RecordSection',
    'EntityInformation',
    'OfferorInformation',
    'ProjectInformation',
    'OfferingInformation',
    'AssetCharacteristics',
    'RightsInformation',
    'TechnologyInformation',
    'RiskInformation',
    'SustainabilityInformation',
    'ManagementBodyMember',
    'ProjectPerson',
    'WhitepaperRecord',
    'SECTION_TYPES',
    'TOP_LEVEL_FIELDS',
    'MANAGEMENT_BODY_ROLES',
    'FIELD_PATHS',
    'resolve_token_type',
]
