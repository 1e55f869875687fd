# Path: mica_ixbrl/engine/checks/lei_validator.py
"""
LEI Validator

Legal Entity Identifier checks (ISO 17442):
- Format: 18 alphanumeric characters followed by 2 check digits
- Checksum: ISO 7064 MOD 97-10, the scheme used for IBANs
- Optional cross-check against the GLEIF registry

Rule IDs:
    LEI-000  LEI missing                     ERROR
    LEI-001  LEI format invalid              ERROR
    LEI-002  LEI checksum invalid            ERROR
    LEI-003  LEI not found in GLEIF          WARNING
    LEI-004  LEI not issued / entity inactive WARNING
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from ...constants import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    LEI_STATUS_ISSUED,
    LEI_ENTITY_STATUS_ACTIVE,
    LOG_PROCESS,
)
from ...core.logger import get_process_logger
from ...models.validation import RuleEngineResult, ValidationIssue
from .field_values import is_not_applicable, is_present
from .registry_client import LEIRegistryClient, RegistryLookupResult


LEI_LENGTH = 20
LEI_PATTERN = re.compile(r'^[A-Z0-9]{18}[0-9]{2}$')

RULE_LEI_MISSING = 'LEI-000'
RULE_LEI_FORMAT = 'LEI-001'
RULE_LEI_CHECKSUM = 'LEI-002'
RULE_LEI_NOT_FOUND = 'LEI-003'
RULE_LEI_STATUS = 'LEI-004'

LEI_RULES = {
    RULE_LEI_MISSING: 'LEI is present',
    RULE_LEI_FORMAT: 'LEI has 18 alphanumeric characters and 2 check digits',
    RULE_LEI_CHECKSUM: 'LEI check digits satisfy ISO 7064 MOD 97-10',
    RULE_LEI_NOT_FOUND: 'LEI is registered with GLEIF',
    RULE_LEI_STATUS: 'LEI registration is issued and entity is active',
}

# Registry outcome folded into a validation result
REGISTRY_CONFIRMED = 'confirmed'
REGISTRY_NOT_FOUND = 'not_found'
REGISTRY_UNCONFIRMED = 'unconfirmed'

logger = get_process_logger('lei_validator')


@dataclass
class LEIValidationResult:
    """
    Outcome of validating one LEI.

    Attributes:
        lei: Normalized LEI (uppercase, stripped) or None if missing
        is_valid: True if format and checksum pass
        errors: Format/checksum errors (at most one, the first failure)
        warnings: Registry warnings
        registry_status: 'confirmed', 'not_found', 'unconfirmed', or None
            when no registry lookup was requested
        registry: Raw registry lookup result
    """
    lei: Optional[str]
    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    registry_status: Optional[str] = None
    registry: Optional[RegistryLookupResult] = None


def normalize_lei(code: str) -> str:
    return str(code).strip().upper()


def is_valid_lei_format(code: str) -> bool:
    """
    Check LEI structure.

    Args:
        code: Candidate LEI

    Returns:
        True if 20 characters, 18 of [A-Z0-9] then 2 digits (after
        uppercasing)
    """
    if not isinstance(code, str):
        return False
    upper = code.upper()
    return len(upper) == LEI_LENGTH and LEI_PATTERN.match(upper) is not None


def _mod97(characters: str) -> int:
    """Remainder mod 97 of the numeral formed by mapping A=10 .. Z=35."""
    remainder = 0
    for char in characters:
        for digit in str(int(char, 36)):
            remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def validate_lei_checksum(code: str) -> bool:
    """
    Verify the ISO 7064 MOD 97-10 check digits.

    Args:
        code: Candidate LEI

    Returns:
        False if the format is invalid or the remainder is not 1
    """
    if not is_valid_lei_format(code):
        return False
    return _mod97(code.upper()) == 1


def compute_check_digits(base: str) -> str:
    """
    Compute the two check digits for an 18-character LEI prefix.

    Args:
        base: First 18 characters

    Returns:
        Two-digit string
    """
    return f"{98 - _mod97(base.upper() + '00'):02d}"


def _lei_issue(rule_id: str, message: str, severity: str, field_path: str,
               rule_suffix: str, label: str) -> ValidationIssue:
    if label:
        message = f"{label} {message}"
    return ValidationIssue(
        rule_id=rule_id + rule_suffix,
        severity=severity,
        message=message,
        field_path=field_path,
    )


def validate_lei(
    code: Optional[str],
    field_path: str = 'partA.lei',
    rule_suffix: str = '',
    label: str = ''
) -> LEIValidationResult:
    """
    Validate presence, format and checksum of an LEI.

    Stops at the first failure; each failure kind has its own rule ID.

    Args:
        code: LEI value from the record
        field_path: Record path reported on issues
        rule_suffix: Appended to rule IDs (e.g. '-ISSUER')
        label: Prefix for messages (e.g. 'Issuer')

    Returns:
        LEIValidationResult
    """
    if not is_present(code):
        return LEIValidationResult(lei=None, is_valid=False, errors=[
            _lei_issue(RULE_LEI_MISSING, 'LEI is required', SEVERITY_ERROR,
                       field_path, rule_suffix, label),
        ])

    lei = normalize_lei(code)

    if not is_valid_lei_format(lei):
        return LEIValidationResult(lei=lei, is_valid=False, errors=[
            _lei_issue(
                RULE_LEI_FORMAT,
                f"LEI format is invalid: '{lei}' must be 20 characters "
                f"(18 alphanumeric followed by 2 check digits)",
                SEVERITY_ERROR, field_path, rule_suffix, label,
            ),
        ])

    if not validate_lei_checksum(lei):
        return LEIValidationResult(lei=lei, is_valid=False, errors=[
            _lei_issue(
                RULE_LEI_CHECKSUM,
                f"LEI checksum is invalid: '{lei}' fails ISO 7064 MOD 97-10",
                SEVERITY_ERROR, field_path, rule_suffix, label,
            ),
        ])

    return LEIValidationResult(lei=lei, is_valid=True)


def apply_registry_result(result: LEIValidationResult, lookup: RegistryLookupResult,
                          field_path: str = 'partA.lei') -> LEIValidationResult:
    """
    Fold a registry lookup into a validation result.

    Only a confirmed "not found" counts against the LEI; an unreachable
    registry leaves it unconfirmed without any issue.

    Args:
        result: Local validation result (modified in place)
        lookup: Registry lookup result
        field_path: Record path reported on issues

    Returns:
        The same result
    """
    result.registry = lookup

    if not lookup.lookup_performed:
        result.registry_status = REGISTRY_UNCONFIRMED
        return result

    if not lookup.is_valid:
        result.registry_status = REGISTRY_NOT_FOUND
        result.warnings.append(ValidationIssue(
            rule_id=RULE_LEI_NOT_FOUND,
            severity=SEVERITY_WARNING,
            message=f"LEI '{lookup.lei}' was not found in the GLEIF registry",
            field_path=field_path,
        ))
        return result

    result.registry_status = REGISTRY_CONFIRMED

    problems = []
    if lookup.registration_status and lookup.registration_status != LEI_STATUS_ISSUED:
        problems.append(f"registration status is {lookup.registration_status}")
    if lookup.entity_status and lookup.entity_status != LEI_ENTITY_STATUS_ACTIVE:
        problems.append(f"entity status is {lookup.entity_status}")
    if problems:
        result.warnings.append(ValidationIssue(
            rule_id=RULE_LEI_STATUS,
            severity=SEVERITY_WARNING,
            message=f"LEI '{lookup.lei}' {' and '.join(problems)}",
            field_path=field_path,
        ))

    return result


async def validate_lei_with_registry(
    code: Optional[str],
    client: Optional[LEIRegistryClient] = None,
    field_path: str = 'partA.lei'
) -> LEIValidationResult:
    """
    Validate an LEI locally and then against GLEIF.

    The registry is only asked when the local checks pass.

    Args:
        code: LEI value
        client: Registry client (a temporary one is created if omitted)
        field_path: Record path reported on issues

    Returns:
        LEIValidationResult with registry_status set
    """
    result = validate_lei(code, field_path=field_path)
    if not result.is_valid:
        return result

    if client is not None:
        lookup = await client.lookup(result.lei)
    else:
        async with LEIRegistryClient() as own_client:
            lookup = await own_client.lookup(result.lei)

    apply_registry_result(result, lookup, field_path)
    logger.debug(f"{LOG_PROCESS} Registry status for {result.lei}: {result.registry_status}")
    return result


def _needs_validation(value: Optional[str], offeror_lei: Optional[str]) -> bool:
    if not is_present(value) or is_not_applicable(value):
        return False
    if is_present(offeror_lei) and normalize_lei(value) == normalize_lei(offeror_lei):
        return False
    return True


def validate_all_leis(
    offeror_lei: Optional[str],
    issuer_lei: Optional[str] = None,
    operator_lei: Optional[str] = None
) -> RuleEngineResult:
    """
    Validate every LEI in a whitepaper.

    The offeror LEI is always required. Issuer and operator LEIs are
    checked only when given, different from the offeror LEI, and not a
    "not applicable" placeholder.

    Args:
        offeror_lei: Part A LEI
        issuer_lei: Part B LEI
        operator_lei: Part C LEI

    Returns:
        RuleEngineResult with all LEI errors
    """
    result = RuleEngineResult()
    result.errors.extend(validate_lei(offeror_lei, field_path='partA.lei').errors)

    if _needs_validation(issuer_lei, offeror_lei):
        result.errors.extend(validate_lei(
            issuer_lei, field_path='partB.lei', rule_suffix='-ISSUER', label='Issuer'
        ).errors)

    if _needs_validation(operator_lei, offeror_lei):
        result.errors.extend(validate_lei(
            operator_lei, field_path='partC.lei', rule_suffix='-OPERATOR', label='Operator'
        ).errors)

    return result


__all__ = [
    'LEI_RULES',
    'REGISTRY_CONFIRMED',
    'REGISTRY_NOT_FOUND',
    'REGISTRY_UNCONFIRMED',
    'LEIValidationResult',
    'normalize_lei',
    'is_valid_lei_format',
    'validate_lei_checksum',
    'compute_check_digits',
    'validate_lei',
    'apply_registry_result',
    'validate_lei_with_registry',
    'validate_all_leis',
]
