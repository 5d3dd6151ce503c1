"""
Italian fiscal identifiers: checksum validators and display helpers.

Checksum validation for:
    - Partita IVA (VAT number): 11 digits, last one is a Luhn-like check digit
    - Codice Fiscale (personal fiscal code): 16 chars, last one is a check letter

The validate_* functions are pure and total: malformed input returns False,
never raises. No normalisation is applied; callers own casing and trimming.

Examples:
    validate_vat_checksum('12345678903')             # True
    validate_fiscal_code_checksum('RSSMRA80A01H501U') # True
"""

import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


VAT_PATTERN = re.compile(r'[0-9]{11}')
FISCAL_CODE_PATTERN = re.compile(r'[A-Z]{6}[0-9]{2}[A-Z][0-9]{2}[A-Z][0-9]{3}[A-Z]')

# Characters at 1-based even positions (0-based odd index)
EVEN_POSITION_VALUES = {
    **{str(d): d for d in range(10)},
    **{chr(ord('A') + i): i for i in range(26)},
}

# Characters at 1-based odd positions (0-based even index)
ODD_POSITION_VALUES = {
    '0': 1, '1': 0, '2': 5, '3': 7, '4': 9, '5': 13, '6': 15, '7': 17, '8': 19, '9': 21,
    'A': 1, 'B': 0, 'C': 5, 'D': 7, 'E': 9, 'F': 13, 'G': 15, 'H': 17, 'I': 19, 'J': 21,
    'K': 2, 'L': 4, 'M': 18, 'N': 20, 'O': 11, 'P': 3, 'Q': 6, 'R': 8, 'S': 12, 'T': 14,
    'U': 16, 'V': 10, 'W': 22, 'X': 25, 'Y': 24, 'Z': 23,
}


def vat_check_digit(first_ten: str) -> str:
    """
    Compute the VAT check digit for the first 10 digits.

    Digits at odd index (1, 3, 5, 7, 9) are doubled, minus 9 when above 9.

    Raises:
        ValueError: If first_ten is not exactly 10 ASCII digits
    """
    if not isinstance(first_ten, str) or not re.fullmatch(r'[0-9]{10}', first_ten):
        raise ValueError(f"Expected 10 digits, got {first_ten!r}")

    total = 0
    for index, char in enumerate(first_ten):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return str((10 - total % 10) % 10)


def fiscal_code_check_char(first_fifteen: str) -> str:
    """
    Compute the fiscal code check letter for the first 15 characters.

    Raises:
        ValueError: If a character has no conversion value or length is not 15
    """
    if not isinstance(first_fifteen, str) or len(first_fifteen) != 15:
        raise ValueError(f"Expected 15 characters, got {first_fifteen!r}")

    total = 0
    for index, char in enumerate(first_fifteen):
        table = ODD_POSITION_VALUES if index % 2 == 0 else EVEN_POSITION_VALUES
        try:
            total += table[char]
        except KeyError:
            raise ValueError(f"Invalid character {char!r} at position {index}") from None

    return chr(ord('A') + total % 26)


def validate_vat_checksum(value) -> bool:
    """True iff value is 11 ASCII digits with a correct check digit."""
    if not isinstance(value, str) or not VAT_PATTERN.fullmatch(value):
        return False
    return vat_check_digit(value[:10]) == value[10]


def validate_fiscal_code_checksum(value) -> bool:
    """True iff value matches the 16-char layout with a correct check letter."""
    if not isinstance(value, str) or not FISCAL_CODE_PATTERN.fullmatch(value):
        return False
    return fiscal_code_check_char(value[:15]) == value[15]


def validate_vat_or_fiscal_code(vat_number: str | None, fiscal_code: str | None) -> bool:
    """
    At least one identifier must be present, and each present one must be valid.

    A private person may only have a fiscal code, a foreign company only a VAT
    number. Blank strings count as absent.
    """
    vat = (vat_number or '').strip()
    cf = (fiscal_code or '').strip()

    if not vat and not cf:
        return False
    if vat and not validate_vat_checksum(vat):
        return False
    if cf and not validate_fiscal_code_checksum(cf):
        return False
    return True


def format_vat(vat: str) -> str:
    """'12345678903' -> '123 456 789 03'. Other lengths are returned unchanged."""
    if len(vat) != 11:
        return vat
    return f"{vat[:3]} {vat[3:6]} {vat[6:9]} {vat[9:]}"


def format_fiscal_code(cf: str) -> str:
    """'RSSMRA80A01H501U' -> 'RSSMRA 80A01 H501U'. Other lengths unchanged."""
    if len(cf) != 16:
        return cf
    return f"{cf[:6]} {cf[6:11]} {cf[11:]}"


# ══════════════════════════════════════════════════════════════
# DJANGO FIELD VALIDATORS
# ══════════════════════════════════════════════════════════════


def vat_number_validator(value):
    """Model/form field validator for Partita IVA."""
    if not validate_vat_checksum(value):
        raise ValidationError(
            _('P.IVA deve contenere esattamente 11 cifre e superare il controllo checksum'),
            code='invalid_vat',
            params={'value': value},
        )


def fiscal_code_validator(value):
    """Model/form field validator for Codice Fiscale."""
    if not validate_fiscal_code_checksum(value):
        raise ValidationError(
            _('Codice Fiscale non valido'),
            code='invalid_fiscal_code',
            params={'value': value},
        )
