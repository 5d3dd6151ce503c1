"""
Movement classifier: (document type code, stock sign) -> MovementCategory.

The mapping is data, not control flow: code families are read from
LEDGERMAN['MOVEMENT_FAMILIES'] and compiled once into a lookup table.

Rules (case-insensitive code):
    +1  supplier_order  -> SUPPLIER_RECEIPT
    +1  credit_note     -> CUSTOMER_RETURN
    +1  supplier_return -> SUPPLIER_RECEIPT   (re-receipt)
    +1  anything else   -> SUPPLIER_RECEIPT   (default)
    -1  delivery_note   -> DELIVERY_ISSUE
    -1  invoice         -> SALES_ISSUE
    -1  supplier_return -> SUPPLIER_RETURN
    -1  anything else   -> SALES_ISSUE        (default)

Any other sign is a programming error and raises LedgerError('INVALID_SIGN').

Usage:
    from ledgerman.classifier import classify_movement

    classify_movement('ddt', -1)  # MovementCategory.DELIVERY_ISSUE
"""

import logging
import threading
from collections.abc import Mapping, Sequence

from ledgerman.conf import ledgerman_settings
from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import MovementCategory

logger = logging.getLogger('ledgerman')

# (family, sign) -> category. Families are keys of MOVEMENT_FAMILIES.
FAMILY_RULES = {
    ('supplier_order', 1): MovementCategory.SUPPLIER_RECEIPT,
    ('credit_note', 1): MovementCategory.CUSTOMER_RETURN,
    ('supplier_return', 1): MovementCategory.SUPPLIER_RECEIPT,
    ('delivery_note', -1): MovementCategory.DELIVERY_ISSUE,
    ('invoice', -1): MovementCategory.SALES_ISSUE,
    ('supplier_return', -1): MovementCategory.SUPPLIER_RETURN,
}

DEFAULT_BY_SIGN = {
    1: MovementCategory.SUPPLIER_RECEIPT,
    -1: MovementCategory.SALES_ISSUE,
}


def _is_sign(value) -> bool:
    # bool is an int subclass; True must not pass as +1
    return isinstance(value, int) and not isinstance(value, bool) and value in DEFAULT_BY_SIGN


# Earlier family wins when a code appears in more than one
FAMILY_PRIORITY = {
    1: ['supplier_order', 'credit_note', 'supplier_return'],
    -1: ['delivery_note', 'invoice', 'supplier_return'],
}


class MovementClassifier:
    """
    Compiled lookup table.

    Build once (see get_classifier) and call classify() per line.
    """

    def __init__(self, families: Mapping[str, Sequence[str]]):
        table: dict[tuple[str, int], MovementCategory] = {}
        for sign, ordered_families in FAMILY_PRIORITY.items():
            for family in reversed(ordered_families):
                category = FAMILY_RULES[(family, sign)]
                for code in families.get(family, ()):
                    table[(code.upper(), sign)] = category
        self._table = table

    def classify(self, type_code: str, stock_sign: int) -> MovementCategory:
        """
        Map a document type code and stock sign to a movement category.

        Raises:
            LedgerError('INVALID_SIGN'): If stock_sign is not exactly +1 or -1
        """
        if not _is_sign(stock_sign):
            raise LedgerError('INVALID_SIGN', sign=stock_sign, document_type=type_code)

        sign = int(stock_sign)
        code = (type_code or '').upper()
        category = self._table.get((code, sign))
        if category is None:
            category = DEFAULT_BY_SIGN[sign]
            logger.warning(
                "ledger.classifier.default",
                extra={
                    "document_type": type_code,
                    "sign": sign,
                    "category": category.value,
                },
            )
        return category

    def known_codes(self) -> set[str]:
        return {code for code, _sign in self._table}


_lock = threading.Lock()
_classifier: MovementClassifier | None = None


def get_classifier() -> MovementClassifier:
    """Return the process-wide classifier, compiling it on first use."""
    global _classifier

    if _classifier is None:
        with _lock:
            if _classifier is None:  # double-checked
                _classifier = MovementClassifier(ledgerman_settings.MOVEMENT_FAMILIES)

    return _classifier


def reset_classifier() -> None:
    """Drop the compiled table. Useful for testing with overridden settings."""
    global _classifier
    _classifier = None


def classify_movement(type_code: str, stock_sign: int) -> MovementCategory:
    """Classify with the process-wide table."""
    return get_classifier().classify(type_code, stock_sign)


def reverse_sign(stock_sign: int) -> int:
    """Sign of an offsetting movement."""
    if not _is_sign(stock_sign):
        raise LedgerError('INVALID_SIGN', sign=stock_sign)
    return -int(stock_sign)
