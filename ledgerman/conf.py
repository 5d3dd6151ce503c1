"""
Ledgerman configuration.

Usage in settings.py:
    LEDGERMAN = {
        "LEDGER_STORE": "ledgerman.adapters.orm.OrmLedgerStore",
        "PRODUCT_STORE": "ledgerman.adapters.orm.OrmProductStore",
        "AMOUNT_DECIMAL_PLACES": 2,
        "ROUNDING": "ROUND_HALF_UP",
        "MAX_DUES": 24,
    }
"""

import decimal
from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


DEFAULT_MOVEMENT_FAMILIES = {
    'supplier_order': ['OF', 'ORD_FORNITORE'],
    'credit_note': ['NC', 'NDC', 'NCF'],
    'supplier_return': ['RESO_FORNITORE'],
    'delivery_note': ['DDT', 'CAF'],
    'invoice': ['FAI', 'FAD', 'FAC'],
}


@dataclass
class LedgermanSettings:
    """Ledgerman configuration settings."""

    # Ledger persistence backend (dotted path)
    LEDGER_STORE: str = "ledgerman.adapters.orm.OrmLedgerStore"

    # Product lookup backend (dotted path)
    PRODUCT_STORE: str = "ledgerman.adapters.orm.OrmProductStore"

    # Scale of ledger quantities
    QUANTITY_DECIMAL_PLACES: int = 4

    # Scale of money amounts (installments, line totals)
    AMOUNT_DECIMAL_PLACES: int = 2

    # Name of a decimal rounding mode
    ROUNDING: str = "ROUND_HALF_UP"

    # Upper bound for PaymentCondition.number_of_dues
    MAX_DUES: int = 24

    # Document-type code families used by the movement classifier
    MOVEMENT_FAMILIES: dict[str, list[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_MOVEMENT_FAMILIES.items()}
    )

    @property
    def rounding_mode(self) -> str:
        """Validated decimal rounding constant."""
        mode = getattr(decimal, self.ROUNDING, None)
        if not isinstance(mode, str) or not self.ROUNDING.startswith('ROUND_'):
            raise ValueError(f"Unknown rounding mode: {self.ROUNDING!r}")
        return mode

    @property
    def amount_quantum(self) -> decimal.Decimal:
        return decimal.Decimal(1).scaleb(-self.AMOUNT_DECIMAL_PLACES)

    @property
    def quantity_quantum(self) -> decimal.Decimal:
        return decimal.Decimal(1).scaleb(-self.QUANTITY_DECIMAL_PLACES)


def get_ledgerman_settings() -> LedgermanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "LEDGERMAN", {})
    return LedgermanSettings(**{
        k: v for k, v in user_settings.items()
        if k in LedgermanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_ledgerman_settings(), name)


ledgerman_settings = _LazySettings()
