"""
Exceptions for Ledgerman.

All errors are LedgerError with a structured code for programmatic handling.
Distinct failure kinds that must abort a document save have their own subclass.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Exception carrying a machine-readable code and context data.

    Usage:
        raise LedgerError('INVALID_QUANTITY', requested='abc')
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, data={self.data!r})"


class LedgerError(BaseError):
    """
    Structured exception for ledger operations.

    Usage:
        try:
            ledger.allocate_payment(payment, {installment.pk: Decimal('50')})
        except LedgerError as e:
            if e.code == 'ALLOCATION_EXCEEDS_RESIDUAL':
                print(f"Residuo disponibile: {e.residual}")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantità non valida',
        'INVALID_SIGN': 'Segno operazione non valido (deve essere 1 o -1)',
        'INVALID_PAYMENT_CONDITION': 'Condizione di pagamento non valida',
        'INVALID_AMOUNT': 'Importo non valido',
        'IMMUTABLE_MOVEMENT': 'I movimenti di magazzino sono immutabili',
        'TENANT_MISMATCH': 'Risorsa di un\'altra organizzazione',
        'INSUFFICIENT_STOCK': 'Giacenza insufficiente',
        'INSTALLMENT_NOT_FOUND': 'Scadenza non trovata',
        'ALLOCATION_EXCEEDS_RESIDUAL': 'Allocazione superiore al residuo della scadenza',
        'ALLOCATION_EXCEEDS_PAYMENT': 'Allocazioni superiori all\'importo del pagamento',
        'DIRECTION_MISMATCH': 'Direzione pagamento incoerente con il documento',
        'MISSING_STOCK_SIGN': 'Tipo documento movimenta magazzino ma il segno non è definito',
        'PRODUCT_NOT_FOUND': 'Prodotto non trovato',
    }

    @property
    def residual(self) -> Decimal:
        """Shortcut for data['residual']."""
        return self.data.get('residual', Decimal('0'))

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class ConfigurationError(LedgerError):
    """Document type configuration is inconsistent (e.g. stock flag without sign)."""


class ProductNotFound(LedgerError):
    """A document line references a product that does not exist for the tenant."""

    def __init__(self, product_id, **data: Any):
        super().__init__('PRODUCT_NOT_FOUND', product_id=product_id, **data)
