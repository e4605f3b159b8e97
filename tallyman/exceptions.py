"""
Exceptions for Tallyman.

All errors are LedgerError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class LedgerError(Exception):
    """
    Structured exception for ledger operations.

    Usage:
        try:
            ledger.submit(payload)
        except LedgerError as e:
            if e.code == 'INVALID_PAYLOAD':
                return JsonResponse({'issues': e.issues}, status=400)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_PAYLOAD': 'Dados inválidos',
        'BATCH_NOT_FOUND': 'Lote de movimentação não encontrado',
        'IMMUTABLE_BATCH': 'Lotes de movimentação são imutáveis',
        'PRODUCT_MODEL_MISSING': 'Modelo de produto não configurado',
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    @property
    def issues(self) -> dict[str, list[str]]:
        """Shortcut for data['issues']."""
        return self.data.get('issues', {})

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

    def __repr__(self) -> str:
        return f"LedgerError({self.code!r}, {self.message!r})"
