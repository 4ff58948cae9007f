# app/reconciliation/errors.py
"""
Errores de integridad del corte de caja.

Todos se lanzan en el punto donde se detectan y no se reintentan: requieren
que una persona corrija los datos.
"""


class ReconciliationError(Exception):
    code = "RECONCILIATION_ERROR"

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, **self.context}


class InvalidAmount(ReconciliationError):
    """El monto no se puede representar exactamente con 2 decimales."""
    code = "INVALID_AMOUNT"


class InvalidCount(ReconciliationError):
    """Cantidad de billetes/monedas negativa o no entera."""
    code = "INVALID_COUNT"


class InvalidInvoiceDiscount(ReconciliationError):
    """El descuento de la factura excede su subtotal."""
    code = "INVALID_INVOICE_DISCOUNT"


class IncompleteSession(ReconciliationError):
    """La sesión no tiene conteo de denominaciones capturado."""
    code = "INCOMPLETE_SESSION"
