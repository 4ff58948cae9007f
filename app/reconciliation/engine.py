# app/reconciliation/engine.py
import logging
from dataclasses import dataclass
from datetime import date
from typing import Generic, Optional, TypeVar, Union

from app.reconciliation.adapters import StreamSummary
from app.reconciliation.errors import IncompleteSession, ReconciliationError
from app.reconciliation.money import MoneyAmount

logger = logging.getLogger(__name__)

EMPTY_STREAM = StreamSummary()


@dataclass(frozen=True)
class CashSessionDescriptor:
    """Vista inmutable de la sesión de caja que necesita el motor."""
    session_id: str
    date: date
    opening_float: MoneyAmount
    closing_float_target: MoneyAmount
    notes: Optional[str] = None


@dataclass(frozen=True)
class ReconciliationResult:
    counted_cash: MoneyAmount
    expected_cash: MoneyAmount
    expected_cheques: MoneyAmount
    over_short: MoneyAmount
    receipts_cash_total: MoneyAmount
    receipts_cheque_total: MoneyAmount
    payments_cash_total: MoneyAmount
    cash_invoices_total: MoneyAmount
    amount_to_deliver_cash: MoneyAmount
    difference_vs_registered: MoneyAmount


def reconcile(
    session: CashSessionDescriptor,
    counted_cash: Optional[MoneyAmount],
    receipts: Optional[StreamSummary] = None,
    payments: Optional[StreamSummary] = None,
    cash_invoices: Optional[StreamSummary] = None,
) -> ReconciliationResult:
    """
    Concilia el efectivo contado contra lo registrado en libros.

    - expected_cash: recibos en efectivo + facturas de contado - pagos.
      No incluye el fondo inicial (es saldo permanente, no flujo del día).
    - over_short: contado - esperado. Positivo = sobrante, negativo = faltante.
    - amount_to_deliver_cash: lo que se retira de caja dejando el fondo objetivo.
    - difference_vs_registered: entrega según conteo vs. entrega según libros;
      distinto de cero indica que el fondo se desvió entre sesiones.

    Función pura: sin I/O, sin reloj, sin estado compartido.
    """
    if counted_cash is None:
        raise IncompleteSession(
            f"La sesión {session.session_id} no tiene conteo de denominaciones",
            session_id=session.session_id,
        )

    # Un flujo ausente equivale a un día sin movimientos
    receipts = receipts or EMPTY_STREAM
    payments = payments or EMPTY_STREAM
    cash_invoices = cash_invoices or EMPTY_STREAM

    expected_cash = receipts.cash_total + cash_invoices.cash_total - payments.cash_total
    amount_to_deliver = counted_cash - session.closing_float_target

    result = ReconciliationResult(
        counted_cash=counted_cash,
        expected_cash=expected_cash,
        expected_cheques=receipts.cheque_total,
        over_short=counted_cash - expected_cash,
        receipts_cash_total=receipts.cash_total,
        receipts_cheque_total=receipts.cheque_total,
        payments_cash_total=payments.cash_total,
        cash_invoices_total=cash_invoices.cash_total,
        amount_to_deliver_cash=amount_to_deliver,
        difference_vs_registered=amount_to_deliver - (expected_cash - session.opening_float),
    )

    logger.info(
        "Corte %s (%s): contado=%s esperado=%s sobrante/faltante=%s",
        session.session_id, session.date.isoformat(),
        result.counted_cash, result.expected_cash, result.over_short,
        extra={"session_id": session.session_id},
    )
    return result


# --- Resultado etiquetado para quien no quiera manejar excepciones ---

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    is_ok = True


@dataclass(frozen=True)
class Err:
    error: ReconciliationError
    is_ok = False

    @property
    def code(self) -> str:
        return self.error.code


Outcome = Union[Ok[ReconciliationResult], Err]


def reconcile_outcome(
    session: CashSessionDescriptor,
    counted_cash: Optional[MoneyAmount],
    receipts: Optional[StreamSummary] = None,
    payments: Optional[StreamSummary] = None,
    cash_invoices: Optional[StreamSummary] = None,
) -> Outcome:
    try:
        return Ok(reconcile(session, counted_cash, receipts, payments, cash_invoices))
    except ReconciliationError as exc:
        return Err(exc)
