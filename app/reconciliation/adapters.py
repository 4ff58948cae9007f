# app/reconciliation/adapters.py
"""
Adaptadores de los flujos de transacciones del día.

Cada adaptador recibe los registros crudos de otro subsistema (recibos,
pagos, facturas de contado), se queda con los de la fecha objetivo y los
normaliza a TransactionLine. Los totales de cada flujo alimentan al motor
de conciliación.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Union

from app.reconciliation.errors import InvalidAmount, InvalidCount, InvalidInvoiceDiscount
from app.reconciliation.money import MoneyAmount, RawAmount

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

# Estatus de factura que cuenta como "pagada completa en efectivo"
SETTLED_STATUS = "PAID"


# --- Registros de entrada (lecturas de otros subsistemas) ---

@dataclass(frozen=True)
class ReceiptRecord:
    id: str
    date: DateLike
    cash_amount: RawAmount = 0
    cheque_amount: RawAmount = 0
    counterparty_label: str = ""


@dataclass(frozen=True)
class PaymentRecord:
    id: str
    date: DateLike
    cash_amount: RawAmount = 0
    cheque_amount: RawAmount = 0
    counterparty_label: str = ""
    notes: str = ""


@dataclass(frozen=True)
class InvoiceDetail:
    unit_price: RawAmount
    quantity: int


@dataclass(frozen=True)
class CashInvoiceRecord:
    id: str
    date: DateLike
    status: str = SETTLED_STATUS
    discount: RawAmount = 0
    details: Sequence[InvoiceDetail] = ()


# --- Salida normalizada ---

@dataclass(frozen=True)
class TransactionLine:
    id: str
    cash_amount: MoneyAmount
    cheque_amount: MoneyAmount
    counterparty_label: str = ""
    notes: str = ""


@dataclass(frozen=True)
class StreamSummary:
    lines: List[TransactionLine] = field(default_factory=list)
    cash_total: MoneyAmount = field(default_factory=MoneyAmount.zero)
    cheque_total: MoneyAmount = field(default_factory=MoneyAmount.zero)
    warnings: List[str] = field(default_factory=list)
    missing_details: List[str] = field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [line.id for line in self.lines]


def calendar_date(value: DateLike) -> date:
    """Reduce un timestamp a su fecha de calendario."""
    if isinstance(value, datetime):
        return value.date()
    return value


def non_negative(value: Optional[RawAmount], what: str, record_id: str) -> MoneyAmount:
    amount = MoneyAmount(value if value is not None else 0)
    if amount.is_negative():
        raise InvalidAmount(f"{what} negativo en {record_id}: {amount}", record_id=record_id)
    return amount


class ReceiptsAdapter:
    """Recibos de clientes: entrada de efectivo y cheques."""

    def normalize(self, records: Iterable[ReceiptRecord], target_date: date) -> StreamSummary:
        lines = []
        for rec in records:
            if calendar_date(rec.date) != target_date:
                continue
            lines.append(TransactionLine(
                id=rec.id,
                cash_amount=non_negative(rec.cash_amount, "Efectivo", rec.id),
                cheque_amount=non_negative(rec.cheque_amount, "Cheque", rec.id),
                counterparty_label=rec.counterparty_label or "",
            ))

        return StreamSummary(
            lines=lines,
            cash_total=sum((l.cash_amount for l in lines), MoneyAmount.zero()),
            cheque_total=sum((l.cheque_amount for l in lines), MoneyAmount.zero()),
        )


class PaymentsAdapter:
    """
    Pagos: efectivo que sale de la caja.

    Solo el efectivo participa en el cálculo. Un componente en cheque se
    reporta (cheque_total) pero no se resta, y se marca como advertencia.
    """

    def normalize(self, records: Iterable[PaymentRecord], target_date: date) -> StreamSummary:
        lines = []
        warnings = []
        for rec in records:
            if calendar_date(rec.date) != target_date:
                continue
            cheque = non_negative(rec.cheque_amount, "Cheque", rec.id)
            if not cheque.is_zero():
                msg = f"Pago {rec.id} trae cheque por {cheque}; se reporta pero no se descuenta del efectivo"
                logger.warning(msg, extra={"payment_id": rec.id, "cheque_amount": str(cheque)})
                warnings.append(msg)
            lines.append(TransactionLine(
                id=rec.id,
                cash_amount=non_negative(rec.cash_amount, "Efectivo", rec.id),
                cheque_amount=cheque,
                counterparty_label=rec.counterparty_label or "",
                notes=rec.notes or "",
            ))

        return StreamSummary(
            lines=lines,
            cash_total=sum((l.cash_amount for l in lines), MoneyAmount.zero()),
            cheque_total=sum((l.cheque_amount for l in lines), MoneyAmount.zero()),
            warnings=warnings,
        )


class CashInvoiceAdapter:
    """
    Facturas de contado pagadas completas en la fecha objetivo.

    valor = subtotal (suma de renglones) - descuento. Una factura sin
    renglones no detiene el corte: entra en 0.00 y su id se lista en
    missing_details.
    """

    @staticmethod
    def subtotal(invoice: CashInvoiceRecord) -> MoneyAmount:
        total = MoneyAmount.zero()
        for detail in invoice.details:
            qty = detail.quantity
            if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
                raise InvalidCount(
                    f"Cantidad inválida en factura {invoice.id}: {qty!r}",
                    record_id=invoice.id,
                )
            total = total + non_negative(detail.unit_price, "Precio", invoice.id) * qty
        return total

    def calc_value(self, invoice: CashInvoiceRecord) -> MoneyAmount:
        subtotal = self.subtotal(invoice)
        discount = non_negative(invoice.discount, "Descuento", invoice.id)
        if discount > subtotal:
            raise InvalidInvoiceDiscount(
                f"Descuento {discount} excede el subtotal {subtotal} en factura {invoice.id}",
                record_id=invoice.id,
            )
        return subtotal - discount

    def normalize(self, records: Iterable[CashInvoiceRecord], target_date: date) -> StreamSummary:
        lines = []
        missing = []
        for inv in records:
            if calendar_date(inv.date) != target_date or inv.status != SETTLED_STATUS:
                continue

            if not inv.details:
                logger.warning(
                    "Factura %s sin renglones de detalle; se toma como 0.00", inv.id,
                    extra={"invoice_id": inv.id},
                )
                missing.append(inv.id)
                value = MoneyAmount.zero()
            else:
                value = self.calc_value(inv)

            lines.append(TransactionLine(
                id=inv.id,
                cash_amount=value,
                cheque_amount=MoneyAmount.zero(),
                counterparty_label=inv.id,
            ))

        return StreamSummary(
            lines=lines,
            cash_total=sum((l.cash_amount for l in lines), MoneyAmount.zero()),
            missing_details=missing,
        )
