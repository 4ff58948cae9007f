# app/reconciliation/sources.py
"""
Lecturas de los subsistemas que alimentan el corte.

Las cuatro lecturas son independientes entre sí, así que se lanzan en
paralelo y se espera a que terminen todas antes de conciliar. Cada lectura
abre su propia sesión de SQLAlchemy (las sesiones no se comparten entre
hilos). Si una lectura falla o excede el tiempo límite, el error sube tal
cual al llamador: aquí no hay reintentos.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from time import monotonic
from typing import Callable, List, Optional, Protocol

from sqlalchemy.orm import Session, selectinload

from app.models import (
    CashDenomination, CashInvoice, CashSession, InvoiceStatus,
    ShopPayment, ShopReceipt,
)
from app.reconciliation.adapters import (
    CashInvoiceRecord, InvoiceDetail, PaymentRecord, ReceiptRecord,
)
from app.reconciliation.engine import CashSessionDescriptor
from app.reconciliation.money import MoneyAmount
from app.reconciliation.tally import DenominationCount

logger = logging.getLogger(__name__)


class CashBookSource(Protocol):
    def fetch_session(self, session_id: str) -> Optional[CashSessionDescriptor]: ...
    def fetch_denomination_counts(self, session_id: str) -> List[DenominationCount]: ...
    def fetch_receipts(self, target_date: date) -> List[ReceiptRecord]: ...
    def fetch_payments(self, target_date: date) -> List[PaymentRecord]: ...
    def fetch_cash_invoices(self, target_date: date) -> List[CashInvoiceRecord]: ...


@dataclass
class ReconciliationInputs:
    denominations: List[DenominationCount] = field(default_factory=list)
    receipts: List[ReceiptRecord] = field(default_factory=list)
    payments: List[PaymentRecord] = field(default_factory=list)
    cash_invoices: List[CashInvoiceRecord] = field(default_factory=list)


def descriptor_from_model(session: CashSession) -> CashSessionDescriptor:
    return CashSessionDescriptor(
        session_id=session.cash_session_id,
        date=session.date,
        opening_float=MoneyAmount(session.opening_float or 0),
        closing_float_target=MoneyAmount(session.closing_float_target or 0),
        notes=session.notes,
    )


class SqlCashBookSource:
    """Implementación sobre la BD de la tienda."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def fetch_session(self, session_id: str) -> Optional[CashSessionDescriptor]:
        with self.session_factory() as db:
            session = db.get(CashSession, session_id)
            return descriptor_from_model(session) if session else None

    def fetch_denomination_counts(self, session_id: str) -> List[DenominationCount]:
        with self.session_factory() as db:
            rows = db.query(CashDenomination).filter(
                CashDenomination.cash_session_id == session_id
            ).order_by(CashDenomination.currency, CashDenomination.denomination.desc()).all()
            return [
                DenominationCount(
                    session_id=r.cash_session_id,
                    currency=r.currency,
                    denomination=r.denomination,
                    quantity=r.qty,
                )
                for r in rows
            ]

    def fetch_receipts(self, target_date: date) -> List[ReceiptRecord]:
        with self.session_factory() as db:
            rows = db.query(ShopReceipt).options(selectinload(ShopReceipt.customer)).filter(
                ShopReceipt.date == target_date
            ).order_by(ShopReceipt.receipt_id).all()
            return [
                ReceiptRecord(
                    id=r.receipt_id,
                    date=r.date,
                    cash_amount=r.cash_amount or 0,
                    cheque_amount=r.cheque_amount or 0,
                    counterparty_label=r.customer.name if r.customer else "",
                )
                for r in rows
            ]

    def fetch_payments(self, target_date: date) -> List[PaymentRecord]:
        with self.session_factory() as db:
            rows = db.query(ShopPayment).options(selectinload(ShopPayment.customer)).filter(
                ShopPayment.date == target_date
            ).order_by(ShopPayment.pay_id).all()
            return [
                PaymentRecord(
                    id=p.pay_id,
                    date=p.date,
                    cash_amount=p.cash_amount or 0,
                    cheque_amount=p.cheque_amount or 0,
                    counterparty_label=p.customer.name if p.customer else "",
                    notes=p.notes or "",
                )
                for p in rows
            ]

    def fetch_cash_invoices(self, target_date: date) -> List[CashInvoiceRecord]:
        # date_time es timestamp: se filtra por el rango [00:00, día siguiente)
        start = datetime.combine(target_date, time.min)
        end = start + timedelta(days=1)

        with self.session_factory() as db:
            rows = db.query(CashInvoice).options(selectinload(CashInvoice.details)).filter(
                CashInvoice.date_time >= start,
                CashInvoice.date_time < end,
                CashInvoice.status == InvoiceStatus.PAID,
            ).order_by(CashInvoice.invoice_id).all()
            return [
                CashInvoiceRecord(
                    id=inv.invoice_id,
                    date=inv.date_time,
                    status=inv.status.value,
                    discount=inv.discount or 0,
                    details=tuple(
                        InvoiceDetail(unit_price=d.unit_price, quantity=d.quantity)
                        for d in inv.details
                    ),
                )
                for inv in rows
            ]


def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return max(0.0, deadline - monotonic())


def gather_inputs(
    source: CashBookSource,
    session: CashSessionDescriptor,
    timeout: Optional[float] = None,
) -> ReconciliationInputs:
    """
    Lanza las cuatro lecturas en paralelo y espera a todas (barrera).

    `timeout` acota la barrera completa, no cada lectura: las cuatro
    esperas descuentan de un mismo plazo. concurrent.futures.TimeoutError y
    cualquier error de la lectura se propagan sin capturar.
    """
    deadline = None if timeout is None else monotonic() + timeout
    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="cashbook")
    try:
        denominations = pool.submit(source.fetch_denomination_counts, session.session_id)
        receipts = pool.submit(source.fetch_receipts, session.date)
        payments = pool.submit(source.fetch_payments, session.date)
        invoices = pool.submit(source.fetch_cash_invoices, session.date)

        inputs = ReconciliationInputs(
            denominations=denominations.result(timeout=_remaining(deadline)),
            receipts=receipts.result(timeout=_remaining(deadline)),
            payments=payments.result(timeout=_remaining(deadline)),
            cash_invoices=invoices.result(timeout=_remaining(deadline)),
        )
    finally:
        # No esperar a lecturas colgadas si ya hubo error o timeout
        pool.shutdown(wait=False, cancel_futures=True)

    logger.debug(
        "Lecturas del %s: %d denominaciones, %d recibos, %d pagos, %d facturas",
        session.date.isoformat(), len(inputs.denominations), len(inputs.receipts),
        len(inputs.payments), len(inputs.cash_invoices),
    )
    return inputs
