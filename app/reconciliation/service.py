# app/reconciliation/service.py
import logging
from typing import Optional

from app.reconciliation.adapters import CashInvoiceAdapter, PaymentsAdapter, ReceiptsAdapter
from app.reconciliation.engine import CashSessionDescriptor, reconcile
from app.reconciliation.report import assemble_report
from app.reconciliation.sources import CashBookSource, ReconciliationInputs, gather_inputs
from app.reconciliation.tally import tally_denominations
from app.schemas.reports import CashSessionReport

logger = logging.getLogger(__name__)


class SessionNotFound(LookupError):
    pass


def reconcile_inputs(
    session: CashSessionDescriptor,
    inputs: ReconciliationInputs,
    local_currency: str,
) -> CashSessionReport:
    """Normaliza, concilia y arma el reporte a partir de lecturas ya hechas."""
    tally = tally_denominations(inputs.denominations)
    receipts = ReceiptsAdapter().normalize(inputs.receipts, session.date)
    payments = PaymentsAdapter().normalize(inputs.payments, session.date)
    invoices = CashInvoiceAdapter().normalize(inputs.cash_invoices, session.date)

    result = reconcile(
        session,
        tally.primary_total(local_currency),
        receipts=receipts,
        payments=payments,
        cash_invoices=invoices,
    )
    return assemble_report(session, result, tally, receipts, payments, invoices)


def build_cash_session_report(
    source: CashBookSource,
    session_id: str,
    local_currency: str,
    timeout: Optional[float] = None,
) -> CashSessionReport:
    """Reporte completo del corte: sesión -> lecturas en paralelo -> conciliación."""
    session = source.fetch_session(session_id)
    if session is None:
        raise SessionNotFound(session_id)

    inputs = gather_inputs(source, session, timeout=timeout)
    return reconcile_inputs(session, inputs, local_currency)
