# app/reconciliation/report.py
from typing import List

from app.reconciliation.adapters import StreamSummary
from app.reconciliation.engine import CashSessionDescriptor, ReconciliationResult
from app.reconciliation.tally import TallyResult
from app.schemas.reports import (
    CashInvoiceRow, CashSessionReport, DenominationRow,
    PaymentRow, ReceiptRow, ReportSession,
)


def assemble_report(
    session: CashSessionDescriptor,
    result: ReconciliationResult,
    tally: TallyResult,
    receipts: StreamSummary,
    payments: StreamSummary,
    cash_invoices: StreamSummary,
) -> CashSessionReport:
    """Empaqueta el resultado y los renglones crudos para la hoja impresa."""
    warnings: List[str] = [*receipts.warnings, *payments.warnings, *cash_invoices.warnings]

    return CashSessionReport(
        session=ReportSession(
            cash_session_id=session.session_id,
            session_date=session.date,
            opening_float=session.opening_float.to_decimal(),
            closing_float_target=session.closing_float_target.to_decimal(),
            notes=session.notes or "",
        ),
        session_date_str=session.date.isoformat(),
        denom_rows=[
            DenominationRow(
                currency=r.currency,
                denomination=r.denomination.to_decimal(),
                qty=r.quantity,
                amount=r.amount.to_decimal(),
            )
            for r in tally.rows
        ],
        counted_by_currency={cur: total.to_decimal() for cur, total in tally.totals.items()},
        receipts_for_date=[
            ReceiptRow(
                id=l.id,
                customerName=l.counterparty_label,
                cash=l.cash_amount.to_decimal(),
                cheque=l.cheque_amount.to_decimal(),
            )
            for l in receipts.lines
        ],
        payments_for_date=[
            PaymentRow(
                id=l.id,
                customerName=l.counterparty_label,
                notes=l.notes,
                cash=l.cash_amount.to_decimal(),
                cheque=l.cheque_amount.to_decimal(),
            )
            for l in payments.lines
        ],
        cash_invoices_with_value=[
            CashInvoiceRow(id=l.id, calcValue=l.cash_amount.to_decimal())
            for l in cash_invoices.lines
        ],
        receipts_today=receipts.ids,
        payments_today=payments.ids,
        counted_cash=result.counted_cash.to_decimal(),
        expected_cash=result.expected_cash.to_decimal(),
        expected_cheques=result.expected_cheques.to_decimal(),
        over_short=result.over_short.to_decimal(),
        receipts_cash_total=result.receipts_cash_total.to_decimal(),
        receipts_cheque_total=result.receipts_cheque_total.to_decimal(),
        payments_cash_total=result.payments_cash_total.to_decimal(),
        payments_cheque_total=payments.cheque_total.to_decimal(),
        cash_invoices_total=result.cash_invoices_total.to_decimal(),
        amount_to_deliver_cash=result.amount_to_deliver_cash.to_decimal(),
        difference_vs_registered=result.difference_vs_registered.to_decimal(),
        missing_details=list(cash_invoices.missing_details),
        data_warnings=warnings,
    )
