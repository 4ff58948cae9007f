"""
Unit Tests for the reconciliation engine

Run with: pytest tests/test_engine.py -v
"""
import dataclasses
from datetime import datetime

import pytest

from app.reconciliation import (
    CashInvoiceAdapter, CashInvoiceRecord, Err, IncompleteSession,
    InvoiceDetail, MoneyAmount, Ok, PaymentRecord, PaymentsAdapter,
    ReceiptRecord, ReceiptsAdapter, reconcile, reconcile_outcome,
)
from tests.conftest import SESSION_DAY


def receipts(*rows):
    return ReceiptsAdapter().normalize(
        [ReceiptRecord(f"R-{i}", SESSION_DAY, cash, cheque) for i, (cash, cheque) in enumerate(rows)],
        SESSION_DAY,
    )


def payments(*cash):
    return PaymentsAdapter().normalize(
        [PaymentRecord(f"P-{i}", SESSION_DAY, c) for i, c in enumerate(cash)], SESSION_DAY
    )


def invoices(*values, discount="0"):
    when = datetime.combine(SESSION_DAY, datetime.min.time())
    return CashInvoiceAdapter().normalize(
        [CashInvoiceRecord(f"INV-{i}", when, discount=discount, details=(InvoiceDetail(v, 1),))
         for i, v in enumerate(values)],
        SESSION_DAY,
    )


class TestReconcileScenarios:

    def test_full_day_with_overage(self, descriptor):
        """Fondo 500/500, contado 1230, esperado 930 -> sobrante exacto de 300.00."""
        result = reconcile(
            descriptor,
            MoneyAmount("1230.00"),
            receipts=receipts(("300.00", "150.00")),
            payments=payments("100.00"),
            cash_invoices=invoices("730.00"),
        )

        assert result.expected_cash == MoneyAmount("930.00")
        assert result.expected_cheques == MoneyAmount("150.00")
        assert result.over_short == MoneyAmount("300.00")
        assert result.amount_to_deliver_cash == MoneyAmount("730.00")
        assert result.difference_vs_registered == MoneyAmount("300.00")

    def test_single_invoice_balances(self, descriptor):
        session = dataclasses.replace(descriptor, closing_float_target=MoneyAmount("100.00"))
        result = reconcile(session, MoneyAmount("150.00"), cash_invoices=invoices("150.00"))

        assert result.over_short == MoneyAmount("0.00")
        assert result.amount_to_deliver_cash == MoneyAmount("150.00") - session.closing_float_target
        assert result.receipts_cash_total.is_zero()
        assert result.payments_cash_total.is_zero()

    def test_shortage_is_negative_not_clamped(self, descriptor):
        result = reconcile(descriptor, MoneyAmount("99.99"), receipts=receipts(("100.00", "0")))
        assert result.over_short == MoneyAmount("-0.01")

    def test_payments_exceeding_income_give_negative_expected(self, descriptor):
        result = reconcile(descriptor, MoneyAmount("0"), payments=payments("80.00"))
        assert result.expected_cash == MoneyAmount("-80.00")
        assert result.over_short == MoneyAmount("80.00")

    def test_float_drift_is_surfaced(self, descriptor):
        """Con fondo inicial 500 y objetivo 450 la entrega difiere de los libros en 50."""
        session = dataclasses.replace(descriptor, closing_float_target=MoneyAmount("450.00"))
        result = reconcile(session, MoneyAmount("600.00"), receipts=receipts(("100.00", "0")))
        assert result.amount_to_deliver_cash == MoneyAmount("150.00")
        assert result.difference_vs_registered == MoneyAmount("550.00")


class TestReconcileInvariants:

    def test_missing_streams_count_as_empty(self, descriptor):
        result = reconcile(descriptor, MoneyAmount("500.00"))
        assert result.expected_cash.is_zero()
        assert result.over_short == MoneyAmount("500.00")

    def test_counted_cash_absent_raises(self, descriptor):
        with pytest.raises(IncompleteSession) as exc:
            reconcile(descriptor, None, receipts=receipts(("1", "0")))
        assert exc.value.code == "INCOMPLETE_SESSION"

    def test_expected_cash_identity(self, descriptor):
        result = reconcile(
            descriptor, MoneyAmount("12.34"),
            receipts=receipts(("10.10", "1.00"), ("0.05", "0")),
            payments=payments("3.33", "0.01"),
            cash_invoices=invoices("7.77", "0.02"),
        )
        assert result.expected_cash == (
            result.receipts_cash_total + result.cash_invoices_total - result.payments_cash_total
        )

    def test_counted_equal_to_expected_gives_zero(self, descriptor):
        streams = dict(receipts=receipts(("41.17", "0")), payments=payments("0.99"), cash_invoices=invoices("3.03"))
        expected = reconcile(descriptor, MoneyAmount("0"), **streams).expected_cash
        assert reconcile(descriptor, expected, **streams).over_short.is_zero()

    def test_deterministic(self, descriptor):
        args = (descriptor, MoneyAmount("1230.00"), receipts(("300", "150")), payments("100"), invoices("730"))
        assert reconcile(*args) == reconcile(*args)


class TestReconcileOutcome:

    def test_ok(self, descriptor):
        outcome = reconcile_outcome(descriptor, MoneyAmount("10.00"))
        assert isinstance(outcome, Ok)
        assert outcome.is_ok
        assert outcome.value.counted_cash == MoneyAmount("10.00")

    def test_err(self, descriptor):
        outcome = reconcile_outcome(descriptor, None)
        assert isinstance(outcome, Err)
        assert not outcome.is_ok
        assert outcome.code == "INCOMPLETE_SESSION"
