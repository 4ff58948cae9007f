"""
Unit Tests for the transaction stream adapters

Tests normalisation of:
- Receipts (cash + cheque in)
- Payments (cash out, cheque reported only)
- Cash invoices (subtotal - discount, missing detail degrade)

Run with: pytest tests/test_adapters.py -v
"""
import logging
from datetime import datetime, timedelta

import pytest

from app.reconciliation import (
    CashInvoiceAdapter, CashInvoiceRecord, InvalidAmount, InvalidCount,
    InvalidInvoiceDiscount, InvoiceDetail, MoneyAmount, PaymentRecord,
    PaymentsAdapter, ReceiptRecord, ReceiptsAdapter,
)
from tests.conftest import SESSION_DAY

YESTERDAY = SESSION_DAY - timedelta(days=1)


class TestReceiptsAdapter:

    def test_filters_by_date_and_sums(self):
        summary = ReceiptsAdapter().normalize([
            ReceiptRecord("R-1", SESSION_DAY, "100.00", "50.00", "Ahmad"),
            ReceiptRecord("R-2", SESSION_DAY, "200.00", 0, "Sami"),
            ReceiptRecord("R-0", YESTERDAY, "999.00", "999.00", "Ayer"),
        ], SESSION_DAY)

        assert summary.ids == ["R-1", "R-2"]
        assert summary.cash_total == MoneyAmount("300.00")
        assert summary.cheque_total == MoneyAmount("50.00")
        assert summary.lines[0].counterparty_label == "Ahmad"

    def test_timestamps_reduced_to_calendar_date(self):
        late = datetime.combine(SESSION_DAY, datetime.max.time())
        summary = ReceiptsAdapter().normalize([ReceiptRecord("R-1", late, "10")], SESSION_DAY)
        assert summary.ids == ["R-1"]

    def test_empty_stream(self):
        summary = ReceiptsAdapter().normalize([], SESSION_DAY)
        assert summary.lines == []
        assert summary.cash_total.is_zero()

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            ReceiptsAdapter().normalize([ReceiptRecord("R-1", SESSION_DAY, "-5.00")], SESSION_DAY)


class TestPaymentsAdapter:

    def test_only_cash_is_summed(self):
        summary = PaymentsAdapter().normalize([
            PaymentRecord("P-1", SESSION_DAY, "100.00", notes="Luz"),
            PaymentRecord("P-2", SESSION_DAY, "25.50"),
        ], SESSION_DAY)
        assert summary.cash_total == MoneyAmount("125.50")
        assert summary.warnings == []

    def test_cheque_component_is_warning_not_error(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.reconciliation.adapters"):
            summary = PaymentsAdapter().normalize([
                PaymentRecord("P-1", SESSION_DAY, "40.00", cheque_amount="60.00"),
            ], SESSION_DAY)

        assert summary.cash_total == MoneyAmount("40.00")
        assert summary.cheque_total == MoneyAmount("60.00")
        assert len(summary.warnings) == 1
        assert "P-1" in summary.warnings[0]
        assert any("P-1" in r.getMessage() for r in caplog.records)


class TestCashInvoiceAdapter:

    @staticmethod
    def invoice(inv_id, details, discount="0", status="PAID", when=None):
        when = when or datetime.combine(SESSION_DAY, datetime.min.time()).replace(hour=10)
        return CashInvoiceRecord(inv_id, when, status=status, discount=discount, details=tuple(details))

    def test_value_is_subtotal_minus_discount(self):
        summary = CashInvoiceAdapter().normalize([
            self.invoice("INV-1", [InvoiceDetail("250.00", 2), InvoiceDetail("250.00", 1)], discount="20.00"),
        ], SESSION_DAY)
        assert summary.cash_total == MoneyAmount("730.00")
        assert summary.lines[0].cash_amount == MoneyAmount("730.00")

    def test_discount_equal_to_subtotal_is_zero(self):
        summary = CashInvoiceAdapter().normalize([
            self.invoice("INV-1", [InvoiceDetail("99.99", 1)], discount="99.99"),
        ], SESSION_DAY)
        assert summary.cash_total == MoneyAmount.zero()
        assert summary.missing_details == []

    def test_discount_one_cent_over_raises(self):
        with pytest.raises(InvalidInvoiceDiscount):
            CashInvoiceAdapter().normalize([
                self.invoice("INV-1", [InvoiceDetail("99.99", 1)], discount="100.00"),
            ], SESSION_DAY)

    def test_missing_details_degrades_to_zero(self):
        summary = CashInvoiceAdapter().normalize([
            self.invoice("INV-1", []),
            self.invoice("INV-2", [InvoiceDetail("150.00", 1)]),
        ], SESSION_DAY)
        assert summary.missing_details == ["INV-1"]
        assert summary.lines[0].cash_amount == MoneyAmount.zero()
        assert summary.cash_total == MoneyAmount("150.00")

    def test_missing_details_ignores_discount(self):
        summary = CashInvoiceAdapter().normalize([self.invoice("INV-1", [], discount="10.00")], SESSION_DAY)
        assert summary.missing_details == ["INV-1"]

    def test_excludes_unsettled_and_other_days(self):
        summary = CashInvoiceAdapter().normalize([
            self.invoice("INV-P", [InvoiceDetail("10", 1)], status="PARTIAL"),
            self.invoice("INV-Y", [InvoiceDetail("10", 1)],
                         when=datetime.combine(YESTERDAY, datetime.min.time())),
            self.invoice("INV-OK", [InvoiceDetail("10", 1)]),
        ], SESSION_DAY)
        assert summary.ids == ["INV-OK"]

    def test_negative_detail_quantity_raises(self):
        with pytest.raises(InvalidCount):
            CashInvoiceAdapter().normalize([self.invoice("INV-1", [InvoiceDetail("10", -2)])], SESSION_DAY)
