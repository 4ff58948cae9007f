from pydantic import BaseModel, Field
from typing import List, Dict, Optional
from datetime import date
from decimal import Decimal

# Los alias son los nombres exactos que consume la hoja impresa del corte.
# Renombrarlos rompe la capa de presentación.

class ReportSession(BaseModel):
    cash_session_id: str = Field(alias="CashSessionID")
    session_date: date = Field(alias="Date")
    opening_float: Decimal = Field(alias="OpeningFloat")
    closing_float_target: Decimal = Field(alias="ClosingFloatTarget")
    notes: str = Field(default="", alias="Notes")

    class Config:
        populate_by_name = True

class DenominationRow(BaseModel):
    currency: str
    denomination: Decimal
    qty: int
    amount: Decimal

class ReceiptRow(BaseModel):
    id: str
    customerName: str = ""
    cash: Decimal
    cheque: Decimal

class PaymentRow(BaseModel):
    id: str
    customerName: str = ""
    notes: str = ""
    cash: Decimal
    cheque: Decimal = Decimal("0.00")

class CashInvoiceRow(BaseModel):
    id: str
    calcValue: Decimal

class CashSessionReport(BaseModel):
    session: ReportSession
    session_date_str: str = Field(alias="sessionDateStr")

    # Conteo físico
    denom_rows: List[DenominationRow] = Field(default_factory=list, alias="denomRows")
    counted_by_currency: Dict[str, Decimal] = Field(default_factory=dict, alias="countedByCurrency")

    # Renglones del día
    receipts_for_date: List[ReceiptRow] = Field(default_factory=list, alias="receiptsForDate")
    payments_for_date: List[PaymentRow] = Field(default_factory=list, alias="paymentsForDate")
    cash_invoices_with_value: List[CashInvoiceRow] = Field(default_factory=list, alias="cashInvoicesWithValue")
    receipts_today: List[str] = Field(default_factory=list, alias="ReceiptsToday")
    payments_today: List[str] = Field(default_factory=list, alias="PaymentsToday")

    # Cifras conciliadas
    counted_cash: Decimal = Field(alias="CountedCash")
    expected_cash: Decimal = Field(alias="ExpectedCash")
    expected_cheques: Decimal = Field(alias="ExpectedCheques")
    over_short: Decimal = Field(alias="OverShort")
    receipts_cash_total: Decimal = Field(alias="ReceiptsCashTotal")
    receipts_cheque_total: Decimal = Field(alias="ReceiptsChequeTotal")
    payments_cash_total: Decimal = Field(alias="PaymentsCashTotal")
    payments_cheque_total: Decimal = Field(default=Decimal("0.00"), alias="PaymentsChequeTotal")
    cash_invoices_total: Decimal = Field(alias="CashInvoicesTotal")
    amount_to_deliver_cash: Decimal = Field(alias="AmountToDeliverCash")
    difference_vs_registered: Decimal = Field(alias="DifferenceVsRegistered")

    # Diagnósticos (se muestran como banner de advertencia)
    missing_details: List[str] = Field(default_factory=list, alias="missingDetails")
    data_warnings: List[str] = Field(default_factory=list, alias="dataWarnings")

    class Config:
        populate_by_name = True
