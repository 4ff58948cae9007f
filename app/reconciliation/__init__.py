# app/reconciliation/__init__.py
# Motor de conciliación del corte de caja diario.

from .money import MoneyAmount
from .errors import (
    ReconciliationError, InvalidAmount, InvalidCount,
    InvalidInvoiceDiscount, IncompleteSession,
)
from .tally import DenominationCount, DenominationLine, TallyResult, tally_denominations
from .adapters import (
    ReceiptRecord, PaymentRecord, CashInvoiceRecord, InvoiceDetail,
    TransactionLine, StreamSummary,
    ReceiptsAdapter, PaymentsAdapter, CashInvoiceAdapter,
)
from .engine import (
    CashSessionDescriptor, ReconciliationResult, reconcile,
    Ok, Err, reconcile_outcome,
)
from .report import assemble_report
