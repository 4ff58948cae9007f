# app/reconciliation/tally.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from app.reconciliation.errors import InvalidCount
from app.reconciliation.money import MoneyAmount, RawAmount


@dataclass(frozen=True)
class DenominationCount:
    """Renglón del conteo físico: N piezas de una denominación."""
    session_id: str
    currency: str
    denomination: RawAmount
    quantity: int


@dataclass(frozen=True)
class DenominationLine:
    currency: str
    denomination: MoneyAmount
    quantity: int
    amount: MoneyAmount


@dataclass(frozen=True)
class TallyResult:
    totals: Dict[str, MoneyAmount] = field(default_factory=dict)
    rows: List[DenominationLine] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def primary_total(self, local_currency: str) -> Optional[MoneyAmount]:
        """
        Efectivo contado en la moneda local.

        None si no se capturó ningún renglón; 0.00 si hay renglones pero
        ninguno en la moneda local.
        """
        if self.is_empty:
            return None
        return self.totals.get(local_currency, MoneyAmount.zero())


def _validate_quantity(row: DenominationCount) -> int:
    qty = row.quantity
    if isinstance(qty, Decimal) and qty == qty.to_integral_value():
        qty = int(qty)
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise InvalidCount(
            f"Cantidad no entera para {row.currency} {row.denomination}: {row.quantity!r}",
            currency=row.currency,
        )
    if qty < 0:
        raise InvalidCount(
            f"Cantidad negativa para {row.currency} {row.denomination}: {qty}",
            currency=row.currency,
        )
    return qty


def tally_denominations(counts: Iterable[DenominationCount]) -> TallyResult:
    """
    Agrupa el conteo por moneda y suma denominación * cantidad.

    Los renglones de salida van ordenados por moneda y luego denominación
    descendente para que el reporte impreso sea reproducible.
    """
    totals: Dict[str, MoneyAmount] = {}
    rows: List[DenominationLine] = []

    for row in counts:
        qty = _validate_quantity(row)
        face = MoneyAmount(row.denomination)
        amount = face * qty

        totals[row.currency] = totals.get(row.currency, MoneyAmount.zero()) + amount
        rows.append(DenominationLine(row.currency, face, qty, amount))

    rows.sort(key=lambda r: (r.currency, -r.denomination.cents))
    return TallyResult(totals=dict(sorted(totals.items())), rows=rows)
