# app/reconciliation/money.py
from __future__ import annotations

import functools
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from app.reconciliation.errors import InvalidAmount

CENT = Decimal("0.01")

RawAmount = Union["MoneyAmount", Decimal, int, float, str]


@functools.total_ordering
class MoneyAmount:
    """
    Monto monetario de punto fijo con exactamente 2 decimales.

    Internamente guarda centavos enteros, así que sumas y restas nunca
    redondean. Los negativos son válidos (representan faltantes).
    """

    __slots__ = ("_cents",)

    def __init__(self, value: RawAmount = 0):
        object.__setattr__(self, "_cents", self._to_cents(value))

    @staticmethod
    def _to_cents(value: RawAmount) -> int:
        if isinstance(value, MoneyAmount):
            return value._cents
        if isinstance(value, bool):
            raise InvalidAmount(f"Monto inválido: {value!r}")
        if isinstance(value, int):
            return value * 100
        if isinstance(value, float):
            # repr() da la representación más corta: 0.1 -> "0.1"
            value = repr(value)
        try:
            dec = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmount(f"Monto inválido: {value!r}")
        if not dec.is_finite():
            raise InvalidAmount(f"Monto no finito: {value!r}")

        scaled = dec * 100
        if scaled != scaled.to_integral_value():
            raise InvalidAmount(f"El monto {value!r} tiene más de 2 decimales")
        return int(scaled)

    @classmethod
    def from_cents(cls, cents: int) -> "MoneyAmount":
        amount = cls.__new__(cls)
        object.__setattr__(amount, "_cents", int(cents))
        return amount

    @classmethod
    def zero(cls) -> "MoneyAmount":
        return cls.from_cents(0)

    def __setattr__(self, name, value):
        raise AttributeError("MoneyAmount es inmutable")

    @property
    def cents(self) -> int:
        return self._cents

    # --- Aritmética ---
    def __add__(self, other: "MoneyAmount") -> "MoneyAmount":
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return MoneyAmount.from_cents(self._cents + other._cents)

    def __radd__(self, other):
        # Permite sum(montos), que arranca en 0
        if other == 0 and not isinstance(other, bool):
            return self
        return NotImplemented

    def __sub__(self, other: "MoneyAmount") -> "MoneyAmount":
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return MoneyAmount.from_cents(self._cents - other._cents)

    def __mul__(self, factor: int) -> "MoneyAmount":
        if isinstance(factor, bool) or not isinstance(factor, int):
            return NotImplemented
        return MoneyAmount.from_cents(self._cents * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "MoneyAmount":
        return MoneyAmount.from_cents(-self._cents)

    def __abs__(self) -> "MoneyAmount":
        return MoneyAmount.from_cents(abs(self._cents))

    # --- Comparación exacta sobre centavos ---
    def __eq__(self, other) -> bool:
        if isinstance(other, MoneyAmount):
            return self._cents == other._cents
        return NotImplemented

    def __lt__(self, other: "MoneyAmount") -> bool:
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return self._cents < other._cents

    def __hash__(self) -> int:
        return hash(("MoneyAmount", self._cents))

    def is_zero(self) -> bool:
        return self._cents == 0

    def is_negative(self) -> bool:
        return self._cents < 0

    # --- Formato (aquí, y solo aquí, se aplica ROUND_HALF_UP) ---
    def to_decimal(self) -> Decimal:
        return (Decimal(self._cents) / 100).quantize(CENT, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return str(self.to_decimal())

    def __repr__(self) -> str:
        return f"MoneyAmount('{self}')"

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        return format(self.to_decimal(), spec)
