# schemas/cash.py
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import date as date_type, datetime
from enum import Enum

# Folio capturado a mano: prefijo + solo dígitos
SESSION_ID_PATTERN = r"^Cash-\d+$"

class CurrencySchema(str, Enum):
    ILS = "ILS"   # Shekel
    JOD = "JOD"   # Dinar jordano
    USD = "USD"
    EUR = "EUR"

# --- Sesión de caja ---

class CashSessionBase(BaseModel):
    date: date_type
    opening_float: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    closing_float_target: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    notes: Optional[str] = None

class CashSessionCreate(CashSessionBase):
    # Si no viene, se genera Cash-NNNN
    cash_session_id: Optional[str] = Field(default=None, pattern=SESSION_ID_PATTERN)

class CashSessionUpdate(BaseModel):
    # Solo notas y fondos son editables
    opening_float: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    closing_float_target: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    notes: Optional[str] = None

class CashSessionRead(CashSessionBase):
    cash_session_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# --- Conteo de denominaciones ---

class DenominationCreate(BaseModel):
    currency: CurrencySchema = CurrencySchema.ILS
    denomination: Decimal = Field(gt=0, decimal_places=2)
    qty: int = Field(default=0, ge=0)

class DenominationUpdate(BaseModel):
    currency: Optional[CurrencySchema] = None
    denomination: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    qty: Optional[int] = Field(default=None, ge=0)

class DenominationRead(BaseModel):
    denom_id: str
    cash_session_id: str
    currency: str
    denomination: Decimal
    qty: int

    class Config:
        from_attributes = True
