# app/models/cash.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

# --- Sesión de Caja (Corte del Día) ---
class CashSession(Base):
    """
    Un día de operación de la caja. Se asume una sola sesión por fecha,
    pero no se fuerza a nivel BD.
    """
    __tablename__ = "cash_sessions"

    cash_session_id = Column(String, primary_key=True, index=True)  # Cash-0001
    date = Column(Date, nullable=False, index=True)

    # Montos del fondo
    opening_float = Column(Numeric(10, 2), nullable=False, default=0)        # Fondo inicial
    closing_float_target = Column(Numeric(10, 2), nullable=False, default=0) # Fondo que se deja al cerrar

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Borrar la sesión borra su conteo
    denominations = relationship(
        "CashDenomination", back_populates="session", cascade="all, delete-orphan"
    )

# --- Conteo físico por denominación ---
class CashDenomination(Base):
    __tablename__ = "cash_denominations"

    denom_id = Column(String, primary_key=True, index=True)  # DEN-000001
    cash_session_id = Column(
        String, ForeignKey("cash_sessions.cash_session_id", ondelete="CASCADE"), nullable=False, index=True
    )

    currency = Column(String(8), nullable=False)      # ILS, JOD, USD, EUR
    denomination = Column(Numeric(10, 2), nullable=False)  # Valor facial
    qty = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    session = relationship("CashSession", back_populates="denominations")
