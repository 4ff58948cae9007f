import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

# --- Enums ---
class InvoiceStatus(str, enum.Enum):
    PAID = "PAID"           # Pagada completa en efectivo
    PARTIAL = "PARTIAL"     # Abono parcial
    UNPAID = "UNPAID"       # Por cobrar
    CANCELLED = "CANCELLED"

# --- Encabezado de factura de contado ---
class CashInvoice(Base):
    __tablename__ = "cash_invoices"

    invoice_id = Column(String, primary_key=True, index=True)
    date_time = Column(DateTime, nullable=False, index=True)

    discount = Column(Numeric(10, 2), default=0)
    status = Column(Enum(InvoiceStatus), default=InvoiceStatus.PAID, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    details = relationship("CashInvoiceDetail", back_populates="invoice", cascade="all, delete-orphan")

# --- Renglones de la factura ---
class CashInvoiceDetail(Base):
    __tablename__ = "cash_invoice_details"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(String, ForeignKey("cash_invoices.invoice_id"), nullable=False, index=True)

    description = Column(String, nullable=True)
    unit_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    invoice = relationship("CashInvoice", back_populates="details")
