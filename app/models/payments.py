# app/models/payments.py
# Recibos y pagos de la tienda. Los captura el módulo de cuentas por
# cobrar/pagar; el corte de caja solo los lee.
from sqlalchemy import Column, String, Date, DateTime, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

# --- Recibo: dinero que ENTRA (efectivo y/o cheque) ---
class ShopReceipt(Base):
    __tablename__ = "shop_receipts"

    receipt_id = Column(String, primary_key=True, index=True)
    customer_id = Column(String, ForeignKey("customers.customer_id"), nullable=True)
    date = Column(Date, nullable=False, index=True)

    cash_amount = Column(Numeric(10, 2), default=0)
    cheque_amount = Column(Numeric(10, 2), default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Customer")

# --- Pago: dinero que SALE de la caja ---
class ShopPayment(Base):
    __tablename__ = "shop_payments"

    pay_id = Column(String, primary_key=True, index=True)
    customer_id = Column(String, ForeignKey("customers.customer_id"), nullable=True)
    date = Column(Date, nullable=False, index=True)

    cash_amount = Column(Numeric(10, 2), default=0)
    cheque_amount = Column(Numeric(10, 2), default=0)  # Normalmente 0
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Customer")
