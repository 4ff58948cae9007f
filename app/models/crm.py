# app/models/crm.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from app.database import Base

class Customer(Base):
    """Cliente/proveedor. Aquí solo se usa su nombre como etiqueta en el corte."""
    __tablename__ = "customers"
    __table_args__ = {'extend_existing': True}

    customer_id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
