# app/models/__init__.py

# 1. Base de datos (Origen de la clase declarativa)
from app.database import Base

# 2. Clientes (etiqueta de recibos y pagos)
from .crm import Customer

# 3. Caja: sesión del día y conteo físico
from .cash import CashSession, CashDenomination

# 4. Flujos que se concilian (solo lectura para el corte)
from .payments import ShopReceipt, ShopPayment
from .sales import CashInvoice, CashInvoiceDetail, InvoiceStatus
