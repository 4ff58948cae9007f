from datetime import date, datetime
from decimal import Decimal

from app.database import SessionLocal, engine
# Importamos TODO desde app.models (usando el __init__.py que ya configuramos)
from app.models import (
    Base, Customer, CashSession, CashDenomination,
    ShopReceipt, ShopPayment, CashInvoice, CashInvoiceDetail, InvoiceStatus,
)
from app.utils.folios import next_session_id, next_denomination_id

def init_db(day: date = None):
    """Pobla un día de demostración: sesión, conteo y movimientos."""
    day = day or date.today()

    print("--- Creando Tablas ---")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    print("--- Iniciando Poblado ---")

    # 1. CLIENTES
    customers_data = [("C-001", "Cliente General"), ("C-002", "Abarrotes Don Pepe")]
    for cid, name in customers_data:
        if not db.get(Customer, cid):
            db.add(Customer(customer_id=cid, name=name))
    db.commit()
    print("✅ Clientes creados.")

    # 2. SESIÓN DEL DÍA
    session = db.query(CashSession).filter(CashSession.date == day).first()
    if session:
        print(f"Sesión {session.cash_session_id} ya existe para {day}.")
        db.close()
        return
    session = CashSession(
        cash_session_id=next_session_id(db),
        date=day,
        opening_float=Decimal("500.00"),
        closing_float_target=Decimal("500.00"),
    )
    db.add(session)
    db.commit()
    print(f"✅ Sesión {session.cash_session_id} creada.")

    # 3. CONTEO FÍSICO (1230.00 ILS + algo de USD que solo se reporta)
    counts = [("ILS", "200", 5), ("ILS", "100", 2), ("ILS", "20", 1), ("ILS", "10", 1), ("USD", "50", 2)]
    for currency, face, qty in counts:
        db.add(CashDenomination(
            denom_id=next_denomination_id(db),
            cash_session_id=session.cash_session_id,
            currency=currency,
            denomination=Decimal(face),
            qty=qty,
        ))
        db.flush() # El siguiente folio depende del anterior
    db.commit()
    print("✅ Conteo capturado.")

    # 4. MOVIMIENTOS DEL DÍA
    db.add(ShopReceipt(receipt_id=f"REC-{day:%Y%m%d}-1", customer_id="C-002", date=day,
                       cash_amount=Decimal("300.00"), cheque_amount=Decimal("150.00")))
    db.add(ShopPayment(pay_id=f"PAY-{day:%Y%m%d}-1", customer_id="C-001", date=day,
                       cash_amount=Decimal("100.00"), notes="Proveedor de limpieza"))

    invoice = CashInvoice(invoice_id=f"INV-{day:%Y%m%d}-1",
                          date_time=datetime.combine(day, datetime.min.time()).replace(hour=11),
                          discount=Decimal("20.00"), status=InvoiceStatus.PAID)
    invoice.details = [
        CashInvoiceDetail(description="Licuadora", unit_price=Decimal("250.00"), quantity=2),
        CashInvoiceDetail(description="Plancha", unit_price=Decimal("250.00"), quantity=1),
    ]
    db.add(invoice)
    db.commit()
    print("✅ Recibos, pagos y facturas creados.")

    db.close()
    print("--- SEED TERMINADO ---")

if __name__ == "__main__":
    init_db()
