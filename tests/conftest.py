"""
Fixtures compartidas.

La BD de pruebas es un archivo SQLite temporal (no :memory:) porque las
lecturas del corte abren una conexión por hilo.
"""
import os
from datetime import date
from decimal import Decimal

# Antes de importar app: el engine del módulo no debe tocar la BD real
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOCAL_CURRENCY", "ILS")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base, get_db, get_session_factory
from app.models import CashSession, CashDenomination
from app.reconciliation import CashSessionDescriptor, MoneyAmount

SESSION_DAY = date(2024, 3, 14)


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'cashbox_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def descriptor():
    """Sesión del escenario base: fondo 500 / objetivo 500."""
    return CashSessionDescriptor(
        session_id="Cash-0001",
        date=SESSION_DAY,
        opening_float=MoneyAmount("500.00"),
        closing_float_target=MoneyAmount("500.00"),
    )


@pytest.fixture
def cash_session(db):
    """Sesión persistida con 1230.00 ILS contados."""
    session = CashSession(
        cash_session_id="Cash-0001",
        date=SESSION_DAY,
        opening_float=Decimal("500.00"),
        closing_float_target=Decimal("500.00"),
    )
    session.denominations = [
        CashDenomination(denom_id="DEN-000001", currency="ILS", denomination=Decimal("200"), qty=5),
        CashDenomination(denom_id="DEN-000002", currency="ILS", denomination=Decimal("100"), qty=2),
        CashDenomination(denom_id="DEN-000003", currency="ILS", denomination=Decimal("20"), qty=1),
        CashDenomination(denom_id="DEN-000004", currency="ILS", denomination=Decimal("10"), qty=1),
    ]
    db.add(session)
    db.commit()
    return session
