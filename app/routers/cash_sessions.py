# app/routers/cash_sessions.py
from concurrent.futures import TimeoutError as FetchTimeout
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.crud import cash as crud_cash
from app.config import Settings, get_settings
from app.database import get_db, get_session_factory
from app.reconciliation.service import SessionNotFound, build_cash_session_report
from app.reconciliation.sources import SqlCashBookSource
from app.schemas.cash import (
    CashSessionCreate, CashSessionRead, CashSessionUpdate,
    DenominationCreate, DenominationRead,
)
from app.schemas.reports import CashSessionReport

router = APIRouter()

def _get_or_404(db: Session, session_id: str):
    session = crud_cash.get_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Sesión de caja no encontrada")
    return session

@router.get("/", response_model=List[CashSessionRead])
def list_sessions(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_cash.get_sessions(db, skip=skip, limit=limit)

@router.post("/", response_model=CashSessionRead, status_code=201)
def open_session(session_in: CashSessionCreate, db: Session = Depends(get_db)):
    """Alta de la sesión del día (fondo inicial y fondo objetivo)."""
    if session_in.cash_session_id and crud_cash.get_session(db, session_in.cash_session_id):
        raise HTTPException(400, f"La sesión {session_in.cash_session_id} ya existe.")
    return crud_cash.create_session(db, session_in)

@router.get("/{session_id}", response_model=CashSessionRead)
def get_session(session_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, session_id)

@router.patch("/{session_id}", response_model=CashSessionRead)
def update_session(session_id: str, session_in: CashSessionUpdate, db: Session = Depends(get_db)):
    session = _get_or_404(db, session_id)
    return crud_cash.update_session(db, session, session_in)

@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, db: Session = Depends(get_db)):
    """Borra la sesión y, en cascada, su conteo de denominaciones."""
    session = _get_or_404(db, session_id)
    crud_cash.delete_session(db, session)

# --- Conteo de la sesión ---

@router.get("/{session_id}/denominations", response_model=List[DenominationRead])
def list_denominations(session_id: str, db: Session = Depends(get_db)):
    _get_or_404(db, session_id)
    return crud_cash.get_denominations(db, session_id)

@router.post("/{session_id}/denominations", response_model=DenominationRead, status_code=201)
def add_denomination(session_id: str, denom_in: DenominationCreate, db: Session = Depends(get_db)):
    _get_or_404(db, session_id)
    return crud_cash.create_denomination(db, session_id, denom_in)

# --- Hoja del corte ---

@router.get("/{session_id}/report", response_model=CashSessionReport, response_model_by_alias=True)
def get_session_report(
    session_id: str,
    session_factory=Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
):
    """
    Conciliación del día: contado vs. recibos, pagos y facturas de contado.
    Los errores de integridad (ReconciliationError) los mapea main.py a 422.
    """
    source = SqlCashBookSource(session_factory)
    try:
        return build_cash_session_report(
            source,
            session_id,
            local_currency=settings.LOCAL_CURRENCY,
            timeout=settings.FETCH_TIMEOUT_SECONDS,
        )
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Sesión de caja no encontrada")
    except FetchTimeout:
        raise HTTPException(status_code=504, detail="Las lecturas del corte excedieron el tiempo límite")
