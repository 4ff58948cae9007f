# app/routers/denominations.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.crud import cash as crud_cash
from app.database import get_db
from app.schemas.cash import DenominationRead, DenominationUpdate

router = APIRouter()

def _get_or_404(db: Session, denom_id: str):
    denom = crud_cash.get_denomination(db, denom_id)
    if not denom:
        raise HTTPException(status_code=404, detail="Renglón de conteo no encontrado")
    return denom

@router.get("/{denom_id}", response_model=DenominationRead)
def get_denomination(denom_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, denom_id)

@router.patch("/{denom_id}", response_model=DenominationRead)
def update_denomination(denom_id: str, denom_in: DenominationUpdate, db: Session = Depends(get_db)):
    """Corrige un renglón del conteo (moneda, denominación o cantidad)."""
    denom = _get_or_404(db, denom_id)
    return crud_cash.update_denomination(db, denom, denom_in)

@router.delete("/{denom_id}", status_code=204)
def delete_denomination(denom_id: str, db: Session = Depends(get_db)):
    denom = _get_or_404(db, denom_id)
    crud_cash.delete_denomination(db, denom)
