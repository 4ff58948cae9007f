import logging
from sqlalchemy.orm import Session
from app.models import CashSession, CashDenomination
from app.schemas.cash import (
    CashSessionCreate, CashSessionUpdate, DenominationCreate, DenominationUpdate,
)
from app.utils.folios import next_session_id, next_denomination_id

logger = logging.getLogger(__name__)

# --- Sesiones ---

def get_session(db: Session, session_id: str):
    return db.get(CashSession, session_id)

def get_sessions(db: Session, skip: int = 0, limit: int = 100):
    return db.query(CashSession).order_by(
        CashSession.date.desc(), CashSession.cash_session_id.desc()
    ).offset(skip).limit(limit).all()

def create_session(db: Session, session_in: CashSessionCreate):
    db_session = CashSession(
        cash_session_id=session_in.cash_session_id or next_session_id(db),
        date=session_in.date,
        opening_float=session_in.opening_float,
        closing_float_target=session_in.closing_float_target,
        notes=session_in.notes,
    )
    db.add(db_session)
    db.commit()
    db.refresh(db_session)
    logger.info("Sesión de caja %s creada para %s", db_session.cash_session_id, db_session.date)
    return db_session

def update_session(db: Session, db_session: CashSession, session_in: CashSessionUpdate):
    for field, value in session_in.model_dump(exclude_unset=True).items():
        if value is None and field != "notes":
            continue # Los fondos no aceptan null
        setattr(db_session, field, value)
    db.commit()
    db.refresh(db_session)
    return db_session

def delete_session(db: Session, db_session: CashSession):
    # El cascade del modelo borra también el conteo
    db.delete(db_session)
    db.commit()
    logger.info("Sesión de caja %s eliminada", db_session.cash_session_id)

# --- Denominaciones ---

def get_denomination(db: Session, denom_id: str):
    return db.get(CashDenomination, denom_id)

def get_denominations(db: Session, session_id: str):
    return db.query(CashDenomination).filter(
        CashDenomination.cash_session_id == session_id
    ).order_by(CashDenomination.currency, CashDenomination.denomination.desc()).all()

def create_denomination(db: Session, session_id: str, denom_in: DenominationCreate):
    db_denom = CashDenomination(
        denom_id=next_denomination_id(db),
        cash_session_id=session_id,
        currency=denom_in.currency.value,
        denomination=denom_in.denomination,
        qty=denom_in.qty,
    )
    db.add(db_denom)
    db.commit()
    db.refresh(db_denom)
    return db_denom

def update_denomination(db: Session, db_denom: CashDenomination, denom_in: DenominationUpdate):
    data = denom_in.model_dump(exclude_unset=True)
    if data.get("currency") is not None:
        data["currency"] = data["currency"].value
    for field, value in data.items():
        if value is not None:
            setattr(db_denom, field, value)
    db.commit()
    db.refresh(db_denom)
    return db_denom

def delete_denomination(db: Session, db_denom: CashDenomination):
    db.delete(db_denom)
    db.commit()
