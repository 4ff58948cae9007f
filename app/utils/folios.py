from sqlalchemy import Integer, cast, func
from sqlalchemy.orm import Session
from app.models import CashSession, CashDenomination

SESSION_PREFIX = "Cash-"
DENOM_PREFIX = "DEN-"

def format_folio(prefix: str, number: int, width: int) -> str:
    return f"{prefix}{number:0{width}d}"

def _max_folio_number(db: Session, column, prefix: str) -> int:
    # MAX numérico sobre la parte después del prefijo: Cash-10000 > Cash-9999,
    # y Cash-5 cuenta como 5 aunque no traiga ceros a la izquierda
    number = cast(func.substr(column, len(prefix) + 1), Integer)
    max_number = db.query(func.max(number)).filter(column.like(f"{prefix}%")).scalar()
    return max_number or 0

def next_session_id(db: Session) -> str:
    """Siguiente folio de sesión: Cash-0001, Cash-0002, ..."""
    number = _max_folio_number(db, CashSession.cash_session_id, SESSION_PREFIX) + 1
    return format_folio(SESSION_PREFIX, number, 4)

def next_denomination_id(db: Session) -> str:
    """Siguiente folio de renglón de conteo: DEN-000001, ..."""
    number = _max_folio_number(db, CashDenomination.denom_id, DENOM_PREFIX) + 1
    return format_folio(DENOM_PREFIX, number, 6)
