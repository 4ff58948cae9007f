import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import engine
from app.logging_config import setup_logging
from app.models import Base
from app.reconciliation.errors import ReconciliationError
from app.routers import cash_sessions, denominations

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.ENVIRONMENT)
logger = logging.getLogger(__name__)

# 1. CREACIÓN AUTOMÁTICA DE TABLAS
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Cashbox - Corte de Caja Diario",
    description="Conciliación diaria del efectivo contado contra recibos, pagos y facturas de contado",
    version="1.0.0"
)

# 2. CONFIGURACIÓN DE CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 3. REGISTRO DE ROUTERS (BACKEND API)
app.include_router(cash_sessions.router, prefix="/api/cash-sessions", tags=["💰 Sesiones de Caja"])
app.include_router(denominations.router, prefix="/api/denominations", tags=["🪙 Conteo de Denominaciones"])

@app.get("/health")
def health():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

# --- 4. MANEJO DE ERRORES ---
@app.exception_handler(ReconciliationError)
async def reconciliation_exception_handler(request: Request, exc: ReconciliationError):
    # Error de integridad de datos: bloquea el reporte, no se reintenta
    logger.warning("Corte rechazado en %s: %s", request.url.path, exc.message, extra={"code": exc.code})
    return JSONResponse(status_code=422, content=exc.to_dict())

@app.exception_handler(404)
async def not_found_exception_handler(request: Request, exc):
    detail = getattr(exc, "detail", None) or "Recurso no encontrado"
    return JSONResponse(status_code=404, content={"detail": detail})
