# app/routers/__init__.py

# Esto expone los módulos para que "from app.routers import cash_sessions" funcione
from . import cash_sessions
from . import denominations
