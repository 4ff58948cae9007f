# app/config.py
"""
Configuración centralizada (variables de entorno).

Se usa pydantic-settings para validar y convertir tipos; el objeto se cachea
con lru_cache para que todos los módulos compartan la misma instancia.
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Entorno ---
    ENVIRONMENT: str = Field(default="development")

    # --- Base de datos ---
    # connect_args de SQLite se agregan en app/database.py
    DATABASE_URL: str = Field(default="sqlite:///./cashbox.db")

    # --- Corte de caja ---
    LOCAL_CURRENCY: str = Field(
        default="ILS",
        description="Moneda que se concilia contra los libros; las demás solo se reportan",
    )
    FETCH_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text", description="text | json")

    # --- CORS ---
    CORS_ORIGINS: List[str] = Field(default=["*"])

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
