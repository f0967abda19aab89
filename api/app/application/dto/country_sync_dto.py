"""
DTOs del trigger de sincronización de países.
"""
from pydantic import BaseModel, Field

from app.domain.entities.country import SyncSummary


class CountrySyncResultDTO(BaseModel):
    """Resultado de una sincronización exitosa."""

    success: bool = Field(True, description="Siempre True; los fallos se reportan como error HTTP")
    message: str = Field(..., description="Resumen textual de la sincronización")
    countries: int = Field(..., ge=0, description="Filas insertadas en countries")
    phone_prefixes: int = Field(..., ge=0, description="Filas insertadas en country_phone_prefixes")
    currencies: int = Field(..., ge=0, description="Filas insertadas en country_currencies")
    languages: int = Field(..., ge=0, description="Filas insertadas en country_languages")
    duration_seconds: float = Field(0.0, description="Duración total de la corrida")

    @classmethod
    def from_summary(cls, summary: SyncSummary) -> "CountrySyncResultDTO":
        return cls(
            message=summary.message(),
            countries=summary.country_count,
            phone_prefixes=summary.phone_count,
            currencies=summary.currency_count,
            languages=summary.language_count,
            duration_seconds=summary.duration_seconds,
        )
