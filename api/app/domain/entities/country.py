"""
Entidades de dominio de los datos de referencia de países.

Los registros son un snapshot puntual: se construyen completos e inmutables
y se entregan así al store, que los reemplaza en bloque.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CountryRecord:
    """
    País normalizado junto con sus listas hijas.

    `code` (ISO2) es la única clave de unión entre las cuatro tablas.
    Las tuplas hijas conservan el orden de origen y los duplicados.
    """

    code: Optional[str]
    name: Optional[str]
    native_name: Optional[str] = None
    region: Optional[str] = None
    subregion: Optional[str] = None
    capital: Optional[str] = None
    population: int = 0
    area: float = 0.0
    phone_prefixes: Tuple[str, ...] = ()
    currencies: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()

    def as_country_row(self) -> tuple:
        """Fila para la tabla `countries` en el orden de columnas del INSERT."""
        return (
            self.code,
            self.name,
            self.native_name,
            self.region,
            self.subregion,
            self.capital,
            self.population,
            self.area,
        )


@dataclass(frozen=True)
class ReplaceCounts:
    """Filas insertadas por tabla en un reemplazo."""

    countries: int = 0
    phone_prefixes: int = 0
    currencies: int = 0
    languages: int = 0

    @classmethod
    def from_records(cls, records) -> "ReplaceCounts":
        """Conteos que produciría insertar `records` (sin deduplicar)."""
        records = list(records)
        return cls(
            countries=len(records),
            phone_prefixes=sum(len(r.phone_prefixes) for r in records),
            currencies=sum(len(r.currencies) for r in records),
            languages=sum(len(r.languages) for r in records),
        )


@dataclass(frozen=True)
class SyncSummary:
    """Resultado de una corrida exitosa de sincronización."""

    country_count: int
    phone_count: int
    currency_count: int
    language_count: int
    duration_seconds: float = 0.0
    source_url: Optional[str] = None
    dry_run: bool = False

    @classmethod
    def from_counts(
        cls,
        counts: ReplaceCounts,
        *,
        duration_seconds: float = 0.0,
        source_url: Optional[str] = None,
        dry_run: bool = False,
    ) -> "SyncSummary":
        return cls(
            country_count=counts.countries,
            phone_count=counts.phone_prefixes,
            currency_count=counts.currencies,
            language_count=counts.languages,
            duration_seconds=duration_seconds,
            source_url=source_url,
            dry_run=dry_run,
        )

    def message(self) -> str:
        """Resumen textual para el trigger (API / CLI)."""
        prefix = "Dry run de sincronización" if self.dry_run else "Sincronización de países"
        return (
            f"{prefix} completada: "
            f"{self.country_count} países, "
            f"{self.phone_count} prefijos telefónicos, "
            f"{self.currency_count} monedas, "
            f"{self.language_count} idiomas "
            f"({self.duration_seconds:.2f}s)"
        )
