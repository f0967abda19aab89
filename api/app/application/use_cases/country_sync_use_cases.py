"""
Caso de uso: sincronización de datos de referencia de países.

Diseño (resumen):
- Descarga el documento completo de la fuente (un único GET)
- Mapea la lista entera a CountryRecord inmutables
- Reemplaza las cuatro tablas en una única transacción

Aislamiento de fallos:
- Si la descarga o el mapeo fallan, no se intenta ningún DELETE.
- El reemplazo solo empieza con el set normalizado completo y es atómico.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from app.application.interfaces.country_sync_ports import CountryDataSource, CountryStore
from app.application.services.country_mapper import map_country_document
from app.core.config import DEFAULT_COUNTRIES_API_URL, Settings, normalize_psycopg_dsn
from app.domain.entities.country import ReplaceCounts, SyncSummary
from app.shared.exceptions.country_sync import CountrySyncException, SyncError


@dataclass(frozen=True)
class CountrySyncConfig:
    """
    Configuración explícita del pipeline (sin estado global).
    """

    database_dsn: str
    source_url: str = DEFAULT_COUNTRIES_API_URL
    fetch_timeout_s: float = 30.0
    statement_timeout_ms: int = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "CountrySyncConfig":
        return cls(
            database_dsn=normalize_psycopg_dsn(settings.effective_database_url),
            source_url=settings.COUNTRIES_API_URL,
            fetch_timeout_s=settings.COUNTRIES_API_TIMEOUT_S,
            statement_timeout_ms=settings.COUNTRY_SYNC_STATEMENT_TIMEOUT_MS,
        )


class CountrySyncUseCase:
    """
    Orquestador del pipeline fetch -> map -> replace.
    """

    def __init__(
        self,
        *,
        source: CountryDataSource,
        store: CountryStore,
        source_url: Optional[str] = None,
    ) -> None:
        self._source = source
        self._store = store
        self._source_url = source_url

    def run(self) -> SyncSummary:
        """
        Ejecuta una corrida completa.

        Raises:
            SyncError: envolviendo el primer NetworkError/MappingError/StoreError.
        """
        started = time.monotonic()
        logger.info("Iniciando sincronización de países")
        try:
            payload = self._source.fetch()
            records = map_country_document(payload)
            counts = self._store.replace(records)
        except CountrySyncException as e:
            logger.error(f"Sincronización de países fallida ({e.error_code}): {e.message}")
            raise SyncError(e) from e

        summary = SyncSummary.from_counts(
            counts,
            duration_seconds=round(time.monotonic() - started, 2),
            source_url=self._source_url,
        )
        logger.success(summary.message())
        return summary

    def dry_run(self) -> SyncSummary:
        """
        Descarga y mapea sin tocar el store; reporta lo que se insertaría.
        """
        started = time.monotonic()
        logger.info("Iniciando dry run de sincronización de países")
        try:
            records = map_country_document(self._source.fetch())
        except CountrySyncException as e:
            logger.error(f"Dry run fallido ({e.error_code}): {e.message}")
            raise SyncError(e) from e

        summary = SyncSummary.from_counts(
            ReplaceCounts.from_records(records),
            duration_seconds=round(time.monotonic() - started, 2),
            source_url=self._source_url,
            dry_run=True,
        )
        logger.info(summary.message())
        return summary


def build_country_sync(config: CountrySyncConfig) -> CountrySyncUseCase:
    """
    Constructor "oficial" del pipeline con cliente HTTP y store Postgres.
    """
    # Import diferido: evita cargar requests/psycopg al importar el caso de uso
    from app.infrastructure.external.restcountries.client import RestCountriesClient
    from app.infrastructure.repositories.country_repository import PostgresCountryStore

    source = RestCountriesClient(url=config.source_url, timeout_s=config.fetch_timeout_s)
    store = PostgresCountryStore(
        config.database_dsn,
        statement_timeout_ms=config.statement_timeout_ms,
    )
    return CountrySyncUseCase(source=source, store=store, source_url=config.source_url)
