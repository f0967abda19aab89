"""
Contratos de las capacidades que usa el pipeline de países.

Este contrato existe para:
- Mantener Clean Architecture: el caso de uso no depende de requests ni psycopg.
- Facilitar tests unitarios sin red ni base de datos.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from app.domain.entities.country import CountryRecord, ReplaceCounts


class CountryDataSource(Protocol):
    """
    Fuente externa del documento de países.

    Implementaciones:
    - Cliente HTTP de REST Countries.
    - Fake/stub para tests.
    """

    def fetch(self) -> Any:
        """
        Retorna el documento crudo (JSON ya parseado).

        Debe lanzar NetworkError ante fallo de transporte, status no-2xx
        o cuerpo no parseable.
        """


class CountryStore(Protocol):
    """
    Store transaccional de las cuatro tablas de países.

    Implementaciones:
    - PostgreSQL (psycopg).
    - Fake en memoria para tests.
    """

    def replace(self, records: Sequence[CountryRecord]) -> ReplaceCounts:
        """
        Reemplaza el dataset completo en una única transacción.

        Reglas:
        - Si cualquier sentencia falla, debe hacer rollback completo y lanzar
          StoreError; el dataset previo queda intacto.
        """
