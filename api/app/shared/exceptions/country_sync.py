"""
Excepciones del pipeline de sincronización de países.

Taxonomía:
- NetworkError: fallo de transporte, status no-2xx o cuerpo no parseable.
- MappingError: el documento top-level no es una lista de objetos.
- StoreError: fallo en connect/delete/insert/commit (lleva fase y tabla).
- SyncError: envuelve el primer error ocurrido durante una corrida.
"""
from typing import Any, Dict, Optional

from app.shared.exceptions.base import AppException


class CountrySyncException(AppException):
    """Excepción base para errores del pipeline de países."""


class NetworkError(CountrySyncException):
    """La fuente externa no respondió o respondió algo inutilizable."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message=message,
            status_code=502,
            error_code="COUNTRY_SOURCE_UNAVAILABLE",
            details=details,
        )
        self.upstream_status = status_code


class MappingError(CountrySyncException):
    """El documento recibido no tiene la forma esperada (lista de objetos)."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="COUNTRY_DOCUMENT_INVALID",
            details={"index": index} if index is not None else None,
        )


class StoreError(CountrySyncException):
    """Fallo del reemplazo transaccional; identifica fase y tabla."""

    def __init__(self, message: str, phase: str, table: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="COUNTRY_STORE_ERROR",
            details={"phase": phase, "table": table},
        )
        self.phase = phase
        self.table = table


class SyncError(CountrySyncException):
    """
    Error de una corrida de sincronización.

    Envuelve el primer error del pipeline y hereda su status HTTP para que
    el trigger pueda distinguir upstream caído (502) de fallo de store (500).
    """

    def __init__(self, cause: CountrySyncException):
        super().__init__(
            message=f"Sincronización de países fallida: {cause.message}",
            status_code=cause.status_code,
            error_code="SYNC_FAILED",
            details={"cause": cause.error_code, **cause.details},
        )
        self.cause = cause


class SyncAlreadyRunningException(AppException):
    """Ya hay una sincronización en curso en este proceso."""

    def __init__(self):
        super().__init__(
            message="Ya existe una sincronización de países en curso",
            status_code=409,
            error_code="SYNC_ALREADY_RUNNING",
        )
