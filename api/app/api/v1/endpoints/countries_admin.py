"""
Endpoints de administracion de datos de referencia de paises.
Permite disparar la sincronizacion completa desde la UI/admin.
"""
import asyncio
import threading

from fastapi import APIRouter, Depends, status
from loguru import logger

from app.api.v1.dependencies.security_deps import require_admin
from app.api.v1.dependencies.use_case_deps import get_country_sync_use_case
from app.application.dto.country_sync_dto import CountrySyncResultDTO
from app.application.use_cases.country_sync_use_cases import CountrySyncUseCase
from app.shared.exceptions.country_sync import SyncAlreadyRunningException


router = APIRouter(prefix="/admin/countries", tags=["Admin"])

# Serializa las corridas dentro del proceso; el core no coordina concurrencia.
_sync_lock = threading.Lock()


def _run_and_release(use_case: CountrySyncUseCase):
    try:
        return use_case.run()
    finally:
        _sync_lock.release()


@router.post(
    "/sync",
    response_model=CountrySyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar paises desde REST Countries",
)
async def sync_countries(
    admin_user: str = Depends(require_admin),
    use_case: CountrySyncUseCase = Depends(get_country_sync_use_case),
) -> CountrySyncResultDTO:
    """
    Reemplaza por completo los datos de referencia de paises.

    - Descarga el snapshot completo de la fuente externa
    - Reemplaza las cuatro tablas en una unica transaccion
    - Si algo falla, los datos previos quedan intactos y se retorna el error

    Returns:
        CountrySyncResultDTO con los conteos insertados por tabla
    """
    if not _sync_lock.acquire(blocking=False):
        logger.warning(f"Sync de paises rechazado ({admin_user}): ya hay una corrida en curso")
        raise SyncAlreadyRunningException()

    logger.info(f"Sync de paises disparado por {admin_user}")
    # El lock se libera en el thread al terminar la corrida, aunque se cancele el request
    summary = await asyncio.shield(asyncio.to_thread(_run_and_release, use_case))

    return CountrySyncResultDTO.from_summary(summary)
