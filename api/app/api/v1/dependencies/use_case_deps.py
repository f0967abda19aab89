"""
Dependencias para inyeccion de casos de uso.
"""
from app.application.use_cases.country_sync_use_cases import (
    CountrySyncConfig,
    CountrySyncUseCase,
    build_country_sync,
)
from app.core.config import settings


def get_country_sync_use_case() -> CountrySyncUseCase:
    """
    Dependencia para obtener el caso de uso de sincronizacion de paises.

    Se construye por request a partir de la configuracion; no mantiene
    conexiones abiertas entre corridas.

    Returns:
        CountrySyncUseCase: Orquestador con cliente HTTP y store Postgres
    """
    return build_country_sync(CountrySyncConfig.from_settings(settings))
