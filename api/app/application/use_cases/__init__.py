"""
Casos de uso de la aplicacion.
"""
from .country_sync_use_cases import CountrySyncConfig, CountrySyncUseCase, build_country_sync

__all__ = ["CountrySyncConfig", "CountrySyncUseCase", "build_country_sync"]
