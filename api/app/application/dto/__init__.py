"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .country_sync_dto import CountrySyncResultDTO

__all__ = ["CountrySyncResultDTO"]
