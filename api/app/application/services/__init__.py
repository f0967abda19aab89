"""
Servicios de aplicacion.

Contiene la logica de negocio reutilizable que no pertenece
a un caso de uso especifico.
"""
from app.application.services.country_mapper import (
    map_country_document,
    map_country_record,
)

__all__ = [
    "map_country_document",
    "map_country_record",
]
