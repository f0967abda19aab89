"""
Entidades del dominio.
"""
from app.domain.entities.country import CountryRecord, ReplaceCounts, SyncSummary

__all__ = [
    "CountryRecord",
    "ReplaceCounts",
    "SyncSummary",
]
