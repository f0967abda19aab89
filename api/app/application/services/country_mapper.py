"""
Mapper del documento de REST Countries.

Transforma la estructura anidada y débilmente tipada de cada país
a un CountryRecord normalizado con sus listas hijas.

Reglas:
- Cada campo se extrae de forma independiente y defensiva.
- La ausencia (o tipo incorrecto) de un campo opcional produce
  None / valor por defecto / tupla vacía, nunca un error.
- Solo falla (MappingError) si el documento top-level no es una lista de objetos.
"""
from __future__ import annotations

from numbers import Real
from typing import Any, List, Optional, Tuple

from loguru import logger

from app.domain.entities.country import CountryRecord
from app.shared.exceptions.country_sync import MappingError


def _get_path(node: Any, *path: str) -> Any:
    """Recorre objetos anidados; retorna None si algún tramo falta o no es dict."""
    current = node
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _get_text(node: Any, *path: str) -> Optional[str]:
    value = _get_path(node, *path)
    return value if isinstance(value, str) else None


def _object_keys(node: Any, key: str) -> Tuple[str, ...]:
    value = node.get(key)
    if not isinstance(value, dict):
        return ()
    return tuple(str(k) for k in value.keys())


def _first_language_key(raw: dict) -> Optional[str]:
    """
    Primera clave del objeto `languages` en orden de documento.

    json preserva el orden de las claves tal como vienen en el cuerpo,
    pero la fuente no garantiza ningún orden estable entre respuestas.
    """
    languages = _object_keys(raw, "languages")
    return languages[0] if languages else None


def _native_name(raw: dict) -> Optional[str]:
    lang = _first_language_key(raw)
    if lang is None:
        return None
    return _get_text(raw, "name", "nativeName", lang, "common")


def _capital(raw: dict) -> Optional[str]:
    capital = raw.get("capital")
    if isinstance(capital, list) and capital and isinstance(capital[0], str):
        return capital[0]
    return None


def _non_negative_number(value: Any) -> Optional[float]:
    # bool es subclase de int: no lo aceptamos como número
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if value != value or value < 0:  # NaN o negativo
        return None
    return float(value)


def _population(raw: dict) -> int:
    value = _non_negative_number(raw.get("population"))
    if value is None or value == float("inf"):
        return 0
    return int(value)


def _area(raw: dict) -> float:
    value = _non_negative_number(raw.get("area"))
    return 0.0 if value is None else value


def _phone_prefixes(raw: dict) -> Tuple[str, ...]:
    """
    root + suffix por cada sufijo; solo si ambos son strings no vacíos.

    Ej: root "+1", suffixes ["201", "202"] -> ("+1201", "+1202").
    """
    root = _get_text(raw, "idd", "root")
    suffixes = _get_path(raw, "idd", "suffixes")
    if not root or not isinstance(suffixes, list):
        return ()
    return tuple(
        root + suffix
        for suffix in suffixes
        if isinstance(suffix, str) and suffix
    )


def map_country_record(raw: dict) -> CountryRecord:
    """
    Convierte un país crudo en un CountryRecord inmutable.

    Nunca rechaza un registro por datos opcionales faltantes.
    """
    return CountryRecord(
        code=_get_text(raw, "cca2"),
        name=_get_text(raw, "name", "common"),
        native_name=_native_name(raw),
        region=_get_text(raw, "region"),
        subregion=_get_text(raw, "subregion"),
        capital=_capital(raw),
        population=_population(raw),
        area=_area(raw),
        phone_prefixes=_phone_prefixes(raw),
        currencies=_object_keys(raw, "currencies"),
        languages=_object_keys(raw, "languages"),
    )


def map_country_document(payload: Any) -> List[CountryRecord]:
    """
    Mapea el documento completo. Se construye la lista entera antes de
    retornarla, de modo que el store nunca recibe un set parcial.

    Raises:
        MappingError: si payload no es una lista o contiene algo que no es objeto
    """
    if not isinstance(payload, list):
        raise MappingError(
            f"Se esperaba una lista de países y se recibió {type(payload).__name__}"
        )

    records: List[CountryRecord] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise MappingError(
                f"Elemento {index} del documento no es un objeto ({type(raw).__name__})",
                index=index,
            )
        records.append(map_country_record(raw))

    missing_code = sum(1 for r in records if not r.code)
    if missing_code:
        logger.warning(f"{missing_code} país(es) sin cca2 en el documento")

    logger.info(f"Documento mapeado: {len(records)} países")
    return records
