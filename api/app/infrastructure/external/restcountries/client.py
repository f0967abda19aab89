"""
Cliente mínimo de REST Countries (sin SDKs externos).

Requisitos cubiertos:
- requests
- un único GET por invocación (respuesta JSON en bloque, sin paginación)
- timeout acotado
- sin reintentos: cualquier fallo se reporta como NetworkError
"""

from __future__ import annotations

from typing import Any, Optional

import requests
from loguru import logger

from app.core.config import DEFAULT_COUNTRIES_API_URL
from app.shared.exceptions.country_sync import NetworkError


class RestCountriesClient:
    """
    Cliente HTTP de la fuente de países.

    Importante:
    - No interpreta el documento: eso es responsabilidad del mapper.
    - Sí garantiza que lo retornado es JSON parseado.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_COUNTRIES_API_URL,
        session: Optional[requests.Session] = None,
        timeout_s: float = 30.0,
    ) -> None:
        self._url = url
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def fetch(self) -> Any:
        """
        Descarga el documento completo de países.

        Raises:
            NetworkError: fallo de transporte/timeout, status no-2xx o JSON inválido
        """
        logger.info(f"Descargando países desde {self._url}")
        try:
            resp = self._session.get(
                self._url,
                headers={"Accept": "application/json"},
                timeout=self._timeout_s,
            )
        except requests.Timeout as e:
            raise NetworkError(
                f"Timeout ({self._timeout_s}s) consultando la fuente de países: {e}",
                url=self._url,
            ) from e
        except requests.RequestException as e:
            raise NetworkError(
                f"Fallo de transporte consultando la fuente de países: {e}",
                url=self._url,
            ) from e

        if not 200 <= resp.status_code < 300:
            raise NetworkError(
                f"La fuente de países respondió {resp.status_code}: {resp.text[:500]}",
                url=self._url,
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            # requests.JSONDecodeError hereda de ValueError
            raise NetworkError(
                f"Respuesta no parseable como JSON: {e}",
                url=self._url,
                status_code=resp.status_code,
            ) from e

        size = len(payload) if isinstance(payload, list) else "?"
        logger.info(f"Fuente de países respondió {resp.status_code} ({size} elementos)")
        return payload
