"""
CLI: REST Countries -> Postgres (reemplazo completo de datos de referencia).

Uso recomendado:
  - Ejecutar bajo demanda o como job (cron/systemd timer).
  - El caller es responsable de no lanzar dos corridas a la vez.

Variables de entorno (ver app/core/config.py):
  - DATABASE_URL o DATABASE_HOST/PORT/USER/PASSWORD/NAME
  - COUNTRIES_API_URL, COUNTRIES_API_TIMEOUT_S (opcionales)
  - COUNTRY_SYNC_STATEMENT_TIMEOUT_MS (opcional)

Ejecución:
  python scripts/sync_countries.py
  python scripts/sync_countries.py --dry-run
  python scripts/sync_countries.py --counts
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `app/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o raíz del repo).
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from app.application.use_cases.country_sync_use_cases import (  # noqa: E402
    CountrySyncConfig,
    build_country_sync,
)
from app.core.config import Settings  # noqa: E402
from app.infrastructure.repositories.country_repository import PostgresCountryStore  # noqa: E402
from app.shared.exceptions.country_sync import StoreError, SyncError  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sincroniza los datos de referencia de países.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Descarga y mapea, pero no toca la base de datos.",
    )
    parser.add_argument(
        "--counts",
        action="store_true",
        help="Solo muestra los conteos actuales de las cuatro tablas.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    # Settings se lee después de load_dotenv para incluir el .env
    config = CountrySyncConfig.from_settings(Settings())

    if args.counts:
        try:
            counts = PostgresCountryStore(config.database_dsn).count_rows()
        except StoreError as e:
            logger.error(f"No se pudieron leer los conteos: {e.message}")
            return 1
        logger.info(
            f"countries={counts.countries}, phone_prefixes={counts.phone_prefixes}, "
            f"currencies={counts.currencies}, languages={counts.languages}"
        )
        return 0

    use_case = build_country_sync(config)
    try:
        summary = use_case.dry_run() if args.dry_run else use_case.run()
    except SyncError as e:
        logger.error(f"{e.message} (details={e.details})")
        return 1

    print(summary.message())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
