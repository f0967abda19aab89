"""
Repositorio Postgres (psycopg) para los datos de referencia de países.

Reemplazo completo (full replace) de cuatro tablas en UNA transacción:
- countries (PK code)
- country_phone_prefixes / country_currencies / country_languages (FK country_code)

Si cualquier sentencia falla, se hace rollback y el dataset previo queda intacto.
El DDL de estas tablas no se gestiona aquí.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence

import psycopg
from loguru import logger
from psycopg.rows import dict_row

from app.domain.entities.country import CountryRecord, ReplaceCounts
from app.shared.exceptions.country_sync import StoreError


COUNTRIES_TABLE = "countries"

# (tabla, columna de valor, atributo del CountryRecord)
CHILD_TABLES = (
    ("country_phone_prefixes", "phone_prefix", "phone_prefixes"),
    ("country_currencies", "currency_code", "currencies"),
    ("country_languages", "language_code", "languages"),
)

# Orden seguro respecto a las FKs: hijas primero, países al final.
DELETE_ORDER = ("country_languages", "country_currencies", "country_phone_prefixes", COUNTRIES_TABLE)

INSERT_COUNTRY_SQL = """
    INSERT INTO countries (code, name, native_name, region, subregion, capital, population, area)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
"""


def _insert_child_sql(table: str, column: str) -> str:
    return f'INSERT INTO "{table}" (country_code, "{column}") VALUES (%s, %s)'


ConnectionFactory = Callable[[], Any]


class PostgresCountryStore:
    def __init__(
        self,
        dsn: str,
        *,
        statement_timeout_ms: int = 0,
        connection_factory: Optional[ConnectionFactory] = None,
    ) -> None:
        self._dsn = dsn
        self._statement_timeout_ms = statement_timeout_ms
        self._connection_factory = connection_factory

    def connect(self) -> psycopg.Connection:
        """
        Abre conexión (autocommit False). El caller controla commits.
        """
        try:
            if self._connection_factory is not None:
                return self._connection_factory()
            return psycopg.connect(self._dsn, row_factory=dict_row)
        except psycopg.Error as e:
            raise StoreError(
                f"No se pudo conectar a la base de datos: {e}",
                phase="connect",
            ) from e

    def replace(self, records: Sequence[CountryRecord]) -> ReplaceCounts:
        """
        Borra las cuatro tablas e inserta `records`, todo o nada.

        Returns:
            ReplaceCounts con las filas insertadas por tabla.

        Raises:
            StoreError: con la fase (connect/configure/delete/insert/commit) y la tabla.
        """
        records = list(records)
        with self.connect() as conn:
            try:
                self._set_statement_timeout(conn)
                self._delete_all(conn)
                counts = self._insert_all(conn, records)
            except StoreError as e:
                logger.error(f"Reemplazo de países abortado (rollback): {e.message}")
                self._rollback_quietly(conn)
                raise

            try:
                conn.commit()
            except psycopg.Error as e:
                raise StoreError(
                    f"Fallo al confirmar la transacción: {e}",
                    phase="commit",
                ) from e

        logger.info(
            f"Reemplazo confirmado: countries={counts.countries}, "
            f"phone_prefixes={counts.phone_prefixes}, currencies={counts.currencies}, "
            f"languages={counts.languages}"
        )
        return counts

    def count_rows(self) -> ReplaceCounts:
        """Conteo actual de filas en las cuatro tablas (solo lectura)."""
        counts = {}
        with self.connect() as conn:
            with conn.cursor() as cur:
                for table in (COUNTRIES_TABLE,) + tuple(t for t, _, _ in CHILD_TABLES):
                    self._execute(cur, "count", table, f'SELECT count(*) AS n FROM "{table}"')
                    row = cur.fetchone()
                    counts[table] = int(row["n"]) if row else 0
            conn.rollback()
        return ReplaceCounts(
            countries=counts[COUNTRIES_TABLE],
            phone_prefixes=counts["country_phone_prefixes"],
            currencies=counts["country_currencies"],
            languages=counts["country_languages"],
        )

    @staticmethod
    def _rollback_quietly(conn: psycopg.Connection) -> None:
        # Con la conexión perdida el rollback también falla; prevalece el StoreError original
        try:
            conn.rollback()
        except psycopg.Error as e:
            logger.warning(f"Rollback fallido tras error de reemplazo: {e}")

    def _set_statement_timeout(self, conn: psycopg.Connection) -> None:
        if self._statement_timeout_ms <= 0:
            return
        with conn.cursor() as cur:
            # set_config(..., true) equivale a SET LOCAL: solo vive en esta transacción
            self._execute(
                cur,
                "configure",
                None,
                "SELECT set_config('statement_timeout', %s, true)",
                (str(self._statement_timeout_ms),),
            )

    def _delete_all(self, conn: psycopg.Connection) -> None:
        with conn.cursor() as cur:
            for table in DELETE_ORDER:
                self._execute(cur, "delete", table, f'DELETE FROM "{table}"')
                logger.info(f"Eliminadas {cur.rowcount} filas de {table}")

    def _insert_all(self, conn: psycopg.Connection, records: Iterable[CountryRecord]) -> ReplaceCounts:
        inserted = {COUNTRIES_TABLE: 0}
        inserted.update({table: 0 for table, _, _ in CHILD_TABLES})

        with conn.cursor() as cur:
            for record in records:
                self._execute(cur, "insert", COUNTRIES_TABLE, INSERT_COUNTRY_SQL, record.as_country_row())
                inserted[COUNTRIES_TABLE] += 1

                for table, column, attr in CHILD_TABLES:
                    values = getattr(record, attr)
                    if not values:
                        continue
                    self._execute_many(
                        cur,
                        table,
                        _insert_child_sql(table, column),
                        [(record.code, value) for value in values],
                    )
                    inserted[table] += len(values)

        return ReplaceCounts(
            countries=inserted[COUNTRIES_TABLE],
            phone_prefixes=inserted["country_phone_prefixes"],
            currencies=inserted["country_currencies"],
            languages=inserted["country_languages"],
        )

    @staticmethod
    def _execute(cur, phase: str, table: Optional[str], sql: str, params: Optional[tuple] = None) -> None:
        try:
            cur.execute(sql, params)
        except psycopg.errors.QueryCanceled as e:
            raise StoreError(
                f"Timeout de sentencia en {phase} ({table}): {e}", phase=phase, table=table
            ) from e
        except psycopg.Error as e:
            raise StoreError(f"Fallo en {phase} ({table}): {e}", phase=phase, table=table) from e

    @staticmethod
    def _execute_many(cur, table: str, sql: str, params_seq: list[tuple]) -> None:
        try:
            cur.executemany(sql, params_seq)
        except psycopg.errors.QueryCanceled as e:
            raise StoreError(
                f"Timeout de sentencia en insert ({table}): {e}", phase="insert", table=table
            ) from e
        except psycopg.Error as e:
            raise StoreError(f"Fallo en insert ({table}): {e}", phase="insert", table=table) from e
