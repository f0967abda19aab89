"""
Configuración de fixtures para pytest.

Incluye fakes en memoria para no requerir red ni PostgreSQL:
- FakeCountryDatabase: conexiones tipo psycopg con semántica commit/rollback
- FakeHttpSession: sustituto de requests.Session con respuesta programable
"""
from __future__ import annotations

import copy
import json
import re
from typing import Any, Dict, List, Optional, Tuple

import psycopg
import pytest
import requests


COUNTRY_TABLES = (
    "countries",
    "country_phone_prefixes",
    "country_currencies",
    "country_languages",
)

_TABLE_RE = re.compile(r'(?:DELETE FROM|INSERT INTO|FROM)\s+"?(\w+)"?', re.IGNORECASE)


class FakeCountryDatabase:
    """
    Base de datos en memoria con las cuatro tablas de países.

    - Cada conexión trabaja sobre una copia; commit la publica, rollback la descarta.
    - Respeta PK (countries.code NOT NULL y único) y FK (country_code existente).
    - fail_on_insert(table, nth) fuerza un error en el n-ésimo INSERT de esa tabla.
    - lose_connection() hace que rollback lance OperationalError.
    """

    def __init__(self) -> None:
        self.tables: Dict[str, List[tuple]] = {t: [] for t in COUNTRY_TABLES}
        self.connections: List["FakeConnection"] = []
        self.statements: List[str] = []
        self._fail_table: Optional[str] = None
        self._fail_nth = 0
        self._fail_delete_table: Optional[str] = None
        self.connection_lost = False

    def seed(self, countries: List[tuple], **children: List[tuple]) -> None:
        self.tables["countries"] = list(countries)
        for table, rows in children.items():
            self.tables[table] = list(rows)

    def fail_on_insert(self, table: str, nth: int = 1) -> None:
        self._fail_table = table
        self._fail_nth = nth

    def fail_on_delete(self, table: str) -> None:
        self._fail_delete_table = table

    def lose_connection(self) -> None:
        """A partir de aquí el rollback falla como con el servidor caído."""
        self.connection_lost = True

    def connect(self) -> "FakeConnection":
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn

    def row_counts(self) -> Dict[str, int]:
        return {t: len(rows) for t, rows in self.tables.items()}


class FakeConnection:
    def __init__(self, db: FakeCountryDatabase) -> None:
        self._db = db
        self.working = copy.deepcopy(db.tables)
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.inserts: Dict[str, int] = {t: 0 for t in COUNTRY_TABLES}

    def cursor(self) -> "FakeCursor":
        return FakeCursor(self)

    def commit(self) -> None:
        self._db.tables = copy.deepcopy(self.working)
        self.committed = True

    def rollback(self) -> None:
        if self._db.connection_lost:
            raise psycopg.OperationalError("the connection is lost")
        self.working = copy.deepcopy(self._db.tables)
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        # Igual que psycopg: un rollback fallido al salir no reemplaza la excepción original
        if exc_type is not None:
            try:
                self.rollback()
            except psycopg.Error:
                pass
        self.close()
        return False


class FakeCursor:
    def __init__(self, conn: FakeConnection) -> None:
        self._conn = conn
        self.rowcount = 0
        self._row: Optional[dict] = None

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False

    def execute(self, sql: str, params: Optional[tuple] = None) -> None:
        db = self._conn._db
        db.statements.append(" ".join(sql.split()))
        normalized = sql.strip().upper()

        if "SET_CONFIG" in normalized:
            self.rowcount = 1
            return

        match = _TABLE_RE.search(sql)
        table = match.group(1) if match else None
        tables = self._conn.working

        if normalized.startswith("DELETE"):
            if table == db._fail_delete_table:
                raise psycopg.OperationalError(f"delete forzado a fallar en {table}")
            self.rowcount = len(tables[table])
            tables[table] = []
        elif normalized.startswith("INSERT"):
            self._insert(table, params)
            self.rowcount = 1
        elif normalized.startswith("SELECT COUNT"):
            self._row = {"n": len(tables[table])}
            self.rowcount = 1
        else:
            raise AssertionError(f"SQL no soportado por el fake: {sql}")

    def executemany(self, sql: str, params_seq) -> None:
        total = 0
        for params in params_seq:
            self.execute(sql, params)
            total += 1
        self.rowcount = total

    def fetchone(self) -> Optional[dict]:
        return self._row

    def _insert(self, table: str, params: tuple) -> None:
        db = self._conn._db
        self._conn.inserts[table] += 1
        if table == db._fail_table and self._conn.inserts[table] == db._fail_nth:
            raise psycopg.IntegrityError(f"insert forzado a fallar en {table}")

        tables = self._conn.working
        if table == "countries":
            code = params[0]
            if code is None:
                raise psycopg.IntegrityError("null value in column \"code\"")
            if any(row[0] == code for row in tables["countries"]):
                raise psycopg.IntegrityError(f"duplicate key value (code)=({code})")
        else:
            if not any(row[0] == params[0] for row in tables["countries"]):
                raise psycopg.IntegrityError(f"foreign key violation on {table}")
        tables[table].append(tuple(params))


@pytest.fixture
def fake_db() -> FakeCountryDatabase:
    """Base de datos en memoria vacía."""
    return FakeCountryDatabase()


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeHttpSession:
    """
    Sustituto de requests.Session: registra las llamadas y retorna
    la respuesta programada (o lanza la excepción programada).
    """

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response or FakeResponse(200, [])
        self.error = error
        self.calls: List[Tuple[str, dict]] = []

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def http_session_factory():
    """Construye FakeHttpSession con una respuesta o error dados."""
    def _factory(status_code: int = 200, body: Any = None, text: Optional[str] = None,
                 error: Optional[requests.RequestException] = None) -> FakeHttpSession:
        return FakeHttpSession(FakeResponse(status_code, body, text), error)
    return _factory


@pytest.fixture
def sample_document() -> List[dict]:
    """Documento con la forma real de REST Countries (subset de campos)."""
    return [
        {
            "cca2": "US",
            "name": {
                "common": "United States",
                "nativeName": {"eng": {"official": "United States of America", "common": "United States"}},
            },
            "region": "Americas",
            "subregion": "North America",
            "capital": ["Washington, D.C."],
            "population": 331000000,
            "area": 9833517.0,
            "idd": {"root": "+1", "suffixes": ["201", "202"]},
            "currencies": {"USD": {"name": "United States dollar", "symbol": "$"}},
            "languages": {"eng": "English"},
        },
        {
            "cca2": "FR",
            "name": {
                "common": "France",
                "nativeName": {"fra": {"official": "République française", "common": "France"}},
            },
            "region": "Europe",
            "subregion": "Western Europe",
            "capital": ["Paris"],
            "population": 67391582,
            "area": 551695.0,
            "idd": {"root": "+3", "suffixes": ["3"]},
            "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
            "languages": {"fra": "French"},
        },
        {
            "cca2": "AQ",
            "name": {"common": "Antarctica"},
            "region": "Antarctic",
            "area": 14000000,
            "idd": {},
            "currencies": {},
            "languages": {},
        },
    ]
