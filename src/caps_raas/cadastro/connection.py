"""DuckDB connection manager para o banco local do cadastro."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import duckdb

from ..config import StoreConfig
from ..shared.errors import ConexaoError
from ..shared.log import get_logger
from .schemas import TABLES

log = get_logger("cadastro.connection")

MEMORY = ":memory:"


class DuckDBConnection:
    """DuckDB persistente (arquivo) ou in-memory com as 5 tabelas do cadastro."""

    def __init__(self, store_config: StoreConfig) -> None:
        self._store = store_config
        self._tables_created = False
        try:
            self._conn = duckdb.connect(
                database=self._prepare_path(store_config.db_path),
                read_only=store_config.read_only,
            )
        except duckdb.Error as e:
            raise ConexaoError(
                f"Nao foi possivel abrir o banco '{store_config.db_path}': {e}"
            ) from e
        log.info("DuckDB aberto em %s", store_config.db_path)

    @staticmethod
    def _prepare_path(db_path: str) -> str:
        if db_path != MEMORY:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return db_path

    def create_tables(self) -> None:
        """Cria as tabelas do cadastro se ainda nao existirem."""
        if self._tables_created or self._store.read_only:
            return
        for ddl in TABLES.values():
            self._conn.execute(ddl)
        log.info("Tabelas do cadastro verificadas (%d)", len(TABLES))
        self._tables_created = True

    def execute(
        self, sql: str, params: list[Any] | None = None
    ) -> list[dict[str, Any]]:
        """Executa SQL e retorna lista de dicts."""
        if params:
            result = self._conn.execute(sql, params)
        else:
            result = self._conn.execute(sql)
        if result.description is None:
            return []
        columns = [desc[0] for desc in result.description]
        return [dict(zip(columns, row)) for row in result.fetchall()]

    def execute_one(
        self, sql: str, params: list[Any] | None = None
    ) -> dict[str, Any] | None:
        """Executa SQL e retorna primeiro resultado ou None."""
        rows = self.execute(sql, params)
        return rows[0] if rows else None

    def health_check(self) -> bool:
        """Testa se o banco responde."""
        try:
            result = self.execute("SELECT 1 AS ok")
            return bool(result and result[0].get("ok") == 1)
        except Exception:
            return False

    def close(self) -> None:
        self._conn.close()
