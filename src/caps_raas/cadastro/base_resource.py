"""BaseResource[R]: repositorio generico de uma tabela do cadastro.

Mesmo padrao de acesso para as 5 tabelas:
- create(registro): valida, gera id/timestamps e insere
- get_by_id(id) / get(id): registro unico por chave primaria
- list_all(order_by, descending): todos os registros
- list_by_ids(ids): busca em lote
- search(column, pattern): busca textual (LIKE, case-insensitive)
- update(id, **campos) / delete(id) / count()
- Metricas por metodo
"""

from __future__ import annotations

import dataclasses
import time
import uuid
from datetime import datetime
from typing import Any, Callable, Generic, TypeVar

from ..shared.errors import DadosInvalidos, RegistroNaoEncontrado
from ..shared.log import get_logger
from .connection import DuckDBConnection
from .metrics import MetricsCollector
from .types import Registro

R = TypeVar("R", bound=Registro)

log = get_logger("cadastro.resource")

_IMUTAVEIS = {"id", "created_at", "updated_at"}


class BaseResource(Generic[R]):
    """CRUD generico sobre uma tabela DuckDB mapeada para um dataclass."""

    def __init__(
        self,
        conn: DuckDBConnection,
        table_name: str,
        model: type[R],
        validar: Callable[[R], R] | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._conn = conn
        self._table_name = table_name
        self._model = model
        self._validar = validar
        self._metrics = metrics
        self._colunas = model.colunas()

    @property
    def table_name(self) -> str:
        return self._table_name

    def _record(self, method: str, start: float, write: bool = False) -> None:
        if self._metrics:
            elapsed = (time.monotonic() - start) * 1000
            self._metrics.record(f"{self._table_name}.{method}", elapsed, write)

    def _coluna(self, column: str) -> str:
        if column not in self._colunas:
            raise DadosInvalidos(
                f"Coluna '{column}' inexistente em {self._table_name}"
            )
        return column

    def _rows(self, rows: list[dict[str, Any]]) -> list[R]:
        return [self._model.from_row(r) for r in rows]

    # ── Escrita ───────────────────────────────────────────────────

    def create(self, registro: R) -> R:
        """Valida e insere um novo registro. Retorna o registro com id."""
        if self._validar:
            registro = self._validar(registro)
        self._antes_de_gravar(registro)
        agora = datetime.now()
        registro.id = str(uuid.uuid4())
        registro.created_at = agora
        registro.updated_at = agora

        start = time.monotonic()
        try:
            row = registro.to_row()
            cols = ", ".join(self._colunas)
            ph = ", ".join("?" for _ in self._colunas)
            self._conn.execute(
                f"INSERT INTO {self._table_name} ({cols}) VALUES ({ph})",
                [row[c] for c in self._colunas],
            )
        finally:
            self._record("create", start, write=True)
        log.info("%s: registro %s criado", self._table_name, registro.id)
        return registro

    def update(self, id_value: str, **campos: Any) -> R:
        """Atualiza campos de um registro existente e revalida."""
        proibidos = _IMUTAVEIS & campos.keys()
        if proibidos:
            raise DadosInvalidos(f"Campos nao editaveis: {', '.join(sorted(proibidos))}")
        atual = self.get(id_value)
        try:
            registro = dataclasses.replace(atual, **campos)
        except TypeError as e:
            raise DadosInvalidos(f"Campo invalido para {self._table_name}: {e}") from e
        if self._validar:
            registro = self._validar(registro)
        self._antes_de_gravar(registro)
        registro.updated_at = datetime.now()

        start = time.monotonic()
        try:
            row = registro.to_row()
            editaveis = [c for c in self._colunas if c not in ("id", "created_at")]
            sets = ", ".join(f"{c} = ?" for c in editaveis)
            self._conn.execute(
                f"UPDATE {self._table_name} SET {sets} WHERE id = ?",
                [row[c] for c in editaveis] + [id_value],
            )
        finally:
            self._record("update", start, write=True)
        return registro

    def delete(self, id_value: str) -> None:
        """Remove um registro. Falha se o id nao existir."""
        self.get(id_value)
        start = time.monotonic()
        try:
            self._conn.execute(
                f"DELETE FROM {self._table_name} WHERE id = ?", [id_value]
            )
        finally:
            self._record("delete", start, write=True)
        log.info("%s: registro %s excluido", self._table_name, id_value)

    def _antes_de_gravar(self, registro: R) -> None:
        """Gancho para checagens de integridade referencial."""

    # ── Leitura ───────────────────────────────────────────────────

    def get_by_id(self, id_value: str) -> R | None:
        """Busca um registro pela chave primaria."""
        start = time.monotonic()
        try:
            row = self._conn.execute_one(
                f"SELECT * FROM {self._table_name} WHERE id = ?", [id_value]
            )
        finally:
            self._record("get_by_id", start)
        return self._model.from_row(row) if row else None

    def get(self, id_value: str) -> R:
        """Como get_by_id, mas levanta RegistroNaoEncontrado."""
        registro = self.get_by_id(id_value)
        if registro is None:
            raise RegistroNaoEncontrado(
                f"Registro '{id_value}' nao encontrado em {self._table_name}"
            )
        return registro

    def list_all(
        self,
        order_by: str | None = None,
        descending: bool = False,
        where: dict[str, Any] | None = None,
    ) -> list[R]:
        """Lista registros, com filtro de igualdade e ordenacao opcionais."""
        start = time.monotonic()
        try:
            sql = f"SELECT * FROM {self._table_name}"
            params: list[Any] = []
            if where:
                conds = [f"{self._coluna(c)} = ?" for c in where]
                sql += " WHERE " + " AND ".join(conds)
                params.extend(where.values())
            if order_by:
                sql += f" ORDER BY {self._coluna(order_by)}"
                sql += " DESC" if descending else " ASC"
            return self._rows(self._conn.execute(sql, params or None))
        finally:
            self._record("list_all", start)

    def list_by_ids(self, ids: list[str]) -> list[R]:
        """Busca registros em lote por lista de IDs."""
        if not ids:
            return []
        normalized = sorted(set(ids))
        start = time.monotonic()
        try:
            id_ph = ", ".join("?" for _ in normalized)
            sql = f"SELECT * FROM {self._table_name} WHERE id IN ({id_ph})"
            return self._rows(self._conn.execute(sql, normalized))
        finally:
            self._record("list_by_ids", start)

    def search(self, column: str, pattern: str, limit: int = 50) -> list[R]:
        """Busca textual (LIKE) em uma coluna."""
        start = time.monotonic()
        try:
            sql = (
                f"SELECT * FROM {self._table_name} "
                f"WHERE LOWER({self._coluna(column)}) LIKE ? "
                f"ORDER BY {self._coluna(column)} LIMIT {int(limit)}"
            )
            return self._rows(self._conn.execute(sql, [f"%{pattern.lower()}%"]))
        finally:
            self._record("search", start)

    def count(self) -> int:
        start = time.monotonic()
        try:
            row = self._conn.execute_one(
                f"SELECT COUNT(*) AS total FROM {self._table_name}"
            )
        finally:
            self._record("count", start)
        return int(row["total"]) if row else 0
