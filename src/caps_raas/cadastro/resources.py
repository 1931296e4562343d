"""Resources especializados com metodos custom alem do BaseResource."""

from __future__ import annotations

import time
from typing import Any

from ..shared.errors import DadosInvalidos, RegistroNaoEncontrado
from ..shared.log import get_logger
from .base_resource import BaseResource
from .connection import DuckDBConnection
from .metrics import MetricsCollector
from .types import AcaoAtendimento, Atendimento, Paciente, Procedimento, Profissional
from .validation import (
    validar_acao,
    validar_atendimento,
    validar_paciente,
    validar_procedimento,
    validar_profissional,
)

log = get_logger("cadastro.resources")


def _existe(conn: DuckDBConnection, table: str, id_value: str) -> bool:
    row = conn.execute_one(f"SELECT 1 AS ok FROM {table} WHERE id = ?", [id_value])
    return row is not None


def _contar(conn: DuckDBConnection, table: str, column: str, id_value: str) -> int:
    row = conn.execute_one(
        f"SELECT COUNT(*) AS total FROM {table} WHERE {column} = ?", [id_value]
    )
    return int(row["total"]) if row else 0


class PacienteResource(BaseResource[Paciente]):
    """Pacientes com busca por nome e exclusao protegida."""

    def __init__(
        self, conn: DuckDBConnection, metrics: MetricsCollector | None = None
    ) -> None:
        super().__init__(conn, "patients", Paciente, validar_paciente, metrics)

    def buscar_por_nome(self, nome: str, limit: int = 50) -> list[Paciente]:
        return self.search("name", nome, limit)

    def delete(self, id_value: str) -> None:
        if _contar(self._conn, "attendances", "patient_id", id_value):
            raise DadosInvalidos(
                "Paciente possui atendimentos registrados; exclua-os primeiro."
            )
        super().delete(id_value)


class _CatalogoResource(BaseResource):
    """Profissionais e procedimentos: flag `active` e referencia por acoes."""

    _coluna_ordem = "id"
    _coluna_acao = ""

    def list_ativos(self) -> list[Any]:
        return self.list_all(
            order_by=self._coluna_ordem, where={"active": True}
        )

    def delete(self, id_value: str) -> None:
        if _contar(self._conn, "attendance_actions", self._coluna_acao, id_value):
            raise DadosInvalidos(
                "Registro usado em acoes de atendimento; desative-o em vez de excluir."
            )
        super().delete(id_value)


class ProfissionalResource(_CatalogoResource):
    _coluna_ordem = "name"
    _coluna_acao = "professional_id"

    def __init__(
        self, conn: DuckDBConnection, metrics: MetricsCollector | None = None
    ) -> None:
        super().__init__(
            conn, "professionals", Profissional, validar_profissional, metrics
        )


class ProcedimentoResource(_CatalogoResource):
    _coluna_ordem = "description"
    _coluna_acao = "procedure_id"

    def __init__(
        self, conn: DuckDBConnection, metrics: MetricsCollector | None = None
    ) -> None:
        super().__init__(
            conn, "procedures", Procedimento, validar_procedimento, metrics
        )

    def _antes_de_gravar(self, registro: Procedimento) -> None:
        existente = self.get_by_sigtap(registro.sigtap_code)
        if existente and existente.id != registro.id:
            raise DadosInvalidos(
                f"Procedimento SIGTAP '{registro.sigtap_code}' ja cadastrado."
            )

    def get_by_sigtap(self, sigtap_code: str) -> Procedimento | None:
        encontrados = self.list_all(where={"sigtap_code": sigtap_code.strip()})
        return encontrados[0] if encontrados else None


class AtendimentoResource(BaseResource[Atendimento]):
    """Atendimentos: paciente obrigatorio, exclusao em cascata das acoes."""

    def __init__(
        self, conn: DuckDBConnection, metrics: MetricsCollector | None = None
    ) -> None:
        super().__init__(
            conn, "attendances", Atendimento, validar_atendimento, metrics
        )

    def _antes_de_gravar(self, registro: Atendimento) -> None:
        if not _existe(self._conn, "patients", registro.patient_id):
            raise RegistroNaoEncontrado(
                f"Paciente '{registro.patient_id}' nao encontrado"
            )

    def delete(self, id_value: str) -> None:
        self.get(id_value)
        removidas = self._conn.execute_one(
            "SELECT COUNT(*) AS total FROM attendance_actions WHERE attendance_id = ?",
            [id_value],
        )
        self._conn.execute(
            "DELETE FROM attendance_actions WHERE attendance_id = ?", [id_value]
        )
        if removidas and removidas["total"]:
            log.info("Removidas %d acoes do atendimento %s", removidas["total"], id_value)
        super().delete(id_value)

    def list_recentes(self) -> list[Atendimento]:
        """Mais recentes primeiro (tela de registro)."""
        return self.list_all(order_by="admission_date", descending=True)

    def list_por_competencia(self, month_reference: str) -> list[Atendimento]:
        return self.list_all(
            order_by="admission_date", where={"month_reference": month_reference}
        )

    def list_para_exportacao(self) -> list[Atendimento]:
        """Todos os atendimentos em ordem crescente de admissao."""
        return self.list_all(order_by="admission_date")


class AcaoAtendimentoResource(BaseResource[AcaoAtendimento]):
    """Acoes/procedimentos executados dentro de um atendimento."""

    def __init__(
        self, conn: DuckDBConnection, metrics: MetricsCollector | None = None
    ) -> None:
        super().__init__(
            conn, "attendance_actions", AcaoAtendimento, validar_acao, metrics
        )

    def _antes_de_gravar(self, registro: AcaoAtendimento) -> None:
        refs = (
            ("attendances", registro.attendance_id, "Atendimento"),
            ("professionals", registro.professional_id, "Profissional"),
            ("procedures", registro.procedure_id, "Procedimento"),
        )
        for table, id_value, rotulo in refs:
            if not _existe(self._conn, table, id_value):
                raise RegistroNaoEncontrado(f"{rotulo} '{id_value}' nao encontrado")

    def list_by_atendimento(self, attendance_id: str) -> list[dict[str, Any]]:
        """Acoes do atendimento com nome do profissional e procedimento SIGTAP."""
        start = time.monotonic()
        try:
            return self._conn.execute(
                "SELECT a.*, pr.name AS professional_name, "
                "pc.description AS procedure_description, pc.sigtap_code "
                "FROM attendance_actions a "
                "LEFT JOIN professionals pr ON pr.id = a.professional_id "
                "LEFT JOIN procedures pc ON pc.id = a.procedure_id "
                "WHERE a.attendance_id = ? "
                "ORDER BY a.action_date DESC",
                [attendance_id],
            )
        finally:
            self._record("list_by_atendimento", start)
