"""CadastroClient: ponto de entrada para o banco do CAPS.

- DI via construtor (connection, metrics)
- Um resource por tabela: pacientes, profissionais, procedimentos,
  atendimentos, acoes
- Metricas centralizadas
"""

from __future__ import annotations

from ..config import Settings, StoreConfig
from ..shared.log import get_logger
from .connection import MEMORY, DuckDBConnection
from .metrics import CadastroMetrics, MetricsCollector
from .resources import (
    AcaoAtendimentoResource,
    AtendimentoResource,
    PacienteResource,
    ProcedimentoResource,
    ProfissionalResource,
)

log = get_logger("cadastro.client")


class CadastroClient:
    """Cliente unificado do cadastro CAPS.

    Uso:
        from caps_raas.config import load_settings
        from caps_raas.cadastro import CadastroClient

        client = CadastroClient.from_settings(load_settings())
        pac = client.pacientes.create(Paciente(name="ANA", ...))
        atend = client.atendimentos.list_para_exportacao()
    """

    def __init__(
        self,
        conn: DuckDBConnection,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._conn = conn
        self._metrics = metrics or MetricsCollector()

        self.pacientes = PacienteResource(conn, self._metrics)
        self.profissionais = ProfissionalResource(conn, self._metrics)
        self.procedimentos = ProcedimentoResource(conn, self._metrics)
        self.atendimentos = AtendimentoResource(conn, self._metrics)
        self.acoes = AcaoAtendimentoResource(conn, self._metrics)

        conn.create_tables()
        log.info("CadastroClient inicializado")

    @classmethod
    def from_settings(cls, settings: Settings) -> CadastroClient:
        """Cria CadastroClient a partir de Settings."""
        return cls(DuckDBConnection(settings.store), MetricsCollector())

    @classmethod
    def in_memory(cls) -> CadastroClient:
        """Banco efemero (testes e demonstracoes)."""
        return cls(DuckDBConnection(StoreConfig(db_path=MEMORY)))

    @property
    def metrics(self) -> CadastroMetrics:
        return self._metrics.snapshot

    def test_connection(self) -> bool:
        """Testa conexao com o DuckDB."""
        ok = self._conn.health_check()
        if ok:
            log.info("Conexao DuckDB OK")
        else:
            log.error("Falha na conexao DuckDB")
        return ok

    def estatisticas(self) -> dict[str, int]:
        """Totais por tabela (painel e tela de exportacao)."""
        return {
            "pacientes": self.pacientes.count(),
            "profissionais": self.profissionais.count(),
            "procedimentos": self.procedimentos.count(),
            "atendimentos": self.atendimentos.count(),
            "acoes": self.acoes.count(),
        }

    def close(self) -> None:
        self._conn.close()
