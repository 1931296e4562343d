"""Exportacao RAAS: le atendimentos + pacientes, codifica e grava o arquivo."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import EstabelecimentoConfig, Settings
from ..shared.errors import ExportacaoVazia
from ..shared.log import get_logger
from .arquivo import nome_arquivo, salvar_arquivo
from .encoder import Par, gerar_raas

if TYPE_CHECKING:
    from ..cadastro.client import CadastroClient

log = get_logger("raas.exportacao")


@dataclass
class ResultadoExportacao:
    nome_arquivo: str
    competencia: str
    total_atendimentos: int
    linhas_pacientes: int
    ignorados: int
    conteudo: str
    caminho: Path | None = None


def carregar_registros(client: "CadastroClient") -> list[Par]:
    """Atendimentos em ordem de admissao, cada um com seu paciente (ou None)."""
    atendimentos = client.atendimentos.list_para_exportacao()
    ids = list({a.patient_id for a in atendimentos})
    pacientes = {p.id: p for p in client.pacientes.list_by_ids(ids)}
    return [(a, pacientes.get(a.patient_id)) for a in atendimentos]


def gerar_conteudo(
    client: "CadastroClient",
    estabelecimento: EstabelecimentoConfig,
    hoje: date | None = None,
) -> ResultadoExportacao:
    """Monta o arquivo em memoria. Levanta ExportacaoVazia sem atendimentos."""
    hoje = hoje or date.today()
    registros = carregar_registros(client)
    if not registros:
        raise ExportacaoVazia("Nao ha atendimentos para exportar!")

    conteudo = gerar_raas(registros, hoje, estabelecimento)
    ignorados = sum(1 for _, p in registros if p is None)
    if ignorados:
        log.warning("%d atendimento(s) sem paciente foram ignorados", ignorados)

    return ResultadoExportacao(
        nome_arquivo=nome_arquivo(hoje, estabelecimento.sufixo_arquivo),
        competencia=hoje.strftime("%Y%m"),
        total_atendimentos=len(registros),
        linhas_pacientes=len(registros) - ignorados,
        ignorados=ignorados,
        conteudo=conteudo,
    )


def exportar_raas(
    client: "CadastroClient",
    settings: Settings,
    destino: Path | None = None,
    hoje: date | None = None,
) -> ResultadoExportacao:
    """Gera e grava o arquivo RAAS em `destino` (default: settings.export_dir)."""
    resultado = gerar_conteudo(client, settings.estabelecimento, hoje)
    resultado.caminho = salvar_arquivo(
        resultado.conteudo, destino or settings.export_dir, resultado.nome_arquivo
    )
    log.info(
        "RAAS %s exportado: %d linhas de paciente",
        resultado.nome_arquivo, resultado.linhas_pacientes,
    )
    return resultado
