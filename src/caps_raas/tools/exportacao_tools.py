"""Tools MCP da exportacao RAAS."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..raas.exportacao import exportar_raas as _exportar
from ..shared.errors import safe_tool
from . import _json

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..cadastro.client import CadastroClient
    from ..config import Settings


def register(
    mcp: "FastMCP",
    get_client: Callable[[], "CadastroClient"],
    get_settings: Callable[[], "Settings"],
) -> None:
    """Registra 2 tools de exportacao no servidor MCP."""

    @mcp.tool()
    @safe_tool
    def estatisticas() -> str:
        """Totais de pacientes, profissionais, procedimentos, atendimentos e acoes."""
        return _json(get_client().estatisticas())

    @mcp.tool()
    @safe_tool
    def exportar_raas(diretorio: str = "") -> str:
        """Gera o arquivo RAAS (layout DATASUS 02.20) com todos os atendimentos.

        O arquivo recebe o nome AAC<sufixo>.<MM><AA> da data atual e deve ser
        enviado ao sistema do DATASUS.

        Args:
            diretorio: Pasta de saida. Default: CAPS_EXPORT_DIR.
        """
        destino = Path(diretorio) if diretorio.strip() else None
        resultado = _exportar(get_client(), get_settings(), destino)
        return _json({
            "msg": "Arquivo RAAS exportado com sucesso!",
            "nome_arquivo": resultado.nome_arquivo,
            "caminho": str(resultado.caminho),
            "competencia": resultado.competencia,
            "total_atendimentos": resultado.total_atendimentos,
            "linhas_pacientes": resultado.linhas_pacientes,
            "ignorados": resultado.ignorados,
        })
