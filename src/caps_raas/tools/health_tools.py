"""Tools MCP de health check, diagnostico e metricas do servidor."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable

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
    """Registra 2 tools de diagnostico e saude do servidor."""

    @mcp.tool()
    def health_check() -> str:
        """Verifica a saude do banco do cadastro e do diretorio de exportacao.

        Use para diagnosticar problemas antes de exportar o arquivo RAAS.
        """
        checks: dict[str, dict] = {}

        try:
            start = time.monotonic()
            client = get_client()
            ok = client.test_connection()
            elapsed = round((time.monotonic() - start) * 1000)
            if ok:
                checks["banco"] = {
                    "status": "ok",
                    **client.estatisticas(),
                    "tempo_ms": elapsed,
                }
            else:
                checks["banco"] = {"status": "erro", "mensagem": "Conexao falhou"}
        except Exception as e:
            checks["banco"] = {"status": "erro", "mensagem": str(e)}

        try:
            destino = get_settings().export_dir
            destino.mkdir(parents=True, exist_ok=True)
            checks["exportacao"] = {"status": "ok", "diretorio": str(destino)}
        except Exception as e:
            checks["exportacao"] = {"status": "erro", "mensagem": str(e)}

        all_ok = all(c.get("status") == "ok" for c in checks.values())
        return _json({
            "status": "ok" if all_ok else "degradado",
            "checks": checks,
        })

    @mcp.tool()
    def info_servidor() -> str:
        """Retorna versao, estabelecimento configurado e metricas de queries."""
        from caps_raas.config import VERSION

        estab = get_settings().estabelecimento
        info: dict[str, Any] = {
            "versao": VERSION,
            "total_tools": 27,
            "modulos_tools": [
                "cadastro_tools (17)", "atendimento_tools (6)",
                "exportacao_tools (2)", "health_tools (2)",
            ],
            "estabelecimento": {
                "nome": estab.nome,
                "cnes": estab.cnes,
                "ibge": estab.ibge,
            },
        }

        try:
            m = get_client().metrics
            top_methods = sorted(
                m.by_method.items(),
                key=lambda x: x[1].query_count,
                reverse=True,
            )[:10]
            info["metricas"] = {
                "total_queries": m.total_queries,
                "escritas": m.writes,
                "total_time_ms": round(m.total_time_ms, 1),
                "top_methods": [
                    {"method": name, "count": met.query_count,
                     "avg_ms": round(met.avg_time_ms, 1)}
                    for name, met in top_methods
                ],
            }
        except Exception:
            info["metricas"] = {"erro": "Metricas indisponiveis"}

        return _json(info)
