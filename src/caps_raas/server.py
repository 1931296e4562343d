"""
MCP Server do cadastro CAPS e da exportacao RAAS.

Expoe o cadastro de pacientes, profissionais, procedimentos e atendimentos
e a geracao do arquivo RAAS (DATASUS) como tools MCP.

Execucao:
  caps-raas-mcp                  (stdio)
  caps-raas-mcp --transport sse
"""

from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP

from .cadastro.client import CadastroClient
from .config import Settings, load_settings
from .shared.log import get_logger
from .tools import atendimento_tools, cadastro_tools, exportacao_tools, health_tools

log = get_logger("server")

_MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
_MCP_PORT = int(os.getenv("MCP_PORT", "8210"))

mcp = FastMCP(
    "caps-raas",
    host=_MCP_HOST,
    port=_MCP_PORT,
    instructions=(
        "Servidor de cadastro de um CAPS (Centro de Atencao Psicossocial). "
        "Registra pacientes, profissionais (CBO), procedimentos (SIGTAP), "
        "atendimentos e as acoes de cada atendimento. "
        "Gera o arquivo RAAS no layout oficial do DATASUS com exportar_raas. "
        "Paciente exige CNS ou CPF. Datas sempre no formato AAAA-MM-DD."
    ),
)

# ---------------------------------------------------------------------------
# Lazy-loaded globals
# ---------------------------------------------------------------------------
_settings: Settings | None = None
_client: CadastroClient | None = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def _get_client() -> CadastroClient:
    global _client
    if _client is None:
        _client = CadastroClient.from_settings(_get_settings())
    return _client


cadastro_tools.register(mcp, _get_client)
atendimento_tools.register(mcp, _get_client)
exportacao_tools.register(mcp, _get_client, _get_settings)
health_tools.register(mcp, _get_client, _get_settings)


def main():
    import argparse

    parser = argparse.ArgumentParser(description="MCP Server CAPS/RAAS")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transporte MCP (default: stdio)",
    )
    args = parser.parse_args()
    log.info("Iniciando servidor MCP (%s)", args.transport)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
