"""Codificador do arquivo RAAS: cabecalho 01 + uma linha 15 por atendimento."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..cadastro.types import Atendimento, Paciente
from ..config import EstabelecimentoConfig
from ..shared.log import get_logger
from .layout import CRLF, LINHA_CABECALHO, LINHA_PACIENTE, Coluna, ContextoLinha

log = get_logger("raas.encoder")

Par = tuple[Atendimento, Optional[Paciente]]


def montar_linha(colunas: Iterable[Coluna], ctx: ContextoLinha) -> str:
    """Concatena as colunas formatadas e termina a linha com CRLF."""
    return "".join(c.formatar(ctx) for c in colunas) + CRLF


def montar_cabecalho(hoje: date, estabelecimento: EstabelecimentoConfig) -> str:
    return montar_linha(LINHA_CABECALHO, ContextoLinha(estabelecimento, hoje))


def montar_linha_paciente(
    atendimento: Atendimento,
    paciente: Paciente,
    estabelecimento: EstabelecimentoConfig,
    hoje: date,
) -> str:
    ctx = ContextoLinha(estabelecimento, hoje, atendimento, paciente)
    return montar_linha(LINHA_PACIENTE, ctx)


def gerar_raas(
    registros: Sequence[Par],
    hoje: date,
    estabelecimento: EstabelecimentoConfig,
) -> str:
    """Gera o conteudo completo do arquivo RAAS.

    `registros` ja vem ordenado por data de admissao. Atendimento sem
    paciente resolvido nao gera linha. Lista vazia e erro de contrato:
    quem chama deve interromper antes (ver exportacao.exportar_raas).
    """
    if not registros:
        raise ValueError("gerar_raas exige ao menos um atendimento")

    partes = [montar_cabecalho(hoje, estabelecimento)]
    for atendimento, paciente in registros:
        if paciente is None:
            log.debug("Atendimento %s sem paciente; ignorado", atendimento.id)
            continue
        partes.append(
            montar_linha_paciente(atendimento, paciente, estabelecimento, hoje)
        )
    return "".join(partes)
