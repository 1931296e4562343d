"""Formatacao de campos de largura fixa do layout RAAS.

Tres tipos de campo:
- alfa: sem acentos, maiusculo, completa com espacos a direita, corta na largura
- num:  vazio vira "0", completa com zeros a esquerda, corta na largura
- data: AAAAMMDD sem separadores; vazio vira "00000000"

Cada caractere ocupa um byte no arquivo (ver arquivo.ENCODING).
Nenhum campo e validado: valor maior que a coluna e truncado em silencio.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..shared.normalize import sem_acentos, so_digitos

DATA_VAZIA = "00000000"


def alfa(valor: Any, largura: int) -> str:
    texto = sem_acentos(str(valor)) if valor else ""
    return texto.upper().ljust(largura, " ")[:largura]


def num(valor: Any, largura: int) -> str:
    texto = str(valor) if valor else "0"
    return texto.rjust(largura, "0")[:largura]


def data(valor: date | str | None) -> str:
    if not valor:
        return DATA_VAZIA
    if isinstance(valor, (date, datetime)):
        return valor.strftime("%Y%m%d")
    digitos = so_digitos(str(valor))
    if not digitos:
        return DATA_VAZIA
    return digitos[:8].ljust(8, "0")
