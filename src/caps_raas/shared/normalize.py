"""Utilitarios de normalizacao de texto e datas."""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime


def sem_acentos(texto: str) -> str:
    """Remove acentos (NFKD sem marcas combinantes): 'Conceição' -> 'Conceicao'."""
    texto = unicodedata.normalize("NFKD", texto)
    return "".join(c for c in texto if not unicodedata.combining(c))


def so_digitos(valor: str) -> str:
    """Remove tudo que nao for digito (pontos, hifens, barras)."""
    return re.sub(r"\D", "", valor)


def para_data(valor: date | str | None) -> date | None:
    """Converte 'AAAA-MM-DD' (ou datetime/date) para date. Vazio vira None."""
    if valor is None or valor == "":
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    return date.fromisoformat(valor.strip()[:10])


def mes_referencia(data_admissao: date | str) -> str:
    """Competencia 'AAAA-MM' derivada da data de admissao."""
    data = para_data(data_admissao)
    if data is None:
        raise ValueError("data de admissao ausente")
    return f"{data.year:04d}-{data.month:02d}"
