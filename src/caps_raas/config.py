"""Configuracao centralizada via variaveis de ambiente."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


_CNPJ_PLACEHOLDER = "00000000000000"


@dataclass(frozen=True)
class EstabelecimentoConfig:
    """Identificacao fixa do CAPS e do orgao de origem do arquivo RAAS."""

    nome: str = field(
        default_factory=lambda: os.getenv("CAPS_NOME", "CAPS 3 DR BACELAR VIANA")
    )
    cnes: str = field(
        default_factory=lambda: os.getenv("CAPS_CNES", "6981291")
    )
    ibge: str = field(
        default_factory=lambda: os.getenv("CAPS_IBGE", "2111300")
    )
    sigla_orgao: str = field(
        default_factory=lambda: os.getenv("CAPS_SIGLA_ORGAO", "SESMA")
    )
    cnpj_orgao: str = field(
        default_factory=lambda: os.getenv("CAPS_CNPJ_ORGAO", _CNPJ_PLACEHOLDER)
    )
    orgao_destino: str = field(
        default_factory=lambda: os.getenv(
            "CAPS_ORGAO_DESTINO", "SECRETARIA MUNICIPAL DE SAUDE"
        )
    )
    sufixo_arquivo: str = field(
        default_factory=lambda: os.getenv("CAPS_SUFIXO_ARQUIVO", "BVSES")
    )

    def __post_init__(self) -> None:
        import logging

        if self.cnpj_orgao.strip("0") == "":
            logging.getLogger("caps_raas.config").warning(
                "EstabelecimentoConfig usando CNPJ placeholder (zeros). "
                "Defina CAPS_CNPJ_ORGAO para o arquivo de producao."
            )


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = field(
        default_factory=lambda: os.getenv("CAPS_DB_PATH", "data/caps.duckdb")
    )
    read_only: bool = False


@dataclass(frozen=True)
class Settings:
    estabelecimento: EstabelecimentoConfig = field(
        default_factory=EstabelecimentoConfig
    )
    store: StoreConfig = field(default_factory=StoreConfig)
    export_dir: Path = field(
        default_factory=lambda: Path(os.getenv("CAPS_EXPORT_DIR", "exportacoes"))
    )


def load_settings() -> Settings:
    """Carrega settings a partir de variaveis de ambiente."""
    return Settings()
