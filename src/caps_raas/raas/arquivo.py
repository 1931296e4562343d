"""Nome e gravacao do arquivo RAAS (AAC<sufixo>.<MM><AA>)."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from ..shared.log import get_logger

log = get_logger("raas.arquivo")

PREFIXO = "AAC"
# Um byte por caractere: as posicoes do layout sao fixas em bytes.
ENCODING = "latin-1"


def nome_arquivo(data: date, sufixo: str = "BVSES") -> str:
    """Ex.: julho/2025 com sufixo BVSES -> 'AACBVSES.0725'."""
    return f"{PREFIXO}{sufixo.upper()}.{data.month:02d}{data.year % 100:02d}"


def salvar_arquivo(conteudo: str, destino: Path, nome: str) -> Path:
    """Grava o texto sem traducao de quebra de linha (CRLF preservado)."""
    destino.mkdir(parents=True, exist_ok=True)
    caminho = destino / nome
    with open(caminho, "w", encoding=ENCODING, errors="replace", newline="") as f:
        f.write(conteudo)
    log.info("Arquivo RAAS gravado em %s (%d bytes)", caminho, caminho.stat().st_size)
    return caminho
