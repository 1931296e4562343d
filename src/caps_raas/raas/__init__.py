"""Arquivo RAAS (Registro das Acoes Ambulatoriais de Saude): layout DATASUS."""

from .arquivo import nome_arquivo, salvar_arquivo
from .encoder import gerar_raas, montar_cabecalho, montar_linha, montar_linha_paciente
from .exportacao import ResultadoExportacao, exportar_raas, gerar_conteudo

__all__ = [
    "nome_arquivo",
    "salvar_arquivo",
    "gerar_raas",
    "montar_cabecalho",
    "montar_linha",
    "montar_linha_paciente",
    "ResultadoExportacao",
    "exportar_raas",
    "gerar_conteudo",
]
