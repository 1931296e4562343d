"""Layout RAAS (versao 02.20): descritores de coluna das linhas 01 e 15.

Cada linha e uma lista ordenada de `Coluna`: nome, largura, tipo de
formatacao e a funcao que extrai o valor do contexto. A posicao de um
campo e a soma das larguras anteriores; nao ha delimitador.

Constantes do cabecalho sao definidas pelo layout oficial do DATASUS e
nao derivam dos dados. Qualquer troca de versao do layout altera este
modulo e nada mais.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from ..cadastro.types import Atendimento, Paciente
from ..config import EstabelecimentoConfig
from ..shared.normalize import so_digitos
from . import campos

CRLF = "\r\n"

ALFA = "A"
NUM = "N"
DATA = "D"

# ── Constantes do layout 02.20 ────────────────────────────────────

TIPO_CABECALHO = "01"
TIPO_PACIENTE = "15"
MARCADOR_PROTOCOLO = "#RAS#"
SEQUENCIAL_LOTE = "1"
CONTROLE_CABECALHO = "1111"
INDICADOR_DESTINO = "M"  # M = secretaria municipal
VERSAO_LAYOUT = "02.20"
VERSAO_SISTEMA = "02.20.0"

VERSAO_LINHA_PACIENTE = "21"
SERVICO_CLASSIFICACAO = "010"
CARATER_ATENDIMENTO = "01"
ORIGEM_INFORMACAO = "RAS"
CNS_VAZIO = "0" * 15
CPF_VAZIO = "0" * 11


@dataclass(frozen=True)
class ContextoLinha:
    """Tudo que uma coluna pode ler para produzir seu valor."""

    estabelecimento: EstabelecimentoConfig
    hoje: date
    atendimento: Atendimento | None = None
    paciente: Paciente | None = None


Fonte = Callable[[ContextoLinha], Any]


@dataclass(frozen=True)
class Coluna:
    nome: str
    largura: int
    tipo: str
    fonte: Fonte

    def formatar(self, ctx: ContextoLinha) -> str:
        valor = self.fonte(ctx)
        if self.tipo == ALFA:
            return campos.alfa(valor, self.largura)
        if self.tipo == NUM:
            return campos.num(valor, self.largura)
        if self.tipo == DATA:
            return campos.data(valor)
        raise ValueError(f"Tipo de coluna desconhecido: {self.tipo!r}")


def fixo(valor: str) -> Fonte:
    return lambda ctx: valor


def branco() -> Fonte:
    return lambda ctx: ""


def pac(campo: str) -> Fonte:
    return lambda ctx: getattr(ctx.paciente, campo)


def atd(campo: str) -> Fonte:
    return lambda ctx: getattr(ctx.atendimento, campo)


def estab(campo: str) -> Fonte:
    return lambda ctx: getattr(ctx.estabelecimento, campo)


# ── Linha 01: cabecalho ───────────────────────────────────────────

LINHA_CABECALHO: list[Coluna] = [
    Coluna("tipo_registro", 2, ALFA, fixo(TIPO_CABECALHO)),
    Coluna("protocolo", 5, ALFA, fixo(MARCADOR_PROTOCOLO)),
    Coluna("competencia", 6, NUM, lambda ctx: ctx.hoje.strftime("%Y%m")),
    Coluna("sequencial", 6, NUM, fixo(SEQUENCIAL_LOTE)),
    Coluna("controle", 4, ALFA, fixo(CONTROLE_CABECALHO)),
    Coluna("nome_origem", 30, ALFA, estab("nome")),
    Coluna("sigla_origem", 6, ALFA, estab("sigla_orgao")),
    Coluna("cnpj_origem", 14, NUM, estab("cnpj_orgao")),
    Coluna("orgao_destino", 40, ALFA, estab("orgao_destino")),
    Coluna("indicador_destino", 1, ALFA, fixo(INDICADOR_DESTINO)),
    Coluna("data_geracao", 8, DATA, lambda ctx: ctx.hoje),
    Coluna("versao_layout", 5, ALFA, fixo(VERSAO_LAYOUT)),
    Coluna("reservado", 10, NUM, fixo("0")),
    Coluna("versao_sistema", 7, ALFA, fixo(VERSAO_SISTEMA)),
    Coluna("brancos", 102, ALFA, branco()),
]


# ── Linha 15: paciente/atendimento ────────────────────────────────

LINHA_PACIENTE: list[Coluna] = [
    Coluna("tipo_registro", 2, ALFA, fixo(TIPO_PACIENTE)),
    Coluna("versao", 2, ALFA, fixo(VERSAO_LINHA_PACIENTE)),
    Coluna(
        "competencia", 6, NUM,
        lambda ctx: so_digitos(ctx.atendimento.month_reference or ""),
    ),
    Coluna("cnes", 7, ALFA, estab("cnes")),
    Coluna("cns_paciente", 15, ALFA, lambda ctx: ctx.paciente.cns or CNS_VAZIO),
    Coluna("data_admissao", 8, DATA, atd("admission_date")),
    Coluna("data_fim", 8, ALFA, branco()),
    Coluna("nome_paciente", 30, ALFA, pac("name")),
    Coluna("prontuario", 10, ALFA, pac("prontuario")),
    Coluna("nome_mae", 30, ALFA, pac("mother_name")),
    Coluna("logradouro", 30, ALFA, pac("address_street")),
    Coluna("numero", 5, ALFA, pac("address_number")),
    Coluna("complemento", 10, ALFA, pac("address_complement")),
    Coluna("cep", 8, ALFA, pac("address_zipcode")),
    Coluna("municipio_ibge", 7, ALFA, estab("ibge")),
    Coluna("data_nascimento", 8, DATA, pac("birth_date")),
    Coluna("sexo", 1, ALFA, pac("sex")),
    Coluna("raca_cor", 2, ALFA, pac("race_color")),
    Coluna(
        "nome_responsavel", 30, ALFA,
        lambda ctx: ctx.paciente.responsible_name or ctx.paciente.name,
    ),
    Coluna("servico_classificacao", 3, ALFA, fixo(SERVICO_CLASSIFICACAO)),
    Coluna("etnia", 4, ALFA, branco()),
    Coluna("telefone", 11, ALFA, pac("phone")),
    Coluna("celular", 11, ALFA, pac("mobile")),
    Coluna("motivo_saida", 2, ALFA, atd("patient_destination")),
    Coluna("data_saida", 8, ALFA, branco()),
    Coluna("cid_principal", 4, ALFA, atd("cid_primary")),
    Coluna("cid_secundario1", 4, ALFA, atd("cid_secondary1")),
    Coluna("cid_secundario2", 4, ALFA, atd("cid_secondary2")),
    Coluna("cid_secundario3", 4, ALFA, atd("cid_secondary3")),
    Coluna("cid_causas_associadas", 4, ALFA, branco()),
    Coluna("carater_atendimento", 2, ALFA, fixo(CARATER_ATENDIMENTO)),
    Coluna("origem_paciente", 2, ALFA, atd("patient_origin")),
    Coluna("cobertura_esf", 1, ALFA, atd("esf_coverage")),
    Coluna("cnes_esf", 7, ALFA, atd("esf_cnes")),
    Coluna("nacionalidade", 5, NUM, fixo("0")),
    Coluna("destino_paciente", 2, ALFA, atd("patient_destination")),
    Coluna("origem_informacao", 3, ALFA, fixo(ORIGEM_INFORMACAO)),
    Coluna("situacao_rua", 1, ALFA, atd("homeless_situation")),
    Coluna("usuario_substancia", 1, ALFA, atd("drug_user")),
    Coluna("tipo_substancia", 3, ALFA, atd("drug_type")),
    Coluna("reservado", 13, ALFA, branco()),
    Coluna("bairro", 30, ALFA, pac("address_neighborhood")),
    Coluna("tipo_logradouro", 3, ALFA, branco()),
    Coluna("email", 40, ALFA, pac("email")),
    Coluna("cpf_paciente", 11, ALFA, lambda ctx: ctx.paciente.cpf or CPF_VAZIO),
    Coluna("brancos", 4, ALFA, branco()),
]


def largura(colunas: list[Coluna]) -> int:
    """Largura total da linha, sem o CRLF."""
    return sum(c.largura for c in colunas)


def posicoes(colunas: list[Coluna]) -> dict[str, tuple[int, int]]:
    """nome -> (inicio, fim) para fatiar uma linha ja montada."""
    resultado: dict[str, tuple[int, int]] = {}
    inicio = 0
    for c in colunas:
        resultado[c.nome] = (inicio, inicio + c.largura)
        inicio += c.largura
    return resultado
