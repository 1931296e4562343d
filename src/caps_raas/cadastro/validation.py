"""Regras de obrigatoriedade e formato aplicadas antes de gravar."""

from __future__ import annotations

from ..shared.errors import DadosInvalidos
from ..shared.normalize import mes_referencia, para_data
from .types import AcaoAtendimento, Atendimento, Paciente, Procedimento, Profissional

SEXOS = {"M", "F"}
RACAS_CORES = {"01", "02", "03", "04", "05"}
ORIGENS = {"01", "02", "03", "04", "05", "06"}
DESTINOS = {"00", "01", "02", "03", "04"}
SIM_NAO = {"S", "N"}


def _vazio(valor: object) -> bool:
    return valor is None or (isinstance(valor, str) and not valor.strip())


def _limpar(valor: str | None) -> str | None:
    if valor is None:
        return None
    valor = valor.strip()
    return valor or None


def _data(valor, campo: str):
    try:
        return para_data(valor)
    except (TypeError, ValueError) as e:
        raise DadosInvalidos(f"Data invalida em '{campo}': {valor!r}") from e


def _dominio(valor: str, permitidos: set[str], campo: str) -> None:
    if valor not in permitidos:
        opcoes = ", ".join(sorted(permitidos))
        raise DadosInvalidos(f"'{campo}' deve ser um de {opcoes} (recebido {valor!r})")


def validar_paciente(p: Paciente) -> Paciente:
    """Nome, nascimento, sexo e raca/cor obrigatorios; CNS ou CPF."""
    if _vazio(p.name) or _vazio(p.birth_date) or _vazio(p.sex):
        raise DadosInvalidos("Nome, Data de Nascimento e Sexo sao obrigatorios!")
    p.cns = _limpar(p.cns)
    p.cpf = _limpar(p.cpf)
    if not p.cns and not p.cpf:
        raise DadosInvalidos("Informe CNS ou CPF!")
    p.name = p.name.strip()
    p.sex = p.sex.strip().upper()
    _dominio(p.sex, SEXOS, "sex")
    _dominio(p.race_color, RACAS_CORES, "race_color")
    p.birth_date = _data(p.birth_date, "birth_date")
    return p


def validar_profissional(p: Profissional) -> Profissional:
    if _vazio(p.name) or _vazio(p.cbo_code) or _vazio(p.cbo_description):
        raise DadosInvalidos("Nome, Codigo CBO e Descricao sao obrigatorios!")
    p.name = p.name.strip()
    p.cbo_code = p.cbo_code.strip()
    p.cns = _limpar(p.cns)
    p.cpf = _limpar(p.cpf)
    return p


def validar_procedimento(p: Procedimento) -> Procedimento:
    if _vazio(p.sigtap_code) or _vazio(p.description):
        raise DadosInvalidos("Codigo SIGTAP e Descricao sao obrigatorios!")
    p.sigtap_code = p.sigtap_code.strip()
    p.procedure_type = _limpar(p.procedure_type)
    return p


def validar_atendimento(a: Atendimento) -> Atendimento:
    """Valida e deriva `month_reference` a partir de `admission_date`."""
    if _vazio(a.patient_id) or _vazio(a.admission_date) or _vazio(a.cid_primary):
        raise DadosInvalidos(
            "Paciente, Data de Admissao e CID Principal sao obrigatorios!"
        )
    a.admission_date = _data(a.admission_date, "admission_date")
    a.month_reference = mes_referencia(a.admission_date)
    a.cid_primary = a.cid_primary.strip().upper()
    a.cid_secondary1 = _limpar(a.cid_secondary1 and a.cid_secondary1.upper())
    a.cid_secondary2 = _limpar(a.cid_secondary2 and a.cid_secondary2.upper())
    a.cid_secondary3 = _limpar(a.cid_secondary3 and a.cid_secondary3.upper())
    _dominio(a.patient_origin, ORIGENS, "patient_origin")
    _dominio(a.patient_destination, DESTINOS, "patient_destination")
    _dominio(a.esf_coverage, SIM_NAO, "esf_coverage")
    _dominio(a.homeless_situation, SIM_NAO, "homeless_situation")
    _dominio(a.drug_user, SIM_NAO, "drug_user")
    a.esf_cnes = _limpar(a.esf_cnes) if a.esf_coverage == "S" else None
    a.drug_type = _limpar(a.drug_type)
    return a


def validar_acao(a: AcaoAtendimento) -> AcaoAtendimento:
    if _vazio(a.professional_id) or _vazio(a.procedure_id) or _vazio(a.action_date):
        raise DadosInvalidos("Profissional, Procedimento e Data sao obrigatorios!")
    if isinstance(a.quantity, bool) or not isinstance(a.quantity, int) or a.quantity < 1:
        raise DadosInvalidos(f"Quantidade deve ser inteiro positivo (recebido {a.quantity!r})")
    a.action_date = _data(a.action_date, "action_date")
    a.notes = _limpar(a.notes)
    return a
