"""MCP tools do cadastro CAPS e da exportacao RAAS."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Any


# ── Rótulos legíveis para campos comuns ──────────────────────────

_ROTULOS: dict[str, str] = {
    # Identificacao
    "id": "ID",
    "name": "Nome",
    "cns": "CNS",
    "cpf": "CPF",
    "prontuario": "Prontuário",
    "birth_date": "Nascimento",
    "sex": "Sexo",
    "race_color": "Raça/Cor",
    "mother_name": "Nome da Mãe",
    "responsible_name": "Responsável",
    # Endereco / contato
    "address_street": "Logradouro",
    "address_number": "Número",
    "address_complement": "Complemento",
    "address_neighborhood": "Bairro",
    "address_zipcode": "CEP",
    "phone": "Telefone",
    "mobile": "Celular",
    "email": "E-mail",
    # Profissional / procedimento
    "cbo_code": "CBO",
    "cbo_description": "Ocupação",
    "sigtap_code": "Código SIGTAP",
    "description": "Descrição",
    "procedure_type": "Tipo",
    "active": "Ativo",
    # Atendimento
    "patient_id": "Paciente",
    "admission_date": "Admissão",
    "month_reference": "Competência",
    "patient_origin": "Origem",
    "cid_primary": "CID Principal",
    "cid_secondary1": "CID Secundário 1",
    "cid_secondary2": "CID Secundário 2",
    "cid_secondary3": "CID Secundário 3",
    "esf_coverage": "Cobertura ESF",
    "esf_cnes": "CNES da ESF",
    "homeless_situation": "Situação de Rua",
    "drug_user": "Usuário de Substância",
    "drug_type": "Tipo de Substância",
    "patient_destination": "Destino",
    # Acoes
    "attendance_id": "Atendimento",
    "professional_id": "Profissional",
    "procedure_id": "Procedimento",
    "professional_name": "Profissional",
    "procedure_description": "Procedimento",
    "action_date": "Data",
    "quantity": "Quantidade",
    "notes": "Observações",
    # Exportacao / status
    "nome_arquivo": "Arquivo",
    "caminho": "Caminho",
    "competencia": "Competência",
    "total_atendimentos": "Atendimentos",
    "linhas_pacientes": "Linhas Exportadas",
    "ignorados": "Ignorados (sem paciente)",
    "pacientes": "Pacientes",
    "profissionais": "Profissionais",
    "procedimentos": "Procedimentos",
    "atendimentos": "Atendimentos",
    "acoes": "Ações",
    "erro": "Erro",
    "msg": "Mensagem",
    "created_at": "Criado em",
    "updated_at": "Atualizado em",
}


def _valor(valor: Any) -> Any:
    if isinstance(valor, datetime):
        return valor.strftime("%Y-%m-%d %H:%M")
    if isinstance(valor, date):
        return valor.isoformat()
    return valor


def _formatar(dados: Any, nivel: int = 0) -> str:
    """Formata dados estruturados como texto legível."""
    prefixo = "  " * nivel

    if dataclasses.is_dataclass(dados) and not isinstance(dados, type):
        dados = dataclasses.asdict(dados)

    if isinstance(dados, dict):
        linhas: list[str] = []
        for chave, valor in dados.items():
            rotulo = _ROTULOS.get(chave, chave.replace("_", " ").capitalize())
            valor = _valor(valor)

            if isinstance(valor, bool):
                linhas.append(f"{prefixo}{rotulo}: {'Sim' if valor else 'Não'}")
            elif valor is None:
                linhas.append(f"{prefixo}{rotulo}: -")
            elif isinstance(valor, dict):
                linhas.append(f"{prefixo}{rotulo}:")
                linhas.append(_formatar(valor, nivel + 1))
            elif isinstance(valor, list):
                if not valor:
                    linhas.append(f"{prefixo}{rotulo}: (nenhum)")
                elif all(isinstance(v, str) for v in valor):
                    linhas.append(f"{prefixo}{rotulo}:")
                    for item in valor:
                        linhas.append(f"{prefixo}  - {item}")
                else:
                    linhas.append(f"{prefixo}{rotulo} ({len(valor)}):")
                    for i, item in enumerate(valor, 1):
                        linhas.append(f"{prefixo}  [{i}]")
                        linhas.append(_formatar(item, nivel + 2))
            else:
                linhas.append(f"{prefixo}{rotulo}: {valor}")
        return "\n".join(linhas)

    elif isinstance(dados, list):
        return _formatar({"resultados": dados}, nivel)

    return f"{prefixo}{dados}"


def _json(data: Any) -> str:
    """Formata dados como texto legível para consumo por LLM."""
    return _formatar(data)


def _opcional(valor: str) -> str | None:
    """Parametro de tool vazio ('') vira None."""
    valor = valor.strip()
    return valor or None
