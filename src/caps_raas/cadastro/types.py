"""Registros das 5 tabelas do cadastro CAPS.

Os nomes dos campos sao os nomes das colunas no DuckDB (patients, attendances, ...).
Datas sao `datetime.date`; codigos (CNS, CPF, CID, SIGTAP, CBO) sao str.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any, TypeVar

R = TypeVar("R", bound="Registro")


@dataclass
class Registro:
    """Base comum: id + timestamps, conversao de/para linhas do DuckDB."""

    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def colunas(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_row(cls: type[R], row: dict[str, Any]) -> R:
        nomes = set(cls.colunas())
        return cls(**{k: v for k, v in row.items() if k in nomes})

    def to_row(self) -> dict[str, Any]:
        return asdict(self)


# ── Cadastros basicos ─────────────────────────────────────────────


@dataclass
class Paciente(Registro):
    name: str = ""
    birth_date: date | None = None
    sex: str = ""
    race_color: str = ""
    cns: str | None = None
    cpf: str | None = None
    prontuario: str | None = None
    mother_name: str | None = None
    responsible_name: str | None = None
    address_street: str | None = None
    address_number: str | None = None
    address_complement: str | None = None
    address_neighborhood: str | None = None
    address_zipcode: str | None = None
    phone: str | None = None
    mobile: str | None = None
    email: str | None = None


@dataclass
class Profissional(Registro):
    name: str = ""
    cbo_code: str = ""
    cbo_description: str = ""
    cns: str | None = None
    cpf: str | None = None
    active: bool = True


@dataclass
class Procedimento(Registro):
    sigtap_code: str = ""
    description: str = ""
    procedure_type: str | None = None
    active: bool = True


# ── Atendimentos ──────────────────────────────────────────────────


@dataclass
class Atendimento(Registro):
    patient_id: str = ""
    admission_date: date | None = None
    month_reference: str = ""
    patient_origin: str = "01"
    cid_primary: str = ""
    cid_secondary1: str | None = None
    cid_secondary2: str | None = None
    cid_secondary3: str | None = None
    esf_coverage: str = "N"
    esf_cnes: str | None = None
    homeless_situation: str = "N"
    drug_user: str = "N"
    drug_type: str | None = None
    patient_destination: str = "00"


@dataclass
class AcaoAtendimento(Registro):
    attendance_id: str = ""
    professional_id: str = ""
    procedure_id: str = ""
    action_date: date | None = None
    quantity: int = 1
    notes: str | None = None
