"""Shared fixtures for caps-raas tests."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from caps_raas.cadastro.client import CadastroClient
from caps_raas.cadastro.types import Atendimento, Paciente
from caps_raas.config import EstabelecimentoConfig, Settings, StoreConfig


@pytest.fixture()
def estabelecimento() -> EstabelecimentoConfig:
    """Identificacao do CAPS igual ao default de producao."""
    return EstabelecimentoConfig(
        nome="CAPS 3 DR BACELAR VIANA",
        cnes="6981291",
        ibge="2111300",
        sigla_orgao="SESMA",
        cnpj_orgao="00000000000000",
        orgao_destino="SECRETARIA MUNICIPAL DE SAUDE",
        sufixo_arquivo="BVSES",
    )


@pytest.fixture()
def settings(tmp_path, estabelecimento) -> Settings:
    return Settings(
        estabelecimento=estabelecimento,
        store=StoreConfig(db_path=":memory:"),
        export_dir=tmp_path / "exportacoes",
    )


@pytest.fixture()
def client():
    """CadastroClient sobre DuckDB in-memory."""
    c = CadastroClient.in_memory()
    yield c
    c.close()


@pytest.fixture()
def paciente_ana() -> Paciente:
    return Paciente(
        id="pac-1",
        name="Ana Silva",
        birth_date=date(1990, 1, 2),
        sex="F",
        race_color="03",
        cns="700000000000001",
        mother_name="Maria Silva",
        address_street="Rua das Flores",
        address_number="12",
        address_zipcode="65000000",
        address_neighborhood="Centro",
        phone="9832320000",
        email="ana@example.com",
    )


@pytest.fixture()
def atendimento_ana() -> Atendimento:
    return Atendimento(
        id="atd-1",
        patient_id="pac-1",
        admission_date=date(2024, 3, 5),
        month_reference="2024-03",
        cid_primary="F200",
        patient_destination="00",
    )


@pytest.fixture()
def novo_paciente():
    """Fabrica de pacientes validos (sem id) para gravar no banco."""

    def _make(**overrides) -> Paciente:
        dados = dict(
            name="ANA SILVA",
            birth_date="1990-01-02",
            sex="F",
            race_color="03",
            cns="700000000000001",
        )
        dados.update(overrides)
        return Paciente(**dados)

    return _make


@pytest.fixture()
def mock_duckdb_conn():
    """Mock de duckdb.connect() para testes sem I/O."""
    conn = MagicMock()
    conn.execute.return_value = conn
    conn.description = None
    conn.fetchall.return_value = []
    return conn
