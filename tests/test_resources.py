"""Tests dos resources do cadastro sobre DuckDB in-memory."""

from __future__ import annotations

from datetime import date

import pytest

from caps_raas.cadastro.types import (
    AcaoAtendimento,
    Atendimento,
    Procedimento,
    Profissional,
)
from caps_raas.shared.errors import DadosInvalidos, RegistroNaoEncontrado


def _atendimento(patient_id: str, admissao: str = "2024-03-05", **kw) -> Atendimento:
    return Atendimento(
        patient_id=patient_id, admission_date=admissao, cid_primary="f200", **kw
    )


@pytest.fixture()
def catalogo(client):
    prof = client.profissionais.create(Profissional(
        name="Dra. Clara", cbo_code="225133", cbo_description="Medico psiquiatra",
    ))
    proc = client.procedimentos.create(Procedimento(
        sigtap_code="0301080208", description="Atendimento individual em CAPS",
    ))
    return prof, proc


class TestPacientes:
    def test_create_gera_id_e_timestamps(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        assert pac.id
        assert pac.created_at is not None
        lido = client.pacientes.get(pac.id)
        assert lido.name == "ANA SILVA"
        assert lido.birth_date == date(1990, 1, 2)
        assert lido.cns == "700000000000001"

    def test_exige_cns_ou_cpf(self, client, novo_paciente):
        with pytest.raises(DadosInvalidos, match="CNS ou CPF"):
            client.pacientes.create(novo_paciente(cns="  ", cpf=None))

    def test_aceita_so_cpf(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente(cns=None, cpf="12345678901"))
        assert client.pacientes.get(pac.id).cpf == "12345678901"

    def test_campos_obrigatorios(self, client, novo_paciente):
        with pytest.raises(DadosInvalidos, match="obrigatorios"):
            client.pacientes.create(novo_paciente(name=""))

    def test_sexo_invalido(self, client, novo_paciente):
        with pytest.raises(DadosInvalidos, match="sex"):
            client.pacientes.create(novo_paciente(sex="X"))

    def test_data_invalida(self, client, novo_paciente):
        with pytest.raises(DadosInvalidos, match="birth_date"):
            client.pacientes.create(novo_paciente(birth_date="02/01/1990"))

    def test_update_revalida_cns_ou_cpf(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        with pytest.raises(DadosInvalidos):
            client.pacientes.update(pac.id, cns=None)

    def test_update_altera_campo(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        client.pacientes.update(pac.id, phone="98999990000")
        assert client.pacientes.get(pac.id).phone == "98999990000"

    def test_update_campo_imutavel(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        with pytest.raises(DadosInvalidos, match="nao editaveis"):
            client.pacientes.update(pac.id, id="outro")

    def test_update_campo_inexistente(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        with pytest.raises(DadosInvalidos):
            client.pacientes.update(pac.id, idade=30)

    def test_get_inexistente(self, client):
        assert client.pacientes.get_by_id("nao-existe") is None
        with pytest.raises(RegistroNaoEncontrado):
            client.pacientes.get("nao-existe")

    def test_busca_por_nome_case_insensitive(self, client, novo_paciente):
        client.pacientes.create(novo_paciente(name="Ana Silva"))
        client.pacientes.create(novo_paciente(name="Bruno Costa"))
        encontrados = client.pacientes.buscar_por_nome("silva")
        assert [p.name for p in encontrados] == ["Ana Silva"]

    def test_nao_exclui_paciente_com_atendimento(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        client.atendimentos.create(_atendimento(pac.id))
        with pytest.raises(DadosInvalidos, match="atendimentos"):
            client.pacientes.delete(pac.id)

    def test_delete(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        client.pacientes.delete(pac.id)
        assert client.pacientes.count() == 0


class TestCatalogo:
    def test_list_ativos(self, client, catalogo):
        prof, _ = catalogo
        client.profissionais.create(Profissional(
            name="Joao", cbo_code="251510", cbo_description="Psicologo", active=False,
        ))
        assert [p.name for p in client.profissionais.list_ativos()] == ["Dra. Clara"]
        assert client.profissionais.count() == 2

    def test_desativar(self, client, catalogo):
        prof, _ = catalogo
        client.profissionais.update(prof.id, active=False)
        assert client.profissionais.list_ativos() == []

    def test_profissional_obrigatorios(self, client):
        with pytest.raises(DadosInvalidos, match="CBO"):
            client.profissionais.create(Profissional(name="X", cbo_code=""))

    def test_procedimento_obrigatorios(self, client):
        with pytest.raises(DadosInvalidos, match="SIGTAP"):
            client.procedimentos.create(Procedimento(sigtap_code="0301080208"))

    def test_get_by_sigtap(self, client, catalogo):
        _, proc = catalogo
        assert client.procedimentos.get_by_sigtap(" 0301080208 ").id == proc.id
        assert client.procedimentos.get_by_sigtap("0000000000") is None

    def test_sigtap_duplicado(self, client, catalogo):
        with pytest.raises(DadosInvalidos, match="ja cadastrado"):
            client.procedimentos.create(Procedimento(
                sigtap_code="0301080208", description="Outro",
            ))
        assert client.procedimentos.count() == 1

    def test_update_mantem_proprio_sigtap(self, client, catalogo):
        _, proc = catalogo
        client.procedimentos.update(proc.id, description="Atendimento em grupo")
        assert client.procedimentos.get(proc.id).description == "Atendimento em grupo"

    def test_nao_exclui_catalogo_em_uso(self, client, catalogo, novo_paciente):
        prof, proc = catalogo
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id))
        client.acoes.create(AcaoAtendimento(
            attendance_id=atd.id, professional_id=prof.id,
            procedure_id=proc.id, action_date="2024-03-05",
        ))
        with pytest.raises(DadosInvalidos):
            client.profissionais.delete(prof.id)
        with pytest.raises(DadosInvalidos):
            client.procedimentos.delete(proc.id)


class TestAtendimentos:
    def test_deriva_mes_referencia(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id, "2024-03-05"))
        assert atd.month_reference == "2024-03"
        lido = client.atendimentos.get(atd.id)
        assert lido.month_reference == "2024-03"
        assert lido.admission_date == date(2024, 3, 5)
        assert lido.cid_primary == "F200"

    def test_update_recalcula_mes_referencia(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id, "2024-03-05"))
        client.atendimentos.update(atd.id, admission_date="2024-11-20")
        assert client.atendimentos.get(atd.id).month_reference == "2024-11"

    def test_defaults(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.get(client.atendimentos.create(_atendimento(pac.id)).id)
        assert atd.patient_origin == "01"
        assert atd.patient_destination == "00"
        assert atd.esf_coverage == "N"
        assert atd.homeless_situation == "N"
        assert atd.drug_user == "N"

    def test_paciente_inexistente(self, client):
        with pytest.raises(RegistroNaoEncontrado, match="Paciente"):
            client.atendimentos.create(_atendimento("nao-existe"))

    def test_cid_obrigatorio(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        with pytest.raises(DadosInvalidos, match="CID"):
            client.atendimentos.create(Atendimento(
                patient_id=pac.id, admission_date="2024-03-05",
            ))

    def test_flag_invalida(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        with pytest.raises(DadosInvalidos, match="esf_coverage"):
            client.atendimentos.create(_atendimento(pac.id, esf_coverage="X"))

    def test_cnes_esf_so_com_cobertura(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        sem = client.atendimentos.create(
            _atendimento(pac.id, esf_coverage="N", esf_cnes="1234567")
        )
        com = client.atendimentos.create(
            _atendimento(pac.id, esf_coverage="S", esf_cnes="1234567")
        )
        assert client.atendimentos.get(sem.id).esf_cnes is None
        assert client.atendimentos.get(com.id).esf_cnes == "1234567"

    def test_ordenacao(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        for d in ("2024-05-01", "2024-03-05", "2024-04-10"):
            client.atendimentos.create(_atendimento(pac.id, d))
        crescente = [a.admission_date.isoformat()
                     for a in client.atendimentos.list_para_exportacao()]
        assert crescente == ["2024-03-05", "2024-04-10", "2024-05-01"]
        recentes = [a.admission_date.isoformat()
                    for a in client.atendimentos.list_recentes()]
        assert recentes == ["2024-05-01", "2024-04-10", "2024-03-05"]

    def test_list_por_competencia(self, client, novo_paciente):
        pac = client.pacientes.create(novo_paciente())
        client.atendimentos.create(_atendimento(pac.id, "2024-03-05"))
        client.atendimentos.create(_atendimento(pac.id, "2024-04-10"))
        assert len(client.atendimentos.list_por_competencia("2024-04")) == 1

    def test_delete_remove_acoes(self, client, catalogo, novo_paciente):
        prof, proc = catalogo
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id))
        client.acoes.create(AcaoAtendimento(
            attendance_id=atd.id, professional_id=prof.id,
            procedure_id=proc.id, action_date="2024-03-05", quantity=2,
        ))
        assert client.acoes.count() == 1
        client.atendimentos.delete(atd.id)
        assert client.acoes.count() == 0
        assert client.atendimentos.count() == 0


class TestAcoes:
    def test_list_by_atendimento_com_nomes(self, client, catalogo, novo_paciente):
        prof, proc = catalogo
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id))
        for d in ("2024-03-05", "2024-03-12"):
            client.acoes.create(AcaoAtendimento(
                attendance_id=atd.id, professional_id=prof.id,
                procedure_id=proc.id, action_date=d,
            ))
        acoes = client.acoes.list_by_atendimento(atd.id)
        assert len(acoes) == 2
        assert acoes[0]["action_date"] == date(2024, 3, 12)
        assert acoes[0]["professional_name"] == "Dra. Clara"
        assert acoes[0]["sigtap_code"] == "0301080208"
        assert acoes[0]["quantity"] == 1

    @pytest.mark.parametrize("quantidade", [0, -1, True, "2"])
    def test_quantidade_positiva(self, client, catalogo, novo_paciente, quantidade):
        prof, proc = catalogo
        pac = client.pacientes.create(novo_paciente())
        atd = client.atendimentos.create(_atendimento(pac.id))
        with pytest.raises(DadosInvalidos, match="Quantidade"):
            client.acoes.create(AcaoAtendimento(
                attendance_id=atd.id, professional_id=prof.id,
                procedure_id=proc.id, action_date="2024-03-05", quantity=quantidade,
            ))

    def test_referencias_inexistentes(self, client, catalogo, novo_paciente):
        prof, proc = catalogo
        with pytest.raises(RegistroNaoEncontrado, match="Atendimento"):
            client.acoes.create(AcaoAtendimento(
                attendance_id="nao-existe", professional_id=prof.id,
                procedure_id=proc.id, action_date="2024-03-05",
            ))


class TestClient:
    def test_estatisticas(self, client, catalogo, novo_paciente):
        client.pacientes.create(novo_paciente())
        assert client.estatisticas() == {
            "pacientes": 1,
            "profissionais": 1,
            "procedimentos": 1,
            "atendimentos": 0,
            "acoes": 0,
        }

    def test_metricas(self, client, novo_paciente):
        client.pacientes.create(novo_paciente())
        client.pacientes.count()
        m = client.metrics
        assert m.writes == 1
        assert m.by_method["patients.create"].query_count == 1
        assert m.by_method["patients.count"].query_count == 1

    def test_connection(self, client):
        assert client.test_connection() is True
