"""Tests das tools MCP: formatacao, tratamento de erros e fluxo completo."""

from __future__ import annotations

import json
import logging
from datetime import date

import pytest

from caps_raas.cadastro.types import Paciente
from caps_raas.shared.errors import DadosInvalidos, safe_tool
from caps_raas.tools import (
    _json,
    _opcional,
    atendimento_tools,
    cadastro_tools,
    exportacao_tools,
    health_tools,
)


class FakeMCP:
    """Substitui FastMCP: guarda as tools registradas pelo nome."""

    def __init__(self):
        self.tools = {}

    def tool(self):
        def deco(fn):
            self.tools[fn.__name__] = fn
            return fn

        return deco


@pytest.fixture()
def tools(client, settings):
    mcp = FakeMCP()
    cadastro_tools.register(mcp, lambda: client)
    atendimento_tools.register(mcp, lambda: client)
    exportacao_tools.register(mcp, lambda: client, lambda: settings)
    health_tools.register(mcp, lambda: client, lambda: settings)
    return mcp.tools


def _id(resposta: str) -> str:
    for linha in resposta.splitlines():
        if linha.startswith("ID: "):
            return linha[len("ID: "):]
    raise AssertionError(f"sem ID em {resposta!r}")


class TestJson:
    def test_dict_simples(self):
        result = _json({"active": True, "name": "Ana"})
        assert "Ativo: Sim" in result
        assert "Nome: Ana" in result

    def test_none(self):
        assert _json({"cpf": None}) == "CPF: -"

    def test_datas(self):
        result = _json({"admission_date": date(2024, 3, 5)})
        assert result == "Admissão: 2024-03-05"

    def test_dataclass(self):
        result = _json(Paciente(name="Ana", sex="F"))
        assert "Nome: Ana" in result
        assert "Sexo: F" in result

    def test_lista(self):
        result = _json([{"name": "A"}, {"name": "B"}])
        assert "Resultados (2):" in result
        assert "[2]" in result

    def test_lista_vazia(self):
        assert _json([]) == "Resultados: (nenhum)"

    def test_chave_sem_rotulo(self):
        assert _json({"campo_livre": 1}) == "Campo livre: 1"


class TestHelpers:
    def test_opcional(self):
        assert _opcional("  ") is None
        assert _opcional(" x ") == "x"


class TestSafeTool:
    def test_erro_de_cadastro(self, caplog):
        @safe_tool
        def quebra() -> str:
            raise DadosInvalidos("Informe CNS ou CPF!")

        with caplog.at_level(logging.WARNING, logger="caps_raas.errors"):
            data = json.loads(quebra())
        assert data == {"erro": "Informe CNS ou CPF!", "tool": "quebra"}
        assert "quebra" in caplog.text

    def test_erro_inesperado(self):
        @safe_tool
        def quebra() -> str:
            raise KeyError("x")

        data = json.loads(quebra())
        assert data["erro"].startswith("Erro interno: KeyError")

    def test_preserva_nome(self):
        @safe_tool
        def minha_tool() -> str:
            """Doc."""
            return "ok"

        assert minha_tool.__name__ == "minha_tool"
        assert minha_tool.__doc__ == "Doc."
        assert minha_tool() == "ok"


class TestRegistro:
    def test_27_tools(self, tools):
        assert len(tools) == 27
        assert {"cadastrar_paciente", "exportar_raas", "health_check"} <= set(tools)

    def test_catalogo_editavel(self, tools):
        assert {
            "buscar_profissional", "atualizar_profissional",
            "buscar_procedimento", "atualizar_procedimento",
            "alterar_status_procedimento",
        } <= set(tools)


class TestFluxo:
    def test_cadastro_atendimento_exportacao(self, tools, settings):
        pac = _id(tools["cadastrar_paciente"](
            name="Ana Silva", birth_date="1990-01-02", sex="F",
            race_color="03", cns="700000000000001",
        ))
        prof = _id(tools["cadastrar_profissional"](
            name="Dra. Clara", cbo_code="225133", cbo_description="Psiquiatra",
        ))
        proc = _id(tools["cadastrar_procedimento"](
            sigtap_code="0301080208", description="Atendimento individual",
        ))
        resp = tools["registrar_atendimento"](
            paciente_id=pac, admission_date="2024-03-05", cid_primary="f200",
        )
        assert "Competência: 2024-03" in resp
        atd = _id(resp)
        assert "adicionado" in tools["adicionar_acao"](
            atendimento_id=atd, profissional_id=prof,
            procedimento_id=proc, action_date="2024-03-05",
        )

        acoes = tools["listar_acoes"](atendimento_id=atd)
        assert "Dra. Clara" in acoes
        assert "0301080208" in acoes
        assert "Ana Silva" in tools["listar_atendimentos"]()

        export = tools["exportar_raas"]()
        assert "Arquivo: AAC" in export
        assert "Linhas Exportadas: 1" in export
        assert len(list(settings.export_dir.iterdir())) == 1

    def test_paciente_sem_documento(self, tools):
        data = json.loads(tools["cadastrar_paciente"](
            name="Ana", birth_date="1990-01-02", sex="F", race_color="03",
        ))
        assert data["erro"] == "Informe CNS ou CPF!"
        assert data["tool"] == "cadastrar_paciente"

    def test_procedimento_duplicado(self, tools):
        tools["cadastrar_procedimento"](sigtap_code="0301080208", description="X")
        data = json.loads(tools["cadastrar_procedimento"](
            sigtap_code="0301080208", description="Y",
        ))
        assert data == {
            "erro": "Procedimento SIGTAP '0301080208' ja cadastrado.",
            "tool": "cadastrar_procedimento",
        }

    def test_atualizar_paciente_campo_invalido(self, tools):
        pac = _id(tools["cadastrar_paciente"](
            name="Ana", birth_date="1990-01-02", sex="F",
            race_color="03", cpf="12345678901",
        ))
        data = json.loads(tools["atualizar_paciente"](
            paciente_id=pac, campo="id", valor="x",
        ))
        assert "nao editavel" in data["erro"]
        tools["atualizar_paciente"](paciente_id=pac, campo="phone", valor="98999990000")
        assert "Telefone: 98999990000" in tools["buscar_paciente"](paciente_id=pac)

    def test_excluir_inexistente(self, tools):
        data = json.loads(tools["excluir_atendimento"](atendimento_id="nao-existe"))
        assert "nao encontrado" in data["erro"]

    def test_exportar_sem_atendimentos(self, tools):
        data = json.loads(tools["exportar_raas"]())
        assert data["erro"] == "Nao ha atendimentos para exportar!"

    def test_profissional_inativo_some_da_lista(self, tools):
        prof = _id(tools["cadastrar_profissional"](
            name="Joao", cbo_code="251510", cbo_description="Psicologo",
        ))
        tools["alterar_status_profissional"](profissional_id=prof, ativo=False)
        assert "Joao" not in tools["listar_profissionais"]()
        assert "Joao" in tools["listar_profissionais"](incluir_inativos=True)

    def test_atualizar_profissional(self, tools):
        prof = _id(tools["cadastrar_profissional"](
            name="Joao", cbo_code="251510", cbo_description="Psicologo",
        ))
        resp = tools["atualizar_profissional"](
            profissional_id=prof, campo="cbo_description", valor="Psicologo clinico",
        )
        assert "atualizado" in resp
        assert "Ocupação: Psicologo clinico" in tools["buscar_profissional"](
            profissional_id=prof
        )

    def test_atualizar_profissional_campo_obrigatorio_vazio(self, tools):
        prof = _id(tools["cadastrar_profissional"](
            name="Joao", cbo_code="251510", cbo_description="Psicologo",
        ))
        data = json.loads(tools["atualizar_profissional"](
            profissional_id=prof, campo="name", valor="  ",
        ))
        assert "obrigatorios" in data["erro"]

    def test_atualizar_procedimento(self, tools):
        proc = _id(tools["cadastrar_procedimento"](
            sigtap_code="0301080208", description="Atendimento individual",
        ))
        tools["atualizar_procedimento"](
            procedimento_id=proc, campo="description", valor="Atendimento em grupo",
        )
        assert "Descrição: Atendimento em grupo" in tools["buscar_procedimento"](
            procedimento_id=proc
        )

    def test_atualizar_procedimento_campo_active_recusado(self, tools):
        proc = _id(tools["cadastrar_procedimento"](
            sigtap_code="0301080208", description="X",
        ))
        data = json.loads(tools["atualizar_procedimento"](
            procedimento_id=proc, campo="active", valor="false",
        ))
        assert "nao editavel" in data["erro"]

    def test_atualizar_procedimento_para_sigtap_existente(self, tools):
        tools["cadastrar_procedimento"](sigtap_code="0301080208", description="X")
        outro = _id(tools["cadastrar_procedimento"](
            sigtap_code="0301080020", description="Y",
        ))
        data = json.loads(tools["atualizar_procedimento"](
            procedimento_id=outro, campo="sigtap_code", valor="0301080208",
        ))
        assert "ja cadastrado" in data["erro"]

    def test_procedimento_em_uso_pode_ser_desativado(self, tools):
        pac = _id(tools["cadastrar_paciente"](
            name="Ana", birth_date="1990-01-02", sex="F",
            race_color="03", cns="700000000000001",
        ))
        prof = _id(tools["cadastrar_profissional"](
            name="Dra. Clara", cbo_code="225133", cbo_description="Psiquiatra",
        ))
        proc = _id(tools["cadastrar_procedimento"](
            sigtap_code="0301080208", description="Atendimento individual",
        ))
        atd = _id(tools["registrar_atendimento"](
            paciente_id=pac, admission_date="2024-03-05", cid_primary="F200",
        ))
        tools["adicionar_acao"](
            atendimento_id=atd, profissional_id=prof,
            procedimento_id=proc, action_date="2024-03-05",
        )

        data = json.loads(tools["excluir_procedimento"](procedimento_id=proc))
        assert "desative" in data["erro"]

        resp = tools["alterar_status_procedimento"](procedimento_id=proc, ativo=False)
        assert "Ativo: Não" in resp
        assert "0301080208" not in tools["listar_procedimentos"]()
        assert "0301080208" in tools["listar_procedimentos"](incluir_inativos=True)


class TestHealth:
    def test_health_ok(self, tools):
        resp = tools["health_check"]()
        assert resp.startswith("Status: ok")

    def test_info_servidor(self, tools, client):
        client.pacientes.count()
        resp = tools["info_servidor"]()
        assert "Total tools: 27" in resp
        assert "6981291" in resp
        assert "patients.count" in resp

    def test_estatisticas(self, tools):
        assert "Pacientes: 0" in tools["estatisticas"]()
