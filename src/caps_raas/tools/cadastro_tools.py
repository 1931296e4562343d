"""Tools MCP para cadastro de pacientes, profissionais e procedimentos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..cadastro.types import Paciente, Procedimento, Profissional
from ..shared.errors import DadosInvalidos, safe_tool
from . import _json, _opcional

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..cadastro.client import CadastroClient

_PACIENTE_EDITAVEIS = set(Paciente.colunas()) - {"id", "created_at", "updated_at"}
# `active` muda so pelas tools de status
_PROFISSIONAL_EDITAVEIS = {"name", "cbo_code", "cbo_description", "cns", "cpf"}
_PROCEDIMENTO_EDITAVEIS = {"sigtap_code", "description", "procedure_type"}


def _checar_campo(campo: str, editaveis: set[str]) -> None:
    if campo not in editaveis:
        opcoes = ", ".join(sorted(editaveis))
        raise DadosInvalidos(f"Campo '{campo}' nao editavel. Use um de: {opcoes}")


def register(mcp: "FastMCP", get_client: Callable[[], "CadastroClient"]) -> None:
    """Registra 17 tools de cadastro no servidor MCP."""

    # ── Pacientes ─────────────────────────────────────────────────

    @mcp.tool()
    @safe_tool
    def cadastrar_paciente(
        name: str,
        birth_date: str,
        sex: str,
        race_color: str,
        cns: str = "",
        cpf: str = "",
        prontuario: str = "",
        mother_name: str = "",
        responsible_name: str = "",
        address_street: str = "",
        address_number: str = "",
        address_complement: str = "",
        address_neighborhood: str = "",
        address_zipcode: str = "",
        phone: str = "",
        mobile: str = "",
        email: str = "",
    ) -> str:
        """Cadastra um paciente do CAPS.

        Obrigatorios: nome, data de nascimento, sexo e raca/cor.
        Informe CNS ou CPF (ao menos um).

        Args:
            name: Nome completo.
            birth_date: Data de nascimento AAAA-MM-DD.
            sex: 'M' ou 'F'.
            race_color: 01 Branca, 02 Preta, 03 Parda, 04 Amarela, 05 Indigena.
            cns: Cartao Nacional de Saude (15 digitos).
            cpf: CPF (11 digitos).
        """
        pac = get_client().pacientes.create(Paciente(
            name=name,
            birth_date=birth_date,  # type: ignore[arg-type]
            sex=sex,
            race_color=race_color,
            cns=_opcional(cns),
            cpf=_opcional(cpf),
            prontuario=_opcional(prontuario),
            mother_name=_opcional(mother_name),
            responsible_name=_opcional(responsible_name),
            address_street=_opcional(address_street),
            address_number=_opcional(address_number),
            address_complement=_opcional(address_complement),
            address_neighborhood=_opcional(address_neighborhood),
            address_zipcode=_opcional(address_zipcode),
            phone=_opcional(phone),
            mobile=_opcional(mobile),
            email=_opcional(email),
        ))
        return _json({"msg": "Paciente cadastrado com sucesso!", "id": pac.id})

    @mcp.tool()
    @safe_tool
    def listar_pacientes(busca: str = "") -> str:
        """Lista pacientes em ordem alfabetica, com filtro opcional por nome.

        Args:
            busca: Trecho do nome. Vazio lista todos.
        """
        c = get_client()
        if busca.strip():
            pacientes = c.pacientes.buscar_por_nome(busca.strip())
        else:
            pacientes = c.pacientes.list_all(order_by="name")
        return _json([
            {"id": p.id, "name": p.name, "cns": p.cns, "cpf": p.cpf,
             "birth_date": p.birth_date}
            for p in pacientes
        ])

    @mcp.tool()
    @safe_tool
    def buscar_paciente(paciente_id: str) -> str:
        """Retorna o cadastro completo de um paciente pelo ID."""
        return _json(get_client().pacientes.get(paciente_id))

    @mcp.tool()
    @safe_tool
    def atualizar_paciente(paciente_id: str, campo: str, valor: str) -> str:
        """Atualiza um campo do cadastro do paciente.

        Args:
            paciente_id: ID do paciente.
            campo: Nome da coluna (ex: 'phone', 'address_street').
            valor: Novo valor. Vazio limpa campos opcionais.
        """
        _checar_campo(campo, _PACIENTE_EDITAVEIS)
        get_client().pacientes.update(paciente_id, **{campo: _opcional(valor)})
        return _json({"msg": "Paciente atualizado com sucesso!"})

    @mcp.tool()
    @safe_tool
    def excluir_paciente(paciente_id: str) -> str:
        """Exclui um paciente sem atendimentos registrados."""
        get_client().pacientes.delete(paciente_id)
        return _json({"msg": "Paciente excluido!"})

    # ── Profissionais ─────────────────────────────────────────────

    @mcp.tool()
    @safe_tool
    def cadastrar_profissional(
        name: str,
        cbo_code: str,
        cbo_description: str,
        cns: str = "",
        cpf: str = "",
    ) -> str:
        """Cadastra um profissional do CAPS.

        Args:
            name: Nome completo.
            cbo_code: Codigo CBO (6 digitos). Ex: '225133' (psiquiatra).
            cbo_description: Descricao da ocupacao.
        """
        prof = get_client().profissionais.create(Profissional(
            name=name,
            cbo_code=cbo_code,
            cbo_description=cbo_description,
            cns=_opcional(cns),
            cpf=_opcional(cpf),
        ))
        return _json({"msg": "Profissional cadastrado com sucesso!", "id": prof.id})

    @mcp.tool()
    @safe_tool
    def listar_profissionais(incluir_inativos: bool = False) -> str:
        """Lista profissionais (somente ativos por padrao)."""
        c = get_client()
        profs = (
            c.profissionais.list_all(order_by="name")
            if incluir_inativos else c.profissionais.list_ativos()
        )
        return _json([
            {"id": p.id, "name": p.name, "cbo_code": p.cbo_code,
             "cbo_description": p.cbo_description, "active": p.active}
            for p in profs
        ])

    @mcp.tool()
    @safe_tool
    def buscar_profissional(profissional_id: str) -> str:
        """Retorna o cadastro completo de um profissional pelo ID."""
        return _json(get_client().profissionais.get(profissional_id))

    @mcp.tool()
    @safe_tool
    def atualizar_profissional(profissional_id: str, campo: str, valor: str) -> str:
        """Atualiza um campo do cadastro do profissional.

        Args:
            profissional_id: ID do profissional.
            campo: name, cbo_code, cbo_description, cns ou cpf.
            valor: Novo valor. Vazio limpa CNS/CPF.
        """
        _checar_campo(campo, _PROFISSIONAL_EDITAVEIS)
        get_client().profissionais.update(profissional_id, **{campo: _opcional(valor)})
        return _json({"msg": "Profissional atualizado com sucesso!"})

    @mcp.tool()
    @safe_tool
    def alterar_status_profissional(profissional_id: str, ativo: bool) -> str:
        """Ativa ou desativa um profissional."""
        get_client().profissionais.update(profissional_id, active=ativo)
        return _json({"msg": "Status atualizado!", "active": ativo})

    @mcp.tool()
    @safe_tool
    def excluir_profissional(profissional_id: str) -> str:
        """Exclui um profissional sem acoes registradas."""
        get_client().profissionais.delete(profissional_id)
        return _json({"msg": "Profissional excluido!"})

    # ── Procedimentos ─────────────────────────────────────────────

    @mcp.tool()
    @safe_tool
    def cadastrar_procedimento(
        sigtap_code: str, description: str, procedure_type: str = ""
    ) -> str:
        """Cadastra um procedimento da tabela SIGTAP.

        Args:
            sigtap_code: Codigo SIGTAP (10 digitos). Ex: '0301080208'.
            description: Descricao do procedimento.
            procedure_type: Categoria opcional.
        """
        proc = get_client().procedimentos.create(Procedimento(
            sigtap_code=sigtap_code,
            description=description,
            procedure_type=_opcional(procedure_type),
        ))
        return _json({"msg": "Procedimento cadastrado com sucesso!", "id": proc.id})

    @mcp.tool()
    @safe_tool
    def listar_procedimentos(incluir_inativos: bool = False) -> str:
        """Lista procedimentos (somente ativos por padrao)."""
        c = get_client()
        procs = (
            c.procedimentos.list_all(order_by="description")
            if incluir_inativos else c.procedimentos.list_ativos()
        )
        return _json([
            {"id": p.id, "sigtap_code": p.sigtap_code,
             "description": p.description, "active": p.active}
            for p in procs
        ])

    @mcp.tool()
    @safe_tool
    def buscar_procedimento(procedimento_id: str) -> str:
        """Retorna o cadastro completo de um procedimento pelo ID."""
        return _json(get_client().procedimentos.get(procedimento_id))

    @mcp.tool()
    @safe_tool
    def atualizar_procedimento(procedimento_id: str, campo: str, valor: str) -> str:
        """Atualiza um campo do procedimento.

        Args:
            procedimento_id: ID do procedimento.
            campo: sigtap_code, description ou procedure_type.
            valor: Novo valor. Vazio limpa procedure_type.
        """
        _checar_campo(campo, _PROCEDIMENTO_EDITAVEIS)
        get_client().procedimentos.update(procedimento_id, **{campo: _opcional(valor)})
        return _json({"msg": "Procedimento atualizado com sucesso!"})

    @mcp.tool()
    @safe_tool
    def alterar_status_procedimento(procedimento_id: str, ativo: bool) -> str:
        """Ativa ou desativa um procedimento (procedimento em uso nao pode ser excluido)."""
        get_client().procedimentos.update(procedimento_id, active=ativo)
        return _json({"msg": "Status atualizado!", "active": ativo})

    @mcp.tool()
    @safe_tool
    def excluir_procedimento(procedimento_id: str) -> str:
        """Exclui um procedimento sem acoes registradas."""
        get_client().procedimentos.delete(procedimento_id)
        return _json({"msg": "Procedimento excluido!"})
