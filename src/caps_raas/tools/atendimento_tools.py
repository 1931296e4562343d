"""Tools MCP para registro de atendimentos e suas acoes/procedimentos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..cadastro.types import AcaoAtendimento, Atendimento
from ..shared.errors import safe_tool
from . import _json, _opcional

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..cadastro.client import CadastroClient


def register(mcp: "FastMCP", get_client: Callable[[], "CadastroClient"]) -> None:
    """Registra 6 tools de atendimento no servidor MCP."""

    @mcp.tool()
    @safe_tool
    def registrar_atendimento(
        paciente_id: str,
        admission_date: str,
        cid_primary: str,
        patient_origin: str = "01",
        cid_secondary1: str = "",
        cid_secondary2: str = "",
        cid_secondary3: str = "",
        esf_coverage: str = "N",
        esf_cnes: str = "",
        patient_destination: str = "00",
        homeless_situation: str = "N",
        drug_user: str = "N",
        drug_type: str = "",
    ) -> str:
        """Registra um atendimento (RAAS) para um paciente.

        A competencia (mes de referencia) e derivada da data de admissao.

        Args:
            paciente_id: ID do paciente.
            admission_date: Data de admissao AAAA-MM-DD.
            cid_primary: CID principal (4 caracteres). Ex: 'F200'.
            patient_origin: 01 Demanda espontanea, 02 Atencao basica,
                03 Urgencia, 04 Outro CAPS, 05 Hospital dia, 06 Hospital psiquiatrico.
            esf_coverage: 'S' ou 'N'. Com 'S', informe esf_cnes (7 digitos).
            patient_destination: 00 Permanencia, 01 Outro CAPS,
                02 Atencao basica, 03 Alta, 04 Obito.
            homeless_situation: 'S' ou 'N'.
            drug_user: 'S' ou 'N'. Com 'S', informe drug_type.
        """
        atend = get_client().atendimentos.create(Atendimento(
            patient_id=paciente_id,
            admission_date=admission_date,  # type: ignore[arg-type]
            cid_primary=cid_primary,
            patient_origin=patient_origin,
            cid_secondary1=_opcional(cid_secondary1),
            cid_secondary2=_opcional(cid_secondary2),
            cid_secondary3=_opcional(cid_secondary3),
            esf_coverage=esf_coverage.upper(),
            esf_cnes=_opcional(esf_cnes),
            patient_destination=patient_destination,
            homeless_situation=homeless_situation.upper(),
            drug_user=drug_user.upper(),
            drug_type=_opcional(drug_type),
        ))
        return _json({
            "msg": "Atendimento registrado com sucesso!",
            "id": atend.id,
            "month_reference": atend.month_reference,
        })

    @mcp.tool()
    @safe_tool
    def listar_atendimentos(competencia: str = "") -> str:
        """Lista atendimentos, mais recentes primeiro.

        Args:
            competencia: Filtro opcional 'AAAA-MM'.
        """
        c = get_client()
        if competencia.strip():
            atendimentos = c.atendimentos.list_por_competencia(competencia.strip())
        else:
            atendimentos = c.atendimentos.list_recentes()
        ids = list({a.patient_id for a in atendimentos})
        nomes = {p.id: p.name for p in c.pacientes.list_by_ids(ids)}
        return _json([
            {
                "id": a.id,
                "paciente": nomes.get(a.patient_id, "-"),
                "admission_date": a.admission_date,
                "month_reference": a.month_reference,
                "cid_primary": a.cid_primary,
                "patient_origin": a.patient_origin,
                "patient_destination": a.patient_destination,
            }
            for a in atendimentos
        ])

    @mcp.tool()
    @safe_tool
    def excluir_atendimento(atendimento_id: str) -> str:
        """Exclui um atendimento e todas as suas acoes."""
        get_client().atendimentos.delete(atendimento_id)
        return _json({"msg": "Atendimento excluido!"})

    @mcp.tool()
    @safe_tool
    def adicionar_acao(
        atendimento_id: str,
        profissional_id: str,
        procedimento_id: str,
        action_date: str,
        quantity: int = 1,
        notes: str = "",
    ) -> str:
        """Adiciona uma acao/procedimento executado dentro de um atendimento.

        Args:
            atendimento_id: ID do atendimento.
            profissional_id: ID do profissional (ativo).
            procedimento_id: ID do procedimento SIGTAP (ativo).
            action_date: Data da acao AAAA-MM-DD.
            quantity: Quantidade (inteiro positivo).
        """
        acao = get_client().acoes.create(AcaoAtendimento(
            attendance_id=atendimento_id,
            professional_id=profissional_id,
            procedure_id=procedimento_id,
            action_date=action_date,  # type: ignore[arg-type]
            quantity=quantity,
            notes=_opcional(notes),
        ))
        return _json({"msg": "Acao/Procedimento adicionado!", "id": acao.id})

    @mcp.tool()
    @safe_tool
    def listar_acoes(atendimento_id: str) -> str:
        """Lista as acoes de um atendimento com profissional e procedimento."""
        c = get_client()
        c.atendimentos.get(atendimento_id)
        acoes = c.acoes.list_by_atendimento(atendimento_id)
        return _json([
            {
                "id": a["id"],
                "action_date": a["action_date"],
                "professional_name": a["professional_name"],
                "sigtap_code": a["sigtap_code"],
                "procedure_description": a["procedure_description"],
                "quantity": a["quantity"],
            }
            for a in acoes
        ])

    @mcp.tool()
    @safe_tool
    def excluir_acao(acao_id: str) -> str:
        """Exclui uma acao de atendimento."""
        get_client().acoes.delete(acao_id)
        return _json({"msg": "Acao excluida!"})
