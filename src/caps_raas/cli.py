"""
Linha de comando do CAPS/RAAS.

Uso:
  caps-raas exportar [--saida DIR]
  caps-raas estatisticas
  caps-raas pacientes [--busca TEXTO]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .cadastro.client import CadastroClient
from .config import Settings, load_settings
from .raas.exportacao import exportar_raas
from .shared.errors import CapsError

console = Console()


def cmd_exportar(client: CadastroClient, settings: Settings, args) -> None:
    destino = Path(args.saida) if args.saida else None
    resultado = exportar_raas(client, settings, destino)
    console.print(Panel(
        f"[bold]{resultado.nome_arquivo}[/bold]\n"
        f"Competencia: {resultado.competencia}\n"
        f"Atendimentos: {resultado.total_atendimentos}  "
        f"Linhas: {resultado.linhas_pacientes}  "
        f"Ignorados: {resultado.ignorados}\n"
        f"[dim]{resultado.caminho}[/dim]",
        title="Arquivo RAAS exportado com sucesso!",
        border_style="green",
    ))


def cmd_estatisticas(client: CadastroClient, settings: Settings, args) -> None:
    table = Table(title=settings.estabelecimento.nome)
    table.add_column("Cadastro")
    table.add_column("Total", justify="right")
    for nome, total in client.estatisticas().items():
        table.add_row(nome.capitalize(), str(total))
    console.print(table)


def cmd_pacientes(client: CadastroClient, settings: Settings, args) -> None:
    if args.busca:
        pacientes = client.pacientes.buscar_por_nome(args.busca)
    else:
        pacientes = client.pacientes.list_all(order_by="name")
    if not pacientes:
        console.print("[yellow]Nenhum paciente encontrado.[/yellow]")
        return
    table = Table(title=f"Pacientes ({len(pacientes)})")
    table.add_column("Nome")
    table.add_column("CNS / CPF")
    table.add_column("Nascimento")
    for p in pacientes:
        table.add_row(
            p.name,
            p.cns or p.cpf or "-",
            p.birth_date.strftime("%d/%m/%Y") if p.birth_date else "-",
        )
    console.print(table)


COMANDOS = {
    "exportar": cmd_exportar,
    "estatisticas": cmd_estatisticas,
    "pacientes": cmd_pacientes,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caps-raas", description="Cadastro CAPS e exportacao RAAS"
    )
    sub = parser.add_subparsers(dest="comando", required=True)

    exp = sub.add_parser("exportar", help="Gera o arquivo RAAS")
    exp.add_argument("--saida", help="Diretorio de saida (default: CAPS_EXPORT_DIR)")

    sub.add_parser("estatisticas", help="Totais do cadastro")

    pac = sub.add_parser("pacientes", help="Lista pacientes")
    pac.add_argument("--busca", help="Trecho do nome")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    try:
        client = CadastroClient.from_settings(settings)
    except CapsError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    try:
        COMANDOS[args.comando](client, settings, args)
    except CapsError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
