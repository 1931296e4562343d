"""Cadastro CAPS: pacientes, profissionais, procedimentos e atendimentos em DuckDB."""

__all__ = ["CadastroClient"]


def __getattr__(name: str):
    if name == "CadastroClient":
        from .client import CadastroClient
        return CadastroClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
