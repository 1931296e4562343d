"""CAPS: cadastro de atendimentos e exportacao do arquivo RAAS (DATASUS)."""

from .config import VERSION

__version__ = VERSION
