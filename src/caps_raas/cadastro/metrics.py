"""Metricas de uso das queries do cadastro."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MethodMetrics:
    query_count: int = 0
    total_time_ms: float = 0.0

    @property
    def avg_time_ms(self) -> float:
        return self.total_time_ms / self.query_count if self.query_count else 0.0


@dataclass
class CadastroMetrics:
    total_queries: int = 0
    total_time_ms: float = 0.0
    by_method: dict[str, MethodMetrics] = field(default_factory=dict)
    writes: int = 0


class MetricsCollector:
    """Acumula contagem e tempo por metodo (`tabela.metodo`)."""

    def __init__(self) -> None:
        self._total_queries = 0
        self._total_time_ms = 0.0
        self._by_method: dict[str, MethodMetrics] = {}
        self._writes = 0

    def record(self, method: str, time_ms: float, write: bool = False) -> None:
        self._total_queries += 1
        self._total_time_ms += time_ms
        if write:
            self._writes += 1
        m = self._by_method.get(method)
        if m:
            m.query_count += 1
            m.total_time_ms += time_ms
        else:
            self._by_method[method] = MethodMetrics(1, time_ms)

    @property
    def snapshot(self) -> CadastroMetrics:
        return CadastroMetrics(
            total_queries=self._total_queries,
            total_time_ms=self._total_time_ms,
            by_method={
                k: MethodMetrics(v.query_count, v.total_time_ms)
                for k, v in self._by_method.items()
            },
            writes=self._writes,
        )
