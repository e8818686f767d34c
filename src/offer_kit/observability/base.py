from dataclasses import dataclass, field
from typing import Literal, Protocol


class MetricsHook(Protocol):
    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


@dataclass(frozen=True)
class MetricRecord:
    kind: Literal["latency", "counter", "gauge"]
    name: str
    value: float
    labels: dict[str, str] = field(default_factory=dict)


class InMemoryMetricsHook:
    """Keeps every recorded metric in a list.

    Handy for tests and for dumping a session's activity in a debug panel.
    """

    def __init__(self) -> None:
        self.records: list[MetricRecord] = []

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("latency", name, value_ms, dict(labels or {})))

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("counter", name, value, dict(labels or {})))

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("gauge", name, value, dict(labels or {})))

    def total(self, name: str) -> float:
        """Sum of all counter increments recorded under ``name``."""
        return sum(r.value for r in self.records if r.kind == "counter" and r.name == name)

    def names(self) -> set[str]:
        return {r.name for r in self.records}
