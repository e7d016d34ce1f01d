"""In-memory metrics for tool calls and orchestration runs.

Collected per worker process so tests and ``GET /api/metrics`` can inspect
tool-call counts, success rate, latency, and how often the iteration cap
was hit.
"""

from __future__ import annotations

import math
import threading
from collections import Counter
from dataclasses import dataclass, field


def _percentile(values: list[float], p: float) -> float:
    """Linear-interpolated percentile, ``0.0`` for no samples."""
    if not values:
        return 0.0
    ordered = sorted(values)
    pos = (len(ordered) - 1) * p
    lo, hi = math.floor(pos), math.ceil(pos)
    return ordered[lo] + (ordered[hi] - ordered[lo]) * (pos - lo)


@dataclass
class _ToolStats:
    latencies_ms: list[float] = field(default_factory=list)
    statuses: Counter = field(default_factory=Counter)

    def as_dict(self) -> dict:
        total = sum(self.statuses.values())
        return {
            "count": total,
            "success_rate": self.statuses["ok"] / total if total else 0.0,
            "latency_p50_ms": round(_percentile(self.latencies_ms, 0.5), 2),
            "latency_p95_ms": round(_percentile(self.latencies_ms, 0.95), 2),
            "status_breakdown": dict(self.statuses),
        }


class MetricsCollector:
    """Thread-safe in-memory metrics collector."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tools: dict[str, _ToolStats] = {}
        self._run_outcomes: Counter = Counter()
        self._run_iterations: list[int] = []

    def record_tool_call(self, *, tool_name: str, status: str, latency_ms: float) -> None:
        """Record one tool execution; *status* is ``ok`` or an error kind."""
        with self._lock:
            stats = self._tools.setdefault(tool_name, _ToolStats())
            stats.latencies_ms.append(float(latency_ms))
            stats.statuses[status] += 1

    def record_run(self, *, outcome: str, iterations: int) -> None:
        """Record one orchestration run (``done`` / ``cap_reached`` / ``error``)."""
        with self._lock:
            self._run_outcomes[outcome] += 1
            self._run_iterations.append(iterations)

    def snapshot(self) -> dict:
        with self._lock:
            iterations = [float(i) for i in self._run_iterations]
            return {
                "tools": {name: stats.as_dict() for name, stats in self._tools.items()},
                "runs": {
                    "outcomes": dict(self._run_outcomes),
                    "iterations_p50": _percentile(iterations, 0.5),
                    "iterations_max": max(self._run_iterations, default=0),
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._tools.clear()
            self._run_outcomes.clear()
            self._run_iterations.clear()


_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    return _metrics_collector
