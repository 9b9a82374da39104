"""Nearby-POI query metrics.

Collects latency samples and counts which path served each query.
"""
import time
from contextlib import contextmanager

_nearby_timings_ms: list[float] = []
_path_counts: dict[str, int] = {"primary": 0, "fallback": 0, "primary_failed": 0}


@contextmanager
def record_nearby_latency():
    start = time.perf_counter()
    try:
        yield
    finally:
        _nearby_timings_ms.append((time.perf_counter() - start) * 1000.0)


def record_path(path: str) -> None:
    _path_counts[path] = _path_counts.get(path, 0) + 1


def _percentiles(values: list[float]) -> dict:
    if not values:
        return {"count": 0, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    return {
        "nearby": _percentiles(_nearby_timings_ms),
        "nearby_paths": dict(_path_counts),
    }


def reset_metrics() -> None:
    _nearby_timings_ms.clear()
    for key in _path_counts:
        _path_counts[key] = 0
