"""Benchmark: manifest decode throughput, JSON versus binary cache.

Measures how many decodes of the same package outline complete per
second through ``elm_outline.decode`` and ``elm_outline.decode_binary``.
"""
from __future__ import annotations

import time
from typing import Callable

import elm_outline

_ITERATIONS: int = 5_000

_SAMPLE_MANIFEST = """
{
    "type": "package",
    "name": "bench/outline",
    "summary": "A package used to benchmark manifest decoding",
    "license": "BSD-3-Clause",
    "version": "1.4.2",
    "exposed-modules": {
        "Primitives": ["Bench.Decode", "Bench.Encode"],
        "Helpers": ["Bench.Extra", "Bench.Pipeline"]
    },
    "elm-version": "0.19.0 <= v < 0.20.0",
    "dependencies": {
        "elm/core": "1.0.0 <= v < 2.0.0",
        "elm/json": "1.0.0 <= v < 2.0.0",
        "elm/parser": "1.0.0 <= v < 2.0.0"
    },
    "test-dependencies": {
        "elm-explorations/test": "2.0.0 <= v < 3.0.0"
    }
}
"""


def _run(operation: str, iterations: int, step: Callable[[], object]) -> dict[str, object]:
    start = time.perf_counter()
    for _ in range(iterations):
        step()
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_json_decode(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark decoding the sample manifest from JSON text.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    return _run("json_decode", iterations, lambda: elm_outline.decode(_SAMPLE_MANIFEST))


def bench_binary_decode(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark decoding the sample manifest from its binary cache form."""
    data = elm_outline.encode_binary(elm_outline.decode(_SAMPLE_MANIFEST))
    return _run("binary_decode", iterations, lambda: elm_outline.decode_binary(data))


def run_all() -> list[dict[str, object]]:
    """Run all throughput benchmarks and return their results."""
    return [bench_json_decode(), bench_binary_decode()]


if __name__ == "__main__":
    run_all()
