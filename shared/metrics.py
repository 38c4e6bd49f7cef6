"""Unified metrics helpers.

Thin wrappers around prometheus_client primitives with service name
prefixing and basic naming validation. Registration is idempotent per
process: asking twice for the same name returns the already registered
collector instead of raising, which keeps module reloads in tests safe.
"""

from __future__ import annotations

import re

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")
_collectors: dict[str, object] = {}


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):  # pragma: no cover - simple guard
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(name: str, documentation: str, service: str | None = None) -> Counter:
    full_name = _validate(_prefix(name, service))
    if full_name not in _collectors:
        _collectors[full_name] = Counter(full_name, documentation, registry=REGISTRY)
    return _collectors[full_name]  # type: ignore[return-value]


def get_histogram(
    name: str,
    documentation: str,
    service: str | None = None,
    buckets: list[float] | None = None,
) -> Histogram:
    full_name = _validate(_prefix(name, service))
    if full_name not in _collectors:
        if buckets is None:
            _collectors[full_name] = Histogram(full_name, documentation)
        else:
            _collectors[full_name] = Histogram(
                full_name, documentation, buckets=buckets
            )
    return _collectors[full_name]  # type: ignore[return-value]


def get_gauge(name: str, documentation: str, service: str | None = None) -> Gauge:
    full_name = _validate(_prefix(name, service))
    if full_name not in _collectors:
        _collectors[full_name] = Gauge(full_name, documentation)
    return _collectors[full_name]  # type: ignore[return-value]


__all__ = [
    "get_counter",
    "get_histogram",
    "get_gauge",
]
