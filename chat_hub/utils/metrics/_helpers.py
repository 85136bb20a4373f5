"""
Get-or-create registration of Prometheus metrics.

Metric modules may be imported more than once (uvicorn ``--reload``, test
collection); a second registration under the same name returns the
collector already in the default registry.
"""

from typing import TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_client.metrics import MetricWrapperBase

M = TypeVar("M", bound=MetricWrapperBase)


def _get_or_create(
    metric_cls: type[M], name: str, doc: str, labels: list[str] | None, **kwargs
) -> M:
    try:
        return metric_cls(name, doc, labels or [], **kwargs)
    except ValueError:
        # Duplicated timeseries: already registered
        return REGISTRY._names_to_collectors[name]


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    return _get_or_create(Counter, name, doc, labels)


def _get_or_create_gauge(
    name: str, doc: str, labels: list[str] | None = None
) -> Gauge:
    return _get_or_create(Gauge, name, doc, labels)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] | None = None,
) -> Histogram:
    """Histogram with the library's default buckets unless ``buckets`` is set."""
    if buckets:
        return _get_or_create(Histogram, name, doc, labels, buckets=buckets)
    return _get_or_create(Histogram, name, doc, labels)
