"""
Tests for async unit resolution and stale-reply handling.
"""

import asyncio

from yaxis_units.metric_units import MetricUnitsResult, StaticMetricUnitLookup
from yaxis_units.query_models import BuilderQuery, DataSource, Query, QueryType, SubQuery
from yaxis_units.resolver import MetricUnitResolver


def builder_query(*metrics):
    return Query(
        query_type=QueryType.QUERY_BUILDER,
        builder=BuilderQuery(query_data=[
            SubQuery(query_name=chr(ord("A") + i), data_source=DataSource.METRICS, aggregate_attribute_key=m)
            for i, m in enumerate(metrics)
        ]),
    )


class GatedLookup:
    """Async lookup whose replies are released manually per metric set."""

    def __init__(self, units_by_metric):
        self.units_by_metric = units_by_metric
        self.gates = {}
        self.calls = []

    def gate(self, names):
        return self.gates.setdefault(tuple(names), asyncio.Event())

    async def fetch_metric_units(self, metric_names, enabled):
        self.calls.append((list(metric_names), enabled))
        if not enabled:
            return MetricUnitsResult.idle()
        await self.gate(metric_names).wait()
        return MetricUnitsResult(units=tuple(self.units_by_metric.get(n, "") for n in metric_names))


def test_async_resolve_single_metric():
    resolver = MetricUnitResolver(async_lookup=StaticMetricUnitLookup({"metric1": "bytes"}, delay=0.001))
    state = asyncio.run(resolver.resolve_async(builder_query("metric1")))
    assert state.unit == "bytes"
    assert not state.loading


def test_async_ineligible_query_is_not_loading():
    lookup = GatedLookup({})
    resolver = MetricUnitResolver(async_lookup=lookup)
    state = asyncio.run(resolver.resolve_async(Query(query_type=QueryType.PROM)))
    assert state.unit is None
    assert not state.loading
    assert lookup.calls == [([], False)]


def test_loading_while_lookup_outstanding():
    async def scenario():
        lookup = GatedLookup({"metric1": "ms"})
        resolver = MetricUnitResolver(async_lookup=lookup)
        task = asyncio.create_task(resolver.resolve_async(builder_query("metric1")))
        await asyncio.sleep(0)
        assert resolver.state.loading
        lookup.gate(["metric1"]).set()
        return await task

    state = asyncio.run(scenario())
    assert state.unit == "ms"
    assert not state.loading


def test_stale_reply_is_discarded():
    async def scenario():
        lookup = GatedLookup({"metric1": "bytes", "metric2": "seconds"})
        resolver = MetricUnitResolver(async_lookup=lookup)

        first = asyncio.create_task(resolver.resolve_async(builder_query("metric1")))
        await asyncio.sleep(0)
        second = asyncio.create_task(resolver.resolve_async(builder_query("metric2")))
        await asyncio.sleep(0)

        lookup.gate(["metric2"]).set()
        await second
        lookup.gate(["metric1"]).set()
        await first
        return resolver.state

    state = asyncio.run(scenario())
    assert state.unit == "seconds"


def test_async_lookup_failure_sets_error():
    class FailingLookup:
        async def fetch_metric_units(self, metric_names, enabled):
            raise TimeoutError("metadata request timed out")

    resolver = MetricUnitResolver(async_lookup=FailingLookup())
    state = asyncio.run(resolver.resolve_async(builder_query("metric1")))
    assert state.error
    assert state.unit is None
    assert not state.loading
