# Copyright (c) 2025 Martinolli
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
MetricUnitResolver: infers a single Y-axis unit for a widget query composed of
one or more metric sub-queries.

The inferred unit is only defined when every contributing metric reports the
same non-empty unit; any disagreement leaves the unit undefined so the user
has to pick one explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .metric_units import AsyncMetricUnitLookup, MetricUnitLookup, MetricUnitsResult
from .query_models import DataSource, Query, QueryType
from .utils.error_handling import handle_async_errors, handle_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedUnitState:
    unit: Optional[str] = None
    loading: bool = False
    error: bool = False


def select_metric_names(query: Optional[Query], selected_query_name: Optional[str] = None) -> Optional[List[str]]:
    """
    Pick the metric names whose units decide the Y-axis unit.
    Arguments:
        query: The widget query.
        selected_query_name: Restrict to this sub-query only.
    Returns:
        None when the query is not an eligible metrics builder query, otherwise
        the ordered metric names ('' where a sub-query has no metric).
    """
    if query is None or query.query_type != QueryType.QUERY_BUILDER:
        return None
    query_data = query.builder.query_data if query.builder else []
    if not query_data or query_data[0].data_source != DataSource.METRICS:
        return None

    if selected_query_name:
        match = next((q for q in query_data if q.query_name == selected_query_name), None)
        return [(match.aggregate_attribute_key if match else None) or ""]
    return [q.aggregate_attribute_key or "" for q in query_data]


def infer_unit(units: Sequence[str]) -> Optional[str]:
    """
    Ambiguity policy over index-aligned raw units.
    Returns the shared unit when all units agree and are non-empty, else None.
    """
    if len(units) == 0:
        return None
    first = units[0]
    if any(unit != first for unit in units[1:]):
        return None
    return first or None


def align_units(metric_names: Sequence[str], units: Sequence[str]) -> Tuple[str, ...]:
    """Blank out units at positions whose metric name is empty."""
    if len(units) != len(metric_names):
        return tuple(units)
    return tuple(unit if name else "" for name, unit in zip(metric_names, units))


class MetricUnitResolver:
    """
    Resolves the Y-axis unit of a query through a batched metric-unit lookup.

    ``state`` holds the result for the most recent inputs. A new metric-name
    set replaces the previous state; nothing carries over between sets.
    """

    def __init__(self, lookup: Optional[MetricUnitLookup] = None,
                 async_lookup: Optional[AsyncMetricUnitLookup] = None):
        self.lookup = lookup
        self.async_lookup = async_lookup
        self.state = ResolvedUnitState()
        self._current_names: Optional[Tuple[str, ...]] = None

    def resolve(self, query: Optional[Query], selected_query_name: Optional[str] = None) -> ResolvedUnitState:
        """
        Resolve the unit for a query using the synchronous lookup.
        Arguments:
            query: The widget query.
            selected_query_name: Optional sub-query to restrict inference to.
        Returns:
            The ResolvedUnitState, also stored on ``self.state``.
        """
        names = select_metric_names(query, selected_query_name)
        self._current_names = tuple(names) if names is not None else None
        metric_names = names or []

        result = self._lookup(metric_names, bool(metric_names))
        self.state = self._state_from_result(metric_names, result)
        return self.state

    async def resolve_async(self, query: Optional[Query], selected_query_name: Optional[str] = None) -> ResolvedUnitState:
        """
        Resolve the unit using the async lookup.

        ``state.loading`` is True while the lookup is outstanding. If another
        resolution changes the metric names before the reply arrives, the reply
        is discarded and the newer state is returned.
        """
        names = select_metric_names(query, selected_query_name)
        requested = tuple(names) if names is not None else None
        self._current_names = requested
        metric_names = names or []
        enabled = bool(metric_names)

        if enabled:
            self.state = ResolvedUnitState(loading=True)
        result = await self._fetch(metric_names, enabled)

        if self._current_names != requested:
            logger.debug("Discarding stale unit lookup for %s", list(metric_names))
            return self.state

        self.state = self._state_from_result(metric_names, result)
        return self.state

    @staticmethod
    def _state_from_result(metric_names: Sequence[str], result: MetricUnitsResult) -> ResolvedUnitState:
        units = align_units(metric_names, result.units)
        unit = infer_unit(units)
        if unit is None and len(set(units)) > 1:
            logger.info("Metrics report different units %s; leaving Y-axis unit undefined", sorted(set(units)))
        return ResolvedUnitState(unit=unit, loading=result.is_loading, error=result.is_error)

    @handle_errors("Metric unit lookup", fallback=MetricUnitsResult.failed())
    def _lookup(self, metric_names: List[str], enabled: bool) -> MetricUnitsResult:
        if self.lookup is None:
            if not enabled:
                return MetricUnitsResult.idle()
            raise RuntimeError("No metric unit lookup configured")
        return self.lookup.get_metric_units(metric_names, enabled)

    @handle_async_errors("Metric unit lookup", fallback=MetricUnitsResult.failed())
    async def _fetch(self, metric_names: List[str], enabled: bool) -> MetricUnitsResult:
        if self.async_lookup is None:
            if not enabled:
                return MetricUnitsResult.idle()
            raise RuntimeError("No async metric unit lookup configured")
        return await self.async_lookup.fetch_metric_units(metric_names, enabled)
