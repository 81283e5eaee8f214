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
Collaborator contracts for metric unit metadata and saved widget units.

The metric-unit lookup is a batched service: it receives an ordered list of
metric names and answers with raw units index-aligned to that list (not keyed
by name, since names may repeat or be empty).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawUnitRecord:
    metric_name: str
    raw_unit: str


@dataclass(frozen=True)
class MetricUnitsResult:
    units: Tuple[str, ...] = ()
    is_loading: bool = False
    is_error: bool = False
    metrics: Tuple[RawUnitRecord, ...] = ()

    @classmethod
    def idle(cls) -> "MetricUnitsResult":
        """Result of a disabled lookup: nothing requested, nothing loading."""
        return cls()

    @classmethod
    def failed(cls) -> "MetricUnitsResult":
        return cls(is_error=True)


class MetricUnitLookup(Protocol):
    def get_metric_units(self, metric_names: Sequence[str], enabled: bool) -> MetricUnitsResult:
        ...


class AsyncMetricUnitLookup(Protocol):
    async def fetch_metric_units(self, metric_names: Sequence[str], enabled: bool) -> MetricUnitsResult:
        ...


class PersistedUnitSupplier(Protocol):
    def get_saved_unit(self, widget_id: str) -> Optional[str]:
        ...


class StaticMetricUnitLookup:
    """
    In-memory metric-unit lookup backed by a ``{metric_name: raw_unit}`` table.

    Unknown metrics and empty metric names yield an empty raw unit at their
    position. ``delay`` makes the async variant yield to the event loop for the
    given number of seconds before answering.
    """

    def __init__(self, units_by_metric: Optional[Dict[str, str]] = None, delay: float = 0.0):
        self.units_by_metric = dict(units_by_metric or {})
        self.delay = delay
        self.live_calls = 0

    def get_metric_units(self, metric_names: Sequence[str], enabled: bool) -> MetricUnitsResult:
        if not enabled:
            return MetricUnitsResult.idle()
        self.live_calls += 1
        records = tuple(
            RawUnitRecord(metric_name=name, raw_unit=self.units_by_metric.get(name, "") if name else "")
            for name in metric_names
        )
        logger.debug("Resolved units for %d metric(s)", len(records))
        return MetricUnitsResult(units=tuple(r.raw_unit for r in records), metrics=records)

    async def fetch_metric_units(self, metric_names: Sequence[str], enabled: bool) -> MetricUnitsResult:
        if not enabled:
            return MetricUnitsResult.idle()
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.get_metric_units(metric_names, enabled)


class InMemoryPersistedUnits:
    """Saved Y-axis units keyed by widget id."""

    def __init__(self, saved: Optional[Dict[str, str]] = None):
        self._saved = dict(saved or {})

    def get_saved_unit(self, widget_id: str) -> Optional[str]:
        return self._saved.get(widget_id) or None

    def save_unit(self, widget_id: str, unit_id: str) -> None:
        self._saved[widget_id] = unit_id
