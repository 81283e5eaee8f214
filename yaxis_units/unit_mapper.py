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
Normalization of raw metric unit strings to canonical taxonomy units.
"""

import re
from typing import Dict, Optional

from .taxonomy import DEFAULT_TAXONOMY, OTHER_CATEGORY, UnitTaxonomy, UniversalUnit


# Prefix of the reserved pseudo-unit ids produced for unrecognized raw units
UNKNOWN_UNIT_PREFIX = "__unknown__:"

# Unknown-but-id-shaped raw units are passed through unchanged
PLAUSIBLE_UNIT_ID_RE = re.compile(r"^(?=.*[A-Za-z%µ°])[A-Za-z0-9%µ°{}\[\]/._\-^*]{1,32}$")


class UnitMapper:
    """
    Maps arbitrary raw unit strings onto canonical unit ids.

    The mapping is total: every input yields something renderable, either a
    registered unit, a pass-through id or an ``__unknown__:`` pseudo-unit whose
    label is the raw string verbatim.
    """

    def __init__(self, taxonomy: Optional[UnitTaxonomy] = None):
        self.taxonomy = taxonomy or DEFAULT_TAXONOMY
        self._folded: Dict[str, UniversalUnit] = {}
        for unit in self.taxonomy.units():
            for key in (unit.id, unit.name, *sorted(unit.aliases)):
                # First declaration wins
                self._folded.setdefault(key.lower(), unit)

    def find_registered_unit(self, raw: Optional[str]) -> Optional[UniversalUnit]:
        """
        Look up a raw unit against ids, names and aliases of the taxonomy.
        Matching is case-insensitive; the first declared unit wins.
        Arguments:
            raw: The raw unit string reported by a metric.
        Returns:
            The matching UniversalUnit, or None.
        """
        if raw is None:
            return None
        key = raw.strip()
        if not key:
            return None
        return self._folded.get(key.lower())

    def map_raw_unit(self, raw: Optional[str]) -> UniversalUnit:
        """Map a raw unit string to a UniversalUnit; never raises."""
        raw = raw if raw is not None else ""
        unit = self.find_registered_unit(raw)
        if unit is not None:
            return unit

        key = raw.strip()
        if key.startswith(UNKNOWN_UNIT_PREFIX):
            return UniversalUnit(id=key, name=key[len(UNKNOWN_UNIT_PREFIX):], category=OTHER_CATEGORY)
        if is_plausible_unit_id(key):
            return UniversalUnit(id=key, name=key, category=OTHER_CATEGORY)
        return UniversalUnit(id=f"{UNKNOWN_UNIT_PREFIX}{key}", name=raw, category=OTHER_CATEGORY)

    def map_raw_unit_to_universal(self, raw: Optional[str]) -> str:
        """Map a raw unit string to a canonical unit id; never raises."""
        return self.map_raw_unit(raw).id

    def display_label(self, unit_id: Optional[str]) -> str:
        """Human readable label for a (possibly unregistered) unit id."""
        return self.map_raw_unit(unit_id).name


def is_plausible_unit_id(value: str) -> bool:
    return bool(value) and PLAUSIBLE_UNIT_ID_RE.match(value) is not None


def is_unknown_unit(unit_id: Optional[str]) -> bool:
    return bool(unit_id) and unit_id.startswith(UNKNOWN_UNIT_PREFIX)


_default_mapper = UnitMapper()


def map_raw_unit_to_universal(raw: Optional[str]) -> str:
    """
    Map a raw unit string onto the default taxonomy.
    Arguments:
        raw: Raw unit string, e.g. "bytes", "Bps", "requests per second".
    Returns:
        The canonical unit id.
    """
    return _default_mapper.map_raw_unit_to_universal(raw)


def get_default_mapper() -> UnitMapper:
    return _default_mapper
