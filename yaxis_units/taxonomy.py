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
Canonical Y-axis unit taxonomy.

Units are grouped into categories; each unit has a unique id, a display name
and a set of aliases (legacy dashboard unit ids and free-text spellings that
metrics report in their metadata).
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple


# Catch-all category for units that are not part of the registry
OTHER_CATEGORY = "Other"


@dataclass(frozen=True)
class UniversalUnit:
    """A canonical unit as shown in the Y-axis unit selector."""
    id: str
    name: str
    category: str
    aliases: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class UnitCategory:
    name: str
    units: Tuple[UniversalUnit, ...] = ()


# ----------------------------
# Registry definition
# ----------------------------
# category -> [(id, display name, aliases)]
# Declaration order is significant: it drives listing, search output and
# raw-unit matching precedence.

UNIT_CATEGORY_SPEC: Dict[str, List[Tuple[str, str, Tuple[str, ...]]]] = {
    "Time": [
        ("ns", "Nanoseconds (ns)", ("nanosecond", "nanoseconds")),
        ("us", "Microseconds (µs)", ("µs", "microsecond", "microseconds")),
        ("ms", "Milliseconds (ms)", ("millisecond", "milliseconds")),
        ("s", "Seconds (s)", ("sec", "second", "seconds", "dtdurations")),
        ("min", "Minutes (m)", ("m", "minute", "minutes")),
        ("h", "Hours (h)", ("hour", "hours")),
        ("d", "Days (d)", ("day", "days")),
        ("wk", "Weeks (w)", ("week", "weeks")),
    ],
    "Data": [
        ("By", "Bytes (B)", ("bytes", "byte", "decbytes")),
        ("kBy", "Kilobytes (KB)", ("deckbytes", "kilobytes", "kilobyte")),
        ("MBy", "Megabytes (MB)", ("decmbytes", "megabytes", "megabyte")),
        ("GBy", "Gigabytes (GB)", ("decgbytes", "gigabytes", "gigabyte")),
        ("TBy", "Terabytes (TB)", ("dectbytes", "terabytes", "terabyte")),
        ("PBy", "Petabytes (PB)", ("decpbytes", "petabytes", "petabyte")),
        ("KiBy", "Kibibytes (KiB)", ("kbytes", "kibibytes")),
        ("MiBy", "Mebibytes (MiB)", ("mbytes", "mebibytes")),
        ("GiBy", "Gibibytes (GiB)", ("gbytes", "gibibytes")),
        ("TiBy", "Tebibytes (TiB)", ("tbytes", "tebibytes")),
        ("bit", "Bits (b)", ("bits", "decbits")),
        ("kbit", "Kilobits (Kb)", ("kilobits",)),
        ("Mbit", "Megabits (Mb)", ("megabits",)),
        ("Gbit", "Gigabits (Gb)", ("gigabits",)),
    ],
    "Data Rate": [
        ("By/s", "Bytes/sec (B/s)", ("Bps", "binBps", "bytes/s", "bytes per second")),
        ("kBy/s", "Kilobytes/sec (KB/s)", ("KBs", "kilobytes/s")),
        ("MBy/s", "Megabytes/sec (MB/s)", ("MBs", "megabytes/s")),
        ("GBy/s", "Gigabytes/sec (GB/s)", ("GBs", "gigabytes/s")),
        ("bit/s", "Bits/sec (b/s)", ("bits/s", "bits per second")),
        ("kbit/s", "Kilobits/sec (Kb/s)", ("Kbits", "kbps")),
        ("Mbit/s", "Megabits/sec (Mb/s)", ("Mbits", "mbps")),
        ("Gbit/s", "Gigabits/sec (Gb/s)", ("Gbits", "gbps")),
    ],
    "Count": [
        ("{count}", "Count", ("count", "short", "1")),
        ("{count}/s", "Count / sec", ("cps", "count/s", "counts per second")),
        ("{count}/min", "Count / min", ("cpm", "count/min", "counts per minute")),
    ],
    "Operations": [
        ("{ops}/s", "Operations / sec", ("ops", "ops/s", "operations per second")),
        ("{req}/s", "Requests / sec", ("reqps", "req/s", "requests per second")),
        ("{read}/s", "Reads / sec", ("rps", "reads/s")),
        ("{write}/s", "Writes / sec", ("wps", "writes/s")),
        ("{iops}/s", "I/O ops / sec", ("iops",)),
        ("{ops}/min", "Operations / min", ("opm", "ops/min")),
        ("{req}/min", "Requests / min", ("reqpm", "req/min")),
    ],
    "Percent": [
        ("%", "Percent (0 - 100)", ("percent", "pct")),
        ("percentunit", "Percent (0.0 - 1.0)", ("ratio", "fraction")),
    ],
    "Frequency": [
        ("Hz", "Hertz (Hz)", ("hertz",)),
        ("kHz", "Kilohertz (kHz)", ("kilohertz",)),
        ("MHz", "Megahertz (MHz)", ("megahertz",)),
        ("GHz", "Gigahertz (GHz)", ("gigahertz",)),
    ],
    "Miscellaneous": [
        ("{bool}", "Boolean (true/false)", ("bool", "boolean")),
        ("{bool_on_off}", "Boolean (on/off)", ("bool_on_off",)),
        ("Cel", "Celsius (°C)", ("celsius", "degc", "°c")),
        ("[degF]", "Fahrenheit (°F)", ("fahrenheit", "degf", "°f")),
        ("V", "Volts (V)", ("volt", "volts")),
        ("A", "Amperes (A)", ("amp", "amps", "ampere")),
        ("W", "Watts (W)", ("watt", "watts")),
    ],
}


class UnitTaxonomy:
    """
    Read-only registry of canonical units.

    Built once from a category specification; lookups by id, by category name
    and full enumeration never raise and never mutate the registry.
    """

    def __init__(self, categories: Tuple[UnitCategory, ...]):
        self._categories = tuple(categories)
        self._by_id: Dict[str, UniversalUnit] = {}
        self._by_category: Dict[str, UnitCategory] = {}
        for category in self._categories:
            self._by_category[category.name] = category
            for unit in category.units:
                if unit.id in self._by_id:
                    raise ValueError(
                        f"Duplicate unit id '{unit.id}' in categories "
                        f"'{self._by_id[unit.id].category}' and '{category.name}'"
                    )
                self._by_id[unit.id] = unit

    @classmethod
    def from_spec(cls, spec: Dict[str, List[Tuple[str, str, Tuple[str, ...]]]]) -> "UnitTaxonomy":
        """
        Build a taxonomy from a ``{category: [(id, name, aliases), ...]}`` mapping.
        Arguments:
            spec: Category specification in declaration order.
        Returns:
            The constructed UnitTaxonomy.
        """
        categories = []
        for category_name, entries in spec.items():
            units = tuple(
                UniversalUnit(id=unit_id, name=name, category=category_name, aliases=frozenset(aliases))
                for unit_id, name, aliases in entries
            )
            categories.append(UnitCategory(name=category_name, units=units))
        return cls(tuple(categories))

    @property
    def categories(self) -> Tuple[UnitCategory, ...]:
        return self._categories

    def get(self, unit_id: Optional[str]) -> Optional[UniversalUnit]:
        """Return the unit with the given id, or None."""
        if unit_id is None:
            return None
        return self._by_id.get(unit_id)

    def get_category(self, name: str) -> Optional[UnitCategory]:
        return self._by_category.get(name)

    def units(self) -> Iterator[UniversalUnit]:
        """Iterate over every unit in declaration order."""
        for category in self._categories:
            yield from category.units

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)


DEFAULT_TAXONOMY = UnitTaxonomy.from_spec(UNIT_CATEGORY_SPEC)
