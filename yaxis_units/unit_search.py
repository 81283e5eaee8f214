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
Alias-aware search over the unit taxonomy, used by the interactive selector.
"""

from typing import List, Optional

from .taxonomy import DEFAULT_TAXONOMY, UnitCategory, UnitTaxonomy, UniversalUnit


class UnitSearchIndex:
    """
    Substring search over unit ids, display names and aliases.

    There is no ranking: results keep the taxonomy's category and
    intra-category declaration order.
    """

    def __init__(self, taxonomy: Optional[UnitTaxonomy] = None):
        self.taxonomy = taxonomy or DEFAULT_TAXONOMY

    def search(self, term: Optional[str], unit: Optional[UniversalUnit]) -> bool:
        """
        Decide whether a candidate unit matches a search term.
        Arguments:
            term: The user's search input. Empty matches everything.
            unit: The candidate unit.
        Returns:
            True if the term is a case-insensitive substring of the unit's id,
            display name or any alias.
        """
        if unit is None or not unit.id:
            return False
        needle = (term or "").lower()
        if needle in unit.id.lower() or needle in (unit.name or "").lower():
            return True
        return any(needle in alias.lower() for alias in unit.aliases)

    def filter(self, term: Optional[str]) -> List[UnitCategory]:
        """Return matching units grouped by category; empty categories are dropped."""
        filtered = []
        for category in self.taxonomy.categories:
            units = tuple(u for u in category.units if self.search(term, u))
            if units:
                filtered.append(UnitCategory(name=category.name, units=units))
        return filtered
