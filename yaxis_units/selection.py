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
Y-axis unit selection state for one widget editing session.
"""

import logging
from typing import Optional

from .config.settings import UnitSelectorConfig
from .metric_units import PersistedUnitSupplier
from .taxonomy import UniversalUnit
from .unit_mapper import UnitMapper, get_default_mapper

logger = logging.getLogger(__name__)

NONE_UNIT = UnitSelectorConfig.SELECTOR['none_value']


class UnitSelectionController:
    """
    Tracks the selected Y-axis unit of a widget.

    - current_value: what the selector shows; seeded once from the inferred
      unit while empty or "none", then owned by the user.
    - initial_value: unit saved with the widget; fixed for the session and
      used only to warn about a mismatch.
    """

    def __init__(self, current_value: Optional[str] = None, initial_value: Optional[str] = None,
                 mapper: Optional[UnitMapper] = None):
        self._current_value = current_value or ""
        self._initial_value = initial_value or None
        self.mapper = mapper or get_default_mapper()
        # Closed once the user picks a unit explicitly
        self.user_selected = False
        self._last_inferred: Optional[str] = None

    @classmethod
    def from_persisted(cls, supplier: PersistedUnitSupplier, widget_id: str,
                       mapper: Optional[UnitMapper] = None) -> "UnitSelectionController":
        """Start a session for a widget, reading its saved unit once."""
        saved = supplier.get_saved_unit(widget_id)
        return cls(current_value=saved, initial_value=saved, mapper=mapper)

    @property
    def current_value(self) -> str:
        return self._current_value

    @property
    def initial_value(self) -> Optional[str]:
        return self._initial_value

    @property
    def is_unset(self) -> bool:
        return not self._current_value or self._current_value == NONE_UNIT

    def on_inferred_unit(self, inferred: Optional[str]) -> bool:
        """
        Feed the resolver's latest inferred unit.
        Arguments:
            inferred: The inferred unit, or None when undefined.
        Returns:
            True if the current value was seeded from it.
        """
        previous, self._last_inferred = self._last_inferred, inferred
        if not inferred or inferred == previous:
            return False
        if self.user_selected or not self.is_unset:
            return False
        logger.debug("Seeding Y-axis unit with inferred unit '%s'", inferred)
        self._current_value = inferred
        return True

    def select(self, unit_id: str) -> None:
        """Explicit user choice; always applied and ends seeding."""
        self._current_value = unit_id or ""
        self.user_selected = True

    @property
    def conflict(self) -> bool:
        return self._initial_value is not None and self._initial_value != self._current_value

    @property
    def conflict_message(self) -> str:
        if not self.conflict:
            return ""
        return f"Unit mismatch. Saved unit is {self._initial_value}, but {self._current_value} is selected."

    @property
    def display_unit(self) -> Optional[UniversalUnit]:
        """Taxonomy unit for the current value, None while unset."""
        if self.is_unset:
            return None
        return self.mapper.map_raw_unit(self._current_value)
