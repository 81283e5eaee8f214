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
Streamlit Y-axis unit selector.

Renders the searchable, categorized unit list, seeds it from the inferred unit
and shows a warning when the selection differs from the saved unit.
"""

from typing import Dict, Optional

import streamlit as st

from .config.settings import UnitSelectorConfig
from .metric_units import PersistedUnitSupplier
from .resolver import ResolvedUnitState
from .selection import NONE_UNIT, UnitSelectionController
from .taxonomy import OTHER_CATEGORY
from .unit_search import UnitSearchIndex


def get_selection_controller(widget_id: str, supplier: PersistedUnitSupplier) -> UnitSelectionController:
    """Return the widget's controller, creating it on the first run of the session."""
    key = f"y_axis_unit_controller::{widget_id}"
    if key not in st.session_state:
        st.session_state[key] = UnitSelectionController.from_persisted(supplier, widget_id)
    return st.session_state[key]


def build_unit_options(search_index: UnitSearchIndex, term: str,
                       controller: UnitSelectionController) -> Dict[str, str]:
    """
    Option id -> option label for the select box, in taxonomy order.
    "none" always comes first, followed by the current value whenever it is
    not a registered unit or does not match the search term.
    """
    settings = UnitSelectorConfig.SELECTOR
    separator = settings['option_separator']
    matches: Dict[str, str] = {}
    for category in search_index.filter(term):
        for unit in category.units:
            matches[unit.id] = f"{category.name}{separator}{unit.name}"

    options = {NONE_UNIT: settings['none_label']}
    current = controller.display_unit
    if current is not None and current.id not in matches:
        category = current.category or OTHER_CATEGORY
        options[current.id] = f"{category}{separator}{current.name}"
    options.update(matches)
    return options


def _selected_option(controller: UnitSelectionController) -> Optional[str]:
    """Option id that shows the controller's current value."""
    current = controller.display_unit
    if current is not None:
        return current.id
    return NONE_UNIT if controller.current_value == NONE_UNIT else None


def render_y_axis_unit_selector(controller: UnitSelectionController, *, key: str,
                                loading: bool = False, search_index: Optional[UnitSearchIndex] = None,
                                placeholder: Optional[str] = None) -> str:
    """
    Render the unit selector and apply the user's choice to the controller.
    Args:
        controller: Selection state of the widget.
        key: Streamlit widget key prefix.
        loading: Show that the inferred unit is still being looked up.
        search_index: Search over the unit taxonomy.
        placeholder: Text shown while no unit is selected.
    Returns:
        The current unit id.
    """
    settings = UnitSelectorConfig.SELECTOR
    search_index = search_index or UnitSearchIndex()
    select_key, synced_key = f"{key}_select", f"{key}_synced"

    term = st.text_input(settings['search_label'], key=f"{key}_search")
    options = build_unit_options(search_index, term, controller)

    # A keyed select box keeps its own value across runs, so push the
    # controller's value into it whenever the controller moved on its own
    expected = _selected_option(controller)
    if synced_key not in st.session_state or st.session_state[synced_key] != expected:
        st.session_state[select_key] = expected
        st.session_state[synced_key] = expected

    if loading:
        st.caption("⏳ Looking up metric units...")

    choice = st.selectbox(
        settings['field_label'],
        list(options),
        index=None,
        format_func=lambda unit_id: options[unit_id],
        placeholder=placeholder or settings['placeholder'],
        key=select_key,
        label_visibility="collapsed",
    )
    if choice is not None and choice != expected:
        controller.select(choice)
        st.session_state[synced_key] = choice

    if controller.conflict:
        st.warning(f"⚠️ {controller.conflict_message}")

    return controller.current_value



def y_axis_unit_field(controller: UnitSelectionController, resolved: ResolvedUnitState, *,
                      key: str, field_label: Optional[str] = None) -> str:
    """
    Labeled selector for the widget editor: seeds the selection from the
    resolver's inferred unit before rendering.
    """
    controller.on_inferred_unit(resolved.unit)
    st.markdown(f"**{field_label or UnitSelectorConfig.SELECTOR['field_label']}**")
    if resolved.error:
        st.error("❌ Could not load metric units; select a unit manually.")
    return render_y_axis_unit_selector(controller, key=key, loading=resolved.loading)
