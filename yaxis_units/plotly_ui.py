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
Plotly helpers that put the selected Y-axis unit on a figure.
"""

from typing import Optional

import plotly.graph_objects as go

from .config.settings import UnitSelectorConfig
from .unit_mapper import UnitMapper, get_default_mapper

NONE_UNIT = UnitSelectorConfig.SELECTOR['none_value']


def format_axis_label(base_label: str, unit: Optional[str], style: str = "parentheses") -> str:
    """
    Format the axis label with the unit according to the specified style.
    Args:
        base_label: The base label without unit.
        unit: The unit label to be appended.
        style: "parentheses", "bracket" or "suffix".
    Returns:
        The formatted axis label.
    """
    if not unit:
        return base_label
    if style == "bracket":
        return f"{base_label} [{unit}]"
    if style == "suffix":
        return f"{base_label} {unit}"
    return f"{base_label} ({unit})"


def unit_axis_symbol(unit_id: Optional[str], mapper: Optional[UnitMapper] = None) -> Optional[str]:
    """
    Short symbol for a unit, e.g. "Bytes (B)" -> "B"; unregistered units use
    their label as-is.
    """
    if not unit_id or unit_id == NONE_UNIT:
        return None
    unit = (mapper or get_default_mapper()).map_raw_unit(unit_id)
    name = unit.name
    if name.endswith(")") and "(" in name:
        symbol = name[name.rindex("(") + 1:-1]
        if symbol and " " not in symbol:
            return symbol
    return name


def apply_y_axis_unit(fig: go.Figure, unit_id: Optional[str], base_label: Optional[str] = None,
                      style: Optional[str] = None, mapper: Optional[UnitMapper] = None) -> go.Figure:
    """
    Write the unit into the primary Y-axis title of a figure.
    Args:
        fig: The Plotly figure to update in place.
        unit_id: Selected unit id, "none" or None for no unit.
        base_label: Axis title without unit.
        style: Unit annotation style.
    Returns:
        The same figure, for chaining.
    """
    settings = UnitSelectorConfig.AXIS_LABEL
    label = format_axis_label(
        base_label or settings['default_title'],
        unit_axis_symbol(unit_id, mapper),
        style or settings['annotation_style'],
    )
    fig.update_yaxes(title_text=label)
    return fig
