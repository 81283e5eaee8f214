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

# Demo widget editor: pick metrics for a builder query and watch the Y-axis
# unit get inferred, overridden and applied to the chart.
# Run with: streamlit run app.py

import streamlit as st
import plotly.graph_objects as go

from yaxis_units.config.base_path import get_base_path_config
from yaxis_units.metric_units import InMemoryPersistedUnits, StaticMetricUnitLookup
from yaxis_units.plotly_ui import apply_y_axis_unit
from yaxis_units.query_models import BuilderQuery, DataSource, Query, QueryType, SubQuery
from yaxis_units.resolver import MetricUnitResolver
from yaxis_units.unit_selector import get_selection_controller, y_axis_unit_field
from yaxis_units.utils.error_handling import configure_logging

SAMPLE_METRIC_UNITS = {
    "http_server_duration": "ms",
    "rpc_server_duration": "ms",
    "container_memory_usage": "bytes",
    "system_network_io": "By",
    "k8s_pod_cpu_utilization": "percent",
    "queue_depth": "",
}

st.set_page_config(
    page_title="Y-Axis Unit Selector",
    page_icon="📈",
    layout="wide"
)

if 'logging_configured' not in st.session_state:
    configure_logging()
    st.session_state.logging_configured = True
if 'saved_units' not in st.session_state:
    st.session_state.saved_units = InMemoryPersistedUnits({"latency-panel": "ms"})

st.title("📈 Y-Axis Unit Selector")
st.caption(f"Served under base path `{get_base_path_config().base_path}`")

with st.sidebar:
    st.header("Widget")
    widget_id = st.selectbox("Widget", ["latency-panel", "new-panel"])
    query_type = st.selectbox("Query type", [t.value for t in QueryType])
    data_source = st.selectbox("Data source", [d.value for d in DataSource])
    metrics = st.multiselect("Metrics", list(SAMPLE_METRIC_UNITS), default=["http_server_duration"])
    sub_query_names = [chr(ord("A") + i) for i in range(len(metrics))]
    selected = st.selectbox("Restrict to sub-query", ["(all)"] + sub_query_names)

query = Query(
    query_type=QueryType(query_type),
    builder=BuilderQuery(query_data=[
        SubQuery(query_name=name, data_source=DataSource(data_source), aggregate_attribute_key=metric)
        for name, metric in zip(sub_query_names, metrics)
    ]),
)

resolver_key = f"resolver::{widget_id}"
if resolver_key not in st.session_state:
    st.session_state[resolver_key] = MetricUnitResolver(lookup=StaticMetricUnitLookup(SAMPLE_METRIC_UNITS))
resolved = st.session_state[resolver_key].resolve(query, None if selected == "(all)" else selected)
controller = get_selection_controller(widget_id, st.session_state.saved_units)

col1, col2 = st.columns([1, 2])
with col1:
    unit_id = y_axis_unit_field(controller, resolved, key=f"unit_{widget_id}")
    st.write(f"Inferred unit: `{resolved.unit or '—'}`")
    if st.button("💾 Save unit"):
        st.session_state.saved_units.save_unit(widget_id, unit_id)
        st.success("Saved. The new unit applies from the next editing session.")

with col2:
    fig = go.Figure()
    for i, metric in enumerate(metrics):
        fig.add_trace(go.Scatter(x=list(range(10)), y=[(i + 1) * v for v in range(10)], name=metric))
    apply_y_axis_unit(fig, unit_id)
    st.plotly_chart(fig, use_container_width=True)
