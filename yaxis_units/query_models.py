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
Query models for dashboard widgets.

Only the parts of a widget query that matter for Y-axis unit inference are
modelled: the execution mode and, for builder queries, each sub-query's name,
data source and aggregate attribute (the metric name).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class QueryType(str, Enum):
    QUERY_BUILDER = "builder"
    PROM = "promql"
    CLICKHOUSE = "clickhouse_sql"


class DataSource(str, Enum):
    METRICS = "metrics"
    TRACES = "traces"
    LOGS = "logs"


@dataclass
class SubQuery:
    query_name: str = "A"
    data_source: DataSource = DataSource.METRICS
    aggregate_attribute_key: Optional[str] = None


@dataclass
class BuilderQuery:
    query_data: List[SubQuery] = field(default_factory=list)


@dataclass
class Query:
    query_type: QueryType = QueryType.QUERY_BUILDER
    builder: BuilderQuery = field(default_factory=BuilderQuery)
    id: Optional[str] = None


def query_from_dict(d: Optional[Dict[str, Any]]) -> Optional[Query]:
    """
    Build a Query from its stored dashboard JSON representation.
    Unknown query types and data sources are kept as plain strings so that the
    eligibility check rejects them instead of failing here.
    Arguments:
        d: Dictionary with ``queryType`` and ``builder.queryData`` keys.
    Returns:
        The Query, or None if no query was given.
    """
    if not d:
        return None

    sub_queries = []
    for item in (d.get("builder") or {}).get("queryData") or []:
        attribute = item.get("aggregateAttribute") or {}
        sub_queries.append(SubQuery(
            query_name=item.get("queryName", ""),
            data_source=_coerce(DataSource, item.get("dataSource")),
            aggregate_attribute_key=attribute.get("key"),
        ))

    return Query(
        query_type=_coerce(QueryType, d.get("queryType")),
        builder=BuilderQuery(query_data=sub_queries),
        id=d.get("id"),
    )


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return value
