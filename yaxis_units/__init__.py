# Y-axis Unit Inference and Selection Package

from .taxonomy import UniversalUnit, UnitCategory, UnitTaxonomy, DEFAULT_TAXONOMY
from .unit_mapper import UnitMapper, map_raw_unit_to_universal
from .unit_search import UnitSearchIndex
from .query_models import Query, BuilderQuery, SubQuery, QueryType, DataSource, query_from_dict
from .metric_units import MetricUnitsResult, StaticMetricUnitLookup, InMemoryPersistedUnits
from .resolver import MetricUnitResolver, ResolvedUnitState
from .selection import UnitSelectionController

__all__ = [
    'UniversalUnit',
    'UnitCategory',
    'UnitTaxonomy',
    'DEFAULT_TAXONOMY',
    'UnitMapper',
    'map_raw_unit_to_universal',
    'UnitSearchIndex',
    'Query',
    'BuilderQuery',
    'SubQuery',
    'QueryType',
    'DataSource',
    'query_from_dict',
    'MetricUnitsResult',
    'StaticMetricUnitLookup',
    'InMemoryPersistedUnits',
    'MetricUnitResolver',
    'ResolvedUnitState',
    'UnitSelectionController'
]
