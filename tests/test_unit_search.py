from yaxis_units.taxonomy import DEFAULT_TAXONOMY, UniversalUnit
from yaxis_units.unit_search import UnitSearchIndex

index = UnitSearchIndex()


def test_search_by_id_name_and_alias():
    bytes_unit = DEFAULT_TAXONOMY.get("By")
    assert index.search("By", bytes_unit)
    assert index.search("bytes (b", bytes_unit)
    # "decbytes" only appears as an alias
    assert index.search("DECBYTES", bytes_unit)
    assert not index.search("seconds", bytes_unit)


def test_empty_term_matches_everything():
    assert all(index.search("", unit) for unit in DEFAULT_TAXONOMY.units())
    assert sum(len(c.units) for c in index.filter("")) == len(DEFAULT_TAXONOMY)


def test_candidate_without_id_never_matches():
    assert not index.search("", UniversalUnit(id="", name="Nothing", category="Other"))
    assert not index.search("x", None)


def test_filter_keeps_declaration_order():
    results = index.filter("sec")
    names = [c.name for c in results]
    assert names == [c.name for c in DEFAULT_TAXONOMY.categories if c.name in names]
    time_units = [u.id for u in results[0].units]
    assert results[0].name == "Time"
    assert time_units == ["ns", "us", "ms", "s"]


def test_filter_drops_empty_categories():
    results = index.filter("hertz")
    assert [c.name for c in results] == ["Frequency"]
    assert [u.id for u in results[0].units] == ["Hz", "kHz", "MHz", "GHz"]


def test_alias_only_match_returns_unit():
    results = index.filter("reqps")
    assert [u.id for c in results for u in c.units] == ["{req}/s"]
