from yaxis_units.taxonomy import DEFAULT_TAXONOMY, OTHER_CATEGORY, UnitTaxonomy
from yaxis_units.unit_mapper import UnitMapper, is_unknown_unit, map_raw_unit_to_universal

import pytest


def test_registered_units_by_id_name_and_alias():
    assert map_raw_unit_to_universal("By") == "By"
    assert map_raw_unit_to_universal("Bytes (B)") == "By"
    assert map_raw_unit_to_universal("bytes") == "By"
    assert map_raw_unit_to_universal("decbytes") == "By"
    assert map_raw_unit_to_universal("milliseconds") == "ms"
    assert map_raw_unit_to_universal("percent") == "%"


def test_matching_is_case_insensitive():
    assert map_raw_unit_to_universal("BYTES") == "By"
    assert map_raw_unit_to_universal("Seconds") == "s"
    assert map_raw_unit_to_universal("  reqps ") == "{req}/s"


def test_case_variants_of_a_legacy_id_map_to_one_unit():
    assert map_raw_unit_to_universal("Bps") == "By/s"
    assert map_raw_unit_to_universal("bps") == "By/s"
    assert map_raw_unit_to_universal("W") == "W"
    assert map_raw_unit_to_universal("w") == "W"


def test_default_taxonomy_keys_do_not_collide_ignoring_case():
    owners = {}
    for unit in DEFAULT_TAXONOMY.units():
        for key in (unit.id, unit.name, *unit.aliases):
            owner = owners.setdefault(key.lower(), unit.id)
            assert owner == unit.id, f"'{key}' is claimed by both {owner} and {unit.id}"


def test_unknown_id_shaped_unit_passes_through():
    assert map_raw_unit_to_universal("furlongs/fortnight") == "furlongs/fortnight"
    unit = UnitMapper().map_raw_unit("{packets}/s")
    assert unit.id == "{packets}/s"
    assert unit.category == OTHER_CATEGORY


def test_unknown_free_text_becomes_pseudo_unit():
    mapper = UnitMapper()
    unit = mapper.map_raw_unit("widgets per fortnight")
    assert is_unknown_unit(unit.id)
    assert unit.name == "widgets per fortnight"
    assert unit.category == OTHER_CATEGORY
    assert mapper.display_label(unit.id) == "widgets per fortnight"


def test_empty_and_none_never_raise():
    mapper = UnitMapper()
    assert mapper.map_raw_unit("").name == ""
    assert mapper.map_raw_unit(None).name == ""


@pytest.mark.parametrize("raw", ["bytes", "Bps", "furlongs", "widgets per fortnight", "", "%"])
def test_mapping_is_idempotent(raw):
    first = map_raw_unit_to_universal(raw)
    assert map_raw_unit_to_universal(raw) == first
    assert map_raw_unit_to_universal(first) == first


def test_taxonomy_lookups():
    assert DEFAULT_TAXONOMY.get("ms").category == "Time"
    assert DEFAULT_TAXONOMY.get("no-such-unit") is None
    assert DEFAULT_TAXONOMY.get(None) is None
    assert DEFAULT_TAXONOMY.get_category("Data").units[0].id == "By"
    assert DEFAULT_TAXONOMY.get_category("Nope") is None
    assert "By/s" in DEFAULT_TAXONOMY
    assert len(list(DEFAULT_TAXONOMY.units())) == len(DEFAULT_TAXONOMY)
    assert [c.name for c in DEFAULT_TAXONOMY.categories][:3] == ["Time", "Data", "Data Rate"]


def test_taxonomy_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        UnitTaxonomy.from_spec({
            "A": [("x", "X", ())],
            "B": [("x", "Also X", ())],
        })


def test_first_declared_alias_wins_across_units():
    taxonomy = UnitTaxonomy.from_spec({
        "First": [("one", "One", ("shared",))],
        "Second": [("two", "Two", ("shared",))],
    })
    assert UnitMapper(taxonomy).map_raw_unit_to_universal("shared") == "one"
