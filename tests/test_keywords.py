"""Tests for the keyword catalog."""

import json

import pytest

from pseudolang.keywords import CATEGORY_ORDER, KEYWORDS, as_json, catalog, keywords_for


def test_catalog_has_every_category_in_order():
    assert list(catalog()) == list(CATEGORY_ORDER)
    assert set(KEYWORDS) == set(CATEGORY_ORDER)


def test_declarations_start_with_app():
    declarations = keywords_for("declarations")
    assert declarations[0] == "app"
    assert "model" in declarations
    assert "page" in declarations
    assert len(declarations) == 17


def test_control_keeps_multi_word_keyword():
    assert "for each" in keywords_for("control")


def test_catalog_is_immutable():
    with pytest.raises(TypeError):
        KEYWORDS["types"] = ("string",)  # type: ignore[index]


def test_catalog_copy_does_not_leak_mutations():
    data = catalog()
    data["types"].append("decimal")
    assert "decimal" not in keywords_for("types")


def test_unknown_category_raises_key_error():
    with pytest.raises(KeyError):
        keywords_for("operators")


def test_as_json_round_trips_catalog():
    assert json.loads(as_json()) == catalog()


def test_as_json_single_category():
    assert json.loads(as_json("types")) == {"types": list(KEYWORDS["types"])}


def test_as_json_unknown_category_raises_key_error():
    with pytest.raises(KeyError):
        as_json("operators")
