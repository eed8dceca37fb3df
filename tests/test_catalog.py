from importlib import resources

import pytest
import yaml

from dimlang.catalog import Catalog, default_catalog, use_catalog
from dimlang.errors import CatalogError, UnsupportedUnit
from dimlang.units import UnitIdentity


def _packaged() -> dict:
    return yaml.safe_load(resources.files("dimlang").joinpath("data/units.yaml").read_text(encoding="utf-8"))


def test_default_catalog_covers_every_identity():
    cat = default_catalog()
    assert set(cat.units) == set(UnitIdentity)
    assert len(cat.list_units()) == len(UnitIdentity)


def test_resolve_is_case_insensitive():
    cat = default_catalog()
    assert cat.resolve("KM") is UnitIdentity.KILOMETER
    assert cat.resolve(" Meters ") is UnitIdentity.METER
    with pytest.raises(UnsupportedUnit):
        cat.resolve("parsec")


def test_duplicate_alias_rejected():
    d = _packaged()
    d["units"]["kilometer"]["aliases"].append("m")
    with pytest.raises(CatalogError):
        Catalog.from_yaml_dict(d)


def test_missing_unit_rejected():
    d = _packaged()
    del d["units"]["gbp"]
    with pytest.raises(CatalogError):
        Catalog.from_yaml_dict(d)


def test_incompatible_definition_rejected():
    d = _packaged()
    d["units"]["hour"]["definition"] = "meter"
    with pytest.raises(CatalogError):
        Catalog.from_yaml_dict(d)


def test_alternate_catalog_file(tmp_path):
    d = _packaged()
    d["definitions"] = ["USD = [currency]", "GBP = 1.25 * USD"]
    path = tmp_path / "units.yaml"
    path.write_text(yaml.safe_dump(d), encoding="utf-8")
    try:
        use_catalog(str(path))
        assert UnitIdentity.GBP.conversion_rate == pytest.approx(1.25)
    finally:
        use_catalog(None)
    assert UnitIdentity.GBP.conversion_rate == pytest.approx(0.8)
