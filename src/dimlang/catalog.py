# -----------------------------------------------------------------------------
# Unit catalog loader & accessor
# Purpose: Parse the YAML unit catalog (dimensions → units → aliases) into
# typed specs, deriving every unit's conversion rate to its dimension's base
# unit with pint.
# - Depends on .units for the UnitIdentity / DimensionIdentity enums; every
#   enum member must have exactly one catalog entry.
# -----------------------------------------------------------------------------

from __future__ import annotations
import functools
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Dict, List

import yaml
from pint import UnitRegistry
from pint.errors import DefinitionSyntaxError, DimensionalityError, RedefinitionError, UndefinedUnitError

from .errors import CatalogError, UnsupportedUnit
from .units import DimensionIdentity, UnitIdentity


@dataclass
class DimensionSpec:
    identity: DimensionIdentity
    base: str     # pint unit every value of this dimension is normalized to
    label: str


@dataclass
class UnitSpec:
    """
    Static facts for one UnitIdentity.
    - definition: pint unit name the rate is derived from
    - rate: multiplier taking a value in this unit to the dimension's base unit
    - aliases: spellings accepted in literal brackets (stored lowercased)
    """
    identity: UnitIdentity
    dimension: DimensionIdentity
    definition: str
    symbol: str
    rate: float
    aliases: List[str] = field(default_factory=list)


@dataclass
class Catalog:
    dimensions: Dict[DimensionIdentity, DimensionSpec]
    units: Dict[UnitIdentity, UnitSpec]
    aliases: Dict[str, UnitIdentity]

    @staticmethod
    def from_yaml_dict(d: Dict[str, Any]) -> "Catalog":
        """
        Build a Catalog from a pre-parsed YAML dictionary.
        Expected shape:
          definitions: ["USD = [currency]", ...]    # optional pint definitions
          dimensions:
            length: { base: "meter", label: "length" }
          units:
            kilometer: { dimension: length, definition: "kilometer",
                         symbol: "km", aliases: ["km", "kilometers"] }
        """
        if not isinstance(d, dict):
            raise CatalogError("Unit catalog must be a mapping")

        ureg = UnitRegistry()
        for definition in d.get("definitions") or []:
            try:
                ureg.define(str(definition))
            except (DefinitionSyntaxError, RedefinitionError) as e:
                raise CatalogError(f"Bad pint definition {definition!r}: {e}") from e

        # ---- Dimensions -------------------------------------------------------
        dims: Dict[DimensionIdentity, DimensionSpec] = {}
        for key, spec in (d.get("dimensions") or {}).items():
            try:
                ident = DimensionIdentity(key)
            except ValueError:
                raise CatalogError(f"Unknown dimension in catalog: {key}") from None
            dims[ident] = DimensionSpec(identity=ident, base=str(spec["base"]),
                                        label=str(spec.get("label", key)))
        missing_dims = set(DimensionIdentity) - set(dims)
        if missing_dims:
            raise CatalogError(f"Catalog is missing dimensions: {sorted(m.value for m in missing_dims)}")

        # ---- Units ------------------------------------------------------------
        units: Dict[UnitIdentity, UnitSpec] = {}
        aliases: Dict[str, UnitIdentity] = {}
        for key, spec in (d.get("units") or {}).items():
            try:
                ident = UnitIdentity(key)
            except ValueError:
                raise CatalogError(f"Unknown unit in catalog: {key}") from None
            try:
                dim = DimensionIdentity(spec["dimension"])
            except (KeyError, ValueError):
                raise CatalogError(f"Unit {key} has no valid dimension") from None
            definition = str(spec.get("definition", key))
            try:
                rate = float(ureg.Quantity(1.0, definition).to(dims[dim].base).magnitude)
            except (UndefinedUnitError, DimensionalityError) as e:
                raise CatalogError(f"Cannot derive conversion rate for {key}: {e}") from e

            names = [str(a).lower() for a in spec.get("aliases", [])]
            for name in names:
                if name in aliases:
                    raise CatalogError(f"Alias {name!r} used by both {aliases[name].value} and {key}")
                aliases[name] = ident
            units[ident] = UnitSpec(identity=ident, dimension=dim, definition=definition,
                                    symbol=str(spec.get("symbol", key)), rate=rate, aliases=names)
        missing = set(UnitIdentity) - set(units)
        if missing:
            raise CatalogError(f"Catalog is missing units: {sorted(m.value for m in missing)}")
        return Catalog(dimensions=dims, units=units, aliases=aliases)

    @staticmethod
    def from_yaml_text(text: str) -> "Catalog":
        return Catalog.from_yaml_dict(yaml.safe_load(text))

    @staticmethod
    def from_file(path: str) -> "Catalog":
        with open(path, "r", encoding="utf-8") as f:
            return Catalog.from_yaml_text(f.read())

    def resolve(self, alias: str) -> UnitIdentity:
        # Literal bracket spelling → identity; unknown spellings are fatal.
        ident = self.aliases.get(alias.strip().lower())
        if ident is None:
            raise UnsupportedUnit(f"Unsupported unit alias {alias!r}")
        return ident

    def list_units(self) -> List[Dict[str, Any]]:
        """Flattened, JSON-friendly listing (CLI `units` command and GET /units)."""
        out = []
        for ident in UnitIdentity:
            u = self.units[ident]
            out.append({
                "unit": ident.value, "symbol": u.symbol,
                "dimension": self.dimensions[u.dimension].label,
                "base": self.dimensions[u.dimension].base,
                "rate": u.rate, "aliases": u.aliases,
            })
        return out


_catalog_path: str | None = None


def use_catalog(path: str | None) -> None:
    """Point default_catalog() at an alternate YAML file (None restores the packaged one)."""
    global _catalog_path
    _catalog_path = path
    default_catalog.cache_clear()


@functools.lru_cache(maxsize=None)
def default_catalog() -> Catalog:
    if _catalog_path:
        return Catalog.from_file(_catalog_path)
    text = resources.files("dimlang").joinpath("data/units.yaml").read_text(encoding="utf-8")
    return Catalog.from_yaml_text(text)
