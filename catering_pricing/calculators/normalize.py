"""
Input normalization: one step per collection type, run before any calculator.

Calculators accept raw snapshot slices (dicts and lists straight from the UI)
or already-validated schema objects. Both are turned into schema objects here.
A slice with the wrong top-level shape is a contract violation and raises
TypeError; malformed entries raise pydantic's ValidationError.
"""

from ..schemas import (
    Beverage,
    BeveragesSelection,
    Dessert,
    Dip,
    DipsIncluded,
    RemovedItem,
    Sauce,
    SauceSelections,
    SelectedPackage,
    SideItem,
    SidesSelection,
    WingDistribution,
    WingOptions,
)


def _coerce(model, value, what: str):
    if isinstance(value, model):
        return value
    if isinstance(value, dict):
        return model.model_validate(value)
    raise TypeError(f"{what} must be an object, got {type(value).__name__}")


def _coerce_list(model, raw, what: str) -> list:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise TypeError(f"{what} must be a list, got {type(raw).__name__}")
    return [_coerce(model, entry, f"{what} entry") for entry in raw]


def _coerce_optional(model, raw, what: str):
    if raw is None:
        return None
    return _coerce(model, raw, what)


def normalize_wing_distribution(raw):
    """Returns a WingDistribution, or None when no distribution was chosen."""
    return _coerce_optional(WingDistribution, raw, "wingDistribution")


def normalize_wing_options(raw) -> WingOptions:
    return _coerce_optional(WingOptions, raw, "wingOptions") or WingOptions()


def normalize_sauces(raw) -> list:
    return _coerce_list(Sauce, raw, "sauces")


def normalize_sauce_selections(raw) -> SauceSelections:
    return _coerce_optional(SauceSelections, raw, "sauceSelections") or SauceSelections()


def normalize_dips(raw) -> list:
    return _coerce_list(Dip, raw, "dips")


def normalize_dips_included(raw) -> DipsIncluded:
    return _coerce_optional(DipsIncluded, raw, "dipsIncluded") or DipsIncluded()


def normalize_sides(raw) -> SidesSelection:
    """Object form {chips, coldSides, salads}; a legacy bare array is cold sides."""
    if raw is None:
        return SidesSelection()
    if isinstance(raw, (list, tuple)):
        return SidesSelection(cold_sides=_coerce_list(SideItem, raw, "sides"))
    return _coerce(SidesSelection, raw, "sides")


def normalize_desserts(raw) -> list:
    return _coerce_list(Dessert, raw, "desserts")


def normalize_beverages(raw) -> BeveragesSelection:
    """Object form {cold, hot}; a legacy bare array is cold beverages."""
    if raw is None:
        return BeveragesSelection()
    if isinstance(raw, (list, tuple)):
        return BeveragesSelection(cold=_coerce_list(Beverage, raw, "beverages"))
    return _coerce(BeveragesSelection, raw, "beverages")


def normalize_removed_items(raw) -> list:
    return _coerce_list(RemovedItem, raw, "removedItems")


def normalize_package(raw) -> SelectedPackage:
    return _coerce_optional(SelectedPackage, raw, "selectedPackage") or SelectedPackage()
