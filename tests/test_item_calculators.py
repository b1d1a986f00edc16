"""
Item calculator tests: dips, sides, desserts, beverages.
"""

import pytest

from catering_pricing.calculators.beverages import BeveragesCalculator
from catering_pricing.calculators.desserts import DessertsCalculator
from catering_pricing.calculators.dips import DipsCalculator
from catering_pricing.calculators.sides import SidesCalculator


def _upcharges(ledger, item_id=None):
    return [
        m for m in ledger["modifiers"]
        if m["kind"] == "upcharge" and (item_id is None or m["item_id"] == item_id)
    ]


# ============================================================
# Dips
# ============================================================

def test_dips_within_allotment_are_free():
    dips = [{"id": "ranch", "name": "Ranch", "quantity": 10}, {"id": "bleu", "name": "Blue Cheese", "quantity": 5}]
    ledger = DipsCalculator().calculate(dips, {"count": 15})
    assert _upcharges(ledger) == []
    assert ledger["items"]["dip-ranch"]["included_quantity"] == 10
    assert ledger["meta"]["completion_status"]["dips"] is True


def test_extra_dips_consume_allotment_in_order():
    dips = [{"id": "ranch", "name": "Ranch", "quantity": 12}, {"id": "bleu", "name": "Blue Cheese", "quantity": 8}]
    ledger = DipsCalculator().calculate(dips, {"count": 15})
    assert _upcharges(ledger, "dip-ranch") == []
    extra = _upcharges(ledger, "dip-bleu")
    assert len(extra) == 1
    assert extra[0]["amount"] == pytest.approx(3.75)
    assert ledger["items"]["dip-bleu"]["extra_quantity"] == 5


def test_three_ounce_upgrade_on_every_unit():
    dips = [{"id": "ranch", "name": "Ranch", "quantity": 4, "size": "3oz"}]
    ledger = DipsCalculator().calculate(dips, {"count": 2})
    amounts = sorted(m["amount"] for m in _upcharges(ledger, "dip-ranch"))
    assert amounts == [pytest.approx(1.50), pytest.approx(6.00)]


def test_missing_dip_quantity_counts_as_one():
    ledger = DipsCalculator().calculate([{"name": "Ranch"}], {"count": 1})
    assert ledger["items"]["dip-0"]["quantity"] == 1
    assert ledger["meta"]["completion_status"]["dips"] is True


def test_zero_quantity_dip_skipped():
    ledger = DipsCalculator().calculate([{"id": "ranch", "name": "Ranch", "quantity": 0}], None)
    assert ledger["items"] == {}
    assert ledger["meta"]["completion_status"]["dips"] is False


# ============================================================
# Sides
# ============================================================

def test_chips_included_quantity_is_free():
    sides = {"chips": {"quantity": 3, "includedQuantity": 2}}
    ledger = SidesCalculator().calculate(sides)
    ups = _upcharges(ledger, "chips")
    assert len(ups) == 1
    assert ups[0]["amount"] == pytest.approx(10.20)
    assert ledger["items"]["chips"]["name"] == "Miss Vickie's Chips 5-Pack"
    assert ledger["meta"]["completion_status"]["sides"] is True


def test_side_unit_price_override():
    sides = {"coldSides": [{"id": "slaw", "name": "Family Coleslaw", "quantity": 2, "unitPrice": 12.00}]}
    ledger = SidesCalculator().calculate(sides)
    assert _upcharges(ledger, "cold-side-slaw")[0]["amount"] == pytest.approx(24.00)


def test_salad_default_rate():
    sides = {"salads": [{"id": "caesar", "name": "Caesar Salad", "quantity": 1}]}
    ledger = SidesCalculator().calculate(sides)
    assert _upcharges(ledger, "salad-caesar")[0]["amount"] == pytest.approx(33.59)


def test_legacy_sides_array_is_cold_sides():
    ledger = SidesCalculator().calculate([{"id": "slaw", "name": "Coleslaw", "quantity": 1}])
    assert "cold-side-slaw" in ledger["items"]
    assert _upcharges(ledger)[0]["amount"] == pytest.approx(14.40)


def test_no_sides_is_incomplete():
    ledger = SidesCalculator().calculate({"chips": {"quantity": 0}, "coldSides": [], "salads": []})
    assert ledger["items"] == {}
    assert ledger["meta"]["completion_status"]["sides"] is False


def test_sides_must_be_object_or_list():
    with pytest.raises(TypeError):
        SidesCalculator().calculate("chips")


# ============================================================
# Desserts
# ============================================================

def test_dessert_type_rates():
    desserts = [
        {"id": "c", "name": "Cookies", "type": "cookie", "quantity": 10},
        {"id": "b", "name": "Brownies", "type": "brownie", "quantity": 5},
        {"id": "k", "name": "Cake", "type": "cake", "quantity": 2},
    ]
    ledger = DessertsCalculator().calculate(desserts)
    assert _upcharges(ledger, "dessert-c")[0]["amount"] == pytest.approx(20.0)
    assert _upcharges(ledger, "dessert-b")[0]["amount"] == pytest.approx(15.0)
    assert _upcharges(ledger, "dessert-k")[0]["amount"] == pytest.approx(8.0)
    assert ledger["meta"]["completion_status"]["desserts"] is True


def test_dessert_defaults_to_cookie():
    ledger = DessertsCalculator().calculate([{"name": "Chocolate Chip"}])
    assert _upcharges(ledger, "dessert-0")[0]["amount"] == pytest.approx(2.0)


def test_dessert_base_price_overrides_type():
    desserts = [{"id": "pound", "name": "Marble Pound Cake 5-Pack", "type": "cake", "quantity": 1, "basePrice": 21.00}]
    ledger = DessertsCalculator().calculate(desserts)
    assert _upcharges(ledger)[0]["amount"] == pytest.approx(21.0)


def test_unknown_dessert_type_rejected():
    with pytest.raises(ValueError):
        DessertsCalculator().calculate([{"name": "Flan", "type": "flan"}])


# ============================================================
# Beverages
# ============================================================

def test_cold_and_hot_beverages():
    beverages = {
        "cold": [{"id": "soda", "name": "Soda", "size": "can", "quantity": 12},
                 {"id": "tea", "name": "Iced Tea", "size": "pitcher", "quantity": 2}],
        "hot": [{"id": "coffee", "name": "Coffee", "size": "box", "quantity": 1}],
    }
    ledger = BeveragesCalculator().calculate(beverages)
    assert _upcharges(ledger, "cold-beverage-soda")[0]["amount"] == pytest.approx(24.0)
    assert _upcharges(ledger, "cold-beverage-tea")[0]["amount"] == pytest.approx(16.0)
    assert _upcharges(ledger, "hot-beverage-coffee")[0]["amount"] == pytest.approx(15.0)
    assert ledger["items"]["hot-beverage-coffee"]["temperature"] == "hot"
    assert ledger["meta"]["completion_status"]["beverages"] is True


def test_beverage_size_defaults():
    beverages = {"cold": [{"name": "Water"}], "hot": [{"name": "Coffee"}]}
    ledger = BeveragesCalculator().calculate(beverages)
    assert ledger["items"]["cold-beverage-0"]["size"] == "can"
    assert ledger["items"]["hot-beverage-0"]["size"] == "cup"
    assert _upcharges(ledger, "hot-beverage-0")[0]["amount"] == pytest.approx(2.50)


def test_legacy_beverages_array_is_cold():
    ledger = BeveragesCalculator().calculate([{"id": "water", "name": "Water", "size": "bottle", "quantity": 3}])
    assert _upcharges(ledger, "cold-beverage-water")[0]["amount"] == pytest.approx(9.0)


def test_unknown_beverage_size_rejected():
    with pytest.raises(ValueError):
        BeveragesCalculator().calculate({"hot": [{"name": "Coffee", "size": "pitcher"}]})


def test_no_beverages_is_incomplete():
    ledger = BeveragesCalculator().calculate(None)
    assert ledger["meta"]["completion_status"]["beverages"] is False
