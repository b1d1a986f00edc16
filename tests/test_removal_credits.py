"""
Removal credit tests — per-item credits, 20% cap, modification pricing,
and the margin-tier credit table.
"""

import pytest

from catering_pricing.calculators.pricing_tables import (
    MARGIN_TIER_CREDIT_RATES,
    MINIMUM_ORDER_VALUES,
    MODIFICATION_PRICING,
    format_price,
    format_price_delta,
    get_add_on_cost,
    get_item_margin_tier,
    get_minimum_order_value,
    get_removal_credit,
)
from catering_pricing.calculators.removal_credits import (
    RemovalCreditCalculator,
    calculate_modification_pricing,
    validate_removal_cap,
)


# --- Test fixtures ---

def _package(base_price=329.99):
    return {"id": "tailgate", "name": "Tailgate Pack", "basePrice": base_price}


def _expensive_removals():
    """$136.50 of credits, well over the cap for a $329.99 package."""
    return [
        {"name": "Ghirardelli Hot Chocolate 128oz", "category": "hotBeverages", "quantity": 1},
        {"name": "Lavazza Coffee 128oz", "category": "hotBeverages", "quantity": 1},
        {"name": "Lavazza Coffee 96oz", "category": "hotBeverages", "quantity": 1},
    ]


# ============================================================
# Calculator
# ============================================================

def test_chips_removal_credit():
    removed = [{"name": "Miss Vickie's Chips 5-Pack", "category": "chips", "quantity": 2}]
    ledger = RemovalCreditCalculator().calculate(removed, _package())
    discounts = [m for m in ledger["modifiers"] if m["kind"] == "discount"]
    assert len(discounts) == 1
    assert discounts[0]["item_id"] == "item-removal-credits"
    assert discounts[0]["amount"] == pytest.approx(8.50)
    assert ledger["meta"]["cap_exceeded"] is False
    assert ledger["meta"]["removal_breakdown"] == [{
        "name": "Miss Vickie's Chips 5-Pack",
        "category": "chips",
        "quantity": 2,
        "credit_per_unit": 4.25,
        "total_credit": 8.50,
    }]
    assert ledger["meta"]["completion_status"]["removals"] is True


def test_credit_capped_at_twenty_percent():
    ledger = RemovalCreditCalculator().calculate(_expensive_removals(), _package())
    discount = [m for m in ledger["modifiers"] if m["kind"] == "discount"][0]
    assert discount["amount"] == pytest.approx(65.998)
    warnings = [m for m in ledger["modifiers"] if m["kind"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["item_id"] == "removal-credit-cap"
    assert "20%" in warnings[0]["label"]
    assert "$66.00" in warnings[0]["label"]
    assert "$70.50" in warnings[0]["label"]
    assert ledger["meta"]["cap_exceeded"] is True


def test_unknown_item_gives_zero_credit():
    removed = [{"name": "Mystery Platter", "category": "chips", "quantity": 1}]
    ledger = RemovalCreditCalculator().calculate(removed, _package())
    assert [m for m in ledger["modifiers"] if m["kind"] == "discount"] == []
    assert ledger["meta"]["removal_breakdown"][0]["total_credit"] == 0.0


def test_generic_beverages_category_maps_to_cold():
    removed = [{"name": "Canned Sodas 24-pack", "category": "beverages", "quantity": 1}]
    ledger = RemovalCreditCalculator().calculate(removed, _package())
    assert ledger["meta"]["removal_breakdown"][0]["category"] == "cold_beverages"
    assert ledger["modifiers"][0]["amount"] == pytest.approx(22.49)


def test_no_removals_is_empty_and_complete():
    ledger = RemovalCreditCalculator().calculate([], _package())
    assert ledger["modifiers"] == []
    assert "removal_breakdown" not in ledger["meta"]
    assert ledger["meta"]["completion_status"]["removals"] is True


@pytest.mark.parametrize("base_price", [0.0, 50.0, 125.0, 329.99, 1000.0])
def test_applied_credit_never_exceeds_cap(base_price):
    ledger = RemovalCreditCalculator().calculate(_expensive_removals(), _package(base_price))
    applied = sum(m["amount"] for m in ledger["modifiers"] if m["kind"] == "discount")
    assert applied <= base_price * 0.20 + 1e-9


# ============================================================
# Cap validation and modification pricing
# ============================================================

def test_validate_removal_cap():
    result = validate_removal_cap(_expensive_removals(), 329.99)
    assert result["valid"] is False
    assert result["total_credits"] == pytest.approx(136.50)
    assert result["max_credit"] == pytest.approx(65.998)
    assert result["capped_credits"] == pytest.approx(65.998)
    assert result["exceeded_amount"] == pytest.approx(70.502)
    assert result["cap_percentage"] == 0.20


def test_modification_pricing_nets_removals_and_add_ons():
    removed = [{"name": "Family Coleslaw", "category": "coldSides", "quantity": 1}]
    added = [{"name": "Gourmet Brownies 5-Pack", "category": "desserts", "quantity": 2}]
    result = calculate_modification_pricing(200.0, removed, added)
    assert result["removal_credits"] == pytest.approx(6.00)
    assert result["add_on_charges"] == pytest.approx(48.00)
    assert result["final_price"] == pytest.approx(242.00)
    assert result["net_modification"] == pytest.approx(42.00)
    assert result["cap_exceeded"] is False


# ============================================================
# Pricing tables
# ============================================================

def test_removal_credit_follows_margin_tier():
    """Table credits are list price x tier rate, to the cent."""
    for category, items in MODIFICATION_PRICING.items():
        for name, entry in items.items():
            expected = entry["base_price"] * MARGIN_TIER_CREDIT_RATES[entry["margin_tier"]]
            assert entry["removal_credit"] == pytest.approx(expected, abs=0.01), f"{category}/{name}"


def test_table_lookups():
    assert get_removal_credit("NY Cheesecake 5-Pack", "desserts") == 23.75
    assert get_add_on_cost("Dip 5-Pack", "dips") == 4.20
    assert get_item_margin_tier("Caesar Salad (Family Size)", "salads") == "medium"
    assert get_item_margin_tier("Nothing", "salads") == "unknown"
    assert get_removal_credit("Anything", "appetizers") == 0.0


def test_minimum_order_values_by_tier():
    assert MINIMUM_ORDER_VALUES == {1: 125.00, 2: 180.00, 3: 280.00}
    assert get_minimum_order_value(2) == 180.00
    assert get_minimum_order_value(None) is None


def test_price_formatting():
    assert format_price(27.99) == "$27.99"
    assert format_price_delta(3.0) == "+$3.00"
    assert format_price_delta(-1.25) == "-$1.25"
    assert format_price_delta(0) == "$0.00"
