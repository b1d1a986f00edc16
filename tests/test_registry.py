"""
Calculator registry tests.
"""

import pytest

from catering_pricing.calculators.base import BaseCalculator
from catering_pricing.calculators.registry import (
    CALCULATOR_REGISTRY,
    get_calculator,
    has_calculator,
    list_calculators,
)


def test_every_section_has_a_calculator():
    assert list_calculators() == [
        "wings", "sauces", "dips", "sides", "desserts", "beverages", "removals",
    ]


def test_calculator_source_matches_registry_key():
    for source in CALCULATOR_REGISTRY:
        calculator = get_calculator(source)
        assert isinstance(calculator, BaseCalculator)
        assert calculator.SOURCE == source


def test_has_calculator():
    assert has_calculator("wings")
    assert not has_calculator("appetizers")


def test_unknown_section_raises():
    with pytest.raises(ValueError, match="No calculator registered"):
        get_calculator("appetizers")


def test_unknown_section_lists_known_sections():
    with pytest.raises(ValueError, match="Known sections: wings, sauces"):
        get_calculator("appetizers")


def test_get_calculator_returns_new_instance():
    assert get_calculator("dips") is not get_calculator("dips")
