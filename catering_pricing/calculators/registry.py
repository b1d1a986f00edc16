"""
Section calculators, keyed by the ledger source they write.

The aggregator walks this mapping in insertion order, so wings are priced
first and removal credits last.
"""

from .base import BaseCalculator
from .beverages import BeveragesCalculator
from .desserts import DessertsCalculator
from .dips import DipsCalculator
from .removal_credits import RemovalCreditCalculator
from .sauces import SauceCalculator
from .sides import SidesCalculator
from .wings import WingCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "wings": WingCalculator,
    "sauces": SauceCalculator,
    "dips": DipsCalculator,
    "sides": SidesCalculator,
    "desserts": DessertsCalculator,
    "beverages": BeveragesCalculator,
    "removals": RemovalCreditCalculator,
}


def get_calculator(source: str) -> BaseCalculator:
    """Fresh calculator for a ledger source. Unknown sources raise ValueError."""
    calculator_class = CALCULATOR_REGISTRY.get(source)
    if calculator_class is None:
        raise ValueError(
            f"No calculator registered for section: {source}. "
            f"Known sections: {', '.join(CALCULATOR_REGISTRY)}"
        )
    return calculator_class()


def has_calculator(source: str) -> bool:
    return source in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """Sources in pricing order."""
    return list(CALCULATOR_REGISTRY)
