"""Beverages calculator: cold drinks by container, hot drinks by cup or box."""

import logging

from ..ledger import ItemCategory
from .base import BaseCalculator
from .normalize import normalize_beverages
from .pricing_tables import BEVERAGE_RATES, DEFAULT_BEVERAGE_SIZE

logger = logging.getLogger(__name__)


def resolve_beverage_rate(temperature: str, size) -> tuple:
    """
    Returns (size, per_unit_price).

    Missing size defaults to can (cold) or cup (hot). Raises ValueError for
    a size the temperature's price list does not have.
    """
    size = (size or DEFAULT_BEVERAGE_SIZE[temperature]).strip().lower()
    rates = BEVERAGE_RATES[temperature]
    if size not in rates:
        raise ValueError(f"Unknown {temperature} beverage size: {size}")
    return size, rates[size]


class BeveragesCalculator(BaseCalculator):

    SOURCE = "beverages"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        beverages = normalize_beverages(selection)

        selected = self._price_group(ledger, "cold", beverages.cold)
        selected = self._price_group(ledger, "hot", beverages.hot) or selected

        self.mark_complete(ledger, "beverages", selected)
        return ledger

    def _price_group(self, ledger, temperature, beverages) -> bool:
        selected = False
        for index, beverage in enumerate(beverages):
            quantity = self.quantity_or_default(beverage.quantity)
            if quantity <= 0:
                continue

            size, rate = resolve_beverage_rate(temperature, beverage.size)
            item_id = f"{temperature}-beverage-{self.item_key(beverage.id, index)}"
            self.add_item(ledger, item_id, ItemCategory.BEVERAGE,
                          name=beverage.name, quantity=quantity, size=size,
                          serves=beverage.serves, temperature=temperature,
                          unit_price=rate)

            amount = quantity * rate
            self.upcharge(ledger, item_id, amount,
                          f"{beverage.name} {size} ({quantity}) (+{self.money(rate)} each)")
            logger.info("Applied %s beverage upcharge: %s %s x%d, %s",
                        temperature, beverage.name, size, quantity, self.money(amount))
            selected = True
        return selected
