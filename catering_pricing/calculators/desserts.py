"""Desserts calculator: every dessert unit is billed at its type rate."""

import logging

from ..ledger import ItemCategory
from .base import BaseCalculator
from .normalize import normalize_desserts
from .pricing_tables import DEFAULT_DESSERT_TYPE, DESSERT_RATES, DESSERT_TYPE_ALIASES

logger = logging.getLogger(__name__)


def resolve_dessert_rate(dessert) -> float:
    """
    Per-unit price for a dessert.

    A positive catalog base_price wins; otherwise the rate for its type.
    Missing type means cookie. Raises ValueError for an unknown type.
    """
    if dessert.base_price is not None and dessert.base_price > 0:
        return dessert.base_price

    dessert_type = (dessert.type or DEFAULT_DESSERT_TYPE).strip().lower()
    dessert_type = DESSERT_TYPE_ALIASES.get(dessert_type, dessert_type)
    if dessert_type not in DESSERT_RATES:
        raise ValueError(f"Unknown dessert type: {dessert.type}")
    return DESSERT_RATES[dessert_type]


class DessertsCalculator(BaseCalculator):

    SOURCE = "desserts"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        selected = False

        for index, dessert in enumerate(normalize_desserts(selection)):
            quantity = self.quantity_or_default(dessert.quantity)
            if quantity <= 0:
                continue

            rate = resolve_dessert_rate(dessert)
            item_id = f"dessert-{self.item_key(dessert.id, index)}"
            self.add_item(ledger, item_id, ItemCategory.DESSERT,
                          name=dessert.name, quantity=quantity,
                          dessert_type=dessert.type or DEFAULT_DESSERT_TYPE,
                          variant_id=dessert.variant_id, servings=dessert.servings,
                          unit_price=rate)

            amount = quantity * rate
            self.upcharge(ledger, item_id, amount,
                          f"{dessert.name} ({quantity}) (+{self.money(rate)} each)")
            logger.info("Applied dessert upcharge: %s x%d, %s",
                        dessert.name, quantity, self.money(amount))
            selected = True

        self.mark_complete(ledger, "desserts", selected)
        return ledger
