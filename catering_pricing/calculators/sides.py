"""
Sides calculator: chips, cold sides and salads.

Each selected side may carry its own unit price and a number of units that
are already included with the package. Only units above the included
quantity are billed.
"""

import logging

from ..ledger import ItemCategory
from .base import BaseCalculator
from .normalize import normalize_sides
from .pricing_tables import DEFAULT_CHIPS_NAME, SIDE_RATES

logger = logging.getLogger(__name__)


class SidesCalculator(BaseCalculator):

    SOURCE = "sides"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        sides = normalize_sides(selection)
        selected = False

        chips = sides.chips
        if chips is not None and chips.quantity > 0:
            name = chips.display_name or DEFAULT_CHIPS_NAME
            self._price_side(ledger, "chips", name, chips.quantity,
                             chips.included_quantity, chips.unit_price,
                             SIDE_RATES["chips"], unit="5-pack")
            selected = True

        for index, side in enumerate(sides.cold_sides):
            if side.quantity <= 0:
                continue
            self._price_side(ledger, f"cold-side-{self.item_key(side.id, index)}",
                             side.display_name or side.name, side.quantity,
                             side.included_quantity, side.unit_price,
                             SIDE_RATES["cold_side"], servings=side.servings)
            selected = True

        for index, salad in enumerate(sides.salads):
            if salad.quantity <= 0:
                continue
            self._price_side(ledger, f"salad-{self.item_key(salad.id, index)}",
                             salad.display_name or salad.name, salad.quantity,
                             salad.included_quantity, salad.unit_price,
                             SIDE_RATES["salad"], servings=salad.servings)
            selected = True

        self.mark_complete(ledger, "sides", selected)
        return ledger

    def _price_side(self, ledger, item_id, name, quantity, included, unit_price,
                    default_rate, **extra):
        included = max(included or 0, 0)
        rate = unit_price if unit_price is not None else default_rate
        additional = max(0, quantity - included)

        self.add_item(ledger, item_id, ItemCategory.SIDE,
                      name=name, quantity=quantity, included_quantity=included,
                      additional_quantity=additional, unit_price=rate, **extra)

        if additional > 0:
            amount = additional * rate
            self.upcharge(ledger, item_id, amount,
                          f"Additional {name} ({additional}) (+{self.money(rate)} each)")
            logger.info("Applied side upcharge: %s x%d at %s, %s",
                        name, additional, self.money(rate), self.money(amount))
        else:
            logger.debug("Side %s fully included (%d of %d)", name, quantity, included)
