"""
Dips calculator.

The package includes a fixed number of 1.5oz dips. The allotment is used up
in the order the dips were selected; anything beyond it is an extra dip.
3oz dips carry a size upgrade on every unit, included or not.
"""

import logging

from ..ledger import ItemCategory
from .base import BaseCalculator
from .normalize import normalize_dips, normalize_dips_included
from .pricing_tables import DIP_PRICING, DIP_UPGRADE_SIZE

logger = logging.getLogger(__name__)


class DipsCalculator(BaseCalculator):

    SOURCE = "dips"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        dips = normalize_dips(selection)
        included_count = normalize_dips_included(package_config).count

        remaining = max(included_count, 0)
        total_quantity = 0

        for index, dip in enumerate(dips):
            quantity = self.quantity_or_default(dip.quantity)
            if quantity <= 0:
                continue
            total_quantity += quantity

            included_qty = min(quantity, remaining)
            extra_qty = quantity - included_qty
            remaining -= included_qty

            item_id = f"dip-{self.item_key(dip.id, index)}"
            self.add_item(ledger, item_id, ItemCategory.DIP,
                          name=dip.name, quantity=quantity, size=dip.size,
                          included_quantity=included_qty, extra_quantity=extra_qty)

            if extra_qty > 0:
                rate = DIP_PRICING["extra"]
                amount = extra_qty * rate
                self.upcharge(ledger, item_id, amount,
                              f"Extra {dip.name} dips ({extra_qty}) (+{self.money(rate)} each)")
                logger.info("Applied extra dip upcharge: %s x%d, %s",
                            dip.name, extra_qty, self.money(amount))

            if dip.size == DIP_UPGRADE_SIZE:
                rate = DIP_PRICING["size_upgrade"]
                amount = quantity * rate
                self.upcharge(ledger, item_id, amount,
                              f"{dip.name} {DIP_UPGRADE_SIZE} upgrade ({quantity}) "
                              f"(+{self.money(rate)} each)")
                logger.info("Applied dip size upgrade: %s x%d, %s",
                            dip.name, quantity, self.money(amount))

        logger.debug("Dips priced: %d selected, %d included in package",
                     total_quantity, included_count)
        self.mark_complete(ledger, "dips", total_quantity >= included_count)
        return ledger
