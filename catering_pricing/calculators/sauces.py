"""
Sauce calculator.

The first `max` sauces are included with the package at no charge; every
sauce beyond that is an extra with a flat per-sauce upcharge. When enough
extras are selected, a cheaper bundle is suggested (never auto-applied).
"""

import logging

from ..ledger import ItemCategory
from .base import BaseCalculator
from .normalize import normalize_sauce_selections, normalize_sauces
from .pricing_tables import SAUCE_PRICING, SAUCE_TYPE_LABELS

logger = logging.getLogger(__name__)

BULK_5_THRESHOLD = 5
BULK_10_THRESHOLD = 10


def validate_sauce_selections(sauces, sauce_config) -> dict:
    """
    Check count, type and duplicate rules.

    Returns {"valid": bool, "errors": [str]}. The above-max message is
    informational, so it alone does not make the selection invalid.
    """
    sauces = normalize_sauces(sauces)
    sauce_config = normalize_sauce_selections(sauce_config)
    errors = []
    blocking = False
    count = len(sauces)

    if count < sauce_config.min:
        errors.append(f"Select at least {sauce_config.min} sauces (currently {count})")
        blocking = True

    if count > sauce_config.max:
        extra = count - sauce_config.max
        errors.append(
            "%d extra sauce%s will be added at $%.2f each"
            % (extra, "s" if extra > 1 else "", SAUCE_PRICING["per_sauce"])
        )

    for sauce in sauces:
        if sauce.type not in sauce_config.allowed_types:
            errors.append(f'Sauce "{sauce.name}" type "{sauce.type}" not allowed in this package')
            blocking = True

    seen = set()
    duplicates = []
    for sauce in sauces:
        if not sauce.id:
            continue
        if sauce.id in seen and sauce.id not in duplicates:
            duplicates.append(sauce.id)
        seen.add(sauce.id)
    if duplicates:
        errors.append(f"Duplicate sauces selected: {', '.join(duplicates)}")
        blocking = True

    return {"valid": not blocking, "errors": errors}


def calculate_bulk_sauce_pricing(extra_count: int) -> dict:
    """
    Compare flat per-sauce pricing for the extras with the bundle price.

    Returns {regular_price, bulk_price, bulk_type, savings, recommended}.
    """
    regular_price = extra_count * SAUCE_PRICING["per_sauce"]
    if extra_count < BULK_5_THRESHOLD:
        return {
            "regular_price": regular_price,
            "bulk_price": None,
            "bulk_type": None,
            "savings": 0.0,
            "recommended": False,
        }

    if extra_count >= BULK_10_THRESHOLD:
        bulk_price, bulk_type = SAUCE_PRICING["bulk_10"], "10-pack"
    else:
        bulk_price, bulk_type = SAUCE_PRICING["bulk_5"], "5-pack"

    savings = round(regular_price - bulk_price, 2)
    return {
        "regular_price": regular_price,
        "bulk_price": bulk_price,
        "bulk_type": bulk_type,
        "savings": savings,
        "recommended": savings > 0,
    }


def get_sauce_summary(sauces, sauce_config) -> dict:
    """Counts by inclusion, type and heat level, plus extra-sauce pricing."""
    sauces = normalize_sauces(sauces)
    sauce_config = normalize_sauce_selections(sauce_config)
    total = len(sauces)
    included = min(total, sauce_config.max)
    extra = max(0, total - sauce_config.max)

    by_type = {}
    by_heat_level = {}
    for sauce in sauces:
        by_type[sauce.type] = by_type.get(sauce.type, 0) + 1
        heat = sauce.heat_level or 0
        by_heat_level[heat] = by_heat_level.get(heat, 0) + 1

    return {
        "total": total,
        "included": included,
        "extra": extra,
        "by_type": by_type,
        "by_heat_level": by_heat_level,
        "complete": sauce_config.min <= total <= sauce_config.max,
        "pricing": {
            "extra_sauce_cost": extra * SAUCE_PRICING["per_sauce"],
            "bulk_pricing": calculate_bulk_sauce_pricing(extra),
        },
    }


def get_sauce_type_label(sauce_type: str) -> str:
    return SAUCE_TYPE_LABELS.get(sauce_type, sauce_type)


class SauceCalculator(BaseCalculator):

    SOURCE = "sauces"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        sauces = normalize_sauces(selection)
        sauce_config = normalize_sauce_selections(package_config)
        count = len(sauces)

        logger.debug("Calculating sauce pricing: %d selected (min %d, max %d)",
                     count, sauce_config.min, sauce_config.max)

        for error in validate_sauce_selections(sauces, sauce_config)["errors"]:
            self.warn(ledger, "sauces", error)

        included_count = min(count, max(sauce_config.max, 0))
        used = set()
        for index, sauce in enumerate(sauces[:included_count]):
            item_id = self._unique_id(f"sauce-{self.item_key(sauce.id, index)}", index, used)
            self.add_item(ledger, item_id, ItemCategory.SAUCE,
                          name=sauce.name, sauce_type=sauce.type,
                          heat_level=sauce.heat_level, included=True)

        extras = sauces[included_count:]
        rate = SAUCE_PRICING["per_sauce"]
        for offset, sauce in enumerate(extras):
            index = included_count + offset
            item_id = self._unique_id(f"sauce-extra-{self.item_key(sauce.id, index)}", index, used)
            self.add_item(ledger, item_id, ItemCategory.SAUCE,
                          name=sauce.name, sauce_type=sauce.type,
                          heat_level=sauce.heat_level, included=False)
            self.upcharge(ledger, item_id, rate, f"Extra sauce: {sauce.name} (+{self.money(rate)})")
            logger.info("Applied extra sauce upcharge: %s %s", sauce.name, self.money(rate))

        bulk = calculate_bulk_sauce_pricing(len(extras))
        if bulk["recommended"]:
            # Suggestion only; extras stay billed per sauce
            self.add_bulk_tip(ledger, bulk)

        self.mark_complete(ledger, "sauces", sauce_config.min <= count <= sauce_config.max)
        return ledger

    def _unique_id(self, item_id: str, index: int, used: set) -> str:
        """Repeated sauce ids get their input position appended."""
        if item_id in used:
            item_id = f"{item_id}-{index}"
        used.add(item_id)
        return item_id

    def add_bulk_tip(self, ledger: dict, bulk: dict) -> None:
        message = "Tip: Save %s with %s bulk pricing (%s instead of %s)" % (
            self.money(bulk["savings"]), bulk["bulk_type"],
            self.money(bulk["bulk_price"]), self.money(bulk["regular_price"]),
        )
        self.warn(ledger, "sauces", message)
