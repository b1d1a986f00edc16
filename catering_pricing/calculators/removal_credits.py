"""
Removal credit calculator.

Customers may remove included items from a package and receive a partial
credit based on the item's margin tier. The credit applied to an order is
capped at a percentage of the package base price (20% by default).

    credit = min(sum(credit_per_unit * quantity), base_price * cap_percentage)
"""

import logging

from ..config import settings
from .base import BaseCalculator
from .normalize import normalize_package, normalize_removed_items
from .pricing_tables import get_add_on_cost, get_removal_credit, resolve_removal_category

logger = logging.getLogger(__name__)

CAP_ITEM_ID = "removal-credit-cap"
CREDIT_ITEM_ID = "item-removal-credits"


def _credit_breakdown(removed_items) -> list:
    breakdown = []
    for item in normalize_removed_items(removed_items):
        if item.quantity <= 0:
            continue
        credit_per_unit = get_removal_credit(item.name, item.category)
        breakdown.append({
            "name": item.name,
            "category": resolve_removal_category(item.category),
            "quantity": item.quantity,
            "credit_per_unit": credit_per_unit,
            "total_credit": credit_per_unit * item.quantity,
        })
    return breakdown


def validate_removal_cap(removed_items, base_price: float) -> dict:
    """
    Check removal credits against the cap without building a ledger.

    Returns {valid, total_credits, max_credit, capped_credits, cap_exceeded,
    exceeded_amount, cap_percentage}.
    """
    cap_percentage = settings.MAX_REMOVAL_CREDIT_PERCENTAGE
    total_credits = sum(entry["total_credit"] for entry in _credit_breakdown(removed_items))
    max_credit = (base_price or 0.0) * cap_percentage
    cap_exceeded = total_credits > max_credit
    return {
        "valid": not cap_exceeded,
        "total_credits": total_credits,
        "max_credit": max_credit,
        "capped_credits": min(total_credits, max_credit),
        "cap_exceeded": cap_exceeded,
        "exceeded_amount": total_credits - max_credit if cap_exceeded else 0.0,
        "cap_percentage": cap_percentage,
    }


def calculate_modification_pricing(base_price: float, removed_items=None, added_items=None) -> dict:
    """
    Net effect of removing and adding catalog items on a package price.

    Added items are {name, category, quantity} like removed ones and are
    billed at their add-on cost.
    """
    cap = validate_removal_cap(removed_items, base_price)
    add_on_charges = sum(
        get_add_on_cost(item.name, item.category) * item.quantity
        for item in normalize_removed_items(added_items)
    )
    removal_credits = cap["capped_credits"]
    return {
        "base_price": base_price,
        "removal_credits": removal_credits,
        "add_on_charges": add_on_charges,
        "final_price": base_price - removal_credits + add_on_charges,
        "net_modification": add_on_charges - removal_credits,
        "cap_exceeded": cap["cap_exceeded"],
        "exceeded_amount": cap["exceeded_amount"],
    }


class RemovalCreditCalculator(BaseCalculator):

    SOURCE = "removals"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        ledger["meta"]["completion_status"]["removals"] = True

        breakdown = _credit_breakdown(selection)
        if not breakdown:
            logger.debug("No items removed, skipping removal credits")
            return ledger

        base_price = normalize_package(package_config).base_price
        cap_percentage = settings.MAX_REMOVAL_CREDIT_PERCENTAGE
        total_credits = sum(entry["total_credit"] for entry in breakdown)
        max_credit = base_price * cap_percentage
        applied = min(total_credits, max_credit)
        cap_exceeded = total_credits > max_credit

        if cap_exceeded:
            excess = total_credits - max_credit
            self.warn(ledger, CAP_ITEM_ID,
                      "Removal credits capped at %.0f%% of base price (%s); %s not credited"
                      % (cap_percentage * 100, self.money(max_credit), self.money(excess)))

        if applied > 0:
            credited = sum(1 for entry in breakdown if entry["total_credit"] > 0)
            self.discount(ledger, CREDIT_ITEM_ID, applied,
                          "Item removal credits (%d item%s)" % (credited, "s" if credited != 1 else ""))

        ledger["meta"]["removal_breakdown"] = breakdown
        ledger["meta"]["cap_exceeded"] = cap_exceeded

        logger.info("Removal credits: %d items removed, %s earned, %s applied (cap exceeded: %s)",
                    len(breakdown), self.money(total_credits), self.money(applied), cap_exceeded)
        return ledger
