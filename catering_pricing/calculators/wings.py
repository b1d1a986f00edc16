"""
Wing calculator.

Prices the wing-type distribution (boneless / bone-in / plant-based), the
bone-in style upcharge (flats or drums only), and the distribution
differential versus the package's default mix.

Validation problems never stop pricing; they become warning modifiers.
"""

import logging
import math

from ..ledger import ItemCategory
from ..schemas import BoneInStyle, WingDistribution
from .base import BaseCalculator
from .normalize import normalize_sauces, normalize_wing_distribution, normalize_wing_options
from .pricing_tables import WING_DIETARY_TAGS, WING_MINIMUMS, WING_UPCHARGES, format_price_delta

logger = logging.getLogger(__name__)

WING_TYPES = ["boneless", "bone_in", "plant_based"]

WING_TYPE_LABELS = {
    "boneless": "boneless",
    "bone_in": "bone-in",
    "plant_based": "plant-based",
}


def calculate_distribution_differential(distribution, wing_options) -> dict:
    """
    Price delta of the chosen wing mix versus the package default.

    differential = sum(current_count * unit_cost) - sum(default_count * unit_cost)

    Positive means the customer's mix costs more. Returns
    {"differential": 0.0, "breakdown": None} when the package has no
    default distribution or per-unit costs.

    Example (Tailgate Pack, 150 boneless / 50 bone-in by default):
        100 boneless / 100 bone-in at {boneless: 0.80, bone_in: 1.00}
        -> differential 10.00
    """
    distribution = normalize_wing_distribution(distribution) or WingDistribution()
    wing_options = normalize_wing_options(wing_options)
    defaults = wing_options.default_distribution
    costs = wing_options.per_unit_costs
    if defaults is None or costs is None:
        logger.debug("No default distribution or per-unit costs in package, skipping differential")
        return {"differential": 0.0, "breakdown": None}

    current = {
        wing_type: {
            "count": getattr(distribution, wing_type),
            "cost": getattr(distribution, wing_type) * getattr(costs, wing_type),
        }
        for wing_type in WING_TYPES
    }
    default = {
        wing_type: {
            "count": getattr(defaults, wing_type),
            "cost": getattr(defaults, wing_type) * getattr(costs, wing_type),
        }
        for wing_type in WING_TYPES
    }
    current_total = sum(entry["cost"] for entry in current.values())
    default_total = sum(entry["cost"] for entry in default.values())
    differential = round(current_total - default_total, 2) + 0.0

    current["total"] = current_total
    default["total"] = default_total
    logger.debug(
        "Wing distribution differential: current $%.2f, default $%.2f, delta $%.2f",
        current_total, default_total, differential,
    )
    return {
        "differential": differential,
        "breakdown": {"current": current, "default": default, "differential": differential},
    }


def validate_wing_distribution(distribution, wing_options) -> dict:
    """Returns {"valid": bool, "errors": [str]}."""
    distribution = normalize_wing_distribution(distribution) or WingDistribution()
    wing_options = normalize_wing_options(wing_options)
    errors = []
    total_wings = wing_options.total_wings
    selected = distribution.total()
    active = [t for t in WING_TYPES if getattr(distribution, t) > 0]

    if selected != total_wings:
        errors.append(f"Total wings ({selected}) must equal package amount ({total_wings})")

    if len(active) > 1:
        for wing_type in active:
            if getattr(distribution, wing_type) < WING_MINIMUMS["per_type"]:
                errors.append(
                    f"Minimum {WING_MINIMUMS['per_type']} {WING_TYPE_LABELS[wing_type]} "
                    f"wings when mixing types"
                )

    if 0 < selected < WING_MINIMUMS["total"]:
        errors.append(f"Minimum {WING_MINIMUMS['total']} total wings required")

    if any(getattr(distribution, t) < 0 for t in WING_TYPES):
        errors.append("Wing quantities cannot be negative")

    return {"valid": not errors, "errors": errors}


def get_wing_type_summary(distribution) -> list:
    """Display rows for each selected wing type, with its upcharge."""
    distribution = normalize_wing_distribution(distribution)
    if distribution is None:
        return []

    summary = []
    if distribution.boneless > 0:
        summary.append({
            "type": "boneless",
            "label": "Boneless",
            "quantity": distribution.boneless,
            "style": None,
            "upcharge": 0.0,
        })
    if distribution.bone_in > 0:
        style = distribution.bone_in_style.value
        style_label = {"mixed": "Mixed", "flats": "Flats Only", "drums": "Drums Only"}[style]
        summary.append({
            "type": "bone_in",
            "label": f"Bone-In ({style_label})",
            "quantity": distribution.bone_in,
            "style": style,
            "upcharge": distribution.bone_in * WING_UPCHARGES[style],
        })
    if distribution.plant_based > 0:
        summary.append({
            "type": "plant_based",
            "label": "Plant-Based Wings",
            "quantity": distribution.plant_based,
            "style": None,
            "upcharge": distribution.plant_based * WING_UPCHARGES["plant_based"],
            "dietary": list(WING_DIETARY_TAGS["plant_based"]),
        })
    return summary


def calculate_sauce_allocation(sauces, distribution) -> dict:
    """
    Spread sauces evenly across the selected wing types.

    Returns {wing_type: {sauce_id: {name, proportion, estimated_wings}}}.
    """
    distribution = normalize_wing_distribution(distribution)
    sauces = normalize_sauces(sauces)
    allocation = {wing_type: {} for wing_type in WING_TYPES}
    if distribution is None or not sauces:
        return allocation

    total = distribution.total()
    if total <= 0:
        return allocation

    for index, sauce in enumerate(sauces):
        sauce_key = sauce.id or str(index)
        for wing_type in WING_TYPES:
            count = getattr(distribution, wing_type)
            if count > 0:
                allocation[wing_type][sauce_key] = {
                    "name": sauce.name,
                    "proportion": count / total,
                    "estimated_wings": math.floor(count / len(sauces) + 0.5),
                }
    return allocation


class WingCalculator(BaseCalculator):

    SOURCE = "wings"

    def price(self, selection, package_config=None) -> dict:
        ledger = self.new_ledger()
        distribution = normalize_wing_distribution(selection)
        wing_options = normalize_wing_options(package_config)

        if distribution is None:
            logger.debug("No wing distribution provided, returning empty wing pricing")
            return ledger

        total_wings = wing_options.total_wings
        selected = distribution.total()
        logger.debug(
            "Calculating wing pricing: boneless=%d bone_in=%d plant_based=%d style=%s package=%d",
            distribution.boneless, distribution.bone_in, distribution.plant_based,
            distribution.bone_in_style.value, total_wings,
        )

        validation = validate_wing_distribution(distribution, wing_options)
        for error in validation["errors"]:
            self.warn(ledger, "wings", error)

        self._apply_differential(ledger, distribution, wing_options)

        if distribution.boneless > 0:
            self.add_item(ledger, "wings-boneless", ItemCategory.WING,
                          quantity=distribution.boneless, wing_type="boneless")

        if distribution.bone_in > 0:
            style = distribution.bone_in_style
            self.add_item(ledger, "wings-bone-in", ItemCategory.WING,
                          quantity=distribution.bone_in, wing_type="bone-in",
                          style=style.value)
            if style in (BoneInStyle.FLATS, BoneInStyle.DRUMS):
                rate = WING_UPCHARGES[style.value]
                amount = distribution.bone_in * rate
                self.upcharge(ledger, "wings-bone-in", amount,
                              f"{style.value.capitalize()} only (+{self.money(rate)}/wing)")
                logger.info("Applied bone-in %s upcharge: %d wings, %s",
                            style.value, distribution.bone_in, self.money(amount))

        if distribution.plant_based > 0:
            rate = WING_UPCHARGES["plant_based"]
            amount = distribution.plant_based * rate
            self.add_item(ledger, "wings-plant-based", ItemCategory.WING,
                          quantity=distribution.plant_based, wing_type="plant-based",
                          dietary=list(WING_DIETARY_TAGS["plant_based"]))
            self.upcharge(ledger, "wings-plant-based", amount,
                          f"Plant-based wings (+{self.money(rate)}/wing)")
            logger.info("Applied plant-based upcharge: %d wings, %s",
                        distribution.plant_based, self.money(amount))

        if selected > total_wings:
            extra = selected - total_wings
            self.warn(ledger, "wings", f"{extra} extra wings will be added as add-ons")

        self.mark_complete(ledger, "wings", selected == total_wings)
        return ledger

    def _apply_differential(self, ledger, distribution, wing_options):
        result = calculate_distribution_differential(distribution, wing_options)
        differential = result["differential"]
        if differential > 0:
            self.upcharge(ledger, "wings-distribution", differential,
                          f"Wing distribution adjustment ({format_price_delta(differential)})")
        elif differential < 0:
            self.discount(ledger, "wings-distribution", abs(differential),
                          f"Wing distribution savings ({format_price_delta(differential)})")
        else:
            return
        logger.info("Wing distribution differential applied: %s", format_price_delta(differential))
