"""
Pricing aggregator.

Runs every section calculator against one configuration snapshot, merges the
fragments into a single ledger, computes totals and notifies subscribers.

Input: PricingState snapshot (dict from the UI or a validated model)
Output: unified ledger (see ledger.py)
"""

import logging
from datetime import datetime, timezone

from .calculators.pricing_tables import get_minimum_order_value
from .calculators.registry import get_calculator, list_calculators
from .config import settings
from .ledger import (
    PACKAGE_ITEM_ID,
    ItemCategory,
    ModifierKind,
    add_item,
    calculate_totals,
    clone,
    create_ledger,
    empty_totals,
)
from .schemas import CurrentConfig, PricingState
from .timing import timed

logger = logging.getLogger(__name__)

GLOBAL_TOPIC = "pricing:updated"

# Completion flags each calculator is allowed to set on the unified ledger
COMPLETION_KEYS_BY_SOURCE = {
    "wings": ["wings"],
    "sauces": ["sauces"],
    "dips": ["dips"],
    "sides": ["sides"],
    "desserts": ["desserts"],
    "beverages": ["beverages"],
    "removals": ["removals"],
}

# Fragment meta copied onto the unified ledger
META_KEYS_BY_SOURCE = {
    "removals": ["removal_breakdown", "cap_exceeded"],
}


def _section_inputs(source: str, package, config) -> tuple:
    """(selection, package_config) slice of the snapshot for one calculator."""
    if source == "wings":
        return config.wing_distribution, package.wing_options
    if source == "sauces":
        return config.sauces, package.sauce_selections
    if source == "dips":
        return config.dips, package.dips_included
    if source == "removals":
        return config.removed_items, package
    return getattr(config, source), None


def merge_fragment(unified: dict, fragment: dict, source: str) -> dict:
    """
    Fold one calculator's fragment into the unified ledger.

    Items and modifiers are tagged with their source. Only the completion
    keys and meta keys allow-listed for the source are copied.
    """
    for item_id, item in fragment["items"].items():
        unified["items"][item_id] = dict(item, source=source)

    for modifier in fragment["modifiers"]:
        unified["modifiers"].append(dict(modifier, source=source))

    completion = fragment["meta"].get("completion_status", {})
    for key in COMPLETION_KEYS_BY_SOURCE.get(source, []):
        if key in completion:
            unified["meta"]["completion_status"][key] = completion[key]

    for key in META_KEYS_BY_SOURCE.get(source, []):
        if key in fragment["meta"]:
            unified["meta"][key] = fragment["meta"][key]

    return unified


class PricingAggregator:
    """
    Holds the cached ledger and the topic subscribers.

    One instance serves the HTTP layer (see `pricing_aggregator` below); tests
    and embedding code can create their own.
    """

    def __init__(self):
        self._current = None
        self._listeners = {}

    def calculate(self, state) -> dict:
        """Price a snapshot and cache the result. Returns a copy; does not publish."""
        if not isinstance(state, PricingState):
            state = PricingState.model_validate(state or {})

        package = state.selected_package
        guest_count = state.event_details.guest_count if state.event_details else None

        if package is None:
            logger.warning("No package selected, returning empty pricing")
            ledger = create_ledger()
            ledger["totals"] = empty_totals(
                guest_count=guest_count or settings.DEFAULT_GUEST_COUNT,
            )
            self._current = ledger
            return clone(ledger)

        config = state.current_config or CurrentConfig()
        with timed("Complete pricing calculation", settings.TOTAL_UPDATE_BUDGET_MS) as timer:
            unified = create_ledger()
            add_item(unified, PACKAGE_ITEM_ID, ItemCategory.PACKAGE, {
                "name": package.name,
                "description": package.description,
                "quantity": 1,
                "base_price": package.base_price,
                "tier": package.tier,
                "wing_count": package.wing_options.total_wings if package.wing_options else None,
                "serves": package.serves,
            })
            logger.debug("Starting pricing calculations: package=%s base=%.2f",
                         package.name, package.base_price)

            fragments = []
            for source in list_calculators():
                selection, package_config = _section_inputs(source, package, config)
                fragments.append((source, get_calculator(source).calculate(selection, package_config)))

            for source, fragment in fragments:
                merge_fragment(unified, fragment, source)

            calculate_totals(unified, guest_count=guest_count)

        unified["meta"]["last_calculated"] = datetime.now(timezone.utc).isoformat()
        unified["meta"]["package_id"] = package.id
        unified["meta"]["package_name"] = package.name
        unified["meta"]["calculation_time_ms"] = round(timer.duration_ms, 3)

        logger.info(
            "Pricing calculation complete: %d items, %d modifiers, subtotal $%.2f, total $%.2f",
            len(unified["items"]), len(unified["modifiers"]),
            unified["totals"]["subtotal"], unified["totals"]["total"],
        )
        self._current = unified
        return clone(unified)

    def recalculate(self, state, topic: str = None, trigger: str = "manual") -> dict:
        """Calculate and publish once (to `topic` and the global topic)."""
        logger.info("Recalculating pricing (trigger: %s)", trigger)
        ledger = self.calculate(state)
        self.publish(topic or GLOBAL_TOPIC, ledger)
        return ledger

    def subscribe(self, topic: str, callback):
        """Register a callback for a topic. Returns an unsubscribe function."""
        self._listeners.setdefault(topic, []).append(callback)
        logger.debug("Pricing listener registered for %s", topic)

        def unsubscribe():
            listeners = self._listeners.get(topic, [])
            if callback in listeners:
                listeners.remove(callback)
                logger.debug("Pricing listener unregistered for %s", topic)

        return unsubscribe

    def publish(self, topic: str, ledger: dict) -> None:
        """
        Notify the topic's listeners, then the global listeners.

        Each callback receives its own copy of the ledger. A failing callback
        is logged and does not stop delivery to the others.
        """
        callbacks = list(self._listeners.get(topic, []))
        if topic != GLOBAL_TOPIC:
            callbacks += self._listeners.get(GLOBAL_TOPIC, [])

        logger.info("Publishing %s to %d listeners", topic, len(callbacks))
        for callback in callbacks:
            try:
                callback(clone(ledger))
            except Exception:
                logger.exception("Pricing listener failed for %s", topic)

    def get_current(self):
        """Copy of the cached ledger, or None before the first calculation."""
        return clone(self._current) if self._current is not None else None

    def clear_cache(self) -> None:
        self._current = None

    def reset(self) -> None:
        """Drop the cache and all subscribers."""
        self._current = None
        self._listeners = {}

    def get_summary(self, ledger: dict = None):
        """
        Counts and totals for a ledger (default: the cached one), or None.

        Also reports the package tier's minimum order value and whether the
        subtotal reaches it (always true for tiers without a minimum).
        """
        ledger = ledger if ledger is not None else self._current
        if ledger is None:
            return None

        kinds = [m["kind"] for m in ledger["modifiers"]]
        completion = ledger["meta"].get("completion_status", {})
        package = ledger["items"].get(PACKAGE_ITEM_ID) or {}
        minimum = get_minimum_order_value(package.get("tier"))
        return {
            "item_count": len(ledger["items"]),
            "upcharge_count": kinds.count(ModifierKind.UPCHARGE.value),
            "discount_count": kinds.count(ModifierKind.DISCOUNT.value),
            "warning_count": kinds.count(ModifierKind.WARNING.value),
            "complete": bool(completion) and all(completion.values()),
            "totals": dict(ledger["totals"]),
            "minimum_order_value": minimum,
            "meets_minimum_order": minimum is None or ledger["totals"]["subtotal"] >= minimum,
        }


pricing_aggregator = PricingAggregator()
