"""
Abstract base class for all catering pricing calculators.

Input: one slice of the configuration snapshot (+ the package's config for it)
Output: a ledger fragment (see ledger.py) with items, modifiers and the
completion flag for the calculator's own section.

Calculators never read each other's output and never touch shared state.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from ..config import settings
from ..ledger import ModifierKind, add_item, add_modifier, create_ledger
from ..timing import timed
from .pricing_tables import format_price

logger = logging.getLogger(__name__)


class BaseCalculator(ABC):
    """All section calculators inherit from this."""

    # Source name used for provenance tagging when fragments are merged
    SOURCE = ""

    def calculate(self, selection, package_config=None) -> dict:
        """
        Price one section and return its ledger fragment.

        Timed against the per-calculation performance budget.
        """
        label = "%s pricing calculation" % self.SOURCE
        with timed(label, settings.CALCULATION_BUDGET_MS) as timer:
            ledger = self.price(selection, package_config)
        ledger["meta"]["last_calculated"] = datetime.now(timezone.utc).isoformat()
        ledger["meta"]["calculation_time_ms"] = round(timer.duration_ms, 3)
        return ledger

    @abstractmethod
    def price(self, selection, package_config=None) -> dict:
        """Build the ledger fragment. Subclasses normalize their own input."""
        pass

    # --- Helper methods for all calculators ---

    def new_ledger(self) -> dict:
        return create_ledger()

    def add_item(self, ledger: dict, item_id: str, category: str, **data) -> None:
        add_item(ledger, item_id, category, data)

    def upcharge(self, ledger: dict, item_id: str, amount: float, label: str) -> None:
        add_modifier(ledger, item_id, ModifierKind.UPCHARGE, amount, label)

    def discount(self, ledger: dict, item_id: str, amount: float, label: str) -> None:
        add_modifier(ledger, item_id, ModifierKind.DISCOUNT, amount, label)

    def warn(self, ledger: dict, item_id: str, message: str) -> None:
        """Business-rule warning. Recorded on the ledger, never raised."""
        add_modifier(ledger, item_id, ModifierKind.WARNING, 0, message)
        logger.warning("%s validation: %s", self.SOURCE, message)

    def mark_complete(self, ledger: dict, section: str, complete: bool) -> None:
        ledger["meta"]["completion_status"][section] = bool(complete)

    def quantity_or_default(self, value, default: int = 1) -> int:
        """Missing quantity means `default`; an explicit 0 stays 0."""
        if value is None:
            return default
        return int(value)

    def item_key(self, entry_id, index: int) -> str:
        """Stable item-id suffix: the entry's own id, else its input position."""
        return str(entry_id) if entry_id not in (None, "") else str(index)

    def money(self, amount: float) -> str:
        return format_price(amount)
