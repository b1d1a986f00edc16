"""
Pricing ledger — the normalized output of one pricing pass.

Items are stored flat under unique ids; modifiers reference items by id so
nothing is duplicated. Everything in a ledger is plain JSON-compatible data,
which keeps export lossless and cloning trivial.

Ledger shape:
    {
        "items":     {item_id: Item},
        "modifiers": [Modifier],
        "totals":    Totals,
        "meta":      {last_calculated, calculation_time_ms, completion_status, ...},
    }
"""

import copy
import enum
import json
import uuid
from datetime import datetime, timezone

from .config import settings


class ItemCategory(str, enum.Enum):
    PACKAGE = "package"
    WING = "wing"
    SAUCE = "sauce"
    DIP = "dip"
    SIDE = "side"
    DESSERT = "dessert"
    BEVERAGE = "beverage"


class ModifierKind(str, enum.Enum):
    UPCHARGE = "upcharge"
    DISCOUNT = "discount"
    WARNING = "warning"


PACKAGE_ITEM_ID = "package-base"

# Section-level references that modifiers may point at without a matching item
META_ITEM_IDS = frozenset({
    "wings",
    "wings-distribution",
    "sauces",
    "dips",
    "sides",
    "desserts",
    "beverages",
    "removal-credit-cap",
    "item-removal-credits",
})

SECTIONS = ["wings", "sauces", "dips", "sides", "desserts", "beverages"]


def round2(value: float) -> float:
    """Round a dollar amount to cents (never returns -0.0)."""
    return round(value, 2) + 0.0


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def empty_totals(guest_count: int = None, tax_rate: float = None) -> dict:
    return {
        "base_price": 0.0,
        "items_subtotal": 0.0,
        "upcharges": 0.0,
        "discounts": 0.0,
        "subtotal": 0.0,
        "tax": 0.0,
        "tax_rate": settings.TAX_RATE if tax_rate is None else tax_rate,
        "total": 0.0,
        "per_person_cost": 0.0,
        "guest_count": settings.DEFAULT_GUEST_COUNT if guest_count is None else guest_count,
    }


def create_ledger() -> dict:
    """Create an empty ledger with every section marked incomplete."""
    return {
        "items": {},
        "modifiers": [],
        "totals": empty_totals(),
        "meta": {
            "last_calculated": None,
            "calculation_time_ms": 0.0,
            "completion_status": {section: False for section in SECTIONS},
        },
    }


def add_item(ledger: dict, item_id: str, category, data: dict = None) -> dict:
    """
    Add (or replace) an item.

    category must be an ItemCategory value; anything else raises ValueError.
    data carries quantity, base_price and category-specific metadata.
    """
    category = ItemCategory(category)
    item = {
        "id": item_id,
        "category": category.value,
        "quantity": 1,
        "base_price": 0.0,
    }
    item.update(data or {})
    ledger["items"][item_id] = item
    return ledger


def add_modifier(ledger: dict, item_id: str, kind, amount: float, label: str) -> dict:
    """
    Append a modifier.

    amount is a magnitude: upcharges and discounts must be >= 0, warnings must be 0.
    """
    kind = ModifierKind(kind)
    if amount < 0:
        raise ValueError(f"Modifier amount must be a non-negative magnitude, got {amount}")
    if kind is ModifierKind.WARNING and amount != 0:
        raise ValueError(f"Warning modifiers carry amount 0, got {amount}")

    ledger["modifiers"].append({
        "id": f"mod-{kind.value}-{uuid.uuid4().hex[:12]}",
        "item_id": item_id,
        "kind": kind.value,
        "amount": amount,
        "label": label,
        "created_at": _now_iso(),
    })
    return ledger


def calculate_totals(ledger: dict, base_price: float = None,
                     guest_count: int = None, tax_rate: float = None) -> dict:
    """
    Derive totals from items and non-warning modifiers and write them back.

    When the ledger has a package-base item, that item supplies the base price.
    Otherwise base_price (if given) is counted toward the items subtotal, which
    lets a single calculator fragment be priced against a package on its own.
    """
    if tax_rate is None:
        tax_rate = settings.TAX_RATE
    if not guest_count or guest_count < 1:
        guest_count = settings.DEFAULT_GUEST_COUNT

    package = ledger["items"].get(PACKAGE_ITEM_ID)
    if package is not None:
        base_price = package.get("base_price", 0.0)
    items_subtotal = sum(
        item.get("base_price", 0.0) * item.get("quantity", 1)
        for item in ledger["items"].values()
    )
    if package is None and base_price:
        items_subtotal += base_price

    upcharges = sum(
        m["amount"] for m in ledger["modifiers"]
        if m["kind"] == ModifierKind.UPCHARGE.value
    )
    discounts = sum(
        abs(m["amount"]) for m in ledger["modifiers"]
        if m["kind"] == ModifierKind.DISCOUNT.value
    )

    items_subtotal = round2(items_subtotal)
    upcharges = round2(upcharges)
    discounts = round2(discounts)
    subtotal = round2(items_subtotal + upcharges - discounts)
    tax = round2(subtotal * tax_rate)
    total = round2(subtotal + tax)

    ledger["totals"] = {
        "base_price": round2(base_price or 0.0),
        "items_subtotal": items_subtotal,
        "upcharges": upcharges,
        "discounts": discounts,
        "subtotal": subtotal,
        "tax": tax,
        "tax_rate": tax_rate,
        "total": total,
        "per_person_cost": round2(total / guest_count),
        "guest_count": guest_count,
    }
    return ledger


def validate(ledger: dict):
    """
    Check ledger structure and modifier references.

    Returns (valid, errors).
    """
    errors = []
    if not isinstance(ledger.get("items"), dict):
        errors.append("Missing or invalid items mapping")
    if not isinstance(ledger.get("modifiers"), list):
        errors.append("Missing or invalid modifiers list")
    if not isinstance(ledger.get("totals"), dict):
        errors.append("Missing or invalid totals mapping")

    items = ledger.get("items") or {}
    for index, mod in enumerate(ledger.get("modifiers") or []):
        if mod.get("kind") not in {k.value for k in ModifierKind}:
            errors.append(f"Modifier {index} has unknown kind: {mod.get('kind')}")
        item_id = mod.get("item_id")
        if item_id not in items and item_id not in META_ITEM_IDS:
            errors.append(f"Modifier {index} references non-existent item: {item_id}")

    return len(errors) == 0, errors


def clone(ledger: dict) -> dict:
    """Deep copy for safe hand-off."""
    return copy.deepcopy(ledger)


def get_items_by_category(ledger: dict, category) -> dict:
    category = ItemCategory(category).value
    return {
        item_id: item
        for item_id, item in ledger["items"].items()
        if item.get("category") == category
    }


def get_modifiers_for_item(ledger: dict, item_id: str) -> list:
    return [m for m in ledger["modifiers"] if m["item_id"] == item_id]


def ledger_to_json(ledger: dict, indent: int = None) -> str:
    """Serialize a ledger for logging or export."""
    return json.dumps(ledger, indent=indent, sort_keys=True)


def ledger_from_json(raw: str) -> dict:
    return json.loads(raw)
