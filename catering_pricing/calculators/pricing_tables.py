"""
Static pricing tables for the catering calculators.

Every rate the engine charges or credits lives here so pricing stays auditable
from one file. All amounts are US dollars per unit unless noted.

Removal credits follow the asymmetric modification strategy (Oct 2025):
- High margin (70%+): 50% of list price credited back
- Medium margin (50-69%): 75% credited back
- Low margin (<50%): 100% credited back
- Total credits capped at 20% of the package base price (see config)
- Core items (wings, packaging, utensils) are not removable
"""

import logging

logger = logging.getLogger(__name__)


# --- Wings ---

WING_UPCHARGES = {
    "plant_based": 0.50,   # per plant-based wing
    "flats": 0.25,         # per bone-in wing, flats only
    "drums": 0.25,         # per bone-in wing, drums only
    "mixed": 0.00,
}

WING_MINIMUMS = {
    "per_type": 10,        # per active type when mixing
    "total": 20,
}

WING_DIETARY_TAGS = {
    "plant_based": ["vegan", "vegetarian"],
}

# --- Sauces ---

SAUCE_PRICING = {
    "included": 0.00,
    "per_sauce": 2.00,     # each sauce beyond the package max
    "bulk_5": 8.00,        # 5-pack bundle
    "bulk_10": 15.00,      # 10-pack bundle
}

SAUCE_TYPE_LABELS = {
    "dry-rub": "Dry Rub",
    "wet-sauce": "Wet Sauce",
}

# --- Dips ---

DIP_PRICING = {
    "included": 0.00,
    "extra": 0.75,         # per 1.5oz dip beyond the package allotment
    "size_upgrade": 1.50,  # per dip upgraded to 3oz
}
DIP_UPGRADE_SIZE = "3oz"

# --- Sides ---

SIDE_RATES = {
    "chips": 10.20,        # per 5-pack
    "cold_side": 14.40,    # per family-size cold side
    "salad": 33.59,        # per family-size salad
}
DEFAULT_CHIPS_NAME = "Miss Vickie's Chips 5-Pack"

# --- Desserts ---

DESSERT_RATES = {
    "cookie": 2.00,
    "brownie": 3.00,
    "cake": 4.00,          # per slice
}
DEFAULT_DESSERT_TYPE = "cookie"
DESSERT_TYPE_ALIASES = {
    "cookies": "cookie",
    "brownies": "brownie",
    "cakeslice": "cake",
    "cake-slice": "cake",
}

# --- Beverages ---

BEVERAGE_RATES = {
    "cold": {
        "can": 2.00,
        "bottle": 3.00,
        "pitcher": 8.00,
    },
    "hot": {
        "cup": 2.50,
        "box": 15.00,      # serves 10
    },
}
DEFAULT_BEVERAGE_SIZE = {
    "cold": "can",
    "hot": "cup",
}

# --- Removal credits ---

MARGIN_TIER_CREDIT_RATES = {
    "high": 0.50,
    "medium": 0.75,
    "low": 1.00,
}

# Removed-item categories as sent by the UI -> table category
REMOVAL_CATEGORY_MAP = {
    "chips": "chips",
    "dips": "dips",
    "coldSides": "cold_sides",
    "cold_sides": "cold_sides",
    "salads": "salads",
    "desserts": "desserts",
    "hotBeverages": "hot_beverages",
    "hot_beverages": "hot_beverages",
    "coldBeverages": "cold_beverages",
    "cold_beverages": "cold_beverages",
    "beverages": "cold_beverages",
}

MODIFICATION_PRICING = {
    "chips": {
        "Miss Vickie's Chips 5-Pack": {
            "base_price": 8.50, "add_on_cost": 10.20, "removal_credit": 4.25,
            "margin_tier": "high", "margin": 0.88,
        },
    },
    "dips": {
        "Dip 5-Pack": {
            "base_price": 3.50, "add_on_cost": 4.20, "removal_credit": 1.75,
            "margin_tier": "high", "margin": 0.814,
        },
    },
    "cold_sides": {
        "Family Coleslaw": {
            "base_price": 12.00, "add_on_cost": 14.40, "removal_credit": 6.00,
            "margin_tier": "high", "margin": 0.61,
        },
        "Family Potato Salad": {
            "base_price": 14.00, "add_on_cost": 16.80, "removal_credit": 7.00,
            "margin_tier": "high", "margin": 0.60,
        },
        "Large Veggie Sticks Tray": {
            "base_price": 8.00, "add_on_cost": 9.60, "removal_credit": 6.00,
            "margin_tier": "medium", "margin": 0.48,
        },
    },
    "salads": {
        "Caesar Salad (Family Size)": {
            "base_price": 27.99, "add_on_cost": 33.59, "removal_credit": 20.99,
            "margin_tier": "medium", "margin": 0.42,
        },
        "Spring Mix Salad (Family Size)": {
            "base_price": 24.99, "add_on_cost": 29.99, "removal_credit": 18.74,
            "margin_tier": "medium", "margin": 0.45,
        },
    },
    "desserts": {
        # Daisy's Bakery
        "Marble Pound Cake 5-Pack": {
            "base_price": 17.50, "add_on_cost": 21.00, "removal_credit": 8.75,
            "margin_tier": "high", "margin": 0.90,
        },
        "Gourmet Brownies 5-Pack": {
            "base_price": 20.00, "add_on_cost": 24.00, "removal_credit": 10.00,
            "margin_tier": "high", "margin": 0.91,
        },
        # Chef's Quality
        "Red Velvet Cake 5-Pack": {
            "base_price": 21.25, "add_on_cost": 25.50, "removal_credit": 15.94,
            "margin_tier": "medium", "margin": 0.52,
        },
        "Crème Brûlée Cheesecake 5-Pack": {
            "base_price": 22.50, "add_on_cost": 27.00, "removal_credit": 16.88,
            "margin_tier": "medium", "margin": 0.50,
        },
        # Bindi premium
        "NY Cheesecake 5-Pack": {
            "base_price": 23.75, "add_on_cost": 28.50, "removal_credit": 23.75,
            "margin_tier": "low", "margin": 0.41,
        },
    },
    "hot_beverages": {
        "Lavazza Coffee 96oz": {
            "base_price": 48.00, "add_on_cost": 57.60, "removal_credit": 36.00,
            "margin_tier": "medium", "margin": 0.42,
        },
        "Lavazza Coffee 128oz": {
            "base_price": 62.00, "add_on_cost": 74.40, "removal_credit": 46.50,
            "margin_tier": "medium", "margin": 0.44,
        },
        "Ghirardelli Hot Chocolate 96oz": {
            "base_price": 58.00, "add_on_cost": 69.60, "removal_credit": 43.50,
            "margin_tier": "medium", "margin": 0.42,
        },
        "Ghirardelli Hot Chocolate 128oz": {
            "base_price": 72.00, "add_on_cost": 86.40, "removal_credit": 54.00,
            "margin_tier": "medium", "margin": 0.44,
        },
    },
    "cold_beverages": {
        "Boxed Iced Tea 96oz": {
            "base_price": 12.99, "add_on_cost": 15.59, "removal_credit": 9.74,
            "margin_tier": "medium", "margin": 0.55,
        },
        "Boxed Iced Tea 3 Gallon": {
            "base_price": 54.26, "add_on_cost": 65.11, "removal_credit": 54.26,
            "margin_tier": "low", "margin": 0.35,
        },
        "Bottled Water 24-pack": {
            "base_price": 19.99, "add_on_cost": 23.99, "removal_credit": 9.995,
            "margin_tier": "high", "margin": 0.75,
        },
        "Canned Sodas 24-pack": {
            "base_price": 29.99, "add_on_cost": 35.99, "removal_credit": 22.49,
            "margin_tier": "medium", "margin": 0.58,
        },
    },
}

# Minimum order value by package tier (tier 1: 10-15 people, 2: 20-35, 3: 50-100)
MINIMUM_ORDER_VALUES = {
    1: 125.00,
    2: 180.00,
    3: 280.00,
}


def get_minimum_order_value(tier):
    """Minimum order for a package tier, or None when the tier has no minimum."""
    return MINIMUM_ORDER_VALUES.get(tier)


def resolve_removal_category(category: str) -> str:
    """Map a UI category key to its MODIFICATION_PRICING category."""
    return REMOVAL_CATEGORY_MAP.get(category, category)


def lookup_modification(name: str, category: str):
    """
    Find the modification pricing entry for an item.

    Returns the entry dict, or None (logged) when the category or item is unknown.
    """
    table_category = resolve_removal_category(category)
    category_pricing = MODIFICATION_PRICING.get(table_category)
    if category_pricing is None:
        logger.warning("Unknown pricing category: %s", category)
        return None
    entry = category_pricing.get(name)
    if entry is None:
        logger.warning("Unknown item in %s: %s", table_category, name)
        return None
    return entry


def get_removal_credit(name: str, category: str) -> float:
    entry = lookup_modification(name, category)
    return entry["removal_credit"] if entry else 0.0


def get_add_on_cost(name: str, category: str) -> float:
    entry = lookup_modification(name, category)
    return entry["add_on_cost"] if entry else 0.0


def get_item_margin_tier(name: str, category: str) -> str:
    """Margin tier ('high', 'medium', 'low') for display, or 'unknown'."""
    category_pricing = MODIFICATION_PRICING.get(resolve_removal_category(category), {})
    entry = category_pricing.get(name)
    return entry["margin_tier"] if entry else "unknown"


def format_price(price: float) -> str:
    return f"${price:.2f}"


def format_price_delta(delta: float) -> str:
    """'+$3.00', '-$1.25', or '$0.00'."""
    if delta == 0:
        return "$0.00"
    sign = "+" if delta > 0 else "-"
    return f"{sign}${abs(delta):.2f}"
