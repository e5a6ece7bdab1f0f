"""
System-Wide Constants
=====================
Static lookup tables shared by the prediction and budget engines.

Design Principles:
- Tables here are read-only reference data, never mutated at runtime
- Tunable numeric thresholds live in ``lanka_pantry.config`` instead
- Texts are selected, never computed
"""

from typing import Dict, List, Tuple

# =============================================================================
# CATALOG CATEGORIES
# =============================================================================

CATEGORY_MEATS = "Meats"
CATEGORY_SEAFOOD = "Seafood"
CATEGORY_DAIRY = "Dairy"
CATEGORY_FROZEN = "Frozen Food"

CATALOG_CATEGORIES = [
    "Rice", "Vegetables", "Fruits", "Dry Goods", CATEGORY_MEATS, CATEGORY_SEAFOOD,
    "Spices", "Essentials", "Bakery", "Snacks", CATEGORY_DAIRY, "Beverages",
    "Household", "Health", "Baby", CATEGORY_FROZEN, "Other",
]

CATALOG_UNITS = ["kg", "g", "100g", "pcs", "l", "ml", "pack", "can", "bundle", "loaf"]

# Categories removed from predictions for each diet.
# Diets not listed here keep every category.
DIET_EXCLUSIONS: Dict[str, List[str]] = {
    "vegetarian": [CATEGORY_MEATS, CATEGORY_SEAFOOD, CATEGORY_FROZEN],
    "vegan": [CATEGORY_MEATS, CATEGORY_SEAFOOD, CATEGORY_FROZEN, CATEGORY_DAIRY],
}

# =============================================================================
# BUDGET REPORT
# =============================================================================

BUDGET_CATEGORIES = [
    "staples",
    "proteins",
    "vegetables",
    "dairy",
    "oils_condiments",
    "fruits",
    "utilities",
]

# Categories counted in the food-only total
FOOD_CATEGORIES = [c for c in BUDGET_CATEGORIES if c != "utilities"]

# Weighted basket used to price "Mixed Vegetables" (weights sum to 1.0)
VEGETABLE_BASKET: List[Tuple[str, float]] = [
    ("tomato", 0.10),
    ("onion_big", 0.15),
    ("potato_local", 0.20),
    ("carrot", 0.10),
    ("cabbage", 0.15),
    ("beans", 0.15),
    ("leafy_greens", 0.15),
]

FRUIT_BASKET: List[Tuple[str, float]] = [
    ("banana", 0.5),
    ("papaya", 0.3),
    ("orange", 0.2),
]

HOME_GROWING_SECTORS = ["rural", "estate"]

COASTAL_DISTRICTS = [
    "Colombo", "Gampaha", "Galle", "Matara", "Hambantota", "Jaffna",
    "Trincomalee", "Batticaloa", "Ampara", "Puttalam",
]

NORTH_EAST_DISTRICTS = [
    "Jaffna", "Kilinochchi", "Mannar", "Mullaitivu", "Vavuniya",
    "Batticaloa", "Trincomalee",
]

SECTOR_TIPS: Dict[str, List[str]] = {
    "urban": [
        "Take advantage of multiple supermarket options for competitive pricing",
        "Visit Pettah/Manning Market for wholesale vegetable prices",
    ],
    "rural": [
        "Utilize home garden space for vegetable cultivation",
        "Connect with local farmers for direct purchases",
        "Preserve seasonal produce through drying/pickling",
    ],
    "estate": [
        "Coordinate bulk purchases with community for discounts",
        "Maximize use of estate-allocated land for food production",
    ],
}

COASTAL_TIP = "Fresh fish available at lower prices - prioritize over meat"
NORTH_EAST_TIP = "Focus on locally-produced staples and dried fish"

# Tier -> (message template, suggestions). {pct} is the income share.
RECOMMENDATION_TIERS: Dict[str, Tuple[str, List[str]]] = {
    "critical": (
        "Food expenses ({pct}%) exceed recommended 35-40% of income. "
        "Consider cost-saving strategies.",
        [
            "Switch to budget rice varieties (Kekulu)",
            "Increase dhal/eggs, reduce meat/fish consumption",
            "Shop at farmers markets on weekends",
            "Buy staples in bulk for 10-25% discount",
        ],
    ),
    "warning": (
        "Food expenses ({pct}%) are above ideal 35%. Some optimization recommended.",
        [
            "Consider seasonal vegetables for 40% savings",
            "Replace premium fish with local varieties",
            "Start home garden for leafy greens",
        ],
    ),
    "healthy": (
        "Food expenses ({pct}%) are within healthy range (25-35%).",
        [
            "Maintain current diet",
            "Consider bulk purchasing for additional savings",
            "Explore seasonal variations for variety",
        ],
    ),
    "excellent": (
        "Food expenses ({pct}%) are well-managed. "
        "You have flexibility for dietary improvements.",
        [
            "Consider adding more fruits and premium proteins",
            "Explore organic or specialty items",
            "Invest in nutrition quality improvements",
        ],
    ),
}

# =============================================================================
# SUFFICIENCY ANALYSIS
# =============================================================================
# (suggestion text, estimated savings) pairs. The first critical and
# needs-improvement suggestion is built from the computed gap at runtime.

SUFFICIENCY_SUGGESTIONS: Dict[str, List[Tuple[str, str]]] = {
    "critical": [
        ("Switch to budget rice varieties", "Rs. 500-800/month"),
        ("Reduce meat/fish frequency, increase eggs/dhal", "Rs. 2,000-4,000/month"),
        ("Shop at farmers markets", "20-30%"),
        ("Start home garden for vegetables", "Rs. 3,000-5,000/month"),
    ],
    "needs improvement": [
        ("Implement bulk purchasing for staples", "15-20%"),
        ("Focus on seasonal vegetables", "40% on produce"),
        ("Compare protein prices and substitute premium items", "15-60% on proteins"),
    ],
    "sufficient": [
        ("Budget is well-managed", ""),
        ("Consider building emergency food fund", ""),
        ("Opportunity to improve diet quality if desired", ""),
    ],
}

# =============================================================================
# SEASONAL FACTORS
# =============================================================================

SEASONAL_FACTOR_TEXT = {
    "peak_harvest": "Peak vegetable harvest season - expect lower prices",
    "off_season": "Off-season vegetables - prices may be higher",
    "monsoon_low": "Monsoon season - reduced fishing, higher fish prices",
    "calm_season": "Calm seas - abundant fish, lower prices",
}

CULTURAL_EVENT_MONTHS: Dict[int, str] = {
    4: "Sinhala/Tamil New Year - increased festival spending",
    12: "Christmas season - higher prices on some items",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Items whose current price can be looked up by name for inflation projection.
# Values are (price table path) tuples resolved against the food price table;
# a float is a fixed average.
INFLATION_PRICE_PATHS: Dict[str, object] = {
    "rice_samba": ("rice", "samba"),
    "rice_nadu": ("rice", "nadu"),
    "chicken": ("proteins", "chicken_whole"),
    "fish": ("proteins", "fish_linna"),
    "eggs": ("proteins", "eggs"),
    "vegetables": 450.0,
    "oil": ("oils_condiments", "vegetable_oil"),
}

# Required top-level sections of the economic dataset
REQUIRED_BUDGET_SECTIONS = [
    "income_quintiles",
    "sectors",
    "districts",
    "food_prices",
    "consumption_patterns",
    "family_templates",
    "dietary_preferences",
    "seasonal_variations",
]
