"""
Item Catalog
============
Built-in catalog of purchasable products with reference prices (Rs.).

Each row is (name, category, unit, price, frequency, group, calories).
``group`` marks interchangeable items for stock sufficiency; ``calories``
is per 100g for grains and per unit otherwise, and is None when unknown.
"""

from typing import Any, Dict, List

CATALOG_COLUMNS = ("name", "category", "unit", "price", "frequency", "group", "calories")

_ROWS = [
    # Rice and grains
    ("Rice (Samba)", "Rice", "kg", 230, "daily", "rice", 360),
    ("Rice (Nadu)", "Rice", "kg", 220, "daily", "rice", 350),
    ("Rice (Keeri Samba)", "Rice", "kg", 300, "daily", "rice", 365),
    ("Rice (Red Raw)", "Rice", "kg", 200, "daily", "rice", 340),
    ("Rice (White Raw)", "Rice", "kg", 210, "daily", "rice", 350),
    ("Basmati Rice", "Rice", "kg", 650, "adhoc", "rice_premium", 370),

    # Vegetables (essential)
    ("Red Onions", "Vegetables", "kg", 450, "weekly", None, 40),
    ("Big Onions (B-Onions)", "Vegetables", "kg", 380, "weekly", None, 40),
    ("Garlic", "Vegetables", "kg", 600, "monthly", None, 149),
    ("Ginger", "Vegetables", "kg", 800, "monthly", None, 80),
    ("Potatoes", "Vegetables", "kg", 280, "weekly", None, 77),
    ("Tomatoes", "Vegetables", "kg", 480, "weekly", None, 18),
    ("Green Chillies", "Vegetables", "kg", 800, "weekly", None, 40),
    ("Lime", "Vegetables", "pcs", 20, "weekly", None, 30),
    ("Curry Leaves", "Vegetables", "bundle", 50, "weekly", None, 10),
    ("Rampe (Pandanus)", "Vegetables", "bundle", 50, "weekly", None, 10),

    # Vegetables (curry)
    ("Beans", "Vegetables", "kg", 450, "weekly", None, 31),
    ("Carrots", "Vegetables", "kg", 350, "weekly", None, 41),
    ("Leeks", "Vegetables", "kg", 300, "weekly", None, 61),
    ("Cabbage", "Vegetables", "kg", 220, "weekly", None, 25),
    ("Pumpkin", "Vegetables", "kg", 150, "weekly", None, 26),
    ("Brinjal", "Vegetables", "kg", 280, "weekly", None, 25),
    ("Okra (Ladies fingers)", "Vegetables", "kg", 200, "weekly", None, 33),
    ("Dhal (Mysore)", "Dry Goods", "kg", 320, "weekly", None, 340),

    # Meats and fish
    ("Chicken (Whole)", "Meats", "kg", 1250, "weekly", "chicken", None),
    ("Chicken (Curry Cut)", "Meats", "kg", 1350, "weekly", "chicken", None),
    ("Fish (Kelawalla)", "Seafood", "kg", 1800, "weekly", "fish_premium", None),
    ("Fish (Thalapath)", "Seafood", "kg", 2000, "weekly", "fish_premium", None),
    ("Sprats (Halmasso)", "Seafood", "kg", 1200, "monthly", None, None),
    ("Dried Fish (Katta)", "Seafood", "kg", 1800, "monthly", None, None),
    ("Canned Fish (Mackerel)", "Seafood", "can", 450, "adhoc", None, None),
    ("Eggs", "Meats", "pcs", 55, "weekly", None, None),

    # Spices and condiments
    ("Chili Powder", "Spices", "kg", 1200, "monthly", None, None),
    ("Chili Flakes", "Spices", "kg", 400, "monthly", None, None),
    ("Turmeric Powder", "Spices", "100g", 250, "monthly", None, None),
    ("Curry Powder (Roasted)", "Spices", "kg", 600, "monthly", None, None),
    ("Curry Powder (Raw)", "Spices", "kg", 500, "monthly", None, None),
    ("Mustard Seeds", "Spices", "100g", 100, "adhoc", None, None),
    ("Fenugreek", "Spices", "100g", 120, "adhoc", None, None),
    ("Cinnamon Sticks", "Spices", "100g", 400, "adhoc", None, None),
    ("Cardamom", "Spices", "kg", 800, "adhoc", None, None),
    ("Cloves", "Spices", "kg", 750, "adhoc", None, None),
    ("Salt", "Essentials", "kg", 90, "monthly", None, None),
    ("Pepper (Black)", "Spices", "100g", 200, "monthly", None, None),
    ("Maldive Fish", "Spices", "kg", 450, "monthly", None, None),
    ("Goraka", "Spices", "100g", 200, "adhoc", None, None),

    # Coconut and oil
    ("Coconut", "Essentials", "pcs", 120, "weekly", None, None),
    ("Coconut Oil", "Essentials", "l", 650, "monthly", "oil", None),
    ("Vegetable Oil", "Essentials", "l", 850, "monthly", "oil", None),
    ("Coconut Milk (Powder)", "Essentials", "pack", 250, "adhoc", None, None),
    ("Coconut Milk (Liquid)", "Essentials", "pack", 280, "adhoc", None, None),

    # Bakery and snacks
    ("Bread (Roast)", "Bakery", "loaf", 110, "daily", "bread", None),
    ("Bread (Sandwich)", "Bakery", "loaf", 190, "daily", "bread", None),
    ("Kimbula Bun", "Bakery", "pcs", 80, "adhoc", None, None),
    ("Cream Cracker", "Snacks", "pack", 350, "weekly", None, None),
    ("Marie Biscuits", "Snacks", "pack", 280, "weekly", None, None),
    ("Lemon Puff", "Snacks", "pack", 320, "adhoc", None, None),

    # Dairy
    ("Fresh Milk", "Dairy", "l", 400, "weekly", "milk_fresh", None),
    ("Milk Powder (Full Cream)", "Dairy", "kg", 900, "monthly", "milk_powder", None),
    ("Yoghurt", "Dairy", "pcs", 90, "daily", None, None),
    ("Butter", "Dairy", "pack", 850, "monthly", None, None),
    ("Cheese (Slices)", "Dairy", "pack", 950, "adhoc", None, None),

    # Flour and sugar
    ("Wheat Flour", "Essentials", "kg", 220, "monthly", "flour", None),
    ("Rice Flour", "Essentials", "kg", 260, "adhoc", "flour", None),
    ("Kurakkan Flour", "Essentials", "kg", 400, "adhoc", "flour", None),
    ("Sugar (White)", "Essentials", "kg", 280, "monthly", "sugar", None),
    ("Sugar (Brown)", "Essentials", "kg", 320, "monthly", "sugar", None),

    # Beverages
    ("Tea Leaves (Dust)", "Beverages", "pack", 200, "monthly", None, None),
    ("Coffee Powder", "Beverages", "kg", 600, "adhoc", None, None),
    ("Milo", "Beverages", "pack", 800, "adhoc", None, None),
    ("Samaposha", "Beverages", "pack", 250, "weekly", None, None),

    # Household
    ("Dish Wash Liquid", "Household", "l", 450, "monthly", None, None),
    ("Washing Powder", "Household", "kg", 500, "monthly", None, None),
    ("Soap Bar", "Household", "pcs", 120, "monthly", None, None),
    ("Toothpaste", "Health", "pcs", 200, "monthly", None, None),
]

CATALOG_ROWS: List[Dict[str, Any]] = [dict(zip(CATALOG_COLUMNS, row)) for row in _ROWS]
