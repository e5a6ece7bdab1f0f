"""
Sri Lanka Family Monthly Food Budget Data (2025)
=================================================
Economic reference tables for the budget calculator and predictors.

Sources: Department of Census and Statistics HIES 2019,
Central Bank of Sri Lanka (June 2025). Prices are Rs. per kg unless the
``unit`` says otherwise.
"""

from typing import Any, Dict

SRI_LANKA_BUDGET_DATA: Dict[str, Any] = {
    "data_version": "December 2025",
    "last_updated": "2025-12-28",

    "national_averages": {
        "household_monthly_income": 63130,
        "household_food_expenditure": 22130,
        "food_percentage_of_income": 35.1,
        "avg_household_size": 3.8,
        "bath_curry_indicator_2019": 836,
        "bath_curry_indicator_2024": 2623,
        "individual_monthly_nutrition_2019": 6966,
        "individual_monthly_nutrition_2025": 16318,
    },

    # Ordered from poorest to richest; monthly_income is the bracket threshold
    "income_quintiles": [
        {"quintile": 1, "name": "Poorest 20%", "monthly_income": 17572,
         "food_budget_range": {"min": 6000, "max": 9000}, "food_percentage": 50},
        {"quintile": 2, "name": "Low Income", "monthly_income": 35000,
         "food_budget_range": {"min": 12000, "max": 15000}, "food_percentage": 42},
        {"quintile": 3, "name": "Middle Income", "monthly_income": 63130,
         "food_budget_range": {"min": 20000, "max": 25000}, "food_percentage": 35},
        {"quintile": 4, "name": "Upper Middle Income", "monthly_income": 100000,
         "food_budget_range": {"min": 30000, "max": 40000}, "food_percentage": 32},
        {"quintile": 5, "name": "Richest 20%", "monthly_income": 196289,
         "food_budget_range": {"min": 40000, "max": 70000}, "food_percentage": 25},
    ],

    "sectors": {
        "urban": {
            "median_income": 74679,
            "food_budget_range": {"min": 23000, "max": 35000},
            "rice_consumption_per_capita": 24.1,
            "preferred_rice_type": "Samba",
            "food_percentage_of_income": 28,
        },
        "rural": {
            "median_income": 50869,
            "food_budget_range": {"min": 15000, "max": 25000},
            "rice_consumption_per_capita": 31.8,
            "preferred_rice_type": "Nadu",
            "food_percentage_of_income": 37,
            "home_grown_vegetables": True,
        },
        "estate": {
            "median_income": 40771,
            "food_budget_range": {"min": 13000, "max": 16500},
            "rice_consumption_per_capita": 35.9,
            "preferred_rice_type": "Nadu",
            "food_percentage_of_income": 50,
        },
    },

    "districts": [
        {"name": "Colombo", "median_income": 86981, "food_budget": {"min": 28000, "max": 35000}, "sector": "urban", "population": 2324349},
        {"name": "Gampaha", "median_income": 69729, "food_budget": {"min": 23000, "max": 28000}, "sector": "urban", "population": 2304833},
        {"name": "Kalutara", "median_income": 58000, "food_budget": {"min": 19000, "max": 24000}, "sector": "mixed", "population": 1222504},
        {"name": "Kandy", "median_income": 55000, "food_budget": {"min": 18000, "max": 23000}, "sector": "mixed", "population": 1375382},
        {"name": "Matale", "median_income": 46000, "food_budget": {"min": 15000, "max": 19000}, "sector": "rural", "population": 484531},
        {"name": "Nuwara Eliya", "median_income": 43000, "food_budget": {"min": 14000, "max": 17500}, "sector": "estate", "population": 711644},
        {"name": "Galle", "median_income": 57500, "food_budget": {"min": 19000, "max": 24000}, "sector": "mixed", "population": 1063334},
        {"name": "Matara", "median_income": 51000, "food_budget": {"min": 17000, "max": 21000}, "sector": "mixed", "population": 814048},
        {"name": "Hambantota", "median_income": 48000, "food_budget": {"min": 16000, "max": 20000}, "sector": "rural", "population": 599903},
        {"name": "Jaffna", "median_income": 42000, "food_budget": {"min": 14000, "max": 17000}, "sector": "mixed", "population": 583882},
        {"name": "Kilinochchi", "median_income": 34862, "food_budget": {"min": 12000, "max": 14000}, "sector": "rural", "population": 113510},
        {"name": "Mannar", "median_income": 38000, "food_budget": {"min": 12500, "max": 15500}, "sector": "rural", "population": 99570},
        {"name": "Vavuniya", "median_income": 40000, "food_budget": {"min": 13500, "max": 16500}, "sector": "rural", "population": 172115},
        {"name": "Mullaitivu", "median_income": 34279, "food_budget": {"min": 11500, "max": 14000}, "sector": "rural", "population": 92238},
        {"name": "Batticaloa", "median_income": 35850, "food_budget": {"min": 12000, "max": 14000}, "sector": "rural", "population": 526567},
        {"name": "Ampara", "median_income": 44000, "food_budget": {"min": 14500, "max": 18000}, "sector": "rural", "population": 649402},
        {"name": "Trincomalee", "median_income": 41000, "food_budget": {"min": 13500, "max": 17000}, "sector": "mixed", "population": 379541},
        {"name": "Kurunegala", "median_income": 52000, "food_budget": {"min": 17000, "max": 22000}, "sector": "mixed", "population": 1618465},
        {"name": "Puttalam", "median_income": 61657, "food_budget": {"min": 20000, "max": 26000}, "sector": "mixed", "population": 762396},
        {"name": "Anuradhapura", "median_income": 47000, "food_budget": {"min": 15500, "max": 19500}, "sector": "rural", "population": 860575},
        {"name": "Polonnaruwa", "median_income": 45000, "food_budget": {"min": 15000, "max": 18500}, "sector": "rural", "population": 406088},
        {"name": "Badulla", "median_income": 44500, "food_budget": {"min": 14500, "max": 18500}, "sector": "mixed", "population": 815405},
        {"name": "Monaragala", "median_income": 40500, "food_budget": {"min": 13500, "max": 16500}, "sector": "rural", "population": 451058},
        {"name": "Ratnapura", "median_income": 49000, "food_budget": {"min": 16000, "max": 20000}, "sector": "mixed", "population": 1088007},
        {"name": "Kegalle", "median_income": 50500, "food_budget": {"min": 16500, "max": 21000}, "sector": "mixed", "population": 840648},
    ],

    # December 2025 prices
    "food_prices": {
        "rice": {
            "samba": {"price": 237.5, "unit": "kg", "preferred": ["urban"]},
            "nadu": {"price": 280, "unit": "kg", "preferred": ["rural", "estate"]},
            "kekulu_white": {"price": 217.5, "unit": "kg", "preferred": ["budget"]},
            "kekulu_red": {"price": 217.5, "unit": "kg", "preferred": ["budget"]},
            "basmathi": {"price": 650, "unit": "kg"},
        },
        "wheat_flour": {"price": 95, "unit": "kg"},
        "dhal_red": {"price": 265, "unit": "kg"},

        "vegetables": {
            "tomato": {"price": 675, "unit": "kg", "seasonal": True},
            "onion_big": {"price": 377.5, "unit": "kg"},
            "onion_red": {"price": 400, "unit": "kg"},
            "potato_local": {"price": 333.5, "unit": "kg"},
            "carrot": {"price": 700, "unit": "kg"},
            "cabbage": {"price": 475, "unit": "kg"},
            "green_chilli": {"price": 825, "unit": "kg"},
            "beans": {"price": 450, "unit": "kg"},
            "brinjal": {"price": 380, "unit": "kg"},
            "leafy_greens": {"price": 200, "unit": "kg", "home_grown": True},
            "pumpkin": {"price": 180, "unit": "kg"},
            "ginger": {"price": 1200, "unit": "kg"},
            "garlic": {"price": 600, "unit": "kg"},
        },

        "proteins": {
            "chicken_whole": {"price": 1250, "unit": "kg"},
            "chicken_katta": {"price": 1600, "unit": "kg"},
            "fish_linna": {"price": 850, "unit": "kg"},
            "fish_thalapath": {"price": 1850, "unit": "kg"},
            "fish_mackerel": {"price": 1420, "unit": "kg"},
            "fish_kelawalla": {"price": 1850, "unit": "kg"},
            "fish_salaya": {"price": 600, "unit": "kg"},
            "beef_round": {"price": 2950, "unit": "kg"},
            "mutton": {"price": 1850, "unit": "kg"},
            "eggs": {"price": 33, "unit": "each"},
            "dried_fish_sprats": {"price": 1200, "unit": "kg"},
            "dried_fish_katta": {"price": 1800, "unit": "kg"},
            "dried_fish_salaya": {"price": 600, "unit": "kg"},
            "canned_fish_mackerel": {"price": 450, "unit": "425g"},
            "soya_meat": {"price": 110, "unit": "90g pack"},
        },

        "dairy": {
            "milk_powder_full_cream": {"price": 900, "unit": "400g"},
            "milk_liquid": {"price": 140, "unit": "liter"},
            "yogurt": {"price": 80, "unit": "cup"},
            "butter": {"price": 850, "unit": "200g"},
            "cheese": {"price": 2500, "unit": "kg"},
        },

        "beverages": {
            "milo": {"price": 800, "unit": "400g"},
            "nescafe": {"price": 1500, "unit": "100g"},
            "coffee_powder": {"price": 1800, "unit": "kg"},
            "coffee_instant_sachets": {"price": 35, "unit": "sachet"},
            "tea_leaves_dust": {"price": 200, "unit": "pack"},
            "tea_bags": {"price": 450, "unit": "100 count"},
            "nestomalt": {"price": 750, "unit": "400g"},
        },

        "spices": {
            "chili_powder": {"price": 1200, "unit": "kg"},
            "chili_flakes": {"price": 400, "unit": "kg"},
            "curry_powder_raw": {"price": 500, "unit": "kg"},
            "curry_powder_roasted": {"price": 600, "unit": "kg"},
            "turmeric_powder": {"price": 300, "unit": "100g"},
            "pepper_black": {"price": 200, "unit": "100g"},
            "mustard_seeds": {"price": 100, "unit": "100g"},
            "fenugreek": {"price": 100, "unit": "100g"},
            "cinnamon_sticks": {"price": 350, "unit": "100g"},
            "cardamom": {"price": 8000, "unit": "kg"},
            "cloves": {"price": 6000, "unit": "kg"},
            "goraka": {"price": 200, "unit": "100g"},
            "maldive_fish": {"price": 450, "unit": "kg"},
        },

        "oils_condiments": {
            "coconut_oil": {"price": 898, "unit": "liter"},
            "vegetable_oil": {"price": 850, "unit": "liter"},
            "coconut": {"price": 160, "unit": "each"},
            "coconut_milk_liquid": {"price": 280, "unit": "pack"},
            "coconut_milk_powder": {"price": 250, "unit": "pack"},
            "sugar": {"price": 223.5, "unit": "kg"},
            "salt": {"price": 70, "unit": "kg"},
            "tea_leaves": {"price": 350, "unit": "100g"},
        },

        "fruits": {
            "banana": {"price": 125, "unit": "kg"},
            "papaya": {"price": 180, "unit": "kg"},
            "mango": {"price": 400, "unit": "kg", "seasonal": True},
            "apple_imported": {"price": 210, "unit": "each"},
            "orange": {"price": 150, "unit": "kg"},
        },

        "household": {
            "toothpaste": {"price": 200, "unit": "pcs"},
            "washing_powder": {"price": 500, "unit": "1kg"},
            "dish_wash_liquid": {"price": 450, "unit": "liter"},
            "soap_bar": {"price": 120, "unit": "bar"},
            "shampoo": {"price": 600, "unit": "bottle"},
        },

        "utilities": {
            "lpg_cylinder_12_5kg": {"price": 3690, "unit": "refill"},
        },
    },

    # Monthly consumption per person
    "consumption_patterns": {
        "rice_per_capita_kg": 8.45,
        "chicken_per_capita_kg": 0.45,
        "eggs_per_capita_count": 4,
        "dhal_per_capita_kg": 0.65,
        "vegetables_per_capita_kg": 8,
        "fish_per_capita_kg": 1.2,
        "milk_liters_per_capita": 2.5,
    },

    "family_templates": {
        "size_1": {"people": 1, "budget_range": {"min": 6000, "max": 10000},
                   "rice_kg": 8.5, "vegetables_kg": 8, "proteins_kg": 2, "eggs_count": 8},
        "size_2": {"people": 2, "budget_range": {"min": 12000, "max": 18000},
                   "rice_kg": 17, "vegetables_kg": 16, "proteins_kg": 4, "eggs_count": 16},
        "size_3": {"people": 3, "budget_range": {"min": 18000, "max": 24000},
                   "rice_kg": 25, "vegetables_kg": 24, "proteins_kg": 6, "eggs_count": 24},
        "size_4": {"people": 4, "budget_range": {"min": 22000, "max": 30000},
                   "rice_kg": 34, "vegetables_kg": 32, "proteins_kg": 8, "eggs_count": 32},
        "size_5": {"people": 5, "budget_range": {"min": 28000, "max": 38000},
                   "rice_kg": 42, "vegetables_kg": 40, "proteins_kg": 10, "eggs_count": 40},
        "size_6": {"people": 6, "budget_range": {"min": 33000, "max": 45000},
                   "rice_kg": 51, "vegetables_kg": 48, "proteins_kg": 12, "eggs_count": 48},
        "size_7": {"people": 7, "budget_range": {"min": 38000, "max": 52000},
                   "rice_kg": 59, "vegetables_kg": 56, "proteins_kg": 14, "eggs_count": 56},
        "size_8_plus": {"people": 8, "budget_range": {"min": 43000, "max": 60000},
                        "rice_kg": 68, "vegetables_kg": 64, "proteins_kg": 16, "eggs_count": 64},
    },

    "dietary_preferences": {
        "mixed": {
            "name": "Mixed (Non-Vegetarian)",
            "protein_sources": ["chicken", "fish", "eggs", "dhal", "beef"],
            "budget_multiplier": 1.0,
            "description": "Balanced diet with meat, fish, and vegetables",
        },
        "vegetarian": {
            "name": "Vegetarian",
            "protein_sources": ["dhal", "eggs", "dairy", "soya"],
            "budget_multiplier": 0.75,
            "description": "Plant-based with dairy and eggs, 25% cost reduction on proteins",
        },
        "pescatarian": {
            "name": "Pescatarian",
            "protein_sources": ["fish", "eggs", "dhal", "dairy"],
            "budget_multiplier": 0.90,
            "description": "Fish and plant-based proteins",
        },
        "vegan": {
            "name": "Vegan",
            "protein_sources": ["dhal", "soya", "beans"],
            "budget_multiplier": 0.65,
            "description": "Fully plant-based, significant cost savings",
        },
        "halal": {
            "name": "Halal (Muslim)",
            "protein_sources": ["chicken", "fish", "beef", "mutton", "eggs", "dhal"],
            "budget_multiplier": 1.05,
            "description": "Halal meat, emphasis on beef/mutton over pork",
            "avoidance": ["pork"],
        },
        "buddhist_hindu": {
            "name": "Buddhist/Hindu",
            "protein_sources": ["chicken", "fish", "eggs", "dhal"],
            "budget_multiplier": 0.95,
            "description": "Occasional meat avoidance, preference for vegetarian curries",
            "poya_day_veg": True,
        },
    },

    "saving_strategies": [
        {
            "strategy": "Bulk Purchasing",
            "description": "Purchase staples (rice, flour, sugar, oil) in bulk every 3-4 weeks",
            "savings": "15-20% annually",
            "min_purchase": 10000,
            "discount_range": {"min": 10, "max": 25},
        },
        {
            "strategy": "Farmers Markets",
            "description": "Shop Saturday/Sunday morning markets for vegetables and fish",
            "savings": "20-30% vs supermarkets",
            "best_days": ["Saturday", "Sunday"],
            "best_time": "6:00 AM - 9:00 AM",
        },
        {
            "strategy": "Seasonal Eating",
            "description": "Buy in-season vegetables and preserve during harvest months (June-Sep)",
            "savings": "40-50% on off-season items",
            "methods": ["drying", "pickling", "freezing"],
        },
        {
            "strategy": "Protein Substitution",
            "description": "Replace beef with chicken (15% savings) or eggs (60% savings)",
            "savings": "15-60% on protein costs",
            "substitutions": [
                {"from": "beef", "to": "chicken", "savings": 15},
                {"from": "chicken", "to": "eggs", "savings": 60},
                {"from": "fish_premium", "to": "fish_local", "savings": 45},
            ],
        },
        {
            "strategy": "Home Gardening",
            "description": "Grow leafy greens, tomatoes, chili in home garden",
            "savings": "Rs. 3,000-5,000/month",
            "suitable_for": ["rural", "suburban"],
            "vegetables": ["leafy greens", "tomato", "chili", "beans"],
        },
    ],

    # % change from baseline price
    "seasonal_variations": {
        "vegetables": {
            "peak_harvest": {"months": [6, 7, 8, 9], "price_change": -35},
            "off_season": {"months": [1, 2, 3], "price_change": 50},
            "normal": {"months": [4, 5, 10, 11, 12], "price_change": 0},
        },
        "fruits": {
            "mango_season": {"months": [5, 6, 7], "price_change": -40},
            "avocado_season": {"months": [7, 8, 9], "price_change": -35},
        },
        "fish": {
            "monsoon_low": {"months": [5, 6, 7, 8], "price_change": 25},
            "calm_season": {"months": [11, 12, 1, 2, 3], "price_change": -15},
        },
    },

    "cultural_factors": {
        "buddhist_poya_days": {
            "frequency": "Monthly (Full Moon)",
            "dietary_impact": "Many avoid meat",
            "budget_impact": -8,
        },
        "ramadan": {
            "duration": "1 month",
            "dietary_impact": "Increased evening meal spending",
            "budget_impact": 15,
        },
        "hindu_festivals": {
            "frequency": "Multiple per year",
            "dietary_impact": "Vegetarian meals, special sweets",
            "budget_impact": 10,
        },
    },
}
