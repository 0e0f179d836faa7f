from __future__ import annotations
import json, os
from functools import lru_cache
from typing import Any, Dict, List

from src.core.menu.catalog import MenuCatalog
from src.core.menu.loader import load_menu
from src.infra.settings import settings

MENU_PATH = settings.MENU_JSON


def _topping(i: int, name: str, category: str) -> Dict[str, Any]:
    return {"id": i, "name": name, "category": category,
            "small_price": 2.49, "medium_price": 2.99, "large_price": 3.49}


_VEGETABLES = [
    "Green Peppers", "Mushrooms", "Onions", "Red Onions", "Jalapeno",
    "Banana Peppers", "Spinach", "Fresh Tomatoes", "Green Olives",
    "Black Olives", "Pineapple", "Dill Pickles", "Lettuce", "Cooked Tomatoes",
]
_MEATS = [
    "Pepperoni", "Ham", "Salami", "Beef", "Spicy Beef", "Bacon",
    "Italian Sausage", "Chicken", "Donair Meat", "Shrimp", "Anchovy",
]
_CHEESES = ["Extra Cheese", "Feta Cheese"]

_TOPPINGS: List[Dict[str, Any]] = (
    [_topping(i, n, "vegetable") for i, n in enumerate(_VEGETABLES, start=1)]
    + [_topping(i, n, "meat") for i, n in enumerate(_MEATS, start=100)]
    + [_topping(i, n, "cheese") for i, n in enumerate(_CHEESES, start=200)]
)


def _pizza(i: int, name: str, small: float, medium: float, large: float,
           description: str) -> Dict[str, Any]:
    return {"id": i, "name": name, "description": description,
            "prices": {"small": small, "medium": medium, "large": large}}


_PIZZAS = [
    _pizza(1, "Cheese", 13.99, 17.99, 21.99, "Pizza sauce and Mozzarella Cheese"),
    _pizza(2, "Two Topper", 15.99, 19.99, 24.99, "Pizza sauce, Mozzarella Cheese and your choice of two toppings"),
    _pizza(3, "Three Topper", 17.99, 21.99, 26.99, "Pizza sauce, Mozzarella Cheese and your choice of three toppings"),
    _pizza(4, "Pepperoni", 15.99, 19.99, 24.99, "Pizza sauce, Pepperoni and Mozzarella Cheese"),
    _pizza(5, "Hawaiian", 15.99, 19.99, 24.99, "Pizza sauce, Ham, Pineapple and Mozzarella Cheese"),
    _pizza(6, "Vegetarian", 16.99, 20.99, 25.99,
           "Pizza sauce, Mushrooms, Green Peppers, Onions, Fresh Tomatoes, Black Olives and Mozzarella Cheese"),
    _pizza(7, "BBQ Chicken", 16.99, 20.99, 25.99, "BBQ Sauce, Chicken, Red Onions and Mozzarella Cheese"),
    _pizza(8, "Greek Style", 16.99, 20.99, 25.99,
           "Pizza sauce, Spinach, Red Onions, Black Olives, Fresh Tomatoes, Feta Cheese and Mozzarella Cheese"),
    _pizza(9, "Meat Supreme", 18.99, 22.99, 27.99,
           "Pizza sauce, Pepperoni, Ham, Beef, Bacon, Italian Sausage and Mozzarella Cheese"),
    _pizza(10, "Donair", 18.99, 22.99, 27.99, "Sweet Donair Sauce, Donair Meat, Onions, Fresh Tomatoes and Mozzarella Cheese"),
]

_COMBO_PRICES = {
    "Cheese": {"10": 18.99, "12": 25.99, "14": 30.99},
    "Two Topper": {"10": 22.99, "12": 28.99, "14": 35.99},
    "Hawaiian": {"10": 22.99, "12": 28.99, "14": 35.99},
    "Pepperoni": {"10": 22.99, "12": 28.99, "14": 35.99},
    "Three Topper": {"10": 26.99, "12": 32.99, "14": 38.99},
    "BBQ Chicken": {"10": 26.99, "12": 32.99, "14": 38.99},
    "Vegetarian": {"10": 26.99, "12": 32.99, "14": 38.99},
    "Greek Style": {"10": 26.99, "12": 32.99, "14": 38.99},
    "Meat Supreme": {"10": 29.99, "12": 35.99, "14": 41.99},
    "Donair": {"10": 29.99, "12": 35.99, "14": 41.99},
}

_DEFAULT_MENU: Dict[str, Any] = {
    "meta": {"currency": "CAD"},
    "base_ingredients": [
        "Pizza sauce", "Mozzarella Cheese", "BBQ Sauce", "Sweet Donair Sauce",
        "Ranch Sauce", "Teriyaki Sauce",
    ],
    "toppings": _TOPPINGS,
    "pizzas": _PIZZAS,
    "wings": [
        {"id": 1, "name": "Bone-In Wings", "type": "bone-in",
         "flavors": ["Hot", "Medium", "Mild", "Honey Garlic", "Salt & Pepper"]},
        {"id": 2, "name": "Boneless Wings", "type": "boneless",
         "flavors": ["Hot", "Medium", "Mild", "Honey Garlic", "Salt & Pepper"]},
    ],
    "combo_prices": _COMBO_PRICES,
}


def _ensure_file():
    folder = os.path.dirname(MENU_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    if not os.path.exists(MENU_PATH):
        with open(MENU_PATH, "w", encoding="utf-8") as f:
            json.dump(_DEFAULT_MENU, f, ensure_ascii=False, indent=2)


@lru_cache(maxsize=1)
def get_catalog() -> MenuCatalog:
    _ensure_file()
    return MenuCatalog(load_menu(MENU_PATH))
