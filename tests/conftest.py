import os
import tempfile

# settings are read at import time, so point them somewhere disposable first
_TMP = tempfile.mkdtemp(prefix="pizzeria-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'test.db')}")
os.environ.setdefault("PIZZA_MENU_JSON", os.path.join(_TMP, "menu.json"))
os.environ.setdefault("ADMIN_USER", "admin")
os.environ.setdefault("ADMIN_PASS", "secret")

import pytest

from src.core.menu.catalog import MenuCatalog
from src.core.menu.loader import menu_from_dict


def _t(i, name, category):
    return {"id": i, "name": name, "category": category,
            "small_price": 1.50, "medium_price": 2.00, "large_price": 2.50}


MENU_DATA = {
    "meta": {"currency": "CAD"},
    "base_ingredients": ["Pizza sauce", "Mozzarella Cheese"],
    "toppings": [
        _t(1, "Mushrooms", "vegetable"),
        _t(2, "Onions", "vegetable"),
        _t(3, "Green Peppers", "vegetable"),
        _t(4, "Spinach", "vegetable"),
        _t(5, "Pineapple", "vegetable"),
        _t(10, "Pepperoni", "meat"),
        _t(11, "Ham", "meat"),
        _t(12, "Bacon", "meat"),
        _t(20, "Extra Cheese", "cheese"),
        _t(21, "Feta Cheese", "cheese"),
    ],
    "pizzas": [
        {"id": 1, "name": "Cheese", "toppings": ["Pizza sauce", "Mozzarella Cheese"],
         "prices": {"small": 12.99, "medium": 16.99, "large": 20.99}},
        {"id": 2, "name": "Vegetarian",
         "toppings": ["Pizza sauce", "Mushrooms", "Onions", "Green Peppers", "Mozzarella Cheese"],
         "prices": {"small": 14.99, "medium": 18.99, "large": 22.99}},
        {"id": 3, "name": "Meat Lovers",
         "toppings": ["Pizza sauce", "Pepperoni", "Ham", "Bacon", "Mozzarella Cheese"],
         "prices": {"small": 17.99, "medium": 22.99, "large": 26.99}},
        {"id": 4, "name": "Two Topper", "toppings": ["Pizza sauce", "Mozzarella Cheese"],
         "prices": {"small": 13.99, "medium": 17.99, "large": 21.99}},
        {"id": 5, "name": "Three Topper", "toppings": ["Pizza sauce", "Mozzarella Cheese"],
         "prices": {"small": 15.99, "medium": 19.99, "large": 23.99}},
        {"id": 6, "name": "Hawaiian",
         "description": "Pizza sauce, Ham, Pineapple and Mozzarella Cheese",
         "prices": {"small": 15.99, "medium": 19.99, "large": 23.99}},
    ],
    "wings": [{"id": 1, "name": "Bone-In Wings", "type": "bone-in", "flavors": ["Hot", "Mild"]}],
    "combo_prices": {
        "Cheese": {"10": 18.99, "12": 25.99, "14": 30.99},
        "Vegetarian": {"10": 22.99, "12": 28.99, "14": 35.99},
        "Hawaiian": {"10": 22.99, "12": 28.99, "14": 35.99},
        "Meat Lovers": {"10": 26.99, "12": 32.99, "14": 38.99},
    },
}


@pytest.fixture
def catalog():
    return MenuCatalog(menu_from_dict(MENU_DATA))


@pytest.fixture
def pizza(catalog):
    def _get(name):
        return catalog.get_base_pizza(name)
    return _get
