from __future__ import annotations
from typing import Dict, Any, List, Set

from .models import CATEGORIES

_SIZE_LABELS = {"small", "medium", "large", "10", "12", "14"}


def _is_price(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and v >= 0


def validate(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    seen_toppings: Set[str] = set()
    seen_pizzas: Set[str] = set()

    toppings = data.get("toppings", [])
    if not toppings:
        errors.append("toppings list is empty")

    for idx, t in enumerate(toppings, start=1):
        name = t.get("name")
        if not name or not isinstance(name, str):
            errors.append(f"topping[{idx}] missing name")
            continue
        key = name.strip().lower()
        if key in seen_toppings:
            errors.append(f"duplicate topping: {name}")
        seen_toppings.add(key)
        if t.get("category") not in CATEGORIES:
            errors.append(f"{name}: unknown category '{t.get('category')}'")
        for col in ("small_price", "medium_price", "large_price"):
            if col in t and not _is_price(t[col]):
                errors.append(f"{name}: {col} must be a non-negative number")

    for idx, p in enumerate(data.get("pizzas", []), start=1):
        name = p.get("name")
        if not name or not isinstance(name, str):
            errors.append(f"pizza[{idx}] missing name")
            continue
        key = name.strip().lower()
        if key in seen_pizzas:
            errors.append(f"duplicate pizza: {name}")
        seen_pizzas.add(key)
        prices = p.get("prices", {})
        if not prices:
            errors.append(f"{name}: no prices")
        for size, price in prices.items():
            if str(size).lower() not in _SIZE_LABELS:
                errors.append(f"{name}: unknown size '{size}'")
            elif not _is_price(price):
                errors.append(f"{name}: price for {size} must be a non-negative number")

    for pizza, by_size in (data.get("combo_prices") or {}).items():
        if pizza.strip().lower() not in seen_pizzas:
            errors.append(f"combo price for unknown pizza '{pizza}'")
        for size, price in by_size.items():
            if str(size).lower() not in _SIZE_LABELS:
                errors.append(f"combo {pizza}: unknown size '{size}'")
            elif not _is_price(price):
                errors.append(f"combo {pizza}: price for {size} must be a number")

    return errors
