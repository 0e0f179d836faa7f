from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List
from .models import Menu, Topping, BasePizza, WingOption, normalize_size
from .validator import validate
from src.nlu.parse_toppings import parse_toppings_from_description


def _prices(d: Dict[str, Any]) -> Dict[str, float]:
    return {normalize_size(str(k)): float(v) for k, v in (d or {}).items()}


def _to_topping(d: Dict[str, Any]) -> Topping:
    return Topping(
        id=d.get("id", 0),
        name=d["name"],
        category=d["category"],
        small_price=float(d.get("small_price", 0.0)),
        medium_price=float(d.get("medium_price", 0.0)),
        large_price=float(d.get("large_price", 0.0)),
    )


def _to_pizza(d: Dict[str, Any], known: List[str], base: List[str]) -> BasePizza:
    defaults = d.get("toppings")
    if defaults is None:
        defaults = parse_toppings_from_description(d.get("description", ""), known, base)
    return BasePizza(
        id=d.get("id", 0),
        name=d["name"],
        prices=_prices(d.get("prices", {})),
        default_toppings=list(defaults),
        description=d.get("description", ""),
        gluten_free=d.get("gluten_free", False),
    )


def menu_from_dict(data: Dict[str, Any]) -> Menu:
    errors = validate(data)
    if errors:
        raise ValueError("Menu validation failed:\n" + "\n".join(errors))
    toppings = [_to_topping(x) for x in data.get("toppings", [])]
    known = [t.name for t in toppings]
    base = data.get("base_ingredients", [])
    pizzas = [_to_pizza(x, known, base) for x in data.get("pizzas", [])]
    wings = [WingOption(**w) for w in data.get("wings", [])]
    combo = {name: _prices(by_size) for name, by_size in (data.get("combo_prices") or {}).items()}
    return Menu(meta=data.get("meta", {}),
                toppings=toppings,
                pizzas=pizzas,
                wings=wings,
                combo_prices=combo,
                base_ingredients=base)


def load_menu(path: str | Path) -> Menu:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    return menu_from_dict(data)
