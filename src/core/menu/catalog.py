from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Union
import unicodedata
import re
from .models import Menu, Topping, BasePizza, WingOption

def _norm(s: str) -> str:
    s = unicodedata.normalize("NFKD", s).encode("ascii", "ignore").decode("ascii")
    s = re.sub(r"[^a-z0-9]+", " ", s.lower()).strip()
    return s

class MenuCatalog:
    """Read-only lookups over a loaded menu. Unknown names give None."""

    def __init__(self, menu: Menu):
        self.menu = menu
        self.toppings: Dict[str, Topping] = {_norm(t.name): t for t in menu.toppings}
        self.pizzas: Dict[str, BasePizza] = {_norm(p.name): p for p in menu.pizzas}
        self.pizzas_by_id: Dict[int, BasePizza] = {p.id: p for p in menu.pizzas}
        self.wings: Dict[str, WingOption] = {_norm(w.name): w for w in menu.wings}
        self.base_ingredients = {_norm(b) for b in menu.base_ingredients}

    def get_topping(self, name: str) -> Optional[Topping]:
        if not name:
            return None
        return self.toppings.get(_norm(name))

    def get_base_pizza(self, name_or_id: Union[str, int]) -> Optional[BasePizza]:
        if isinstance(name_or_id, int):
            return self.pizzas_by_id.get(name_or_id)
        if not name_or_id:
            return None
        return self.pizzas.get(_norm(name_or_id))

    def get_wings(self, name_or_id: Union[str, int]) -> Optional[WingOption]:
        if isinstance(name_or_id, int):
            return next((w for w in self.menu.wings if w.id == name_or_id), None)
        return self.wings.get(_norm(name_or_id or ""))

    def is_base_ingredient(self, name: str) -> bool:
        return _norm(name) in self.base_ingredients

    def toppings_by_category(self, category: str, exclude: Iterable[str] = ()) -> List[Topping]:
        skip = {_norm(x) for x in exclude}
        return [t for t in self.menu.toppings
                if t.category == category and _norm(t.name) not in skip]

    def combo_table(self) -> Dict[str, Dict[str, float]]:
        return dict(self.menu.combo_prices)
