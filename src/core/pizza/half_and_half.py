from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from src.core.menu.catalog import MenuCatalog
from src.core.menu.models import BasePizza
from .customizer import PizzaCustomizer, restore_ledger
from .ledger import ADD, Modification
from .models import CookingPreferences, Outcome, PricedItem
from .rules import ReplacementRule

log = logging.getLogger("pizza.pricing")

LEFT = "left"
RIGHT = "right"

MORE_EXPENSIVE_HALF = "more_expensive_half"
BLENDED = "blended"
PRICING_MODES = (MORE_EXPENSIVE_HALF, BLENDED)


class HalfAndHalfComposer:
    """Two independent half sessions, priced together on read.

    more_expensive_half: the dearer half (base + its own surcharge) is the
    price, never below the pizza the customer first clicked.
    blended: the highest base of the three plus both halves' surcharges.
    Toppings inherited from a menu pizza chosen for a half are never charged.
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        clicked_pizza: BasePizza,
        size: str,
        pricing: str = MORE_EXPENSIVE_HALF,
        replacement_rule: Optional[ReplacementRule] = None,
        cooking: Optional[CookingPreferences] = None,
    ):
        if pricing not in PRICING_MODES:
            raise ValueError(f"unknown half-and-half pricing: {pricing}")
        self.catalog = catalog
        self.clicked_pizza = clicked_pizza
        self.size = size
        self.pricing = pricing
        self.rule = replacement_rule
        self.cooking = cooking or CookingPreferences()
        self.halves: Dict[str, PizzaCustomizer] = {
            LEFT: self._new_half(clicked_pizza, LEFT),
            RIGHT: self._new_half(clicked_pizza, RIGHT),
        }

    def _new_half(self, pizza: BasePizza, half: str, **kwargs: Any) -> PizzaCustomizer:
        return PizzaCustomizer(self.catalog, pizza, self.size, half=half,
                               replacement_rule=self.rule, cooking=self.cooking, **kwargs)

    @property
    def left(self) -> PizzaCustomizer:
        return self.halves[LEFT]

    @property
    def right(self) -> PizzaCustomizer:
        return self.halves[RIGHT]

    def half(self, side: str) -> PizzaCustomizer:
        return self.halves[side]

    # ---------- edits ----------

    def choose_pizza(self, side: str, name_or_id) -> bool:
        """Swap a half's whole topping set for another menu pizza's.

        The chosen pizza's toppings land on that half's fresh ledger as free
        adds and are remembered as inherited. Unknown pizzas are a no-op.
        """
        pizza = self.catalog.get_base_pizza(name_or_id)
        if pizza is None:
            log.warning(f"choose_pizza: unknown pizza '{name_or_id}' for {side} half")
            return False
        toppings = [t for t in pizza.default_toppings if not self.catalog.is_base_ingredient(t)]
        session = self._new_half(pizza, side, default_toppings=[], inherited=toppings)
        for name in toppings:
            known = self.catalog.get_topping(name)
            session.ledger.append(Modification(
                ADD, known.name if known else name, 0.0, side,
                topping_id=known.id if known else None,
            ))
        self.halves[side] = session
        log.info(f"{side} half set to {pizza.name} ({len(toppings)} toppings)")
        return True

    def add_topping(self, side: str, name: str) -> Outcome:
        return self.halves[side].add_topping(name)

    def remove_topping(self, side: str, name: str) -> Outcome:
        return self.halves[side].remove_topping(name)

    def toggle_cooking(self, pref: str) -> CookingPreferences:
        self.cooking.toggle(pref)
        return self.cooking

    # ---------- pricing ----------

    def clicked_price(self) -> float:
        return self.clicked_pizza.price_for(self.size) or 0.0

    def half_total(self, side: str) -> float:
        h = self.halves[side]
        return round(h.base_price + h.surcharge(), 2)

    def effective_base_price(self) -> float:
        return max(self.left.base_price, self.right.base_price, self.clicked_price())

    def surcharge(self) -> float:
        return round(self.left.surcharge() + self.right.surcharge(), 2)

    def total_price(self) -> float:
        if self.pricing == BLENDED:
            return round(self.effective_base_price() + self.surcharge(), 2)
        return round(max(self.half_total(LEFT), self.half_total(RIGHT), self.clicked_price()), 2)

    def current_toppings(self) -> Dict[str, List[str]]:
        return {side: h.current_toppings() for side, h in self.halves.items()}

    def priced(self) -> PricedItem:
        merged: List[str] = []
        for h in (self.left, self.right):
            for t in h.current_toppings():
                if t not in merged:
                    merged.append(t)
        total = self.total_price()
        if self.pricing == BLENDED:
            return PricedItem(merged, self.surcharge(), total)
        # only the dearer half's extras end up on the bill
        return PricedItem(merged, round(total - self.effective_base_price(), 2), total)

    def describe(self) -> List[str]:
        lines = [f"Left: {self.left.pizza.name}", f"Right: {self.right.pizza.name}"]
        return lines + self.left.describe() + self.right.describe()

    # ---------- commit / restore ----------

    @staticmethod
    def _half_record(h: PizzaCustomizer) -> Dict[str, Any]:
        return {
            "basePizzaName": h.pizza.name,
            "basePizzaId": h.pizza.id,
            "basePizzaPrice": h.base_price,
            "defaultToppings": list(h.default_toppings),
            "inheritedToppings": list(h.inherited),
            "toppingModifications": h.ledger.to_list(),
        }

    def to_payload(self) -> Dict[str, Any]:
        return {
            "isHalfAndHalf": True,
            "leftHalf": self._half_record(self.left),
            "rightHalf": self._half_record(self.right),
            "cookingPreferences": self.cooking.to_dict(),
            "pricing": self.pricing,
            "calculatedPrice": self.total_price(),
        }

    @classmethod
    def from_payload(cls, catalog: MenuCatalog, clicked_pizza: BasePizza, size: str,
                     payload: Dict[str, Any], **kwargs: Any) -> "HalfAndHalfComposer":
        """Restore both halves; bad records are skipped, never raised."""
        payload = payload if isinstance(payload, dict) else {}
        pricing = payload.get("pricing") or MORE_EXPENSIVE_HALF
        if pricing not in PRICING_MODES:
            log.warning(f"restore: unknown pricing {pricing!r}, using {MORE_EXPENSIVE_HALF}")
            pricing = MORE_EXPENSIVE_HALF
        kwargs.setdefault("pricing", pricing)
        kwargs.setdefault("cooking", CookingPreferences.from_dict(payload.get("cookingPreferences")))
        composer = cls(catalog, clicked_pizza, size, **kwargs)
        for side, key in ((LEFT, "leftHalf"), (RIGHT, "rightHalf")):
            record = payload.get(key)
            if not record:
                continue
            if not isinstance(record, dict):
                log.warning(f"restore: malformed {side} half {record!r} skipped")
                continue
            pizza = _lookup_pizza(catalog, record.get("basePizzaName")) or _lookup_pizza(catalog, record.get("basePizzaId"))
            if pizza is None:
                log.warning(f"restore: {side} half pizza {record.get('basePizzaName')!r} not on the menu")
                pizza = clicked_pizza
            defaults = _names(record.get("defaultToppings"))
            if defaults is None:
                defaults = pizza.default_toppings
            ledger = restore_ledger(catalog, record.get("toppingModifications") or [], defaults)
            composer.halves[side] = composer._new_half(
                pizza, side, ledger=ledger, default_toppings=defaults,
                inherited=_names(record.get("inheritedToppings")) or [],
            )
        return composer


def _lookup_pizza(catalog: MenuCatalog, key: Any) -> Optional[BasePizza]:
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        return None
    return catalog.get_base_pizza(key)


def _names(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [v for v in value if isinstance(v, str)]
