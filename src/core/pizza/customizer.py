from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from src.core.menu.catalog import MenuCatalog
from src.core.menu.models import BasePizza, Topping
from .ledger import (
    ADD, HALVES, REMOVE, REPLACE, TYPES, WHOLE,
    Modification, ModificationLedger, same_name,
)
from .models import CookingPreferences, Outcome, PricedItem
from .rules import ReplacementRule, addon_price, is_free_swap, is_upgrade_swap

log = logging.getLogger("pizza.pricing")


def restore_ledger(catalog: MenuCatalog, rows: Iterable[Dict[str, Any]],
                   defaults: Iterable[str] = ()) -> ModificationLedger:
    """Rebuild a saved ledger as-is, charges included.

    Rows naming toppings that left the catalog are dropped; everything else
    comes back untouched (no allowance or free-swap logic is re-run).
    """
    defaults = list(defaults)
    ledger = ModificationLedger()
    for row in rows or []:
        try:
            mod = Modification.from_dict(row)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            log.warning(f"restore: malformed modification {row!r} skipped ({e})")
            continue
        if mod.type not in TYPES:
            log.warning(f"restore: unknown modification type '{mod.type}' skipped")
            continue
        if mod.half not in HALVES:
            log.warning(f"restore: unknown half '{mod.half}' skipped")
            continue
        known = catalog.get_topping(mod.topping) is not None
        if mod.type == REMOVE:
            known = known or any(same_name(mod.topping, d) for d in defaults)
        elif mod.type == REPLACE:
            known = known and bool(mod.replaced_topping)
        if not known:
            log.warning(f"restore: '{mod.topping}' no longer on the menu, skipped")
            continue
        ledger.append(mod)
    return ledger


class PizzaCustomizer:
    """One open customization session for a single pizza (or one half).

    Every edit goes through the ledger; the topping list and surcharge are
    re-derived from it on each read.
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        pizza: BasePizza,
        size: str,
        half: str = WHOLE,
        replacement_rule: Optional[ReplacementRule] = None,
        ledger: Optional[ModificationLedger] = None,
        cooking: Optional[CookingPreferences] = None,
        default_toppings: Optional[Iterable[str]] = None,
        inherited: Iterable[str] = (),
    ):
        self.catalog = catalog
        self.pizza = pizza
        self.size = size
        self.half = half
        self.rule = replacement_rule
        self.ledger = ledger if ledger is not None else ModificationLedger()
        self.cooking = cooking or CookingPreferences()
        if default_toppings is None:
            default_toppings = pizza.default_toppings
        self.default_toppings: List[str] = list(default_toppings)
        # toppings that came with a menu pizza picked for this half
        self.inherited: List[str] = list(inherited)

    # ---------- derived state ----------

    @property
    def free_limit(self) -> int:
        return self.pizza.specialty_free_limit

    @property
    def base_price(self) -> float:
        return self.pizza.price_for(self.size) or 0.0

    def is_inherited(self, mod: Modification) -> bool:
        return mod.type == ADD and any(same_name(mod.topping, n) for n in self.inherited)

    def current_toppings(self) -> List[str]:
        return self.ledger.resolve(self.default_toppings)

    def has_topping(self, name: str) -> bool:
        return any(same_name(t, name) for t in self.current_toppings())

    def surcharge(self) -> float:
        return self.ledger.surcharge(exclude=self.is_inherited)

    def total_price(self) -> float:
        return round(self.base_price + self.surcharge(), 2)

    def priced(self) -> PricedItem:
        return PricedItem(self.current_toppings(), self.surcharge(), self.total_price())

    def available_toppings(self, category: str) -> List[Topping]:
        return self.catalog.toppings_by_category(category, exclude=self.current_toppings())

    def manual_adds(self) -> List[Modification]:
        return [m for m in self.ledger if m.type == ADD and not self.is_inherited(m)]

    # ---------- edits ----------

    def add_topping(self, name: str, half: Optional[str] = None) -> Outcome:
        topping = self.catalog.get_topping(name)
        if topping is None:
            log.warning(f"add_topping: unknown topping '{name}' ignored")
            return self._unchanged()
        if self.has_topping(topping.name):
            return self._unchanged()
        half = half or self.half
        price = addon_price(topping, self.size)

        if self.free_limit and len(self.manual_adds()) < self.free_limit:
            self.ledger.append(Modification(ADD, topping.name, 0.0, half, topping_id=topping.id))
            return self._changed()

        removes = self.ledger.unconsumed_removes()
        idx = self._pick_remove(removes, topping, free=True)
        if idx is not None:
            charge = price if self.ledger.free_replacements() else 0.0
        else:
            idx = self._pick_remove(removes, topping, free=False)
            charge = price

        if idx is None:
            self.ledger.append(Modification(ADD, topping.name, price, half, topping_id=topping.id))
            return self._changed()

        removed = self.ledger[idx].topping
        if self.rule is not None:
            rejection = self.rule(removed, topping, len(self.ledger.of_type(REPLACE)))
            if rejection is not None:
                log.info(f"replace {removed} -> {topping.name} rejected: {rejection.reason}")
                return Outcome(False, self.surcharge(), rejection.reason)
        self.ledger.swap_at(idx, Modification(
            REPLACE, topping.name, charge, half,
            replaced_topping=removed, topping_id=topping.id,
        ))
        return self._changed()

    def remove_topping(self, name: str, half: Optional[str] = None) -> Outcome:
        half = half or self.half
        i = self.ledger.index_of(lambda m: m.type == ADD and same_name(m.topping, name))
        if i >= 0:
            dropped = self.ledger.delete_at(i)
            self.inherited = [n for n in self.inherited if not same_name(n, dropped.topping)]
            return self._changed()

        i = self.ledger.index_of(lambda m: m.type == REPLACE and same_name(m.topping, name))
        if i >= 0:
            rep = self.ledger[i]
            original = self.catalog.get_topping(rep.replaced_topping)
            self.ledger.swap_at(i, Modification(
                REMOVE, rep.replaced_topping, 0.0, rep.half,
                topping_id=original.id if original else None,
            ))
            return self._changed()

        match = next((t for t in self.current_toppings() if same_name(t, name)), None)
        if match is None:
            log.warning(f"remove_topping: '{name}' is not on the pizza, ignored")
            return self._unchanged()
        known = self.catalog.get_topping(match)
        self.ledger.append(Modification(REMOVE, match, 0.0, half,
                                        topping_id=known.id if known else None))
        return self._changed()

    def recalc_specialty_charges(self) -> None:
        """First N manual adds are free, the rest pay the add-on price."""
        limit = self.free_limit
        if not limit:
            return
        n = 0
        for i, mod in enumerate(self.ledger):
            if mod.type != ADD or self.is_inherited(mod):
                continue
            if n < limit:
                charge = 0.0
            else:
                topping = self.catalog.get_topping(mod.topping)
                charge = addon_price(topping, self.size) if topping else mod.charge
            n += 1
            if mod.charge != charge:
                self.ledger.swap_at(i, mod.with_charge(charge))

    def toggle_cooking(self, pref: str) -> CookingPreferences:
        self.cooking.toggle(pref)
        return self.cooking

    # ---------- helpers ----------

    def _category_of_removed(self, name: str, added: Topping) -> Optional[str]:
        t = self.catalog.get_topping(name)
        if t is not None:
            return t.category
        # default toppings missing from the topping table only swap for vegetables
        if (any(same_name(name, d) for d in self.default_toppings)
                and not self.catalog.is_base_ingredient(name)
                and added.category == "vegetable"):
            return "vegetable"
        return None

    def _pick_remove(self, indexes: List[int], topping: Topping, free: bool) -> Optional[int]:
        for i in indexes:
            removed = self.ledger[i].topping
            if free:
                if is_free_swap(self._category_of_removed(removed, topping), topping.category):
                    return i
            else:
                known = self.catalog.get_topping(removed)
                if known and is_upgrade_swap(known.category, topping.category):
                    return i
        return None

    def _changed(self) -> Outcome:
        self.recalc_specialty_charges()
        return Outcome(True, self.surcharge(), changed=True)

    def _unchanged(self) -> Outcome:
        return Outcome(True, self.surcharge())

    # ---------- commit / restore ----------

    def describe(self) -> List[str]:
        """Cart and kitchen lines, e.g. '+ Bacon', 'Onions -> Spinach (left half)'."""
        lines = []
        for mod in self.ledger:
            if self.is_inherited(mod):
                continue
            if mod.type == ADD:
                text = f"+ {mod.topping}"
            elif mod.type == REMOVE:
                text = f"- {mod.topping}"
            else:
                text = f"{mod.replaced_topping} -> {mod.topping}"
            if mod.half != WHOLE:
                text += f" ({mod.half} half)"
            if mod.charge:
                text += f" (+${mod.charge:.2f})"
            lines.append(text)
        return lines

    def to_payload(self) -> Dict[str, Any]:
        return {
            "toppingModifications": self.ledger.to_list(),
            "cookingPreferences": self.cooking.to_dict(),
            "isHalfAndHalf": False,
            "calculatedPrice": self.total_price(),
        }

    @classmethod
    def from_payload(cls, catalog: MenuCatalog, pizza: BasePizza, size: str,
                     payload: Dict[str, Any], **kwargs: Any) -> "PizzaCustomizer":
        """Edit-existing-cart-item mode: restore, do not replay."""
        payload = payload if isinstance(payload, dict) else {}
        defaults = kwargs.pop("default_toppings", None)
        if defaults is None:
            defaults = pizza.default_toppings
        ledger = restore_ledger(catalog, payload.get("toppingModifications") or [], defaults)
        return cls(
            catalog, pizza, size,
            ledger=ledger,
            cooking=CookingPreferences.from_dict(payload.get("cookingPreferences")),
            default_toppings=defaults,
            **kwargs,
        )
