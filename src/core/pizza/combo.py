from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.core.menu.models import WING_COUNT_BY_SIZE, normalize_size

log = logging.getLogger("pizza.combo")

TWO_PIZZAS = "2-pizzas"
PIZZA_WINGS = "pizza-wings"

CHARGED_NOTE = "[Classic Combo - Charged]"
FREE_NOTE = "[Classic Combo - FREE]"
PIZZA_NOTE = "[Classic Combo - Pizza (Charged)]"
WINGS_NOTE = "[Classic Combo - Wings (FREE)]"


@dataclass
class ComboItem:
    pizza_name: str
    size: str
    regular_base_price: float
    topping_surcharge: float = 0.0
    notes: str = ""

    @classmethod
    def from_total(cls, pizza_name: str, size: str, regular_base_price: float,
                   total_price: float, notes: str = "") -> "ComboItem":
        """Surcharge is whatever the customizer added on top of the menu price."""
        return cls(pizza_name, size, regular_base_price,
                   round(total_price - regular_base_price, 2), notes)


@dataclass
class WingSelection:
    name: str
    flavor: str
    count: int = 0
    wing_id: Optional[int] = None


@dataclass
class ComboLeg:
    price: float
    is_free: bool
    note: str
    size: Optional[str] = None  # wings only, e.g. "12pc"
    item_id: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {"price": self.price, "isFree": self.is_free, "note": self.note}
        if self.size:
            out["size"] = self.size
        if self.item_id is not None:
            out["itemId"] = self.item_id
        return out


@dataclass
class ComboResult:
    ok: bool
    legs: List[ComboLeg] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def total(self) -> float:
        return round(sum(leg.price for leg in self.legs), 2)


def _with_note(notes: str, tag: str) -> str:
    return f"{notes} {tag}".strip()


class ComboResolver:
    """Classic Combo pricing over a fixed [pizza][size] table.

    Two pizzas: the dearer combo price is charged, the other pizza is free;
    on a tie the first pizza pays. Pizza + wings: pizza pays, wings are free.
    """

    def __init__(self, table: Dict[str, Dict[str, float]]):
        self.table = {name.strip().lower(): {normalize_size(str(s)): float(p) for s, p in by_size.items()}
                      for name, by_size in (table or {}).items()}

    def combo_base(self, item: ComboItem) -> float:
        by_size = self.table.get(item.pizza_name.strip().lower(), {})
        price = by_size.get(normalize_size(item.size))
        if price is None:
            log.warning(f"no combo price for {item.pizza_name} {item.size}, using menu price")
            return item.regular_base_price
        return price

    def combo_price(self, item: ComboItem) -> float:
        return round(self.combo_base(item) + item.topping_surcharge, 2)

    def two_pizzas(self, p1: ComboItem, p2: ComboItem) -> ComboResult:
        if normalize_size(p1.size) != normalize_size(p2.size):
            return ComboResult(False, reason="Both combo pizzas must be the same size.")
        c1, c2 = self.combo_price(p1), self.combo_price(p2)
        charged = max(c1, c2)
        # a tie charges the first pizza
        first_pays = c1 >= c2
        legs = [
            ComboLeg(charged if first_pays else 0.0, not first_pays,
                     _with_note(p1.notes, CHARGED_NOTE if first_pays else FREE_NOTE)),
            ComboLeg(0.0 if first_pays else charged, first_pays,
                     _with_note(p2.notes, FREE_NOTE if first_pays else CHARGED_NOTE)),
        ]
        log.info(f"combo {p1.pizza_name} ${c1:.2f} / {p2.pizza_name} ${c2:.2f} -> charged ${charged:.2f}")
        return ComboResult(True, legs)

    def pizza_and_wings(self, pizza: ComboItem, wings: WingSelection) -> ComboResult:
        count = wings.count or WING_COUNT_BY_SIZE[normalize_size(pizza.size)]
        legs = [
            ComboLeg(self.combo_price(pizza), False, _with_note(pizza.notes, PIZZA_NOTE)),
            ComboLeg(0.0, True, f"Flavor: {wings.flavor} {WINGS_NOTE}",
                     size=f"{count}pc", item_id=wings.wing_id),
        ]
        return ComboResult(True, legs)
