from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# pref -> the pref it switches off
_EXCLUSIVE = {
    "extra_sauce": "easy_sauce",
    "easy_sauce": "extra_sauce",
    "well_done": "extra_well_done",
    "extra_well_done": "well_done",
}

_CAMEL = {
    "extra_sauce": "extraSauce",
    "easy_sauce": "easySauce",
    "well_done": "wellDone",
    "extra_well_done": "extraWellDone",
}


@dataclass
class CookingPreferences:
    extra_sauce: bool = False
    easy_sauce: bool = False
    well_done: bool = False
    extra_well_done: bool = False

    def toggle(self, pref: str) -> None:
        if pref not in _EXCLUSIVE:
            raise KeyError(f"unknown cooking preference: {pref}")
        on = not getattr(self, pref)
        setattr(self, pref, on)
        if on:
            setattr(self, _EXCLUSIVE[pref], False)

    def to_dict(self) -> Dict[str, bool]:
        return {camel: getattr(self, snake) for snake, camel in _CAMEL.items()}

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "CookingPreferences":
        d = d if isinstance(d, dict) else {}
        return cls(**{snake: bool(d.get(camel, False)) for snake, camel in _CAMEL.items()})


@dataclass
class PricedItem:
    resolved_toppings: List[str]
    surcharge: float
    total_price: float


@dataclass
class Outcome:
    """Result of one edit.

    ok=False is a rejection with a reason to show the customer. Unknown
    toppings are quiet no-ops: ok stays True and changed is False.
    """
    ok: bool
    surcharge: float
    reason: Optional[str] = None
    changed: bool = field(default=False)
