from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

ADD = "add"
REMOVE = "remove"
REPLACE = "replace"
TYPES = (ADD, REMOVE, REPLACE)

WHOLE = "whole"
HALVES = (WHOLE, "left", "right")


def same_name(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").strip().lower() == (b or "").strip().lower()


@dataclass(frozen=True)
class Modification:
    """One ledger entry. `replaced_topping` is only set for replace."""
    type: str
    topping: str
    charge: float = 0.0
    half: str = WHOLE
    replaced_topping: Optional[str] = None
    topping_id: Optional[int] = None

    def with_charge(self, charge: float) -> "Modification":
        return replace(self, charge=round(charge, 2))

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.type,
            "toppingName": self.topping,
            "price": self.charge,
            "half": self.half,
        }
        if self.topping_id is not None:
            d["toppingId"] = self.topping_id
        if self.replaced_topping is not None:
            d["replacedToppingName"] = self.replaced_topping
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Modification":
        if not isinstance(d.get("toppingName"), str):
            raise TypeError(f"toppingName must be a string, got {d.get('toppingName')!r}")
        return cls(
            type=d["type"],
            topping=d["toppingName"],
            charge=round(float(d.get("price") or 0.0), 2),
            half=d.get("half") or WHOLE,
            replaced_topping=d.get("replacedToppingName"),
            topping_id=d.get("toppingId"),
        )


Predicate = Callable[[Modification], bool]


class ModificationLedger:
    """Ordered edit log for one pizza (or one half).

    Entries are never edited in place; a changed entry is swapped for a new
    Modification at the same position.
    """

    def __init__(self, entries: Iterable[Modification] = ()):
        self._entries: List[Modification] = list(entries)

    def __iter__(self) -> Iterator[Modification]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, i: int) -> Modification:
        return self._entries[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModificationLedger):
            return NotImplemented
        return self._entries == other._entries

    @property
    def entries(self) -> List[Modification]:
        return list(self._entries)

    def copy(self) -> "ModificationLedger":
        return ModificationLedger(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    # ---------- mutation ----------

    def append(self, mod: Modification) -> None:
        self._entries.append(mod)

    def index_of(self, pred: Predicate) -> int:
        for i, m in enumerate(self._entries):
            if pred(m):
                return i
        return -1

    def delete_at(self, i: int) -> Modification:
        return self._entries.pop(i)

    def swap_at(self, i: int, mod: Modification) -> None:
        self._entries[i] = mod

    def delete_where(self, pred: Predicate) -> int:
        before = len(self._entries)
        self._entries = [m for m in self._entries if not pred(m)]
        return before - len(self._entries)

    # ---------- queries ----------

    def find(self, pred: Predicate) -> Optional[Modification]:
        i = self.index_of(pred)
        return self._entries[i] if i >= 0 else None

    def of_type(self, kind: str) -> List[Modification]:
        return [m for m in self._entries if m.type == kind]

    def free_replacements(self) -> int:
        return sum(1 for m in self._entries if m.type == REPLACE and m.charge == 0)

    def unconsumed_removes(self) -> List[int]:
        """Indexes of remove entries no replace has taken over yet."""
        replaced = [m.replaced_topping for m in self._entries if m.type == REPLACE]
        return [
            i for i, m in enumerate(self._entries)
            if m.type == REMOVE and not any(same_name(m.topping, r) for r in replaced)
        ]

    def resolve(self, defaults: Iterable[str]) -> List[str]:
        """Replay the log over the default toppings."""
        current = list(defaults)
        for mod in self._entries:
            if mod.type == REMOVE:
                current = [t for t in current if not same_name(t, mod.topping)]
            elif mod.type == ADD:
                if not any(same_name(t, mod.topping) for t in current):
                    current.append(mod.topping)
            elif mod.type == REPLACE and mod.replaced_topping:
                for i, t in enumerate(current):
                    if same_name(t, mod.replaced_topping):
                        current[i] = mod.topping
                        break
        return current

    def surcharge(self, scope: Optional[str] = None,
                  exclude: Optional[Predicate] = None) -> float:
        total = 0.0
        for mod in self._entries:
            if scope is not None and mod.half != scope:
                continue
            if exclude is not None and exclude(mod):
                continue
            total += mod.charge
        return round(total, 2)

    # ---------- serialisation ----------

    def to_list(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self._entries]

    @classmethod
    def from_list(cls, rows: Iterable[Dict[str, Any]]) -> "ModificationLedger":
        return cls(Modification.from_dict(r) for r in rows)
