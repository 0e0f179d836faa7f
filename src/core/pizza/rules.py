from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional

from src.core.menu.models import Topping, normalize_size

PREMIUM = {"meat", "cheese"}


@dataclass(frozen=True)
class Rejection:
    reason: str


# (removed topping, added topping, replace entries already on the ledger)
ReplacementRule = Callable[[str, Topping, int], Optional[Rejection]]


def is_free_swap(removed_category: Optional[str], added_category: str) -> bool:
    """Same category, or a downgrade from meat/cheese to a vegetable."""
    if removed_category is None:
        return False
    if removed_category == added_category:
        return True
    return removed_category in PREMIUM and added_category == "vegetable"


def is_upgrade_swap(removed_category: Optional[str], added_category: str) -> bool:
    return removed_category == "vegetable" and added_category in PREMIUM


def addon_price(topping: Topping, size: str) -> float:
    return round(topping.price_for(size), 2)


def can_split(size: str, gluten_free: bool = False) -> bool:
    """Half-and-half only exists for 12" and 14" regular crust."""
    if gluten_free:
        return False
    s = (size or "").lower()
    if not any(k in s for k in ("12", "14", "medium", "large")):
        return False
    return normalize_size(size) in ("medium", "large")


def max_replacements(limit: int) -> ReplacementRule:
    """Reject a swap once `limit` replace entries exist on the pizza."""
    def rule(removed: str, added: Topping, existing: int) -> Optional[Rejection]:
        if existing >= limit:
            return Rejection(
                f"Only {limit} topping replacement(s) allowed per pizza. "
                f"Remove {removed} and add {added.name} separately instead."
            )
        return None
    return rule
