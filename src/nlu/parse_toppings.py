from __future__ import annotations
import re
from typing import Iterable, List

# fragments are separated by commas or the word "and"
SPLIT_RE = re.compile(r",|\sand\s", flags=re.IGNORECASE)

def normalize_spaces(s: str) -> str:
    return re.sub(r"\s+", " ", s.strip())

def _match(part: str, names: List[str]) -> str | None:
    p = part.lower()
    for name in names:
        if name.lower() == p:
            return name
    # longest name wins, so "Red Onions" is not read as "Onions"
    for name in sorted(names, key=len, reverse=True):
        n = name.lower()
        if n in p or p in n:
            return name
    return None

def parse_toppings_from_description(
    description: str,
    known_toppings: Iterable[str],
    base_ingredients: Iterable[str] = (),
) -> List[str]:
    """Pull default ingredients out of a menu description.

    "Pizza sauce, Ham, Pineapple and Mozzarella Cheese" gives
    ["Pizza sauce", "Ham", "Pineapple", "Mozzarella Cheese"] when all four are
    known. Toppings are tried before base ingredients (sauces, mozzarella).
    """
    if not description:
        return []
    known = list(known_toppings)
    base = list(base_ingredients)

    items: List[str] = []
    for raw in SPLIT_RE.split(description):
        part = normalize_spaces(raw)
        if not part:
            continue
        hit = _match(part, known) or _match(part, base)
        if hit and hit not in items:
            items.append(hit)
    return items
