from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

SIZES = ("small", "medium", "large")
CATEGORIES = ("vegetable", "meat", "cheese")

# wing pieces that come with each pizza size in a combo
WING_COUNT_BY_SIZE = {"small": 8, "medium": 12, "large": 14}


def normalize_size(size: str) -> str:
    """Map 'Medium (12\")', '12', 'medium' etc. to small|medium|large (default medium)."""
    s = (size or "").lower()
    if "10" in s or "small" in s or "9" in s:
        return "small"
    if "12" in s or "medium" in s or "11" in s:
        return "medium"
    if "14" in s or "large" in s:
        return "large"
    return "medium"


@dataclass(frozen=True)
class Topping:
    id: int
    name: str
    category: str  # "vegetable" | "meat" | "cheese"
    small_price: float = 0.0
    medium_price: float = 0.0
    large_price: float = 0.0

    def price_for(self, size: str) -> float:
        key = normalize_size(size)
        return {"small": self.small_price,
                "medium": self.medium_price,
                "large": self.large_price}[key]


@dataclass
class BasePizza:
    id: int
    name: str
    prices: Dict[str, float] = field(default_factory=dict)
    default_toppings: List[str] = field(default_factory=list)
    description: str = ""
    gluten_free: bool = False

    @property
    def specialty_free_limit(self) -> int:
        n = self.name.lower()
        if "two topper" in n:
            return 2
        if "three topper" in n:
            return 3
        return 0

    def price_for(self, size: str) -> Optional[float]:
        return self.prices.get(normalize_size(size))


@dataclass
class WingOption:
    id: int
    name: str
    type: str = "bone-in"
    flavors: List[str] = field(default_factory=list)


@dataclass
class Menu:
    meta: Dict[str, Any]
    toppings: List[Topping]
    pizzas: List[BasePizza]
    wings: List[WingOption] = field(default_factory=list)
    # pizza name -> size -> combo price
    combo_prices: Dict[str, Dict[str, float]] = field(default_factory=dict)
    base_ingredients: List[str] = field(default_factory=list)
