from __future__ import annotations
import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from src.core.menu.catalog import MenuCatalog
from src.core.menu.models import BasePizza, CATEGORIES
from src.core.pizza.customizer import PizzaCustomizer
from src.core.pizza.half_and_half import HalfAndHalfComposer, MORE_EXPENSIVE_HALF
from src.core.pizza.models import CookingPreferences
from src.core.pizza.rules import can_split, max_replacements
from src.infra.logs import save_record
from src.infra.menu import get_catalog
from src.infra.settings import settings

log = logging.getLogger("pizza.api")

router = APIRouter(prefix="/pizza", tags=["pizza"])


class OperationIn(BaseModel):
    action: Literal["add", "remove"]
    topping: str


class PriceIn(BaseModel):
    pizza: str
    size: str
    operations: List[OperationIn] = Field(default_factory=list)
    cookingPreferences: Optional[Dict[str, bool]] = None
    save: bool = False


class HalfIn(BaseModel):
    pizza: Optional[str] = None  # menu pizza chosen for this half
    operations: List[OperationIn] = Field(default_factory=list)


class HalfAndHalfIn(BaseModel):
    clickedPizza: str
    size: str
    left: HalfIn = Field(default_factory=HalfIn)
    right: HalfIn = Field(default_factory=HalfIn)
    pricing: Literal["more_expensive_half", "blended"] = MORE_EXPENSIVE_HALF
    cookingPreferences: Optional[Dict[str, bool]] = None
    save: bool = False


class RestoreIn(BaseModel):
    pizza: str
    size: str
    payload: Dict[str, Any]


def _rule():
    return max_replacements(settings.MAX_REPLACEMENTS) if settings.MAX_REPLACEMENTS > 0 else None


def _pizza_or_404(catalog: MenuCatalog, name: str, size: str) -> BasePizza:
    pizza = catalog.get_base_pizza(name)
    if pizza is None:
        raise HTTPException(status_code=404, detail=f"unknown pizza: {name}")
    if pizza.price_for(size) is None:
        raise HTTPException(status_code=400, detail=f"{pizza.name} is not offered in size {size}")
    return pizza


def _apply(session: PizzaCustomizer, ops: List[OperationIn], rejections: List[str]) -> None:
    # edits carry the session's own half (whole, or the half being edited)
    for op in ops:
        if op.action == "add":
            outcome = session.add_topping(op.topping)
        else:
            outcome = session.remove_topping(op.topping)
        if not outcome.ok:
            rejections.append(outcome.reason or "rejected")


def _view(session: PizzaCustomizer) -> Dict[str, Any]:
    priced = session.priced()
    return {
        "pizza": session.pizza.name,
        "basePrice": session.base_price,
        "resolvedToppings": priced.resolved_toppings,
        "surcharge": priced.surcharge,
        "totalPrice": priced.total_price,
        "lines": session.describe(),
    }


@router.get("/toppings")
def list_toppings(exclude: Optional[str] = None):
    catalog = get_catalog()
    skip = [x.strip() for x in (exclude or "").split(",") if x.strip()]
    return {
        cat: [{"id": t.id, "name": t.name,
               "prices": {"small": t.small_price, "medium": t.medium_price, "large": t.large_price}}
              for t in catalog.toppings_by_category(cat, exclude=skip)]
        for cat in CATEGORIES
    }


@router.post("/price")
def price_pizza(payload: PriceIn):
    catalog = get_catalog()
    pizza = _pizza_or_404(catalog, payload.pizza, payload.size)
    session = PizzaCustomizer(catalog, pizza, payload.size, replacement_rule=_rule(),
                               cooking=CookingPreferences.from_dict(payload.cookingPreferences))
    rejections: List[str] = []
    _apply(session, payload.operations, rejections)
    out = _view(session)
    out["payload"] = session.to_payload()
    out["rejections"] = rejections
    if payload.save:
        save_record(pizza.name, payload.size, out["payload"])
    log.info(f"priced {pizza.name} {payload.size}: ${out['totalPrice']:.2f}")
    return out


@router.post("/half-and-half/price")
def price_half_and_half(payload: HalfAndHalfIn):
    catalog = get_catalog()
    clicked = _pizza_or_404(catalog, payload.clickedPizza, payload.size)
    if not can_split(payload.size, clicked.gluten_free):
        raise HTTPException(status_code=400, detail="half-and-half is only available on 12\" and 14\" pizzas")

    composer = HalfAndHalfComposer(catalog, clicked, payload.size,
                                   pricing=payload.pricing, replacement_rule=_rule(),
                                   cooking=CookingPreferences.from_dict(payload.cookingPreferences))
    rejections: List[str] = []
    for side, half in (("left", payload.left), ("right", payload.right)):
        if half.pizza:
            if catalog.get_base_pizza(half.pizza) is None:
                raise HTTPException(status_code=404, detail=f"unknown pizza: {half.pizza}")
            composer.choose_pizza(side, half.pizza)
        _apply(composer.half(side), half.operations, rejections)

    body = composer.to_payload()
    priced = composer.priced()
    if payload.save:
        save_record(clicked.name, payload.size, body)
    return {
        "left": _view(composer.left),
        "right": _view(composer.right),
        "effectiveBasePrice": composer.effective_base_price(),
        "surcharge": priced.surcharge,
        "totalPrice": priced.total_price,
        "payload": body,
        "rejections": rejections,
    }


@router.post("/payload/restore")
def restore_payload(payload: RestoreIn):
    catalog = get_catalog()
    pizza = _pizza_or_404(catalog, payload.pizza, payload.size)
    if payload.payload.get("isHalfAndHalf"):
        composer = HalfAndHalfComposer.from_payload(catalog, pizza, payload.size, payload.payload)
        return {
            "isHalfAndHalf": True,
            "left": _view(composer.left),
            "right": _view(composer.right),
            "totalPrice": composer.total_price(),
        }
    session = PizzaCustomizer.from_payload(catalog, pizza, payload.size, payload.payload)
    out = _view(session)
    out["isHalfAndHalf"] = False
    return out
