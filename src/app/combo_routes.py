from __future__ import annotations
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from src.core.pizza.combo import PIZZA_WINGS, TWO_PIZZAS, ComboItem, ComboResolver, WingSelection
from src.infra.menu import get_catalog

router = APIRouter(prefix="/combo", tags=["combo"])


class ComboPizzaIn(BaseModel):
    pizza: str
    totalPrice: float = Field(ge=0)  # regular menu price + toppings, as customized
    notes: str = ""


class WingsIn(BaseModel):
    name: str
    flavor: str
    count: int = Field(default=0, ge=0)


class ComboIn(BaseModel):
    route: Literal[TWO_PIZZAS, PIZZA_WINGS]
    size: str
    pizza1: ComboPizzaIn
    pizza2: Optional[ComboPizzaIn] = None
    wings: Optional[WingsIn] = None


def _item(p: ComboPizzaIn, size: str) -> ComboItem:
    pizza = get_catalog().get_base_pizza(p.pizza)
    if pizza is None:
        raise HTTPException(status_code=404, detail=f"unknown pizza: {p.pizza}")
    base = pizza.price_for(size)
    if base is None:
        raise HTTPException(status_code=400, detail=f"{pizza.name} is not offered in size {size}")
    return ComboItem.from_total(pizza.name, size, base, p.totalPrice, p.notes)


@router.post("/price")
def price_combo(payload: ComboIn):
    catalog = get_catalog()
    resolver = ComboResolver(catalog.combo_table())
    p1 = _item(payload.pizza1, payload.size)

    if payload.route == TWO_PIZZAS:
        if payload.pizza2 is None:
            raise HTTPException(status_code=400, detail="missing: pizza2")
        result = resolver.two_pizzas(p1, _item(payload.pizza2, payload.size))
    else:
        if payload.wings is None:
            raise HTTPException(status_code=400, detail="missing: wings")
        option = catalog.get_wings(payload.wings.name)
        if option is None:
            raise HTTPException(status_code=404, detail=f"unknown wings: {payload.wings.name}")
        wings = WingSelection(option.name, payload.wings.flavor, payload.wings.count, option.id)
        result = resolver.pizza_and_wings(p1, wings)

    if not result.ok:
        raise HTTPException(status_code=400, detail=result.reason)
    legs: List[dict] = [leg.to_dict() for leg in result.legs]
    return {"route": payload.route, "legs": legs, "total": result.total}
