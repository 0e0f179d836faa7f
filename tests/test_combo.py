import pytest

from src.core.pizza.combo import ComboItem, ComboResolver, WingSelection


@pytest.fixture
def resolver(catalog):
    return ComboResolver(catalog.combo_table())


def test_tie_charges_the_first_pizza(resolver):
    p1 = ComboItem("Vegetarian", "12", 18.99)
    p2 = ComboItem("Hawaiian", "12", 19.99)
    result = resolver.two_pizzas(p1, p2)
    assert result.ok
    first, second = result.legs
    assert (first.price, first.is_free) == (pytest.approx(28.99), False)
    assert (second.price, second.is_free) == (0.0, True)
    assert second.note.endswith("[Classic Combo - FREE]")
    assert first.note == "[Classic Combo - Charged]"


def test_cheaper_first_pizza_is_free(resolver):
    p1 = ComboItem("Vegetarian", "medium", 18.99, topping_surcharge=2.0, notes="no onions")
    p2 = ComboItem("Meat Lovers", "medium", 22.99)
    first, second = resolver.two_pizzas(p1, p2).legs
    assert first.price == 0.0 and first.is_free
    assert first.note == "no onions [Classic Combo - FREE]"
    assert second.price == pytest.approx(32.99)
    assert not second.is_free


def test_surcharge_is_carried_onto_combo_price(resolver):
    item = ComboItem("Cheese", "Large (14\")", 20.99, topping_surcharge=5.0)
    assert resolver.combo_price(item) == pytest.approx(35.99)


def test_missing_table_entry_falls_back_to_menu_price(resolver):
    item = ComboItem("Two Topper", "12", 17.99, topping_surcharge=2.0)
    assert resolver.combo_price(item) == pytest.approx(19.99)


def test_sizes_must_match(resolver):
    result = resolver.two_pizzas(ComboItem("Cheese", "10", 12.99), ComboItem("Cheese", "14", 20.99))
    assert not result.ok
    assert result.legs == []


def test_pizza_and_wings(resolver):
    pizza = ComboItem("Meat Lovers", "12", 22.99, topping_surcharge=2.0)
    wings = WingSelection("Bone-In Wings", "Hot", wing_id=1)
    result = resolver.pizza_and_wings(pizza, wings)
    p, w = result.legs
    assert p.price == pytest.approx(34.99) and not p.is_free
    assert p.note == "[Classic Combo - Pizza (Charged)]"
    assert w.price == 0.0 and w.is_free
    assert w.note == "Flavor: Hot [Classic Combo - Wings (FREE)]"
    assert w.to_dict()["size"] == "12pc"
    assert w.to_dict()["itemId"] == 1
    assert wings.count == 0  # the selection itself is left alone
    assert result.total == pytest.approx(34.99)


def test_wings_are_free_whatever_the_count(resolver):
    pizza = ComboItem("Cheese", "14", 20.99)
    _, w = resolver.pizza_and_wings(pizza, WingSelection("Bone-In Wings", "Mild", count=30)).legs
    assert w.price == 0.0
    assert w.size == "30pc"


@pytest.mark.parametrize("size,pieces", [("10", "8pc"), ("12", "12pc"), ("Large (14\")", "14pc")])
def test_wing_count_follows_pizza_size(resolver, size, pieces):
    _, w = resolver.pizza_and_wings(ComboItem("Cheese", size, 16.99), WingSelection("Bone-In Wings", "Hot")).legs
    assert w.size == pieces


def test_two_free_priced_pizzas_still_charge_one():
    resolver = ComboResolver({"Cheese": {"12": 0.0}})
    first, second = resolver.two_pizzas(ComboItem("Cheese", "12", 0.0), ComboItem("Cheese", "12", 0.0)).legs
    assert (first.is_free, second.is_free) == (False, True)
    assert first.note == "[Classic Combo - Charged]"
    assert second.note == "[Classic Combo - FREE]"


def test_from_total_derives_surcharge():
    item = ComboItem.from_total("Vegetarian", "12", 18.99, 22.99)
    assert item.topping_surcharge == pytest.approx(4.0)


def test_leg_to_dict():
    pizza = ComboItem("Cheese", "12", 16.99)
    leg = ComboResolver({"Cheese": {"12": 25.99}}).pizza_and_wings(pizza, WingSelection("W", "Hot")).legs[0]
    assert leg.to_dict() == {"price": 25.99, "isFree": False, "note": "[Classic Combo - Pizza (Charged)]"}
