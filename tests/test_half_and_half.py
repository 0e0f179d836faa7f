import pytest

from src.core.pizza.half_and_half import HalfAndHalfComposer

SIZE = "Medium (12\")"


@pytest.fixture
def composer(catalog, pizza):
    def _open(clicked="Vegetarian", **kwargs):
        return HalfAndHalfComposer(catalog, pizza(clicked), SIZE, **kwargs)
    return _open


def test_charges_only_the_more_expensive_half(composer):
    c = composer()
    c.add_topping("left", "Extra Cheese")
    assert c.choose_pizza("right", "Meat Lovers")
    assert c.half_total("left") == pytest.approx(20.99)
    assert c.half_total("right") == pytest.approx(22.99)
    assert c.total_price() == pytest.approx(22.99)


def test_blended_pricing_adds_both_surcharges_to_highest_base(composer):
    c = composer(pricing="blended")
    c.add_topping("left", "Extra Cheese")
    c.choose_pizza("right", "Meat Lovers")
    c.add_topping("right", "Mushrooms")
    assert c.effective_base_price() == pytest.approx(22.99)
    assert c.total_price() == pytest.approx(22.99 + 2.0 + 2.0)


def test_chosen_pizza_toppings_are_inherited_not_charged(composer):
    c = composer()
    c.choose_pizza("right", "Meat Lovers")
    right = c.right
    assert right.current_toppings() == ["Pepperoni", "Ham", "Bacon"]
    assert [m.charge for m in right.ledger] == [0.0, 0.0, 0.0]
    assert right.surcharge() == 0.0
    assert right.describe() == []


def test_manual_add_on_chosen_half_is_charged(composer):
    c = composer()
    c.choose_pizza("right", "Meat Lovers")
    c.add_topping("right", "Mushrooms")
    assert c.right.surcharge() == pytest.approx(2.0)
    assert c.total_price() == pytest.approx(24.99)


def test_removing_an_inherited_topping_drops_it(composer):
    c = composer()
    c.choose_pizza("right", "Meat Lovers")
    c.remove_topping("right", "Ham")
    assert c.right.current_toppings() == ["Pepperoni", "Bacon"]
    assert "Ham" not in c.right.inherited


def test_price_never_drops_below_the_clicked_pizza(composer):
    c = composer("Meat Lovers")
    c.choose_pizza("left", "Cheese")
    c.choose_pizza("right", "Cheese")
    assert c.total_price() == pytest.approx(22.99)


def test_halves_keep_independent_free_replacements(composer):
    c = composer()
    for side in ("left", "right"):
        c.remove_topping(side, "Mushrooms")
        c.add_topping(side, "Spinach")
    assert c.left.ledger.free_replacements() == 1
    assert c.right.ledger.free_replacements() == 1
    assert all(m.half == "left" for m in c.left.ledger)
    assert all(m.half == "right" for m in c.right.ledger)


def test_specialty_half_uses_its_own_allowance(composer):
    c = composer()
    c.choose_pizza("left", "Two Topper")
    c.add_topping("left", "Ham")
    c.add_topping("left", "Bacon")
    c.add_topping("left", "Pepperoni")
    assert [m.charge for m in c.left.ledger] == [0.0, 0.0, 2.0]


def test_unknown_pizza_for_half_is_a_noop(composer):
    c = composer()
    before = c.right
    assert c.choose_pizza("right", "Calzone") is False
    assert c.right is before


def test_unknown_pricing_mode_is_rejected(composer):
    with pytest.raises(ValueError):
        composer(pricing="sum")


def test_payload_restores_both_halves(composer, catalog, pizza):
    c = composer()
    c.add_topping("left", "Bacon")
    c.choose_pizza("right", "Meat Lovers")
    c.add_topping("right", "Mushrooms")
    c.toggle_cooking("well_done")
    payload = c.to_payload()
    assert payload["isHalfAndHalf"] is True
    assert payload["rightHalf"]["inheritedToppings"] == ["Pepperoni", "Ham", "Bacon"]

    restored = HalfAndHalfComposer.from_payload(catalog, pizza("Vegetarian"), SIZE, payload)
    assert restored.current_toppings() == c.current_toppings()
    assert restored.total_price() == pytest.approx(c.total_price())
    assert restored.right.surcharge() == pytest.approx(2.0)
    assert restored.cooking.well_done is True


def test_priced_surcharge_matches_the_charged_half(composer):
    c = composer()
    c.add_topping("left", "Extra Cheese")
    c.choose_pizza("right", "Meat Lovers")
    c.add_topping("right", "Mushrooms")
    priced = c.priced()
    assert priced.total_price == pytest.approx(24.99)
    assert priced.surcharge == pytest.approx(2.0)
    assert priced.total_price == pytest.approx(c.effective_base_price() + priced.surcharge)


def test_blended_priced_surcharge_is_both_halves(composer):
    c = composer(pricing="blended")
    c.add_topping("left", "Extra Cheese")
    c.add_topping("right", "Bacon")
    assert c.priced().surcharge == pytest.approx(4.0)


def test_restore_with_unknown_pricing_falls_back(catalog, pizza):
    restored = HalfAndHalfComposer.from_payload(
        catalog, pizza("Vegetarian"), SIZE, {"isHalfAndHalf": True, "pricing": "sum"})
    assert restored.pricing == "more_expensive_half"
    assert restored.total_price() == pytest.approx(18.99)


def test_restore_skips_malformed_half_records(catalog, pizza):
    payload = {"isHalfAndHalf": True, "leftHalf": ["junk"], "rightHalf": "junk",
               "cookingPreferences": ["wellDone"]}
    restored = HalfAndHalfComposer.from_payload(catalog, pizza("Vegetarian"), SIZE, payload)
    assert restored.left.pizza.name == "Vegetarian"
    assert restored.right.ledger.to_list() == []
    assert restored.cooking.well_done is False


def test_restore_recovers_a_half_partially(catalog, pizza):
    payload = {"isHalfAndHalf": True, "leftHalf": {
        "basePizzaName": "Calzone",
        "toppingModifications": [
            {"type": "add", "toppingName": "Truffles", "price": 4.0, "half": "left"},
            {"type": "add", "toppingName": "Bacon", "price": 2.0, "half": "left"},
        ],
    }}
    restored = HalfAndHalfComposer.from_payload(catalog, pizza("Vegetarian"), SIZE, payload)
    left = restored.left
    assert left.pizza.name == "Vegetarian"
    assert [m.topping for m in left.ledger] == ["Bacon"]
    assert left.current_toppings()[-1] == "Bacon"
    assert left.surcharge() == pytest.approx(2.0)
