import pytest

from src.core.pizza.ledger import Modification, ModificationLedger


DEFAULTS = ["Pizza sauce", "Mushrooms", "Onions", "Mozzarella Cheese"]


def test_resolve_replays_in_order():
    ledger = ModificationLedger([
        Modification("remove", "Onions"),
        Modification("add", "Bacon", 2.0),
        Modification("replace", "Spinach", 0.0, replaced_topping="Mushrooms"),
    ])
    assert ledger.resolve(DEFAULTS) == ["Pizza sauce", "Spinach", "Mozzarella Cheese", "Bacon"]


def test_resolve_is_deterministic_and_does_not_touch_defaults():
    defaults = list(DEFAULTS)
    ledger = ModificationLedger([Modification("remove", "mushrooms"), Modification("add", "Ham", 2.0)])
    first = ledger.resolve(defaults)
    assert ledger.resolve(defaults) == first
    assert defaults == DEFAULTS


def test_add_of_present_topping_is_not_duplicated():
    ledger = ModificationLedger([Modification("add", "ONIONS", 2.0)])
    assert ledger.resolve(DEFAULTS).count("Onions") == 1


def test_surcharge_by_half_and_exclusion():
    ledger = ModificationLedger([
        Modification("add", "Bacon", 2.0, half="left"),
        Modification("add", "Ham", 2.5, half="right"),
        Modification("add", "Pepperoni", 0.0, half="right"),
        Modification("replace", "Feta Cheese", 2.0, half="right", replaced_topping="Onions"),
    ])
    assert ledger.surcharge() == pytest.approx(6.5)
    assert ledger.surcharge("left") == pytest.approx(2.0)
    assert ledger.surcharge("right") == pytest.approx(4.5)
    assert ledger.surcharge("right", exclude=lambda m: m.topping == "Ham") == pytest.approx(2.0)


def test_unconsumed_removes_skip_names_already_replaced():
    ledger = ModificationLedger([
        Modification("remove", "Onions"),
        Modification("replace", "Spinach", 0.0, replaced_topping="Onions"),
        Modification("remove", "Mushrooms"),
    ])
    assert ledger.unconsumed_removes() == [2]
    assert ledger.free_replacements() == 1


def test_payload_rows_use_cart_field_names():
    mod = Modification("replace", "Spinach", 0.0, replaced_topping="Onions", topping_id=4)
    row = mod.to_dict()
    assert row == {"type": "replace", "toppingName": "Spinach", "price": 0.0,
                   "half": "whole", "toppingId": 4, "replacedToppingName": "Onions"}
    assert ModificationLedger.from_list([row]).entries == [mod]


def test_from_dict_defaults_missing_half_to_whole():
    mod = Modification.from_dict({"type": "remove", "toppingName": "Onions", "price": None})
    assert mod.half == "whole"
    assert mod.charge == 0.0


def test_modifications_are_immutable():
    mod = Modification("add", "Bacon", 2.0)
    with pytest.raises(AttributeError):
        mod.charge = 0.0
    assert mod.with_charge(0).charge == 0.0
    assert mod.charge == 2.0
