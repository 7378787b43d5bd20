"""
OrderedJsonDict behavior tests.

Validates insertion order, duplicate shadowing, removal and the views that
expose every stored entry.
"""

import pytest

from odjson import OrderedJsonDict


@pytest.fixture
def shadowed() -> OrderedJsonDict[int]:
    """Mapping holding a duplicate key, in insertion order a, b, a."""
    return OrderedJsonDict([("a", 1), ("b", 2), ("a", 3)])


def test_latest_duplicate_wins_lookup(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates lookups see the most recent entry for a key.
    """
    assert shadowed["a"] == 3
    assert shadowed.get("a") == 3
    assert shadowed["b"] == 2
    assert "a" in shadowed
    assert len(shadowed) == 3


def test_every_entry_is_enumerated(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates iteration and views include shadowed entries in order.
    """
    assert list(shadowed) == ["a", "b", "a"]
    assert list(shadowed.items()) == [("a", 1), ("b", 2), ("a", 3)]
    assert list(shadowed.values()) == [1, 2, 3]
    assert ("a", 1) in shadowed.items()
    assert ("a", 2) not in shadowed.items()
    assert 1 in shadowed.values()


def test_setitem_appends() -> None:
    """
    Validates assignment appends rather than replacing in place.
    """
    d: OrderedJsonDict[int] = OrderedJsonDict()
    d["x"] = 1
    d["y"] = 2
    d["x"] = 3
    assert list(d.items()) == [("x", 1), ("y", 2), ("x", 3)]
    assert d["x"] == 3

    d.add("y", 4)
    assert d["y"] == 4
    assert len(d) == 4


def test_remove_drops_all_entries(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates remove deletes every entry stored under the key.
    """
    assert shadowed.remove("a") is True
    assert list(shadowed.items()) == [("b", 2)]
    assert "a" not in shadowed
    assert shadowed.get("a") is None
    assert shadowed.remove("a") is False


def test_remove_item_matches_value(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates remove_item deletes only the entries equal to the pair.
    """
    assert shadowed.remove_item("a", 3) is True
    assert list(shadowed.items()) == [("a", 1), ("b", 2)]
    assert shadowed["a"] == 1

    assert shadowed.remove_item("a", 99) is False
    assert shadowed.remove_item("zzz", 1) is False
    assert len(shadowed) == 2


def test_contains_item(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates contains_item looks at shadowed entries too.
    """
    assert shadowed.contains_item("a", 1)
    assert shadowed.contains_item("a", 3)
    assert not shadowed.contains_item("b", 3)
    assert not shadowed.contains_item("c", 1)


def test_delitem_and_missing_keys(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates KeyError for missing keys and del removing duplicates.
    """
    with pytest.raises(KeyError):
        shadowed["missing"]
    assert shadowed.get("missing", 0) == 0
    assert 1 not in shadowed  # type: ignore[comparison-overlap]

    del shadowed["a"]
    assert list(shadowed) == ["b"]
    with pytest.raises(KeyError):
        del shadowed["a"]


def test_lookup_after_mutation() -> None:
    """
    Validates lookups stay correct as entries are added and removed.
    """
    d = OrderedJsonDict((f"k{i}", i) for i in range(50))
    assert d["k49"] == 49
    d.remove("k10")
    assert "k10" not in d
    assert d["k11"] == 11
    d["k10"] = 100
    assert d["k10"] == 100
    assert list(d)[-1] == "k10"
    assert len(d) == 50


def test_copy_and_clear(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates copy is independent and clear empties the mapping.
    """
    clone = shadowed.copy()
    assert list(clone.items()) == list(shadowed.items())

    shadowed.clear()
    assert len(shadowed) == 0
    assert shadowed == {}
    assert clone["a"] == 3


def test_constructor_forms() -> None:
    """
    Validates construction from pairs, mappings and keyword arguments.
    """
    from_pairs = OrderedJsonDict([("one", 1), ("two", 2)])
    from_mapping = OrderedJsonDict({"one": 1, "two": 2})
    from_kwargs = OrderedJsonDict(one=1, two=2)
    assert list(from_pairs.items()) == list(from_mapping.items())
    assert list(from_kwargs.items()) == [("one", 1), ("two", 2)]


def test_equality_uses_visible_values(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates comparison against plain mappings uses looked-up values.
    """
    assert shadowed == {"a": 3, "b": 2}
    assert shadowed != {"a": 1, "b": 2}
    assert OrderedJsonDict(a=1, b=2) == OrderedJsonDict(b=2, a=1)


def test_mutable_mapping_mixins(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates pop, setdefault and update on top of the core operations.
    """
    assert shadowed.pop("a") == 3
    assert "a" not in shadowed
    assert shadowed.setdefault("b", 9) == 2
    assert shadowed.setdefault("c", 9) == 9

    shadowed.update({"d": 4})
    assert list(shadowed) == ["b", "c", "d"]


def test_repr(shadowed: OrderedJsonDict[int]) -> None:
    """
    Validates repr lists every entry.
    """
    assert repr(shadowed) == "OrderedJsonDict({'a': 1, 'b': 2, 'a': 3})"
