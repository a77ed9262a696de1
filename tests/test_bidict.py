from __future__ import annotations

import pickle

import pytest

from pydiverse.bimap import BiDict, MultiDict, OrderedMap
from pydiverse.bimap._internal.containers import index
from tests.util import assert_consistent, assert_same_state


class TestConstruction:
    def test_empty(self):
        d = BiDict.empty()
        assert len(d) == 0
        assert not d
        assert d == BiDict()
        assert_consistent(d)

    def test_singleton(self):
        d = BiDict.singleton("a", 1)
        assert d.to_list() == [("a", 1)]
        assert d.get_reverse(1) == {"a"}
        assert_consistent(d)

    def test_from_list_collapse(self):
        assert BiDict.from_list([(1, 1), (1, 1)]) == BiDict.singleton(1, 1)

    def test_from_list_later_pairs_win(self):
        d = BiDict.from_list([("a", 1), ("b", 2), ("a", 3)])
        assert d.to_list() == [("a", 3), ("b", 2)]
        assert d.get_reverse(1) == set()
        assert_consistent(d)

    def test_from_dict(self):
        d = BiDict.from_dict({"x": 1, "y": 1})
        assert d.get_reverse(1) == {"x", "y"}
        assert BiDict.from_dict(OrderedMap.singleton("x", 1)) == BiDict.singleton("x", 1)
        assert d.to_dict() == {"x": 1, "y": 1}

    def test_from_dict_type_check(self):
        with pytest.raises(TypeError, match="mapping"):
            BiDict.from_dict([("x", 1)])

    def test_round_trip(self, pets):
        assert BiDict.from_list(pets.to_list()) == pets
        assert BiDict.from_dict(pets.to_dict()) == pets


class TestQueries:
    def test_reverse_lookup(self, pets):
        assert pets.get_reverse("cat") == {"Tom", "Spike"}
        assert pets.get_reverse("cat").to_list() == ["Tom", "Spike"]
        assert pets.get_reverse("dog") == set()

    def test_get(self, pets):
        assert pets.get("Jerry") == "mouse"
        assert pets.get("Butch") is None
        assert pets.get("Butch", "dog") == "dog"
        assert pets["Tom"] == "cat"
        with pytest.raises(KeyError):
            _ = pets["Butch"]

    def test_member_and_size(self, pets):
        assert pets.member("Tom")
        assert "Tom" in pets
        assert "cat" not in pets
        assert len(pets) == 3

    def test_listings_follow_insertion_order(self, pets):
        assert pets.keys() == ["Tom", "Jerry", "Spike"]
        assert pets.values() == ["cat", "mouse", "cat"]
        assert list(pets) == ["Tom", "Jerry", "Spike"]
        assert pets.to_reverse_list() == [
            ("cat", {"Tom", "Spike"}),
            ("mouse", {"Jerry"}),
        ]

    def test_reverse_list_order_after_reinsert(self, pets):
        d = pets.insert("Tom", "mouse").insert("Tom", "cat")
        assert [ks.to_list() for _, ks in d.to_reverse_list()] == [
            ["Tom", "Spike"],
            ["Jerry"],
        ]


class TestUpdates:
    def test_scenario_remove(self, pets):
        d = pets.remove("Tom")
        assert d.get_reverse("cat") == {"Spike"}
        assert pets.get_reverse("cat") == {"Tom", "Spike"}
        assert_consistent(d)

    def test_insert_replaces_old_value(self, pets):
        d = pets.insert("Jerry", "cat")
        assert d.get_reverse("mouse") == set()
        assert "mouse" not in d._reverse
        assert d.get_reverse("cat") == {"Tom", "Jerry", "Spike"}
        assert d.keys() == ["Tom", "Jerry", "Spike"]
        assert_consistent(d)

    def test_insert_same_pair(self, pets):
        d = pets.insert("Tom", "cat")
        assert_same_state(d, pets)
        assert_consistent(d)

    def test_insert_same_pair_keeps_reverse_order(self, pets):
        before = pets.get_reverse("cat").to_list()
        d = pets.insert("Tom", "cat")
        assert d is pets
        assert d.get_reverse("cat").to_list() == before == ["Tom", "Spike"]
        assert [ks.to_list() for _, ks in d.to_reverse_list()] == [
            ks.to_list() for _, ks in d._reverse.items()
        ]

    def test_insert_idempotent(self, pets):
        once = pets.insert("Butch", "dog")
        assert_same_state(once.insert("Butch", "dog"), once)

    def test_remove_absent(self, pets):
        assert pets.remove("Butch") == pets

    def test_remove_last_key_of_value(self, pets):
        d = pets.remove("Jerry")
        assert "mouse" not in d._reverse
        assert_consistent(d)

    def test_update(self, pets):
        d = pets.update("Jerry", lambda v: v.upper())
        assert d.get("Jerry") == "MOUSE"
        assert d.get_reverse("mouse") == set()
        assert_consistent(d)

    def test_update_absent_key(self, pets):
        d = pets.update("Butch", lambda v: "dog" if v is None else v)
        assert d.get("Butch") == "dog"
        assert_consistent(d)

    def test_update_to_none_removes(self):
        d = BiDict.singleton("k", "v").update("k", lambda _: None)
        assert not d.member("k")
        assert_consistent(d)

    def test_update_requires_callable(self, pets):
        with pytest.raises(TypeError, match="callable"):
            pets.update("Tom", "dog")


class TestTransformations:
    def test_map(self, pets):
        d = pets.map(len)
        assert d.to_list() == [("Tom", 3), ("Jerry", 5), ("Spike", 3)]
        assert d.get_reverse(3) == {"Tom", "Spike"}
        assert_consistent(d)

    def test_map_logs_reverse_rebuild(self, pets, monkeypatch):
        events = []

        class Recorder:
            def debug(self, event, **kwargs):
                events.append((event, kwargs))

        monkeypatch.setattr(index, "logger", Recorder())
        pets.map(len)
        assert events == [("rebuilding reverse index", {"entries": 3})]

    def test_filter(self, pets):
        d = pets.filter(lambda k, v: k != "Tom")
        assert d.keys() == ["Jerry", "Spike"]
        assert d.get_reverse("cat") == {"Spike"}
        assert_consistent(d)

    def test_partition(self, pets):
        cats, others = pets.partition(lambda k, v: v == "cat")
        assert cats.keys() == ["Tom", "Spike"]
        assert others.keys() == ["Jerry"]
        assert others.get_reverse("cat") == set()
        assert_consistent(cats)
        assert_consistent(others)

    def test_folds(self, pets):
        assert pets.foldl(lambda acc, k, v: acc + [k], []) == ["Tom", "Jerry", "Spike"]
        assert pets.foldr(lambda k, v, acc: acc + [v], []) == ["cat", "mouse", "cat"]


class TestCombinators:
    def test_union_is_left_biased(self):
        d = BiDict.singleton("a", "1").union(BiDict.singleton("a", "2"))
        assert d.get("a") == "1"
        assert d.get_reverse("2") == set()
        assert_consistent(d)

    def test_operators(self, pets):
        other = BiDict.from_list([("Tom", "mouse"), ("Butch", "cat")])
        assert (pets | other).to_list() == [
            ("Tom", "cat"),
            ("Jerry", "mouse"),
            ("Spike", "cat"),
            ("Butch", "cat"),
        ]
        assert (pets & other).to_list() == [("Tom", "cat")]
        assert (pets - other).to_list() == [("Jerry", "mouse"), ("Spike", "cat")]
        for d in (pets | other, pets & other, pets - other):
            assert_consistent(d)

    def test_combinators_require_same_kind(self, pets):
        with pytest.raises(TypeError, match="hint"):
            pets.union(MultiDict.singleton("Tom", "cat"))
        with pytest.raises(TypeError):
            _ = pets | {"Tom": "cat"}

    def test_merge(self, pets):
        other = BiDict.from_list([("Spike", "dog"), ("Butch", "cat")])
        changes = pets.merge(
            other,
            lambda acc, k, v: acc,
            lambda acc, k, v, w: acc + [(k, v, w)] if v != w else acc,
            lambda acc, k, w: acc + [(k, None, w)],
            [],
        )
        assert changes == [("Spike", "cat", "dog"), ("Butch", None, "cat")]


class TestValueSemantics:
    def test_hash_and_equality(self, pets):
        same = BiDict.from_list([("Spike", "cat"), ("Jerry", "mouse"), ("Tom", "cat")])
        assert pets == same
        assert hash(pets) == hash(same)
        assert pets != MultiDict.from_flat_list(pets.to_list())

    def test_pickle(self, pets):
        restored = pickle.loads(pickle.dumps(pets))
        assert_same_state(restored, pets)
        assert restored.keys() == pets.keys()

    def test_repr(self):
        assert repr(BiDict.singleton("a", 1)) == "BiDict({'a': 1})"
