from __future__ import annotations

import pytest

from pydiverse.bimap import BiDict, MultiBiDict, OrderedSet
from tests.util import assert_consistent, assert_same_state


def test_scenario(chats):
    assert chats.get("chat1") == {"doc1", "doc2"}
    assert chats.get_reverse("doc1") == {"chat1", "chat2"}

    d = chats.remove("chat1", "doc2").insert("chat3", "doc2")
    assert d.get("chat1") == {"doc1"}
    assert d.get("chat3") == {"doc2"}
    assert d.get_reverse("doc2") == {"chat3"}
    assert_consistent(d)

    # the original value is untouched
    assert chats.get("chat1") == {"doc1", "doc2"}


class TestConstruction:
    def test_empty_and_singleton(self):
        assert len(MultiBiDict.empty()) == 0
        d = MultiBiDict.singleton("k", "v")
        assert d.get_reverse("v") == {"k"}
        assert_consistent(d)

    def test_from_flat_list(self, chats):
        d = MultiBiDict.from_flat_list(
            [("chat1", "doc1"), ("chat2", "doc1"), ("chat1", "doc2")]
        )
        assert d == chats
        assert d.keys() == ["chat1", "chat2"]
        assert_consistent(d)

    def test_from_dict(self):
        d = MultiBiDict.from_dict({"a": ["x", "y"], "b": ["x"], "c": []})
        assert d.keys() == ["a", "b"]
        assert d.get_reverse("x") == {"a", "b"}
        assert_consistent(d)

    def test_round_trip(self, chats):
        assert MultiBiDict.from_list(chats.to_list()) == chats
        assert MultiBiDict(chats.to_dict()) == chats
        assert_same_state(MultiBiDict.from_flat_list(chats.to_flat_list()), chats)


class TestQueries:
    def test_size_counts_pairs(self, chats):
        assert len(chats) == 3
        assert chats.values() == ["doc1", "doc2", "doc1"]

    def test_absent_lookups_are_empty(self, chats):
        assert chats.get("chat9") == set()
        assert chats.get_reverse("doc9") == set()
        assert not chats.member_reverse("doc9")
        assert chats.member_reverse("doc1")

    def test_reverse_list(self, chats):
        assert chats.to_reverse_list() == [
            ("doc1", {"chat1", "chat2"}),
            ("doc2", {"chat1"}),
        ]


class TestUpdates:
    def test_insert_is_additive(self, chats):
        d = chats.insert("chat2", "doc3")
        assert d.get("chat2") == {"doc1", "doc3"}
        assert d.get_reverse("doc3") == {"chat2"}
        assert_consistent(d)

    def test_insert_idempotent(self, chats):
        once = chats.insert("chat4", "doc1")
        assert_same_state(once.insert("chat4", "doc1"), once)

    def test_remove_drops_empty_entries(self, chats):
        d = chats.remove("chat2", "doc1")
        assert "chat2" not in d
        assert d.get_reverse("doc1") == {"chat1"}
        d = d.remove("chat1", "doc2")
        assert not d.member_reverse("doc2")
        assert_consistent(d)

    def test_remove_absent_pair(self, chats):
        assert chats.remove("chat2", "doc2") is chats
        assert chats.remove("chat9", "doc1") is chats

    def test_remove_all(self, chats):
        d = chats.remove_all("chat1")
        assert d.keys() == ["chat2"]
        assert d.get_reverse("doc1") == {"chat2"}
        assert not d.member_reverse("doc2")
        assert_consistent(d)
        assert chats.remove_all("chat9") is chats

    def test_update(self, chats):
        d = chats.update("chat1", lambda docs: docs.remove("doc1") | {"doc3"})
        assert d.get("chat1") == {"doc2", "doc3"}
        assert d.get_reverse("doc1") == {"chat2"}
        assert d.get_reverse("doc3") == {"chat1"}
        assert_consistent(d)

    def test_update_to_empty_removes_key(self):
        d = MultiBiDict.singleton("k", "v").update("k", lambda _: OrderedSet.empty())
        assert not d.member("k")
        assert not d.member_reverse("v")
        assert_consistent(d)

    def test_update_absent_key(self, chats):
        d = chats.update("chat9", lambda docs: docs | ["doc9"])
        assert d.get_reverse("doc9") == {"chat9"}
        assert_consistent(d)


class TestTransformations:
    def test_map(self, chats):
        d = chats.map(lambda doc: doc[:3])
        assert d.to_list() == [("chat1", {"doc"}), ("chat2", {"doc"})]
        assert d.get_reverse("doc") == {"chat1", "chat2"}
        assert len(d) == 2
        assert_consistent(d)

    def test_filter(self, chats):
        d = chats.filter(lambda chat, doc: doc == "doc2")
        assert d.to_flat_list() == [("chat1", "doc2")]
        assert not d.member_reverse("doc1")
        assert_consistent(d)

    def test_partition(self, chats):
        multi, single = chats.partition(lambda chat, docs: len(docs) > 1)
        assert multi.keys() == ["chat1"]
        assert single.get_reverse("doc1") == {"chat2"}
        assert not single.member_reverse("doc2")
        assert_consistent(multi)
        assert_consistent(single)


class TestCombinators:
    @pytest.fixture
    def other(self):
        return MultiBiDict.from_flat_list([("chat2", "doc7"), ("chat5", "doc1")])

    def test_union(self, chats, other):
        d = chats | other
        assert d.get("chat2") == {"doc1"}
        assert d.get_reverse("doc7") == set()
        assert d.get_reverse("doc1") == {"chat1", "chat2", "chat5"}
        assert_consistent(d)

    def test_intersect(self, chats, other):
        d = chats & other
        assert d.to_list() == [("chat2", {"doc1"})]
        assert d.get_reverse("doc1") == {"chat2"}
        assert_consistent(d)

    def test_diff(self, chats, other):
        d = chats - other
        assert d.keys() == ["chat1"]
        assert d.get_reverse("doc1") == {"chat1"}
        assert_consistent(d)

    def test_merge(self, chats, other):
        shared = chats.merge(
            other,
            lambda acc, k, vs: acc,
            lambda acc, k, vs, ws: acc | (vs & ws),
            lambda acc, k, ws: acc,
            OrderedSet.empty(),
        )
        assert shared == set()

    def test_kind_mismatch(self, chats):
        with pytest.raises(TypeError, match="MultiBiDict"):
            chats.intersect(BiDict.singleton("chat1", "doc1"))
