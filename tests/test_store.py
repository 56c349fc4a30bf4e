# tests/test_store.py
"""Tests for the keyed store abstraction and the lexicon helpers."""

from chuk_ai_agent_orchestrator.lexicon import (
    NEGATIVE_TERMS,
    POSITIVE_TERMS,
    contains_any,
    count_matches,
    sentiment_counts,
)
from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore, KeyedStore


class TestInMemoryKeyedStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryKeyedStore(), KeyedStore)

    def test_set_get_delete(self):
        store = InMemoryKeyedStore()
        store.set("a", 1)
        assert store.get("a") == 1
        assert "a" in store
        assert len(store) == 1
        assert store.delete("a") == 1
        assert store.get("a") is None
        assert store.delete("a") is None

    def test_items_is_snapshot(self):
        store = InMemoryKeyedStore()
        for key in ("a", "b", "c"):
            store.set(key, key.upper())
        for key, _ in store.items():
            store.delete(key)
        assert len(store) == 0

    def test_iteration_yields_keys(self):
        store = InMemoryKeyedStore()
        store.set("x", 1)
        store.set("y", 2)
        assert sorted(store) == ["x", "y"]


class TestLexicon:
    def test_case_insensitive(self):
        assert contains_any("THANKS a lot", POSITIVE_TERMS)

    def test_word_boundary(self):
        # "no" must not match inside "know" or "nothing"
        assert not contains_any("I know nothing about that", ("no",))
        assert contains_any("no, not that one", ("no",))

    def test_phrases_match_as_substrings(self):
        assert contains_any("that was not helpful at all", NEGATIVE_TERMS)
        assert contains_any("Let's roll some D&D dice", ("d&d",))

    def test_count_matches_distinct_terms(self):
        assert count_matches("thanks, great, great stuff", POSITIVE_TERMS) == 2
        assert count_matches("meh", POSITIVE_TERMS) == 0

    def test_negated_phrase_is_not_praise(self):
        assert sentiment_counts("that was not helpful") == (0, 1)
        assert sentiment_counts("very helpful, thanks") == (2, 0)
        assert sentiment_counts("thanks, but not helpful") == (1, 1)
