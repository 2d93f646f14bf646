"""
Rank Updater Tests
"""

from unittest.mock import MagicMock

import pytest

from linkgraph.db.graph_store import StoreError
from rankcrawler.domain.ranking import RankUpdater, approximate_rank

A = "https://a.test/"
B = "https://b.test/"
C = "https://c.test/"


def test_approximate_rank_no_neighbors():
    assert approximate_rank([]) == pytest.approx(0.15)


def test_approximate_rank_formula():
    assert approximate_rank([0.5, 1.0]) == pytest.approx(0.15 + 0.85 * 1.5)


def test_approximate_rank_custom_damping():
    assert approximate_rank([1.0], damping=0.5) == pytest.approx(1.0)


def test_update_rank_two_in_neighbors(graph_store):
    graph_store.upsert_node(A, 0.4)
    graph_store.upsert_node(B, 0.6)
    graph_store.upsert_edge(A, C)
    graph_store.upsert_edge(B, C)

    rank = RankUpdater(graph_store).update_rank(C)

    expected = 0.15 + 0.85 * (0.4 + 0.6)
    assert rank == pytest.approx(expected)
    assert graph_store.get_rank(C) == pytest.approx(expected)


def test_update_rank_single_seed_parent(graph_store):
    graph_store.upsert_node(A, 1.0)
    graph_store.upsert_edge(A, B)

    assert RankUpdater(graph_store).update_rank(B) == pytest.approx(1.0)


def test_update_rank_read_failure_is_noop():
    store = MagicMock()
    store.in_neighbors.side_effect = StoreError("in_neighbors")

    assert RankUpdater(store).update_rank(A) is None
    store.set_rank.assert_not_called()


def test_update_rank_write_failure_returns_none():
    store = MagicMock()
    store.in_neighbors.return_value = [(B, 1.0)]
    store.set_rank.side_effect = StoreError("set_rank")

    assert RankUpdater(store).update_rank(A) is None
