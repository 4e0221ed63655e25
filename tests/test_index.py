import math

import pytest

from tetrolab.index import BoardIndex

VECTORS = [[0.1, 0.9], [0.5, 0.2], [0.3, 0.7], [0.5, 0.0]]


def test_ordering_is_descending_permutation():
    index = BoardIndex(VECTORS)
    for feature in range(2):
        order = index.boards_in_rank_range(feature, 0, len(VECTORS))
        assert sorted(order) == list(range(len(VECTORS)))
        values = [VECTORS[board][feature] for board in order]
        assert values == sorted(values, reverse=True)


def test_ties_keep_original_order():
    index = BoardIndex(VECTORS)
    order = index.boards_in_rank_range(0, 0, len(VECTORS))
    assert order.index(1) < order.index(3)
    tied = BoardIndex([[0.5], [0.5], [0.5]])
    assert tied.boards_in_rank_range(0, 0, 3) == [0, 1, 2]


def test_rank_matches_rank_range():
    index = BoardIndex(VECTORS)
    for feature in range(2):
        for board in range(len(VECTORS)):
            rank = index.board_rank(feature, board)
            assert index.boards_in_rank_range(feature, rank, rank + 1) == [board]


def test_unknown_board_has_no_rank():
    assert BoardIndex(VECTORS).board_rank(0, 99) is None


def test_rank_range_end_is_clamped():
    index = BoardIndex(VECTORS)
    assert index.boards_in_rank_range(1, 2, 100) == index.boards_in_rank_range(1, 2, 4)


def test_rank_range_start_past_end():
    with pytest.raises(IndexError):
        BoardIndex(VECTORS).boards_in_rank_range(0, 5, 100)


def test_percentiles_partition_boards():
    vectors = [[i / 200] for i in range(200)]
    index = BoardIndex(vectors)
    chunks = [index.boards_at_percentile(0, float(p)) for p in range(100)]
    flat = [board for chunk in chunks for board in chunk]
    assert sorted(flat) == list(range(200))
    assert flat == index.boards_in_rank_range(0, 0, 200)


def test_percentile_out_of_range():
    index = BoardIndex([[i / 10] for i in range(10)])
    with pytest.raises(IndexError):
        index.boards_at_percentile(0, 150.0)


def test_nan_ranks_first():
    index = BoardIndex([[0.0], [math.nan], [1.0]])
    assert index.board_rank(0, 1) == 0


def test_positive_zero_before_negative_zero():
    index = BoardIndex([[-0.0], [0.0]])
    assert index.boards_in_rank_range(0, 0, 2) == [1, 0]


def test_ragged_vectors_rejected():
    with pytest.raises(ValueError):
        BoardIndex([[0.1, 0.2], [0.3]])


def test_feature_index_out_of_range():
    index = BoardIndex(VECTORS)
    with pytest.raises(IndexError):
        index.board_rank(2, 0)
    with pytest.raises(IndexError):
        index.boards_at_percentile(-1, 0.0)