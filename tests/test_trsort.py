import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blocksort.trsort import tr_ilg, tr_sort


def _prepare(symbols, depth):
    """Lay out a work array grouped by the first ``depth`` symbols."""
    m = len(symbols)

    def key(i):
        return symbols[i:i + depth]

    order = sorted(range(m), key=key)
    sa = list(order) + [0] * m
    groups = []
    start = 0

    while start < m:
        end = start + 1
        while end < m and key(order[end]) == key(order[start]):
            end += 1
        groups.append((start, end))
        for pos in range(start, end):
            sa[m + order[pos]] = end - 1
        start = end

    run_start = None
    run_len = 0

    for start, end in groups + [(m, m + 2)]:
        if end - start == 1:
            if run_start is None:
                run_start = start
                run_len = 0
            run_len += 1
        else:
            if run_start is not None:
                sa[run_start] = -run_len
                run_start = None

    return sa


def _expected_ranks(symbols):
    ranks = [0] * len(symbols)
    for rank, i in enumerate(sorted(range(len(symbols)), key=lambda i: symbols[i:])):
        ranks[i] = rank
    return ranks


def _run(symbols, depth=1):
    m = len(symbols)
    sa = _prepare(symbols, depth)
    tr_sort(sa, m, depth)
    return sa, m


def test_single_symbol_is_already_sorted():
    sa, m = _run([0])
    assert sa[m:2 * m] == [0]
    assert sa[0] == -1


def test_periodic_input():
    symbols = [1, 2, 3] * 400 + [1, 2] + [0]
    sa, m = _run(symbols)
    assert sa[m:2 * m] == _expected_ranks(symbols)


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_depth_of_initial_grouping(depth):
    symbols = [(i * 7) % 5 % 3 for i in range(600)] + [-1]
    sa, m = _run(symbols, depth)
    assert sa[m:2 * m] == _expected_ranks(symbols)


@settings(max_examples=60, deadline=None)
@given(st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=400))
def test_ranks_match_lexicographic_order(body):
    symbols = body + [0]
    sa, m = _run(symbols)
    ranks = sa[m:2 * m]
    assert sorted(ranks) == list(range(m))
    assert ranks == _expected_ranks(symbols)


@settings(max_examples=30, deadline=None)
@given(st.lists(st.integers(min_value=1, max_value=2), min_size=200, max_size=800))
def test_binary_alphabet(body):
    symbols = body + [0]
    sa, m = _run(symbols)
    assert sa[m:2 * m] == _expected_ranks(symbols)


def test_rejects_short_work_array():
    with pytest.raises(ValueError):
        tr_sort([0, 0, 0], 2, 1)


def test_rejects_zero_depth():
    with pytest.raises(ValueError):
        tr_sort([0, 0], 1, 0)


def test_ilg_of_zero_and_byte_boundary():
    assert tr_ilg(0) == -1
    assert tr_ilg(256) == 8


@given(st.integers(min_value=1, max_value=(1 << 31) - 1))
def test_ilg_is_floor_log2(n):
    result = tr_ilg(n)
    assert (1 << result) <= n < (1 << (result + 1))