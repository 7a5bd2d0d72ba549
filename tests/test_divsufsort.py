import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blocksort.divsufsort import DivSufSort


def _sorted_suffixes(text):
    return sorted(range(len(text)), key=lambda i: text[i:])


def _samples():
    rnd = random.Random(1234)
    yield b"mississippi"
    yield b"3.14159265358979323846264338327950288419716939937510"
    yield b"SIX.MIXED.PIXIES.SIFT.SIXTY.PIXIE.DUST.BOXES"
    yield b"ab"
    yield b"ba"
    yield b"a" * 500
    yield b"ab" * 700
    yield b"abcabcabd" * 300
    yield bytes(rnd.randrange(65, 69) for _ in range(3000))
    yield bytes(rnd.randrange(256) for _ in range(5000))
    yield bytes(i & 0xFF for i in range(6000))


def test_mississippi_suffix_array():
    assert DivSufSort().compute_suffix_array(b"mississippi") == [10, 7, 4, 1, 0, 9, 8, 6, 3, 5, 2]


def test_mississippi_bwt():
    assert DivSufSort().compute_bwt(b"mississippi", 1) == (b"ipssmpissii", [5])


def test_tiny_inputs():
    sorter = DivSufSort()
    assert sorter.compute_suffix_array(b"") == []
    assert sorter.compute_suffix_array(b"z") == [0]


@pytest.mark.parametrize("text", list(_samples()))
def test_suffix_array_is_sorted(text):
    assert DivSufSort().compute_suffix_array(text) == _sorted_suffixes(text)


@pytest.mark.parametrize("text", list(_samples()))
def test_bwt_matches_suffix_array(text):
    sorter = DivSufSort()
    sa = sorter.compute_suffix_array(text)
    out, indexes = sorter.compute_bwt(text, 1)
    expected = bytes([text[-1]]) + bytes(text[s - 1] for s in sa if s != 0)
    assert out == expected
    assert indexes == [sa.index(0) + 1]


@pytest.mark.parametrize("text", [t for t in _samples() if len(t) >= 256])
def test_chunk_indexes_locate_chunk_starts(text):
    sorter = DivSufSort()
    sa = sorter.compute_suffix_array(text)
    out, indexes = sorter.compute_bwt(text, 8)
    n = len(text)
    step = -(-n // 8)
    assert len(indexes) == 8
    assert sorted(out) == sorted(text)
    for q, index in enumerate(indexes):
        assert index == sa.index(q * step) + 1


def test_sorter_is_reusable():
    sorter = DivSufSort()
    first = sorter.compute_suffix_array(b"banana")
    sorter.compute_suffix_array(b"zzzzyyyyxxxx")
    assert sorter.compute_suffix_array(b"banana") == first


def test_bwt_rejects_short_input():
    with pytest.raises(ValueError):
        DivSufSort().compute_bwt(b"x", 1)


def test_bwt_rejects_zero_chunks():
    with pytest.raises(ValueError):
        DivSufSort().compute_bwt(b"abc", 0)


@settings(max_examples=60, deadline=None)
@given(st.binary(min_size=2, max_size=300))
def test_suffix_array_property(text):
    assert DivSufSort().compute_suffix_array(text) == _sorted_suffixes(text)


@settings(max_examples=60, deadline=None)
@given(st.lists(st.sampled_from(b"ab"), min_size=2, max_size=400).map(bytes))
def test_suffix_array_small_alphabet(text):
    assert DivSufSort().compute_suffix_array(text) == _sorted_suffixes(text)