import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blocksort.bwt import BWT, _inverse_bipsi, _inverse_merge_tpsi, bwt_chunks


def _encode(data, jobs=1):
    fwd = BWT(jobs)
    encoded = fwd.forward(data)
    indexes = [fwd.primary_index(i) for i in range(bwt_chunks(len(data)))]
    return encoded, indexes


def _decode(encoded, indexes, jobs=1):
    inv = BWT(jobs)

    for i, pi in enumerate(indexes):
        assert inv.set_primary_index(i, pi)

    return inv.inverse(encoded)


def _source_cases():
    cases = [
        b"mississippi",
        b"3.14159265358979323846264338327950288419716939937510",
        b"SIX.MIXED.PIXIES.SIFT.SIXTY.PIXIE.DUST.BOXES",
    ]
    rnd = random.Random(12345)

    for ii in range(4, 19):
        cases.append(bytes(65 + rnd.randrange(4 * ii) for _ in range(128)))

    cases.append(bytes(i & 0xFF for i in range(2048)))
    return cases


def test_bwt_chunks():
    assert bwt_chunks(1) == 1
    assert bwt_chunks(255) == 1
    assert bwt_chunks(256) == 8
    assert bwt_chunks(1 << 20) == 8


def test_mississippi_pinned():
    encoded, indexes = _encode(b"mississippi")
    assert encoded == b"ipssmpissii"
    assert indexes == [5]


@pytest.mark.parametrize("data", _source_cases())
def test_round_trip_source_cases(data):
    encoded, indexes = _encode(data)
    assert len(encoded) == len(data)
    assert sorted(encoded) == sorted(data)
    assert _decode(encoded, indexes) == data


def test_round_trip_multi_chunk_random():
    rnd = random.Random(7)
    data = bytes(rnd.randrange(256) for _ in range(1000))
    encoded, indexes = _encode(data)
    assert len(indexes) == 8
    assert _decode(encoded, indexes, jobs=4) == data


def test_single_and_empty():
    bwt = BWT()
    assert bwt.forward(b"x") == b"x"
    assert bwt.inverse(b"x") == b"x"
    assert bwt.forward(b"") == b""
    assert bwt.inverse(b"") == b""


def test_set_primary_index_range():
    bwt = BWT()
    assert bwt.set_primary_index(7, 42) is True
    assert bwt.primary_index(7) == 42
    assert bwt.set_primary_index(8, 1) is False
    assert bwt.set_primary_index(-1, 1) is False


def test_invalid_jobs():
    with pytest.raises(ValueError):
        BWT(0)


def test_max_encoded_len():
    assert BWT().max_encoded_len(100) == 100


def test_corrupted_primary_index_single_chunk():
    with pytest.raises(ValueError):
        BWT().inverse(b"ba")


def test_corrupted_primary_index_multi_chunk():
    data = bytes((i * 7) & 0xFF for i in range(300))
    encoded, indexes = _encode(data)
    indexes[3] = 0

    with pytest.raises(ValueError):
        _decode(encoded, indexes)


@pytest.mark.parametrize("size", [2, 3, 17, 200, 256, 257, 777])
def test_bipsi_matches_merge(size):
    rnd = random.Random(size)
    data = bytes(97 + rnd.randrange(5) for _ in range(size))
    encoded, indexes = _encode(data)
    padded = indexes + [0] * (8 - len(indexes))
    assert _inverse_merge_tpsi(encoded, padded) == data
    assert _inverse_bipsi(encoded, padded) == data


@settings(max_examples=30, deadline=None)
@given(st.binary(min_size=2, max_size=600))
def test_round_trip_property(data):
    encoded, indexes = _encode(data)
    assert sorted(encoded) == sorted(data)
    assert _decode(encoded, indexes) == data