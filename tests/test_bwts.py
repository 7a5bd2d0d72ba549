import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blocksort.bwts import BWTS


def _cases():
    yield b"mississippi"
    yield b"3.14159265358979323846264338327950288419716939937510"
    yield b"SIX.MIXED.PIXIES.SIFT.SIXTY.PIXIE.DUST.BOXES"
    rnd = random.Random(42)

    for ii in range(4, 19):
        yield bytes(65 + rnd.randrange(4 * ii) for _ in range(128))

    yield bytes(i & 0xFF for i in range(4096))
    yield bytes(i & 0xFF for i in range(10000))


@pytest.mark.parametrize("data", list(_cases()))
def test_round_trip(data):
    encoded = BWTS().forward(data)
    assert len(encoded) == len(data)
    assert sorted(encoded) == sorted(data)
    assert BWTS().inverse(encoded) == data


def test_empty_and_single_byte():
    bwts = BWTS()
    assert bwts.forward(b"") == b""
    assert bwts.inverse(b"") == b""
    assert bwts.forward(b"q") == b"q"
    assert bwts.inverse(b"q") == b"q"


def test_periodic_input_groups_symbols():
    # Every Lyndon factor is "ab": the rotations "ab" sort before "ba",
    # so all the trailing b's come first.
    data = b"ab" * 50
    assert BWTS().forward(data) == b"b" * 50 + b"a" * 50


def test_constant_input_is_unchanged():
    data = b"z" * 64
    assert BWTS().forward(data) == data


def test_repeated_symbols():
    data = b"a" * 300 + b"b" * 300
    encoded = BWTS().forward(data)
    assert BWTS().inverse(encoded) == data


def test_instance_reuse():
    bwts = BWTS()
    first = bwts.forward(b"mississippi")
    bwts.forward(b"banana bandana")
    assert bwts.forward(b"mississippi") == first


def test_accepts_bytearray():
    data = bytearray(b"abracadabra")
    assert BWTS().inverse(BWTS().forward(data)) == bytes(data)


def test_max_encoded_len():
    assert BWTS().max_encoded_len(1000) == 1000


@settings(max_examples=80, deadline=None)
@given(st.binary(max_size=300))
def test_round_trip_property(data):
    bwts = BWTS()
    assert bwts.inverse(bwts.forward(data)) == data


@settings(max_examples=80, deadline=None)
@given(st.lists(st.sampled_from(b"abc"), max_size=200).map(bytes))
def test_inverse_is_bijective(data):
    bwts = BWTS()
    assert bwts.forward(bwts.inverse(data)) == data