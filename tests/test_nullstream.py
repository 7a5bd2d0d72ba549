import pytest

from blocksort.nullstream import NullOutputStream, StreamClosedError


def test_write_returns_length():
    stream = NullOutputStream()
    data = b"some bytes to discard"
    assert stream.write(data) == len(data)


def test_write_empty():
    assert NullOutputStream().write(b"") == 0


def test_write_after_close_fails():
    stream = NullOutputStream()
    stream.close()
    with pytest.raises(StreamClosedError, match="Stream closed"):
        stream.write(b"abc")


def test_close_is_idempotent():
    stream = NullOutputStream()
    stream.close()
    stream.close()
    assert stream.closed is True
    with pytest.raises(StreamClosedError):
        stream.write(b"x")


def test_context_manager_closes():
    with NullOutputStream() as stream:
        assert stream.write(b"abcd") == 4
    assert stream.closed is True
    with pytest.raises(StreamClosedError):
        stream.write(b"abcd")


def test_closed_error_is_value_error():
    stream = NullOutputStream()
    stream.close()
    with pytest.raises(ValueError):
        stream.write(b"data")