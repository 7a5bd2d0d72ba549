"""A writable stream that discards everything written to it."""


class StreamClosedError(ValueError):
    """Raised when writing to a stream that has been closed."""


class NullOutputStream:
    """Accepts and discards writes until closed."""

    def __init__(self):
        self.closed = False

    def write(self, data):
        """Discard ``data`` and return its length."""
        if self.closed:
            raise StreamClosedError("Stream closed")

        return len(data)

    def close(self):
        """Make the stream unavailable for further writes."""
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()