"""BWT codec that stores the primary indexes in a block header.

Stream format: header (mode + primary indexes) followed by the transformed
data.  The mode byte is laid out as ``xxxyyyzz``: ``yyy`` is the base 2 log
of the number of chunks and ``zz`` is the size of each primary index in
bytes, minus one.  The primary indexes follow, big endian, one per chunk.
"""

from .bwt import BWT, bwt_chunks

_MAX_HEADER_SIZE = 8 * 4


def _ceil_log2(n):
    log = n.bit_length() - 1

    if n & (n - 1):
        log += 1

    return log


class BWTBlockCodec:
    """Wraps a :class:`BWT` and writes or reads its primary indexes."""

    def __init__(self, bs_version=6, jobs=1):
        self.bs_version = bs_version
        self._bwt = BWT(jobs)

    def forward(self, src):
        """Return the header followed by the transform of ``src``."""
        src = bytes(src)
        block_size = len(src)

        if block_size == 0:
            return b""

        p_index_size = (_ceil_log2(block_size) + 7) >> 3

        if p_index_size <= 0 or p_index_size >= 5:
            raise ValueError("BWT forward failed: invalid index size")

        chunks = bwt_chunks(block_size)
        log_nb_chunks = chunks.bit_length() - 1

        if log_nb_chunks > 7:
            raise ValueError("BWT forward failed: invalid number of chunks")

        encoded = self._bwt.forward(src)
        mode = (log_nb_chunks << 2) | (p_index_size - 1)
        mask = (1 << (8 * p_index_size)) - 1
        header = bytearray([mode])

        for i in range(chunks):
            primary_index = (self._bwt.primary_index(i) - 1) & mask
            header += primary_index.to_bytes(p_index_size, "big")

        return bytes(header) + encoded

    def inverse(self, src):
        """Return the block encoded in ``src`` (header and transformed data)."""
        src = bytes(src)

        if not src:
            return b""

        if len(src) == 1:
            raise ValueError("BWT inverse transform failed: invalid size")

        if self.bs_version > 5:
            start, length = self._read_header(src)
        else:
            start, length = self._read_legacy_header(src)

        return self._bwt.inverse(src[start:start + length])

    def _read_header(self, src):
        mode = src[0]
        log_nb_chunks = (mode >> 2) & 0x07
        p_index_size = (mode & 0x03) + 1
        chunks = 1 << log_nb_chunks
        header_size = chunks * p_index_size + 1

        if len(src) < header_size:
            raise ValueError("BWT inverse transform failed: invalid header size")

        if chunks != bwt_chunks(len(src) - header_size):
            raise ValueError("BWT inverse transform failed: invalid number of chunks")

        for i in range(chunks):
            pos = 1 + i * p_index_size
            primary_index = int.from_bytes(src[pos:pos + p_index_size], "big")

            if not self._bwt.set_primary_index(i, primary_index + 1):
                raise ValueError(
                    "BWT inverse transform failed: invalid primary index in bitstream"
                )

        return header_size, len(src) - header_size

    def _read_legacy_header(self, src):
        block_size = len(src)
        src_idx = 0

        for i in range(bwt_chunks(len(src))):
            block_mode = src[src_idx]
            src_idx += 1
            p_index_bytes = 1 + ((block_mode >> 6) & 0x03)

            if block_size < p_index_bytes:
                raise ValueError(
                    "BWT inverse transform failed: invalid compressed length in bitstream"
                )

            block_size -= p_index_bytes
            shift = (p_index_bytes - 1) << 3
            primary_index = (block_mode & 0x3F) << shift

            for _ in range(1, p_index_bytes):
                shift -= 8
                primary_index |= src[src_idx] << shift
                src_idx += 1

            if not self._bwt.set_primary_index(i, primary_index):
                raise ValueError(
                    "BWT inverse transform failed: invalid primary index in bitstream"
                )

        return src_idx, block_size

    def max_encoded_len(self, src_len):
        """Return the largest output size for an input of ``src_len`` bytes."""
        return src_len + _MAX_HEADER_SIZE