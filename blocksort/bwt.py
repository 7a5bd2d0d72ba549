"""Burrows-Wheeler transform with up to eight primary indexes.

The forward transform builds a suffix array of the block and emits, for each
suffix in sorted order, the byte that precedes it.  A virtual end-of-block
sentinel is handled internally, so the output has the same length as the
input.  Blocks of 256 bytes or more are split into eight chunks, each with
its own primary index, so that the inverse can rebuild the chunks
independently.
"""

from .divsufsort import DivSufSort

MAX_BLOCK_SIZE = 1024 * 1024 * 1024
_NB_FASTBITS = 17
_MASK_FASTBITS = (1 << _NB_FASTBITS) - 1
_BLOCK_SIZE_THRESHOLD1 = 256
_BLOCK_SIZE_THRESHOLD2 = 4 * 1024 * 1024
_MAX_CHUNKS = 8


def bwt_chunks(size):
    """Return the number of chunks (and primary indexes) for a block size."""
    return 1 if size < _BLOCK_SIZE_THRESHOLD1 else _MAX_CHUNKS


def _bucket_starts(src):
    counts = [0] * 256

    for c in src:
        counts[c] += 1

    starts = [0] * 256
    total = 0

    for c, freq in enumerate(counts):
        starts[c] = total
        total += freq

    return starts


def _inverse_merge_tpsi(src, indexes):
    """Invert a block by following a packed index + symbol table."""
    count = len(src)
    p_idx = indexes[0]

    if p_idx <= 0 or p_idx > count:
        raise ValueError("Invalid input: corrupted BWT primary index")

    buckets = _bucket_starts(src)
    data = [0] * count

    first = src[0]
    data[buckets[first]] = 0xFF00 | first
    buckets[first] += 1

    for i in range(1, p_idx):
        val = src[i]
        data[buckets[val]] = ((i - 1) << 8) | val
        buckets[val] += 1

    for i in range(p_idx, count):
        val = src[i]
        data[buckets[val]] = (i << 8) | val
        buckets[val] += 1

    dst = bytearray(count)

    if bwt_chunks(count) != _MAX_CHUNKS:
        t = p_idx - 1

        for i in range(count):
            ptr = data[t]
            dst[i] = ptr & 0xFF
            t = ptr >> 8

        return bytes(dst)

    ck_size = -(-count // _MAX_CHUNKS)
    starts = [indexes[k] - 1 for k in range(_MAX_CHUNKS)]

    if any(t < 0 or t >= count for t in starts):
        raise ValueError("BWT inverse transform failed: corrupted BWT primary index")

    for k, t in enumerate(starts):
        begin = k * ck_size

        for i in range(begin, min(begin + ck_size, count)):
            ptr = data[t]
            dst[i] = ptr & 0xFF
            t = ptr >> 8

    return bytes(dst)


def _inverse_bipsi(src, indexes):
    """Invert a block two symbols at a time using a bigram table."""
    count = len(src)
    p_idx = indexes[0]

    if p_idx > count:
        raise ValueError("Invalid input: corrupted BWT primary index")

    freqs = [0] * 256

    for c in src:
        freqs[c] += 1

    buckets = [0] * 65536
    total = 1

    for c in range(256):
        f = total
        total += freqs[c]
        freqs[c] = f

        if f != total:
            base = c << 8

            for i in range(f, min(total, p_idx)):
                buckets[base + src[i]] += 1

            for i in range(max(f - 1, p_idx), total - 1):
                buckets[base + src[i]] += 1

    lastc = src[0]
    fast_bits = [0] * (_MASK_FASTBITS + 1)
    shift = 0

    while (count >> shift) > _MASK_FASTBITS:
        shift += 1

    v = 0
    total = 1

    for c in range(256):
        if c == lastc:
            total += 1

        for d in range(256):
            idx = c + (d << 8)
            val = buckets[idx]
            buckets[idx] = total
            total += val

            if val != 0:
                fb = (c << 8) | d
                ve = (total - 1) >> shift

                while v <= ve:
                    fast_bits[v] = fb
                    v += 1

    data = [0] * (count + 1)

    for i in range(count):
        c = src[i]
        p = freqs[c]
        freqs[c] += 1
        target = i if i < p_idx else i + 1

        if p < p_idx:
            idx = (c << 8) | src[p]
        elif p > p_idx:
            idx = (c << 8) | src[p - 1]
        else:
            continue

        data[buckets[idx]] = target
        buckets[idx] += 1

    for c in range(256):
        c256 = c << 8

        for d in range(c):
            a = (d << 8) | c
            b = c256 | d
            buckets[a], buckets[b] = buckets[b], buckets[a]

    chunks = bwt_chunks(count)
    ck_size = -(-count // chunks)
    # One spare byte: a chain may write one position past the block end.
    dst = bytearray(count + 1)

    for c in range(chunks):
        start = c * ck_size
        end = min(start + ck_size, count - 1)
        p = indexes[c]

        for i in range(start + 1, end + 1, 2):
            s = fast_bits[p >> shift]

            while buckets[s] <= p:
                s += 1

            dst[i - 1] = s >> 8
            dst[i] = s & 0xFF
            p = data[p]

    dst[count - 1] = lastc
    return bytes(dst[:count])


class BWT:
    """Burrows-Wheeler transform keeping the primary index of each chunk."""

    def __init__(self, jobs=1):
        if jobs < 1:
            raise ValueError("The number of jobs must be at least 1")

        self.jobs = jobs
        self._primary_indexes = [0] * _MAX_CHUNKS
        self._sorter = DivSufSort()

    def primary_index(self, n):
        """Return the primary index of chunk ``n``."""
        return self._primary_indexes[n]

    def set_primary_index(self, n, primary_index):
        """Set the primary index of chunk ``n``; return False if ``n`` is out of range."""
        if n < 0 or n >= len(self._primary_indexes):
            return False

        self._primary_indexes[n] = primary_index
        return True

    def forward(self, src):
        """Return the transform of ``src`` and record its primary indexes."""
        src = bytes(src)
        count = len(src)

        if count > MAX_BLOCK_SIZE:
            raise ValueError(f"The max BWT block size is {MAX_BLOCK_SIZE}, got {count}")

        if count < 2:
            return src

        encoded, indexes = self._sorter.compute_bwt(src, bwt_chunks(count))
        self._primary_indexes[:len(indexes)] = indexes
        return encoded

    def inverse(self, src):
        """Return the block whose transform is ``src``, using the primary indexes."""
        src = bytes(src)
        count = len(src)

        if count > MAX_BLOCK_SIZE:
            raise ValueError(
                f"BWT inverse transform failed: max BWT block size is {MAX_BLOCK_SIZE}, got {count}"
            )

        if count < 2:
            return src

        if count <= _BLOCK_SIZE_THRESHOLD2:
            return _inverse_merge_tpsi(src, self._primary_indexes)

        return _inverse_bipsi(src, self._primary_indexes)

    def max_encoded_len(self, src_len):
        """Return the largest output size for an input of ``src_len`` bytes."""
        return src_len