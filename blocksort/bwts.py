"""Bijective Burrows-Wheeler transform.

Unlike the regular transform this variant needs no primary index: every
output string is the transform of exactly one input string.
"""

from .divsufsort import DivSufSort

MAX_BLOCK_SIZE = 1024 * 1024 * 1024


def _check_size(count):
    if count > MAX_BLOCK_SIZE:
        raise ValueError(f"The max BWTS block size is {MAX_BLOCK_SIZE}, got {count}")


class BWTS:
    """Bijective BWT over byte strings."""

    def __init__(self):
        self._sorter = DivSufSort()

    def forward(self, src):
        """Return the bijective transform of ``src``."""
        src = bytes(src)
        count = len(src)
        _check_size(count)

        if count < 2:
            return src

        sa = self._sorter.compute_suffix_array(src)
        isa = [0] * count

        for rank, start in enumerate(sa):
            isa[start] = rank

        lowest = isa[0]
        idx_min = 0
        i = 1

        while i < count and lowest > 0:
            if isa[i] < lowest:
                ref_rank = self._move_lyndon_word_head(
                    sa, isa, src, count, idx_min, i - idx_min, lowest
                )

                # Walk the new Lyndon word from its end to its start.
                for j in range(i - 1, idx_min, -1):
                    test_rank = isa[j]
                    start_rank = test_rank

                    while test_rank < count - 1:
                        next_rank_start = sa[test_rank + 1]

                        if (
                            j > next_rank_start
                            or src[j] != src[next_rank_start]
                            or ref_rank < isa[next_rank_start + 1]
                        ):
                            break

                        sa[test_rank] = next_rank_start
                        isa[next_rank_start] = test_rank
                        test_rank += 1

                    sa[test_rank] = j
                    isa[j] = test_rank
                    ref_rank = test_rank

                    if start_rank == test_rank:
                        break

                lowest = isa[i]
                idx_min = i

            i += 1

        dst = bytearray(count)
        lowest = count

        for i, rank in enumerate(isa):
            if rank >= lowest:
                dst[rank] = src[i - 1]
                continue

            if lowest < count:
                dst[lowest] = src[i - 1]

            lowest = rank

        dst[0] = src[count - 1]
        return bytes(dst)

    @staticmethod
    def _move_lyndon_word_head(sa, isa, data, count, start, size, rank):
        end = start + size

        while rank + 1 < count:
            next_start0 = sa[rank + 1]

            if next_start0 <= end:
                break

            next_start = next_start0
            k = 0

            while k < size and next_start < count and data[start + k] == data[next_start]:
                k += 1
                next_start += 1

            if k == size and rank < isa[next_start]:
                break

            if k < size and next_start < count and data[start + k] < data[next_start]:
                break

            sa[rank] = next_start0
            isa[next_start0] = rank
            rank += 1

        sa[rank] = start
        isa[start] = rank
        return rank

    def inverse(self, src):
        """Return the string whose bijective transform is ``src``."""
        src = bytes(src)
        count = len(src)
        _check_size(count)

        if count < 2:
            return src

        buckets = [0] * 256

        for c in src:
            buckets[c] += 1

        total = 0

        for c, freq in enumerate(buckets):
            buckets[c] = total
            total += freq

        lf = [0] * count

        for i, c in enumerate(src):
            lf[i] = buckets[c]
            buckets[c] += 1

        dst = bytearray(count)
        j = count - 1
        i = 0

        while j >= 0:
            if lf[i] >= 0:
                p = i

                while True:
                    dst[j] = src[p]
                    j -= 1
                    t = lf[p]
                    lf[p] = -1
                    p = t

                    if lf[p] < 0:
                        break

            i += 1

        return bytes(dst)

    def max_encoded_len(self, src_len):
        """Return the largest output size for an input of ``src_len`` bytes."""
        return src_len