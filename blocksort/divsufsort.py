"""Suffix array and Burrows-Wheeler transform construction.

The sorter follows the induced-sorting scheme of divsufsort.  It classifies
suffixes into types A, B and B*, sorts the B* substrings with
:func:`ss_sort`, and refines their order with :func:`tr_sort`.  It then
induces the order of every other suffix from the B* suffixes.
"""

from .sssort import ss_sort
from .trsort import tr_sort


class DivSufSort:
    """Builds suffix arrays and BWT blocks of byte strings."""

    def __init__(self):
        self._bucket_a = [0] * 256
        self._bucket_b = [0] * 65536

    def _reset(self):
        self._bucket_a[:] = [0] * 256
        self._bucket_b[:] = [0] * 65536

    def compute_suffix_array(self, src):
        """Return the suffix array of ``src`` as a list of start positions."""
        text = bytes(src)
        n = len(text)

        if n == 0:
            return []

        if n == 1:
            return [0]

        self._reset()
        sa = [0] * n
        m = self._sort_type_bstar(text, sa, n)
        self._construct_suffix_array(text, sa, n, m)
        return sa

    def compute_bwt(self, src, chunks):
        """Return the BWT of ``src`` and its ``chunks`` primary indexes.

        The first output byte is the last input byte; the remaining bytes are
        the transform with the sentinel row left out.  Primary index ``k`` is
        one more than the rank of the suffix that starts chunk ``k``.
        """
        text = bytes(src)
        n = len(text)

        if n < 2:
            raise ValueError(f"the BWT needs at least 2 bytes, got {n}")

        if chunks < 1:
            raise ValueError(f"the number of chunks must be at least 1, got {chunks}")

        self._reset()
        sa = [0] * n
        indexes = [0] * chunks
        m = self._sort_type_bstar(text, sa, n)
        p_idx = self._construct_bwt(text, sa, n, m, indexes)
        out = bytearray(n)
        out[0] = text[n - 1]
        out[1:p_idx + 1] = bytes(v & 0xFF for v in sa[:p_idx])
        out[p_idx + 1:] = bytes(v & 0xFF for v in sa[p_idx + 1:n])
        return bytes(out), indexes

    def _sort_type_bstar(self, text, sa, n):
        bucket_a = self._bucket_a
        bucket_b = self._bucket_b
        m = n
        c0 = text[n - 1]
        i = n - 1

        # Count the first one or two symbols of each type A, B and B* suffix
        # and record where the B* suffixes start.
        while i >= 0:
            c1 = c0

            while c0 >= c1:
                c1 = c0
                bucket_a[c1] += 1
                i -= 1

                if i < 0:
                    break

                c0 = text[i]

            if i < 0:
                break

            bucket_b[(c0 << 8) + c1] += 1
            m -= 1
            sa[m] = i
            i -= 1
            c1 = c0

            while i >= 0:
                c0 = text[i]

                if c0 > c1:
                    break

                bucket_b[(c1 << 8) + c0] += 1
                c1 = c0
                i -= 1

        m = n - m

        i = j = 0

        for x0 in range(256):
            t = i + bucket_a[x0]
            bucket_a[x0] = i + j
            idx = x0 << 8
            i = t + bucket_b[idx + x0]

            for x1 in range(x0 + 1, 256):
                j += bucket_b[idx + x1]
                bucket_b[idx + x1] = j
                i += bucket_b[(x1 << 8) + x0]

        if m == 0:
            return m

        # Sort the B* suffixes by their first two symbols.
        pab = n - m

        for i in range(m - 2, -1, -1):
            t = sa[pab + i]
            idx = (text[t] << 8) + text[t + 1]
            bucket_b[idx] -= 1
            sa[bucket_b[idx]] = i

        t = sa[pab + m - 1]
        idx = (text[t] << 8) + text[t + 1]
        bucket_b[idx] -= 1
        sa[bucket_b[idx]] = m - 1

        # Sort the B* substrings.
        buf_size = n - m - m
        x0 = 254
        j = m

        while j > 0:
            idx = x0 << 8

            for x1 in range(255, x0, -1):
                i = bucket_b[idx + x1]

                if j - i > 1:
                    ss_sort(sa, text, pab, i, j, m, buf_size, 2, n, sa[i] == m - 1)

                j = i

            x0 -= 1

        # Rank the B* substrings.
        i = m - 1

        while i >= 0:
            if sa[i] >= 0:
                j = i

                while True:
                    sa[m + sa[i]] = i
                    i -= 1

                    if i < 0 or sa[i] < 0:
                        break

                sa[i + 1] = i - j

                if i <= 0:
                    break

            j = i

            while True:
                sa[i] = ~sa[i]
                sa[m + sa[i]] = j
                i -= 1

                if sa[i] >= 0:
                    break

            sa[m + sa[i]] = j
            i -= 1

        # Build the inverse suffix array of the B* suffixes.
        tr_sort(sa, m, 1)

        # Put the B* suffixes in sorted order.
        c0 = text[n - 1]
        i = n - 1
        j = m

        while i >= 0:
            i -= 1
            c1 = c0

            while i >= 0:
                c0 = text[i]

                if c0 < c1:
                    break

                c1 = c0
                i -= 1

            if i >= 0:
                tt = i
                i -= 1
                c1 = c0

                while i >= 0:
                    c0 = text[i]

                    if c0 > c1:
                        break

                    c1 = c0
                    i -= 1

                j -= 1
                sa[sa[m + j]] = tt if tt == 0 or tt - i > 1 else ~tt

        # Compute bucket bounds and move the B* suffixes into place.
        bucket_b[65535] = n
        k = m - 1

        for x0 in range(254, -1, -1):
            i = bucket_a[x0 + 1] - 1
            x2 = x0 << 8

            for x1 in range(255, x0, -1):
                tt = i - bucket_b[(x1 << 8) + x0]
                bucket_b[(x1 << 8) + x0] = i
                i = tt
                j = bucket_b[x2 + x1]

                while j <= k:
                    sa[i] = sa[k]
                    i -= 1
                    k -= 1

            bucket_b[x2 + x0 + 1] = i - bucket_b[x2 + x0] + 1
            bucket_b[x2 + x0] = i

        return m

    def _construct_suffix_array(self, text, sa, n, m):
        bucket_a = self._bucket_a
        bucket_b = self._bucket_b

        if m > 0:
            for c1 in range(254, -1, -1):
                idx = c1 << 8
                i = bucket_b[idx + c1 + 1]
                k = 0
                c2 = -1

                for j in range(bucket_a[c1 + 1] - 1, i - 1, -1):
                    s = sa[j]
                    sa[j] = ~s

                    if s <= 0:
                        continue

                    s -= 1
                    c0 = text[s]

                    if s > 0 and text[s - 1] > c0:
                        s = ~s

                    if c0 != c2:
                        if c2 >= 0:
                            bucket_b[idx + c2] = k

                        c2 = c0
                        k = bucket_b[idx + c2]

                    sa[k] = s
                    k -= 1

        c2 = text[n - 1]
        k = bucket_a[c2]
        sa[k] = ~(n - 1) if text[n - 2] < c2 else n - 1
        k += 1

        for i in range(n):
            s = sa[i]

            if s <= 0:
                sa[i] = ~s
                continue

            s -= 1
            c0 = text[s]

            if s == 0 or text[s - 1] < c0:
                s = ~s

            if c0 != c2:
                bucket_a[c2] = k
                c2 = c0
                k = bucket_a[c2]

            sa[k] = s
            k += 1

    def _construct_bwt(self, text, sa, n, m, indexes):
        bucket_a = self._bucket_a
        bucket_b = self._bucket_b
        p_idx = -1
        chunks = len(indexes)
        step = n // chunks

        if step * chunks != n:
            step += 1

        if m > 0:
            for c1 in range(254, -1, -1):
                idx = c1 << 8
                i = bucket_b[idx + c1 + 1]
                k = 0
                c2 = -1

                for j in range(bucket_a[c1 + 1] - 1, i - 1, -1):
                    s = sa[j]

                    if s <= 0:
                        if s != 0:
                            sa[j] = ~s

                        continue

                    if s % step == 0:
                        indexes[s // step] = j + 1

                    s -= 1
                    c0 = text[s]
                    sa[j] = ~c0

                    if s > 0 and text[s - 1] > c0:
                        s = ~s

                    if c0 != c2:
                        if c2 >= 0:
                            bucket_b[idx + c2] = k

                        c2 = c0
                        k = bucket_b[idx + c2]

                    sa[k] = s
                    k -= 1

        c2 = text[n - 1]
        k = bucket_a[c2]

        if text[n - 2] < c2:
            if (n - 1) % step == 0:
                indexes[(n - 1) // step] = n

            sa[k] = ~text[n - 2]
        else:
            sa[k] = n - 1

        k += 1

        for i in range(n):
            s = sa[i]

            if s <= 0:
                if s != 0:
                    sa[i] = ~s
                else:
                    p_idx = i

                continue

            if s % step == 0:
                indexes[s // step] = i + 1

            s -= 1
            c0 = text[s]
            sa[i] = c0

            if c0 != c2:
                bucket_a[c2] = k
                c2 = c0
                k = bucket_a[c2]

            if s > 0 and text[s - 1] < c0:
                if s % step == 0:
                    indexes[s // step] = k + 1

                s = ~text[s - 1]

            sa[k] = s
            k += 1

        indexes[0] = p_idx + 1
        return p_idx