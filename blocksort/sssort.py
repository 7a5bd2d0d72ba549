"""Substring sort: the first stage of the suffix sorter.

``ss_sort`` sorts a run of type B* substrings held in a shared work list.
The entries of ``sa[first:last]`` are indexes into the list of B* positions
stored at ``sa[pa:]``.  The substring of entry ``k`` runs from text position
``sa[pa + k]`` up to and including the two symbols at ``sa[pa + k + 1]``.
The substring of the last B* position runs to the end of the text.

On return the entries are in ascending order of their substrings, and every
entry equal to the one before it is stored negated (``~k``).
"""

from math import isqrt

_INSERTIONSORT_THRESHOLD = 16
_BLOCKSIZE = 4096


def ss_ilg(n):
    """Return the floor of log2 of the low 16 bits of ``n`` (-1 for 0)."""
    return (n & 0xFFFF).bit_length() - 1


def ss_isqrt(x):
    """Return the integer square root of ``x``, capped at the block size."""
    if x >= _BLOCKSIZE * _BLOCKSIZE:
        return _BLOCKSIZE

    return isqrt(x)


def _index(v):
    return v if v >= 0 else ~v


class _SubstringSorter:
    def __init__(self, sa, text):
        self.sa = sa
        self.text = text

    # Comparisons

    def _compare(self, u1, u1n, u2, u2n):
        s1 = self.text[u1:u1n]
        s2 = self.text[u2:u2n]
        return (s1 > s2) - (s1 < s2)

    def compare3(self, p1, p2, depth):
        sa = self.sa
        return self._compare(sa[p1] + depth, sa[p1 + 1] + 2, sa[p2] + depth, sa[p2 + 1] + 2)

    def compare4(self, pos, pb, p2, depth):
        sa = self.sa
        return self._compare(pos + depth, pb + 2, sa[p2] + depth, sa[p2 + 1] + 2)

    # Block moves

    def block_swap(self, a, b, n):
        if n <= 0:
            return

        sa = self.sa

        if abs(a - b) >= n:
            sa[a:a + n], sa[b:b + n] = sa[b:b + n], sa[a:a + n]
            return

        for _ in range(n):
            sa[a], sa[b] = sa[b], sa[a]
            a += 1
            b += 1

    def rotate(self, first, middle, last):
        if first < middle < last:
            sa = self.sa
            sa[first:last] = sa[middle:last] + sa[first:middle]

    # Merging

    def inplace_merge(self, pa, first, middle, last, depth):
        sa = self.sa

        while True:
            if sa[last - 1] < 0:
                x = 1
                p = pa + ~sa[last - 1]
            else:
                x = 0
                p = pa + sa[last - 1]

            a = first
            r = -1
            length = middle - first
            half = length >> 1

            while length > 0:
                b = a + half
                q = self.compare3(pa + _index(sa[b]), p, depth)

                if q >= 0:
                    r = q
                else:
                    a = b + 1
                    half -= (length & 1) ^ 1

                length = half
                half >>= 1

            if a < middle:
                if r == 0:
                    sa[a] = ~sa[a]

                self.rotate(a, middle, last)
                last -= middle - a
                middle = a

                if first == middle:
                    break

            last -= 1

            if x != 0:
                last -= 1

                while sa[last] < 0:
                    last -= 1

            if middle == last:
                break

    def _fix_ends(self, pa, first, last, check, depth):
        sa = self.sa

        if check & 1 or (
            check & 2 and self.compare3(pa + _index(sa[first - 1]), pa + sa[first], depth) == 0
        ):
            sa[first] = ~sa[first]

        if check & 4 and self.compare3(pa + _index(sa[last - 1]), pa + sa[last], depth) == 0:
            sa[last] = ~sa[last]

    def swap_merge(self, pa, first, middle, last, buf, buf_size, depth):
        sa = self.sa
        stack = []
        check = 0

        while True:
            if last - middle <= buf_size:
                if first < middle < last:
                    self.merge_backward(pa, first, middle, last, buf, depth)

                self._fix_ends(pa, first, last, check, depth)

                if not stack:
                    return
                first, middle, last, check = stack.pop()
                continue

            if middle - first <= buf_size:
                if first < middle:
                    self.merge_forward(pa, first, middle, last, buf, depth)

                self._fix_ends(pa, first, last, check, depth)

                if not stack:
                    return
                first, middle, last, check = stack.pop()
                continue

            m = 0
            length = min(middle - first, last - middle)
            half = length >> 1

            while length > 0:
                if self.compare3(
                    pa + _index(sa[middle + m + half]),
                    pa + _index(sa[middle - m - half - 1]),
                    depth,
                ) < 0:
                    m += half + 1
                    half -= (length & 1) ^ 1

                length, half = half, half >> 1

            if m > 0:
                lm = middle - m
                rm = middle + m
                self.block_swap(lm, middle, m)
                l = r = middle
                nxt = 0

                if rm < last:
                    if sa[rm] < 0:
                        sa[rm] = ~sa[rm]

                        if first < lm:
                            l -= 1
                            while sa[l] < 0:
                                l -= 1
                            nxt |= 4

                        nxt |= 1
                    elif first < lm:
                        while sa[r] < 0:
                            r += 1
                        nxt |= 2

                if l - first <= last - r:
                    stack.append((r, rm, last, (nxt & 3) | (check & 4)))
                    middle = lm
                    last = l
                    check = (check & 3) | (nxt & 4)
                else:
                    if r == middle and nxt & 2:
                        nxt ^= 6

                    stack.append((first, lm, l, (check & 3) | (nxt & 4)))
                    first = r
                    middle = rm
                    check = (nxt & 3) | (check & 4)
            else:
                if self.compare3(pa + _index(sa[middle - 1]), pa + sa[middle], depth) == 0:
                    sa[middle] = ~sa[middle]

                self._fix_ends(pa, first, last, check, depth)

                if not stack:
                    return
                first, middle, last, check = stack.pop()

    def merge_forward(self, pa, first, middle, last, buf, depth):
        sa = self.sa
        buf_end = buf + middle - first - 1
        self.block_swap(buf, first, middle - first)
        a = first
        b = buf
        c = middle
        t = sa[a]

        while True:
            r = self.compare3(pa + sa[b], pa + sa[c], depth)

            if r == 0:
                sa[c] = ~sa[c]

            if r <= 0:
                while True:
                    sa[a] = sa[b]
                    a += 1

                    if buf_end <= b:
                        sa[buf_end] = t
                        return

                    sa[b] = sa[a]
                    b += 1

                    if sa[b] >= 0:
                        break

            if r >= 0:
                while True:
                    sa[a] = sa[c]
                    a += 1
                    sa[c] = sa[a]
                    c += 1

                    if last <= c:
                        while b < buf_end:
                            sa[a] = sa[b]
                            a += 1
                            sa[b] = sa[a]
                            b += 1

                        sa[a] = sa[b]
                        sa[b] = t
                        return

                    if sa[c] >= 0:
                        break

    def merge_backward(self, pa, first, middle, last, buf, depth):
        sa = self.sa
        buf_end = buf + last - middle - 1
        self.block_swap(buf, middle, last - middle)
        x = 0

        if sa[buf_end] < 0:
            p1 = pa + ~sa[buf_end]
            x |= 1
        else:
            p1 = pa + sa[buf_end]

        if sa[middle - 1] < 0:
            p2 = pa + ~sa[middle - 1]
            x |= 2
        else:
            p2 = pa + sa[middle - 1]

        a = last - 1
        b = buf_end
        c = middle - 1
        t = sa[a]

        while True:
            r = self.compare3(p1, p2, depth)

            if r >= 0:
                if x & 1:
                    while True:
                        sa[a] = sa[b]
                        a -= 1
                        sa[b] = sa[a]
                        b -= 1
                        if sa[b] >= 0:
                            break
                    x ^= 1

                sa[a] = sa[b] if r > 0 else ~sa[b]
                a -= 1

                if b <= buf:
                    sa[buf] = t
                    return

                sa[b] = sa[a]
                b -= 1

                if r > 0:
                    if sa[b] < 0:
                        p1 = pa + ~sa[b]
                        x |= 1
                    else:
                        p1 = pa + sa[b]
                    continue

            if x & 2:
                while True:
                    sa[a] = sa[c]
                    a -= 1
                    sa[c] = sa[a]
                    c -= 1
                    if sa[c] >= 0:
                        break
                x ^= 2

            sa[a] = sa[c]
            a -= 1
            sa[c] = sa[a]
            c -= 1

            if c < first:
                while buf < b:
                    sa[a] = sa[b]
                    a -= 1
                    sa[b] = sa[a]
                    b -= 1

                sa[a] = sa[b]
                sa[b] = t
                return

            if r == 0:
                if sa[b] < 0:
                    p1 = pa + ~sa[b]
                    x |= 1
                else:
                    p1 = pa + sa[b]

            if sa[c] < 0:
                p2 = pa + ~sa[c]
                x |= 2
            else:
                p2 = pa + sa[c]

    # Sorting

    def insertion_sort(self, pa, first, last, depth):
        sa = self.sa

        for i in range(last - 2, first - 1, -1):
            t = pa + sa[i]
            j = i + 1
            r = self.compare3(t, pa + sa[j], depth)

            while r > 0:
                while True:
                    sa[j - 1] = sa[j]
                    j += 1
                    if j >= last or sa[j] >= 0:
                        break

                if j >= last:
                    break

                r = self.compare3(t, pa + sa[j], depth)

            if r == 0:
                sa[j] = ~sa[j]

            sa[j - 1] = t - pa

    def _key(self, td, pa, i):
        sa = self.sa
        return self.text[td + sa[pa + sa[i]]]

    def median3(self, td, pa, v1, v2, v3):
        key = self._key

        if key(td, pa, v1) > key(td, pa, v2):
            v1, v2 = v2, v1

        if key(td, pa, v2) > key(td, pa, v3):
            return v1 if key(td, pa, v1) > key(td, pa, v3) else v3

        return v2

    def median5(self, td, pa, v1, v2, v3, v4, v5):
        key = self._key

        if key(td, pa, v2) > key(td, pa, v3):
            v2, v3 = v3, v2

        if key(td, pa, v4) > key(td, pa, v5):
            v4, v5 = v5, v4

        if key(td, pa, v2) > key(td, pa, v4):
            v4 = v2
            v3, v5 = v5, v3

        if key(td, pa, v1) > key(td, pa, v3):
            v1, v3 = v3, v1

        if key(td, pa, v1) > key(td, pa, v4):
            v4 = v1
            v3 = v5

        if key(td, pa, v3) > key(td, pa, v4):
            return v4

        return v3

    def pivot(self, td, pa, first, last):
        t = last - first
        middle = first + (t >> 1)

        if t <= 512:
            if t <= 32:
                return self.median3(td, pa, first, middle, last - 1)

            return self.median5(td, pa, first, first + (t >> 2), middle, last - 1 - (t >> 2), last - 1)

        t >>= 3
        first = self.median3(td, pa, first, first + t, first + (t << 1))
        middle = self.median3(td, pa, middle - t, middle, middle + t)
        last = self.median3(td, pa, last - 1 - (t << 1), last - 1 - t, last - 1)
        return self.median3(td, pa, first, middle, last)

    def partition(self, pa, first, last, depth):
        sa = self.sa
        a = first - 1
        b = last
        d = depth - 1

        while True:
            a += 1

            while a < b and sa[pa + sa[a]] + d >= sa[pa + sa[a] + 1]:
                sa[a] = ~sa[a]
                a += 1

            b -= 1

            while b > a and sa[pa + sa[b]] + d < sa[pa + sa[b] + 1]:
                b -= 1

            if b <= a:
                break

            sa[a], sa[b] = ~sa[b], sa[a]

        if first < a:
            sa[first] = ~sa[first]

        return a

    def fix_down(self, td, pa, base, i, size):
        sa = self.sa
        text = self.text
        v = sa[base + i]
        c = text[td + sa[pa + v]]
        j = (i << 1) + 1

        while j < size:
            k = j
            j += 1
            d = text[td + sa[pa + sa[base + k]]]
            e = text[td + sa[pa + sa[base + j]]]

            if d < e:
                k = j
                d = e

            if d <= c:
                break

            sa[base + i] = sa[base + k]
            i = k
            j = (i << 1) + 1

        sa[base + i] = v

    def heap_sort(self, td, pa, base, size):
        sa = self.sa
        m = size

        if size % 2 == 0:
            m -= 1
            half = base + (m >> 1)

            if self._key(td, pa, half) < self._key(td, pa, base + m):
                sa[half], sa[base + m] = sa[base + m], sa[half]

        for i in range((m >> 1) - 1, -1, -1):
            self.fix_down(td, pa, base, i, m)

        if size % 2 == 0:
            sa[base], sa[base + m] = sa[base + m], sa[base]
            self.fix_down(td, pa, base, 0, m)

        for i in range(m - 1, 0, -1):
            t = sa[base]
            sa[base] = sa[base + i]
            self.fix_down(td, pa, base, 0, i)
            sa[base + i] = t

    def multikey_intro_sort(self, pa, first, last, depth):
        sa = self.sa
        text = self.text
        limit = ss_ilg(last - first)
        stack = []
        x = 0

        while True:
            if last - first <= _INSERTIONSORT_THRESHOLD:
                if last - first > 1:
                    self.insertion_sort(pa, first, last, depth)

                if not stack:
                    return
                first, last, depth, limit = stack.pop()
                continue

            td = depth

            if limit == 0:
                self.heap_sort(td, pa, first, last - first)

            limit -= 1

            if limit < 0:
                v = text[td + sa[pa + sa[first]]]
                a = first + 1

                while a < last:
                    x = text[td + sa[pa + sa[a]]]

                    if x != v:
                        if a - first > 1:
                            break

                        v = x
                        first = a

                    a += 1

                if text[td + sa[pa + sa[first]] - 1] < v:
                    first = self.partition(pa, first, a, depth)

                if a - first <= last - a:
                    if a - first > 1:
                        stack.append((a, last, depth, -1))
                        last = a
                        depth += 1
                        limit = ss_ilg(a - first)
                    else:
                        first = a
                        limit = -1
                elif last - a > 1:
                    stack.append((first, a, depth + 1, ss_ilg(a - first)))
                    first = a
                    limit = -1
                else:
                    last = a
                    depth += 1
                    limit = ss_ilg(a - first)

                continue

            a = self.pivot(td, pa, first, last)
            v = text[td + sa[pa + sa[a]]]
            sa[a], sa[first] = sa[first], sa[a]
            b = first + 1

            while b < last:
                x = text[td + sa[pa + sa[b]]]
                if x != v:
                    break
                b += 1

            a = b

            if a < last and x < v:
                b += 1

                while b < last:
                    x = text[td + sa[pa + sa[b]]]
                    if x > v:
                        break
                    if x == v:
                        sa[a], sa[b] = sa[b], sa[a]
                        a += 1
                    b += 1

            c = last - 1

            while c > b:
                x = text[td + sa[pa + sa[c]]]
                if x != v:
                    break
                c -= 1

            d = c

            if b < d and x > v:
                c -= 1

                while c > b:
                    x = text[td + sa[pa + sa[c]]]
                    if x < v:
                        break
                    if x == v:
                        sa[c], sa[d] = sa[d], sa[c]
                        d -= 1
                    c -= 1

            while b < c:
                sa[b], sa[c] = sa[c], sa[b]
                b += 1

                while b < c:
                    x = text[td + sa[pa + sa[b]]]
                    if x > v:
                        break
                    if x == v:
                        sa[a], sa[b] = sa[b], sa[a]
                        a += 1
                    b += 1

                c -= 1

                while c > b:
                    x = text[td + sa[pa + sa[c]]]
                    if x < v:
                        break
                    if x == v:
                        sa[c], sa[d] = sa[d], sa[c]
                        d -= 1
                    c -= 1

            if a <= d:
                c = b - 1
                s = min(a - first, b - a)
                self.block_swap(first, b - s, s)
                s = min(d - c, last - d - 1)
                self.block_swap(b, last - s, s)
                a = first + (b - a)
                c = last - (d - c)

                if v <= text[td + sa[pa + sa[a]] - 1]:
                    b = a
                else:
                    b = self.partition(pa, a, c, depth)

                if a - first <= last - c:
                    if last - c <= c - b:
                        stack.append((b, c, depth + 1, ss_ilg(c - b)))
                        stack.append((c, last, depth, limit))
                        last = a
                    elif a - first <= c - b:
                        stack.append((c, last, depth, limit))
                        stack.append((b, c, depth + 1, ss_ilg(c - b)))
                        last = a
                    else:
                        stack.append((c, last, depth, limit))
                        stack.append((first, a, depth, limit))
                        first, last = b, c
                        depth += 1
                        limit = ss_ilg(c - b)
                elif a - first <= c - b:
                    stack.append((b, c, depth + 1, ss_ilg(c - b)))
                    stack.append((first, a, depth, limit))
                    first = c
                elif last - c <= c - b:
                    stack.append((first, a, depth, limit))
                    stack.append((b, c, depth + 1, ss_ilg(c - b)))
                    first = c
                else:
                    stack.append((first, a, depth, limit))
                    stack.append((c, last, depth, limit))
                    first, last = b, c
                    depth += 1
                    limit = ss_ilg(c - b)
            else:
                if text[td + sa[pa + sa[first]] - 1] < v:
                    first = self.partition(pa, first, last, depth)
                    limit = ss_ilg(last - first)
                else:
                    limit += 1

                depth += 1


def ss_sort(sa, text, pa, first, last, buf, buf_size, depth, n, last_suffix):
    """Sort the B* substrings referenced by ``sa[first:last]`` in place.

    ``buf`` and ``buf_size`` describe a scratch area of ``sa``; ``depth`` is
    the number of leading symbols already known to be equal; ``n`` is the
    text length.  When ``last_suffix`` is true, ``sa[first]`` refers to the
    last B* position and is placed among the others once they are sorted.
    """
    if not 0 <= first <= last <= len(sa):
        raise ValueError(f"invalid range [{first}, {last}) for a work list of {len(sa)} entries")

    if buf_size < 0:
        raise ValueError("buffer size must be non-negative")

    sorter = _SubstringSorter(sa, text)

    if last_suffix:
        first += 1

    limit = 0
    middle = last

    if buf_size < _BLOCKSIZE and buf_size < last - first:
        limit = ss_isqrt(last - first)

        if buf_size < limit:
            limit = min(limit, _BLOCKSIZE)
            middle = last - limit
            buf = middle
            buf_size = limit
        else:
            limit = 0

    a = first
    i = 0

    while middle - a > _BLOCKSIZE:
        sorter.multikey_intro_sort(pa, a, a + _BLOCKSIZE, depth)
        cur_buf_size = last - (a + _BLOCKSIZE)

        if cur_buf_size > buf_size:
            cur_buf = a + _BLOCKSIZE
        else:
            cur_buf_size = buf_size
            cur_buf = buf

        k = _BLOCKSIZE
        b = a
        j = i

        while j & 1:
            sorter.swap_merge(pa, b - k, b, b + k, cur_buf, cur_buf_size, depth)
            b -= k
            k <<= 1
            j >>= 1

        i += 1
        a += _BLOCKSIZE

    sorter.multikey_intro_sort(pa, a, middle, depth)
    k = _BLOCKSIZE

    while i != 0:
        if i & 1:
            sorter.swap_merge(pa, a - k, a, middle, buf, buf_size, depth)
            a -= k

        k <<= 1
        i >>= 1

    if limit != 0:
        sorter.multikey_intro_sort(pa, middle, last, depth)
        sorter.inplace_merge(pa, first, middle, last, depth)

    if last_suffix:
        i = sa[first - 1]
        p1 = sa[pa + i]
        a = first

        while a < last and (sa[a] < 0 or sorter.compare4(p1, n - 2, pa + sa[a], depth) > 0):
            sa[a - 1] = sa[a]
            a += 1

        sa[a - 1] = i