"""Tandem repeat sort: the doubling stage of the suffix sorter.

``tr_sort`` refines a partially sorted suffix array in place.  The list
``sa`` holds the suffix array in ``sa[0:n]`` and the inverse suffix array in
``sa[n:2n]``.  Every entry of the inverse suffix array is the index of the
last slot of the group that holds that suffix.  A run of already sorted
slots starts with its negated length.  Once the sort is done,
``sa[n:2n]`` holds the exact rank of every suffix.
"""

from dataclasses import dataclass

_INSERTIONSORT_THRESHOLD = 16


def tr_ilg(n):
    """Return the floor of log2 of ``n`` viewed as a 32-bit word (-1 for 0)."""
    return (n & 0xFFFFFFFF).bit_length() - 1


@dataclass
class _Budget:
    chance: int
    remain: int
    inc_val: int
    count: int = 0

    def check(self, size):
        if size <= self.remain:
            self.remain -= size
            return True

        if self.chance == 0:
            self.count += size
            return False

        self.remain += self.inc_val - size
        self.chance -= 1
        return True


def _mark(stack, link):
    # A link past the top of the stack refers to a discarded frame.
    if 0 <= link < len(stack):
        stack[link][3] = -1


def _rank(sa, isad, i):
    return sa[isad + sa[i]]


def _set_ranks(sa, isa, lo, hi, v):
    for c in range(lo, hi):
        sa[isa + sa[c]] = v


def _swap_blocks(sa, a, b, size):
    if size > 0:
        sa[a:a + size], sa[b:b + size] = sa[b:b + size], sa[a:a + size]


def _gather_low(sa, isad, a, b, limit, v, x):
    # Advance b over keys <= v, moving the keys equal to v to the front run.
    while b < limit:
        x = _rank(sa, isad, b)
        if x > v:
            break
        if x == v:
            sa[a], sa[b] = sa[b], sa[a]
            a += 1
        b += 1
    return a, b, x


def _gather_high(sa, isad, c, d, limit, v, x):
    # Move c down over keys >= v, moving the keys equal to v to the back run.
    while c > limit:
        x = _rank(sa, isad, c)
        if x < v:
            break
        if x == v:
            sa[c], sa[d] = sa[d], sa[c]
            d -= 1
        c -= 1
    return c, d, x


def _partition(sa, isad, first, middle, last, v):
    x = 0
    b = middle

    while b < last:
        x = _rank(sa, isad, b)
        if x != v:
            break
        b += 1

    a = b

    if a < last and x < v:
        a, b, x = _gather_low(sa, isad, a, b + 1, last, v, x)

    c = last - 1

    while c > b:
        x = _rank(sa, isad, c)
        if x != v:
            break
        c -= 1

    d = c

    if b < d and x > v:
        c, d, x = _gather_high(sa, isad, c - 1, d, b, v, x)

    while b < c:
        sa[b], sa[c] = sa[c], sa[b]
        a, b, x = _gather_low(sa, isad, a, b + 1, c, v, x)
        c, d, x = _gather_high(sa, isad, c - 1, d, b, v, x)

    if a <= d:
        c = b - 1
        s = min(a - first, b - a)
        _swap_blocks(sa, first, b - s, s)
        s = d - c
        if s >= last - d:
            s = last - d - 1
        _swap_blocks(sa, b, last - s, s)
        first += b - a
        last -= d - c

    return first, last


def _median3(sa, isad, v1, v2, v3):
    if _rank(sa, isad, v1) > _rank(sa, isad, v2):
        v1, v2 = v2, v1

    if _rank(sa, isad, v2) > _rank(sa, isad, v3):
        return v1 if _rank(sa, isad, v1) > _rank(sa, isad, v3) else v3

    return v2


def _median5(sa, isad, v1, v2, v3, v4, v5):
    if _rank(sa, isad, v2) > _rank(sa, isad, v3):
        v2, v3 = v3, v2

    if _rank(sa, isad, v4) > _rank(sa, isad, v5):
        v4, v5 = v5, v4

    if _rank(sa, isad, v2) > _rank(sa, isad, v4):
        v4 = v2
        v3, v5 = v5, v3

    if _rank(sa, isad, v1) > _rank(sa, isad, v3):
        v1, v3 = v3, v1

    if _rank(sa, isad, v1) > _rank(sa, isad, v4):
        v4 = v1
        v3 = v5

    if _rank(sa, isad, v3) > _rank(sa, isad, v4):
        return v4

    return v3


def _pivot(sa, isad, first, last):
    t = last - first
    middle = first + (t >> 1)

    if t <= 512:
        if t <= 32:
            return _median3(sa, isad, first, middle, last - 1)

        t >>= 2
        return _median5(sa, isad, first, first + t, middle, last - 1 - t, last - 1)

    t >>= 3
    first = _median3(sa, isad, first, first + t, first + (t << 1))
    middle = _median3(sa, isad, middle - t, middle, middle + t)
    last = _median3(sa, isad, last - 1 - (t << 1), last - 1 - t, last - 1)
    return _median3(sa, isad, first, middle, last)


def _fix_down(sa, isad, base, i, size):
    v = sa[base + i]
    c = sa[isad + v]
    j = (i << 1) + 1

    while j < size:
        k = j
        j += 1
        d = sa[isad + sa[base + k]]
        e = sa[isad + sa[base + j]]

        if d < e:
            k = j
            d = e

        if d <= c:
            break

        sa[base + i] = sa[base + k]
        i = k
        j = (i << 1) + 1

    sa[base + i] = v


def _heap_sort(sa, isad, base, size):
    m = size

    if size % 2 == 0:
        m -= 1
        half = base + (m >> 1)

        if _rank(sa, isad, half) < _rank(sa, isad, base + m):
            sa[half], sa[base + m] = sa[base + m], sa[half]

    for i in range((m >> 1) - 1, -1, -1):
        _fix_down(sa, isad, base, i, m)

    if size % 2 == 0:
        sa[base], sa[base + m] = sa[base + m], sa[base]
        _fix_down(sa, isad, base, 0, m)

    for i in range(m - 1, 0, -1):
        t = sa[base]
        sa[base] = sa[base + i]
        _fix_down(sa, isad, base, 0, i)
        sa[base + i] = t


def _insertion_sort(sa, isad, first, last):
    for a in range(first + 1, last):
        b = a - 1
        t = sa[a]
        r = sa[isad + t] - _rank(sa, isad, b)

        while r < 0:
            while True:
                sa[b + 1] = sa[b]
                b -= 1
                if b < first or sa[b] >= 0:
                    break

            if b < first:
                break

            r = sa[isad + t] - _rank(sa, isad, b)

        if r == 0:
            sa[b] = ~sa[b]

        sa[b + 1] = t


def _partial_copy(sa, isa, first, a, b, last, depth):
    v = b - 1
    last_rank = -1
    new_rank = -1
    d = a - 1
    c = first

    while c <= d:
        s = sa[c] - depth

        if s >= 0 and sa[isa + s] == v:
            d += 1
            sa[d] = s
            rank = sa[isa + s + depth]

            if last_rank != rank:
                last_rank = rank
                new_rank = d

            sa[isa + s] = new_rank

        c += 1

    last_rank = -1

    for e in range(d, first - 1, -1):
        rank = sa[isa + sa[e]]

        if last_rank != rank:
            last_rank = rank
            new_rank = e

        if new_rank != rank:
            sa[isa + sa[e]] = new_rank

    last_rank = -1
    e = d + 1
    d = b
    c = last - 1

    while d > e:
        s = sa[c] - depth

        if s >= 0 and sa[isa + s] == v:
            d -= 1
            sa[d] = s
            rank = sa[isa + s + depth]

            if last_rank != rank:
                last_rank = rank
                new_rank = d

            sa[isa + s] = new_rank

        c -= 1


def _copy(sa, isa, first, a, b, last, depth):
    v = b - 1
    d = a - 1
    c = first

    while c <= d:
        s = sa[c] - depth

        if s >= 0 and sa[isa + s] == v:
            d += 1
            sa[d] = s
            sa[isa + s] = d

        c += 1

    e = d + 1
    d = b
    c = last - 1

    while d > e:
        s = sa[c] - depth

        if s >= 0 and sa[isa + s] == v:
            d -= 1
            sa[d] = s
            sa[isa + s] = d

        c -= 1


def _choose_side(stack, left, right, left_size, right_size):
    """Continue with one side, push the other; None when neither is left."""
    if left_size <= right_size:
        if left_size > 1:
            stack.append(right)
            return left
        return right if right_size > 1 else None

    if right_size > 1:
        stack.append(left)
        return right

    return left if left_size > 1 else None


def _order_three(left, middle, right, ls, ms, rs):
    """Return the frames to push and the frame to continue with."""
    if ls <= rs:
        if rs <= ms:
            if ls > 1:
                return [middle, right], left
            if rs > 1:
                return [middle], right
            return [], middle
        if ls <= ms:
            if ls > 1:
                return [right, middle], left
            return [right], middle
        return [right, left], middle

    if ls <= ms:
        if rs > 1:
            return [middle, left], right
        if ls > 1:
            return [middle], left
        return [], middle

    if rs <= ms:
        if rs > 1:
            return [left, middle], right
        return [left], middle

    return [left, right], middle


def _sorted_partition(sa, isa, isad, incr, first, last, trlink, stack, budget):
    if sa[first] >= 0:
        a = first

        while True:
            sa[isa + sa[a]] = a
            a += 1
            if a >= last or sa[a] < 0:
                break

        first = a

    if first >= last:
        return None

    a = first

    while True:
        sa[a] = ~sa[a]
        a += 1
        if sa[a] >= 0:
            break

    next_limit = -1

    if sa[isa + sa[a]] != sa[isad + sa[a]]:
        next_limit = tr_ilg(a - first + 1)

    a += 1

    if a < last:
        _set_ranks(sa, isa, first, a, a - 1)

    deeper = [isad + incr, first, a, next_limit, trlink]
    rest = [isad, a, last, -3, trlink]

    if budget.check(a - first):
        if a - first <= last - a:
            stack.append(rest)
            return deeper
        if last - a > 1:
            stack.append(deeper)
            return rest
        return deeper

    _mark(stack, trlink)
    return rest if last - a > 1 else None


def _intro_sort(sa, isa, isad, first, last, budget):
    incr = isad - isa
    limit = tr_ilg(last - first)
    trlink = -1
    stack = []

    while True:
        if limit == -1:
            # Tandem repeat partition.
            a, b = _partition(sa, isad - incr, first, first, last, last - 1)

            if a < last:
                _set_ranks(sa, isa, first, a, a - 1)

            if b < last:
                _set_ranks(sa, isa, a, b, b - 1)

            if b - a > 1:
                stack.append([0, a, b, 0, 0])
                stack.append([isad - incr, first, last, -2, trlink])
                trlink = len(stack) - 2

            frame = _choose_side(
                stack,
                [isad, first, a, tr_ilg(a - first), trlink],
                [isad, b, last, tr_ilg(last - b), trlink],
                a - first,
                last - b,
            )
        elif limit == -2:
            # Tandem repeat copy.
            _, se_a, se_b, se_limit, _ = stack.pop()

            if se_limit == 0:
                _copy(sa, isa, first, se_a, se_b, last, isad - isa)
            else:
                _mark(stack, trlink)
                _partial_copy(sa, isa, first, se_a, se_b, last, isad - isa)

            frame = None
        elif limit < 0:
            frame = _sorted_partition(sa, isa, isad, incr, first, last, trlink, stack, budget)
        elif last - first <= _INSERTIONSORT_THRESHOLD:
            _insertion_sort(sa, isad, first, last)
            frame = [isad, first, last, -3, trlink]
        elif limit == 0:
            _heap_sort(sa, isad, first, last - first)
            a = last - 1

            while first < a:
                b = a - 1
                x = _rank(sa, isad, a)

                while first <= b and _rank(sa, isad, b) == x:
                    sa[b] = ~sa[b]
                    b -= 1

                a = b

            frame = [isad, first, last, -3, trlink]
        else:
            limit -= 1
            pvt = _pivot(sa, isad, first, last)
            sa[first], sa[pvt] = sa[pvt], sa[first]
            v = _rank(sa, isad, first)
            a, b = _partition(sa, isad, first, first + 1, last, v)

            if last - first != b - a:
                next_limit = tr_ilg(b - a) if sa[isa + sa[a]] != v else -1
                _set_ranks(sa, isa, first, a, a - 1)

                if b < last:
                    _set_ranks(sa, isa, a, b, b - 1)

                left = [isad, first, a, limit, trlink]
                middle = [isad + incr, a, b, next_limit, trlink]
                right = [isad, b, last, limit, trlink]

                if b - a > 1 and budget.check(b - a):
                    pushes, frame = _order_three(left, middle, right, a - first, b - a, last - b)
                    stack.extend(pushes)
                else:
                    if b - a > 1:
                        _mark(stack, trlink)
                    frame = _choose_side(stack, left, right, a - first, last - b)
            elif budget.check(last - first):
                frame = [isad + incr, first, last, tr_ilg(last - first), trlink]
            else:
                _mark(stack, trlink)
                frame = None

        if frame is None:
            if not stack:
                return
            frame = stack.pop()

        isad, first, last, limit, trlink = frame


def tr_sort(sa, n, depth):
    """Finish sorting the ``n`` suffixes held in ``sa`` in place.

    ``depth`` is the number of leading symbols by which the groups are
    already sorted.  On return ``sa[n:2n]`` holds the rank of each suffix.
    """
    if n < 0 or depth < 1:
        raise ValueError("n must be non-negative and depth at least 1")

    if len(sa) < 2 * n:
        raise ValueError(f"work array too small: {len(sa)} entries, {2 * n} required")

    if n == 0:
        return

    budget = _Budget(chance=tr_ilg(n) * 2 // 3, remain=n, inc_val=n)
    isad = n + depth

    while sa[0] > -n:
        first = 0
        skip = 0
        unsorted = 0

        while True:
            t = sa[first]

            if t < 0:
                first -= t
                skip += t
            else:
                if skip != 0:
                    sa[first + skip] = skip
                    skip = 0

                last = sa[n + t] + 1

                if last - first > 1:
                    budget.count = 0
                    _intro_sort(sa, n, isad, first, last, budget)

                    if budget.count != 0:
                        unsorted += budget.count
                    else:
                        skip = first - last
                elif last - first == 1:
                    skip = -1

                first = last

            if first >= n:
                break

        if skip != 0:
            sa[first + skip] = skip

        if unsorted == 0:
            break

        isad += isad - n