"""Striped Smith-Waterman local alignment.

The query is laid out in a striped profile of 16 unsigned-byte lanes or 8
signed 16-bit lanes per vector. A query position ``k`` sits in vector
``k % slen`` at lane ``k // slen``. The functions below work lane by lane
with the same saturating arithmetic, so the scores, end positions and
tie-breaking come out the same as with SIMD registers.

Sequences are lists of residue codes ``0 <= c < m`` and ``mat`` is an
``m*m`` scoring matrix in row-major order. A gap of length ``l`` costs
``gapo + l * gape``.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

XBYTE = 0x10000
"""Use unsigned bytes for scores; a score that overflows is reported as 255."""
XSTOP = 0x20000
"""Stop once the best score reaches ``xtra & 0xffff``."""
XSUBO = 0x40000
"""Track the second best score if it reaches ``xtra & 0xffff``."""
XSTART = 0x80000
"""Also find the start positions of the alignment."""

Vector = List[int]


@dataclass
class AlignResult:
    """Result of a local alignment; positions not found are -1.

    ``te``/``qe`` are the last aligned positions on target and query,
    ``tb``/``qb`` the first ones, and ``score2``/``te2`` the second best
    score and its end on the target.
    """

    score: int = 0
    te: int = -1
    qe: int = -1
    score2: int = -1
    te2: int = -1
    tb: int = -1
    qb: int = -1


def _check_matrix(m: int, mat: Sequence[int]) -> List[int]:
    if m <= 0:
        raise ValueError("alphabet size must be positive")
    if len(mat) < m * m:
        raise ValueError("scoring matrix must have m*m entries")
    values = list(mat[: m * m])
    if any(not -128 <= v <= 127 for v in values):
        raise ValueError("scores must fit in a signed byte")
    return values


def _check_codes(seq: Sequence[int], m: int, what: str) -> List[int]:
    codes = list(seq)
    if any(not 0 <= c < m for c in codes):
        raise ValueError(f"{what} holds a residue code outside 0..{m - 1}")
    return codes


class QueryProfile:
    """Striped query profile, reusable for aligning one query to many targets.

    ``size`` 1 stores shifted unsigned-byte scores, any larger value signed
    16-bit scores.
    """

    def __init__(self, size: int, query: Sequence[int], m: int, mat: Sequence[int]):
        values = _check_matrix(m, mat)
        query = _check_codes(query, m, "query")
        if not query:
            raise ValueError("query must not be empty")
        self.size = 2 if size > 1 else 1
        self.m = m
        self.lanes = 8 * (3 - self.size)
        self.qlen = len(query)
        self.slen = (self.qlen + self.lanes - 1) // self.lanes
        low = min(127, min(values))
        high = max(0, max(values))
        self.shift = (256 - (low & 0xFF)) & 0xFF
        self.max = high & 0xFF
        self.mdiff = (high + self.shift) & 0xFF
        self.vectors: List[List[Vector]] = []
        for a in range(m):
            row = values[a * m:(a + 1) * m]
            vecs = []
            for i in range(self.slen):
                positions = range(i, self.slen * self.lanes, self.slen)
                scores = [row[query[k]] if k < self.qlen else 0 for k in positions]
                if self.size == 1:
                    scores = [(s + self.shift) & 0xFF for s in scores]
                vecs.append(scores)
            self.vectors.append(vecs)


def _limits(xtra: int) -> Tuple[int, int]:
    minsc = xtra & 0xFFFF if xtra & XSUBO else 0x10000
    endsc = xtra & 0xFFFF if xtra & XSTOP else 0x10000
    return minsc, endsc


def _mark(marks: List[List[int]], imax: int, i: int, minsc: int) -> None:
    """Record a row whose best score reaches ``minsc``, merging adjacent rows."""
    if imax < minsc:
        return
    if not marks or marks[-1][1] + 1 != i:
        marks.append([imax, i])
    elif marks[-1][0] < imax:
        marks[-1] = [imax, i]


def _finish(
    r: AlignResult,
    hmax: List[Vector],
    slen: int,
    lanes: int,
    lane_mask: int,
    marks: List[List[int]],
    te: int,
    best_cell: int,
) -> None:
    best = -1
    for j, vec in enumerate(hmax):
        for lane, value in enumerate(vec):
            value &= lane_mask
            if value > best:
                best = value
                r.qe = j + lane * slen
    if marks:
        if best_cell == 0:
            raise ValueError("scoring matrix has no positive score")
        w = (r.score + best_cell - 1) // best_cell
        low, high = te - w, te + w
        for score, e in marks:
            if (e < low or e > high) and score > r.score2:
                r.score2, r.te2 = score, e


def _sub_u(vec: Vector, amount: int) -> Vector:
    return [x - amount if x > amount else 0 for x in vec]


def align_u8(profile: QueryProfile, target: Sequence[int], gapo: int, gape: int, xtra: int = 0) -> AlignResult:
    """Align with unsigned-byte scores; an overflowing score is reported as 255."""
    if profile.size != 1:
        raise ValueError("profile does not hold byte scores")
    target = _check_codes(target, profile.m, "target")
    minsc, endsc = _limits(xtra)
    slen, shift = profile.slen, profile.shift
    gapoe = (gapo + gape) & 0xFF
    ge = gape & 0xFF
    zero = [0] * 16
    e_vecs = [zero] * slen
    h0 = [zero] * slen
    h1 = [zero] * slen
    hmax = [zero] * slen
    gmax, te = 0, -1
    marks: List[List[int]] = []
    r = AlignResult()
    for i, t in enumerate(target):
        s = profile.vectors[t]
        f = zero
        vmax = zero
        h = [0] + h0[slen - 1][:-1]
        for j in range(slen):
            h = [max(min(x + y, 255) - shift, 0) for x, y in zip(h, s[j])]
            e = e_vecs[j]
            h = [max(a, b, c) for a, b, c in zip(h, e, f)]
            vmax = [max(a, b) for a, b in zip(vmax, h)]
            h1[j] = h
            hg = _sub_u(h, gapoe)
            e_vecs[j] = [max(a, b) for a, b in zip(_sub_u(e, ge), hg)]
            f = [max(a, b) for a, b in zip(_sub_u(f, ge), hg)]
            h = h0[j]
        done = False
        for _ in range(16):
            f = [0] + f[:-1]
            for j in range(slen):
                h = [max(a, b) for a, b in zip(h1[j], f)]
                h1[j] = h
                hg = _sub_u(h, gapoe)
                f = _sub_u(f, ge)
                if all(a <= b for a, b in zip(f, hg)):
                    done = True
                    break
            if done:
                break
        imax = max(vmax) & 0xFF
        _mark(marks, imax, i, minsc)
        if imax > gmax:
            gmax, te = imax, i
            hmax = list(h1)
            if gmax + shift >= 255 or gmax >= endsc:
                break
        h0, h1 = h1, h0
    r.score = gmax if gmax + shift < 255 else 255
    r.te = te
    if r.score != 255:
        _finish(r, hmax, slen, 16, 0xFF, marks, te, profile.max)
    return r


def _to_s16(x: int) -> int:
    return x - 0x10000 if x >= 0x8000 else x


def _subs_u16(vec: Vector, amount: int) -> Vector:
    out = []
    for x in vec:
        ux = x & 0xFFFF
        out.append(_to_s16(ux - amount if ux > amount else 0))
    return out


def align_i16(profile: QueryProfile, target: Sequence[int], gapo: int, gape: int, xtra: int = 0) -> AlignResult:
    """Align with signed 16-bit scores."""
    if profile.size != 2:
        raise ValueError("profile does not hold 16-bit scores")
    target = _check_codes(target, profile.m, "target")
    minsc, endsc = _limits(xtra)
    slen = profile.slen
    gapoe = (gapo + gape) & 0xFFFF
    ge = gape & 0xFFFF
    zero = [0] * 8
    e_vecs = [zero] * slen
    h0 = [zero] * slen
    h1 = [zero] * slen
    hmax = [zero] * slen
    gmax, te = 0, -1
    marks: List[List[int]] = []
    r = AlignResult()
    for i, t in enumerate(target):
        s = profile.vectors[t]
        f = zero
        vmax = zero
        h = [0] + h0[slen - 1][:-1]
        for j in range(slen):
            h = [min(max(x + y, -0x8000), 0x7FFF) for x, y in zip(h, s[j])]
            e = e_vecs[j]
            h = [max(a, b, c) for a, b, c in zip(h, e, f)]
            vmax = [max(a, b) for a, b in zip(vmax, h)]
            h1[j] = h
            hg = _subs_u16(h, gapoe)
            e_vecs[j] = [max(a, b) for a, b in zip(_subs_u16(e, ge), hg)]
            f = [max(a, b) for a, b in zip(_subs_u16(f, ge), hg)]
            h = h0[j]
        done = False
        for _ in range(16):
            f = [0] + f[:-1]
            for j in range(slen):
                h = [max(a, b) for a, b in zip(h1[j], f)]
                h1[j] = h
                hg = _subs_u16(h, gapoe)
                f = _subs_u16(f, ge)
                if not any(a > b for a, b in zip(f, hg)):
                    done = True
                    break
            if done:
                break
        imax = max(vmax) & 0xFFFF
        _mark(marks, imax, i, minsc)
        if imax > gmax:
            gmax, te = imax, i
            hmax = list(h1)
            if gmax >= endsc:
                break
        h0, h1 = h1, h0
    r.score = gmax
    r.te = te
    _finish(r, hmax, slen, 8, 0xFFFF, marks, te, profile.max)
    return r


def align(
    query: Sequence[int],
    target: Sequence[int],
    m: int,
    mat: Sequence[int],
    gapo: int,
    gape: int,
    xtra: int = 0,
    profile: Optional[QueryProfile] = None,
) -> AlignResult:
    """Locally align ``query`` to ``target``.

    ``xtra`` combines the X* flags with a score threshold in its low 16 bits.
    A ``profile`` built for ``query`` may be passed to avoid rebuilding it;
    otherwise one is built with byte scores if ``XBYTE`` is set.
    """
    query = list(query)
    target = list(target)
    if profile is None:
        profile = QueryProfile(1 if xtra & XBYTE else 2, query, m, mat)
    func = align_i16 if profile.size == 2 else align_u8
    r = func(profile, target, gapo, gape, xtra)
    if not xtra & XSTART or (xtra & XSUBO and r.score < (xtra & 0xFFFF)):
        return r
    if r.qe < 0:
        return r
    qend, tend = r.qe + 1, r.te + 1
    rev_query = query[:qend][::-1]
    rev_target = target[:tend][::-1] + target[tend:]
    rev_profile = QueryProfile(profile.size, rev_query, m, mat)
    rr = func(rev_profile, rev_target, gapo, gape, XSTOP | r.score)
    if r.score == rr.score:
        r.tb = r.te - rr.te
        r.qb = r.qe - rr.qe
    return r