import pytest

from kcore.align import (
    XBYTE,
    XSTART,
    XSUBO,
    AlignResult,
    QueryProfile,
    align,
    align_i16,
    align_u8,
)
from kcore.rng import Rng


def matrix(a=1, b=3):
    mat = []
    for i in range(4):
        mat.extend(a if i == j else -b for j in range(4))
        mat.append(0)
    mat.extend([0] * 5)
    return mat


MAT = matrix()


def random_seq(rng, n):
    return [rng.next_u64() % 4 for _ in range(n)]


def test_identical_sequences_i16():
    seq = [0, 1, 2, 3, 0, 1]
    r = align(seq, seq, 5, MAT, 5, 2)
    assert r.score == len(seq)
    assert r.te == len(seq) - 1
    assert r.qe == len(seq) - 1


def test_identical_sequences_u8():
    seq = [0, 1, 2, 3, 0, 1]
    r = align(seq, seq, 5, MAT, 5, 2, XBYTE)
    assert r.score == len(seq)
    assert (r.te, r.qe) == (len(seq) - 1, len(seq) - 1)


def test_no_match_gives_defaults():
    r = align([0, 0, 0], [3, 3, 3, 3, 3], 5, MAT, 5, 2)
    assert r.score == 0
    assert r.te == -1
    assert r.score2 == -1
    assert r.tb == -1 and r.qb == -1


def test_start_positions():
    query = [0, 1, 2, 3, 0, 1, 2, 3]
    target = [3, 3, 3] + query + [0, 0]
    for flags in (0, XBYTE):
        r = align(query, target, 5, MAT, 5, 2, XSTART | flags)
        assert r.score == len(query)
        assert r.te == 3 + len(query) - 1
        assert r.qe == len(query) - 1
        assert r.tb == 3
        assert r.qb == 0


def test_second_best_hit():
    query = [0, 1, 2, 3] * 4
    filler = [0] * 8
    target = query + filler + query
    r = align(query, target, 5, MAT, 5, 2, XSUBO | len(query))
    assert r.score == len(query)
    assert r.te == len(query) - 1
    assert r.score2 == len(query)
    assert r.te2 == len(target) - 1


def test_u8_saturation():
    seq = [0, 1, 2, 3] * 75
    r8 = align(seq, seq, 5, MAT, 5, 2, XBYTE)
    r16 = align(seq, seq, 5, MAT, 5, 2)
    assert r8.score == 255
    assert r8.qe == -1
    assert r16.score == len(seq)


def test_profile_reuse_matches_fresh():
    rng = Rng(7)
    query = random_seq(rng, 30)
    profile = QueryProfile(2, query, 5, MAT)
    for _ in range(3):
        target = random_seq(rng, 60)
        assert align(query, target, 5, MAT, 5, 2, 0, profile) == align(query, target, 5, MAT, 5, 2)


def test_direct_functions_agree_with_align():
    rng = Rng(11)
    query = random_seq(rng, 20)
    target = random_seq(rng, 40)
    assert align_u8(QueryProfile(1, query, 5, MAT), target, 5, 2) == align(query, target, 5, MAT, 5, 2, XBYTE)
    assert align_i16(QueryProfile(2, query, 5, MAT), target, 5, 2) == align(query, target, 5, MAT, 5, 2)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_random_invariants(seed):
    rng = Rng(seed)
    query = random_seq(rng, 25)
    target = random_seq(rng, 80)
    r = align(query, target, 5, MAT, 5, 2, XSTART | XSUBO | 1)
    assert r.score >= 1
    assert 0 <= r.qe < len(query)
    assert 0 <= r.te < len(target)
    assert r.score2 <= r.score
    assert 0 <= r.qb <= r.qe
    assert 0 <= r.tb <= r.te
    sub = align(query[r.qb:r.qe + 1], target[r.tb:r.te + 1], 5, MAT, 5, 2)
    assert sub.score == r.score


@pytest.mark.parametrize("seed", [5, 6])
def test_score_symmetric_under_reversal(seed):
    rng = Rng(seed)
    query = random_seq(rng, 12)
    target = query[3:9] + random_seq(rng, 10)
    forward = align(query, target, 5, MAT, 5, 2)
    backward = align(query[::-1], target[::-1], 5, MAT, 5, 2)
    assert forward.score == backward.score


def test_result_defaults():
    assert AlignResult() == AlignResult(0, -1, -1, -1, -1, -1, -1)


def test_empty_query_rejected():
    with pytest.raises(ValueError):
        align([], [0, 1], 5, MAT, 5, 2)


def test_code_out_of_range_rejected():
    with pytest.raises(ValueError):
        align([0, 7], [0, 1], 5, MAT, 5, 2)
    with pytest.raises(ValueError):
        align([0, 1], [0, 9], 5, MAT, 5, 2)


def test_short_matrix_rejected():
    with pytest.raises(ValueError):
        QueryProfile(2, [0, 1], 5, MAT[:10])


def test_profile_size_mismatch_rejected():
    with pytest.raises(ValueError):
        align_u8(QueryProfile(2, [0, 1], 5, MAT), [0, 1], 5, 2)
    with pytest.raises(ValueError):
        align_i16(QueryProfile(1, [0, 1], 5, MAT), [0, 1], 5, 2)


def test_profile_shift_and_max():
    profile = QueryProfile(1, [0, 1, 2], 5, MAT)
    assert profile.shift == 3
    assert profile.max == 1
    assert profile.slen == 1
    assert len(profile.vectors) == 5