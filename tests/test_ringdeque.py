import pytest

from kcore.ringdeque import RingDeque


def test_starts_empty_with_four_slots():
    q = RingDeque()
    assert len(q) == 0
    assert q.capacity() == 4


def test_push_shift_is_fifo():
    q = RingDeque()
    for v in range(10):
        q.push(v)
    assert [q.shift() for _ in range(10)] == list(range(10))
    assert len(q) == 0


def test_unshift_pop_is_fifo_from_the_other_end():
    q = RingDeque()
    for v in range(7):
        q.unshift(v)
    assert [q.pop() for _ in range(7)] == list(range(7))


def test_mixed_operations_keep_order():
    q = RingDeque()
    q.push(2)
    q.unshift(1)
    q.push(3)
    q.unshift(0)
    q.push(4)
    assert list(q) == [0, 1, 2, 3, 4]
    assert q.first() == 0
    assert q.last() == 4
    assert q[2] == 2
    assert q[-1] == 4


def test_grows_by_doubling():
    q = RingDeque()
    for v in range(5):
        q.push(v)
    assert q.capacity() == 8
    assert list(q) == [0, 1, 2, 3, 4]


def test_wraparound_survives_growth():
    q = RingDeque()
    for v in range(4):
        q.push(v)
    q.shift()
    q.shift()
    for v in range(4, 9):
        q.push(v)
    assert list(q) == list(range(2, 9))


def test_resize_shrink_preserves_contents():
    q = RingDeque()
    for v in range(20):
        q.push(v)
    for _ in range(17):
        q.shift()
    assert q.resize(2) == 2
    assert list(q) == [17, 18, 19]
    assert q.capacity() == 4


def test_resize_below_count_picks_smallest_fitting_size():
    q = RingDeque()
    for v in range(5):
        q.push(v)
    bits = q.resize(1)
    assert (1 << bits) > len(q)
    assert (1 << (bits - 1)) <= len(q)
    assert list(q) == list(range(5))


def test_resize_same_bits_is_unchanged():
    q = RingDeque()
    q.push("a")
    assert q.resize(2) == 2
    assert list(q) == ["a"]


def test_empty_operations_raise():
    q = RingDeque()
    with pytest.raises(IndexError):
        q.pop()
    with pytest.raises(IndexError):
        q.shift()
    with pytest.raises(IndexError):
        q.first()
    with pytest.raises(IndexError):
        q[0]


def test_negative_bits_rejected():
    with pytest.raises(ValueError):
        RingDeque().resize(-1)