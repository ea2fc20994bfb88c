"""Tests for frame buffering and the overlap tail."""

import numpy as np
import pytest

from pedometer import FrameBuffer, OverlapTail


def test_push_reports_full_frame():
    buf = FrameBuffer(4)
    assert [buf.push(float(i), i / 104) for i in range(4)] == [False, False, False, True]
    assert buf.is_full
    assert len(buf) == 4


def test_drain_returns_copies_and_empties():
    buf = FrameBuffer(3)
    for i in range(3):
        buf.push(10.0 + i, 0.01 * i)
    values, timestamps = buf.drain()

    np.testing.assert_array_equal(values, [10.0, 11.0, 12.0])
    np.testing.assert_allclose(timestamps, [0.0, 0.01, 0.02])
    assert len(buf) == 0

    buf.push(99.0, 1.0)
    assert values[0] == 10.0


def test_push_on_full_buffer_raises():
    buf = FrameBuffer(1)
    buf.push(1.0, 0.0)
    with pytest.raises(RuntimeError):
        buf.push(2.0, 0.01)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        FrameBuffer(0)


def test_tail_starts_zeroed_and_prepends():
    tail = OverlapTail(2)
    values, timestamps = tail.extend(np.array([5.0, 6.0, 7.0]), np.array([1.0, 2.0, 3.0]))
    np.testing.assert_array_equal(values, [0.0, 0.0, 5.0, 6.0, 7.0])
    np.testing.assert_array_equal(timestamps, [0.0, 0.0, 1.0, 2.0, 3.0])


def test_tail_keeps_end_of_previous_frame():
    tail = OverlapTail(2)
    tail.save(np.array([5.0, 6.0, 7.0]), np.array([1.0, 2.0, 3.0]))
    values, timestamps = tail.extend(np.array([8.0]), np.array([4.0]))
    np.testing.assert_array_equal(values, [6.0, 7.0, 8.0])
    np.testing.assert_array_equal(timestamps, [2.0, 3.0, 4.0])

    tail.reset()
    values, _ = tail.extend(np.array([8.0]), np.array([4.0]))
    np.testing.assert_array_equal(values, [0.0, 0.0, 8.0])


def test_tail_longer_than_frame():
    with pytest.raises(ValueError):
        OverlapTail(3).save(np.array([1.0]), np.array([0.0]))
