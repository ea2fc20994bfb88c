"""Shared fixtures: synthetic vertical-acceleration recordings."""

import numpy as np
import pytest

from pedometer import PedometerConfig

FS = 104
GRAVITY = 9.81


def _rows(ary: np.ndarray, fs: int = FS):
    t = np.arange(len(ary)) / fs
    return [(float(ti), 0.0, float(a), 0.0, 0.0, 0.0, 0.0) for ti, a in zip(t, ary)]


@pytest.fixture
def config():
    return PedometerConfig()


@pytest.fixture
def constant_rows():
    """Rows of constant gravity on the vertical axis."""
    def make(n_samples: int, value: float = GRAVITY):
        return _rows(np.full(n_samples, value))
    return make


@pytest.fixture
def tone_rows():
    """Rows of gravity plus a sine starting at t = 0."""
    def make(freq: float, amp: float, duration: float):
        t = np.arange(int(round(duration * FS)) + 1) / FS
        return _rows(GRAVITY + amp * np.sin(2 * np.pi * freq * t))
    return make


@pytest.fixture
def tone_burst():
    """
    Rows of gravity with a sine burst between quiet sections.

    The quiet lead-in lets the smoothing filter settle before the burst, so
    every cycle of the burst is counted. Returns (rows, index of the first
    sample after the burst).
    """
    def make(freq: float, amp: float, duration: float,
             quiet_before: float = 1.0, quiet_after: float = 1.0):
        n_before = int(round(quiet_before * FS))
        n_tone = int(round(duration * FS))
        n_after = int(round(quiet_after * FS))
        ary = np.full(n_before + n_tone + n_after, GRAVITY)
        t_tone = np.arange(n_tone) / FS
        ary[n_before:n_before + n_tone] += amp * np.sin(2 * np.pi * freq * t_tone)
        return _rows(ary), n_before + n_tone
    return make
