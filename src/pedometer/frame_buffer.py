"""Fixed-size sample framing for batched step detection."""

from typing import Tuple
import numpy as np


class FrameBuffer:
    """
    Collects (smoothed value, timestamp) pairs until a full frame is available.

    Storage is allocated once; entries [0, count) are valid. A full frame is
    drained in one go and the buffer starts again from index 0.
    """

    def __init__(self, capacity: int):
        """
        Initialize the frame buffer.

        Args:
            capacity: Number of samples per frame
        """
        if capacity < 1:
            raise ValueError(f"Frame capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.values = np.zeros(capacity)
        self.timestamps = np.zeros(capacity)
        self.count = 0

    def __len__(self) -> int:
        return self.count

    @property
    def is_full(self) -> bool:
        return self.count == self.capacity

    def push(self, value: float, timestamp: float) -> bool:
        """
        Append one sample.

        Args:
            value: Smoothed sample value
            timestamp: Sample time in seconds

        Returns:
            True if this sample completed a frame
        """
        if self.is_full:
            raise RuntimeError("Frame buffer is full; drain it before pushing more samples")
        self.values[self.count] = value
        self.timestamps[self.count] = timestamp
        self.count += 1
        return self.is_full

    def drain(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Return copies of the buffered values and timestamps and empty the buffer.

        Returns:
            Tuple of (values, timestamps), each of length count
        """
        values = self.values[:self.count].copy()
        timestamps = self.timestamps[:self.count].copy()
        self.count = 0
        return values, timestamps

    def reset(self):
        """Discard any buffered samples."""
        self.values[:] = 0.0
        self.timestamps[:] = 0.0
        self.count = 0


class OverlapTail:
    """
    The last few samples of the previous frame, prepended to the next one.

    The derivative filter lags the smoothed signal, so extrema found near the
    start of a frame belong to samples at the end of the previous frame.
    """

    def __init__(self, length: int):
        """
        Initialize a zero-filled tail.

        Args:
            length: Number of samples to carry between frames
        """
        self.length = length
        self.values = np.zeros(length)
        self.timestamps = np.zeros(length)

    def extend(self, values: np.ndarray, timestamps: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Prepend the carried samples to a frame.

        Args:
            values: Frame of smoothed values
            timestamps: Matching timestamps

        Returns:
            Tuple of (extended_values, extended_timestamps), each of length
            self.length + len(values)
        """
        return (np.concatenate([self.values, values]),
                np.concatenate([self.timestamps, timestamps]))

    def save(self, values: np.ndarray, timestamps: np.ndarray):
        """
        Keep the last samples of a frame for the next call.

        Args:
            values: Frame of smoothed values (at least self.length long)
            timestamps: Matching timestamps
        """
        if self.length == 0:
            return
        if len(values) < self.length:
            raise ValueError(f"Frame of {len(values)} samples is shorter than the tail ({self.length})")
        self.values[:] = values[-self.length:]
        self.timestamps[:] = timestamps[-self.length:]

    def reset(self):
        self.values[:] = 0.0
        self.timestamps[:] = 0.0
