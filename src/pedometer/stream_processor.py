"""Rolling playback windows for streaming pedometer output."""

from collections import deque
from typing import Dict, List, Optional, Tuple

from .config import UIConfig
from .pedometer import SampleResult


class PlaybackWindow:
    """Keeps the most recent samples and detected extrema for display."""

    def __init__(self, config: UIConfig, sampling_rate: int):
        """
        Initialize the playback window.

        Args:
            config: UI configuration object
            sampling_rate: Sensor sampling rate in Hz
        """
        self.config = config
        self.window_size = max(1, int(config.WINDOW_SECONDS * sampling_rate))
        self.times = deque(maxlen=self.window_size)
        self.raw = deque(maxlen=self.window_size)
        self.smoothed = deque(maxlen=self.window_size)
        self.maxima: deque = deque()  # (timestamp, value)
        self.minima: deque = deque()
        self.y_range: Optional[List[float]] = None

    def reset(self):
        self.times.clear()
        self.raw.clear()
        self.smoothed.clear()
        self.maxima.clear()
        self.minima.clear()
        self.y_range = None

    def update(self, timestamp: float, raw_value: float, result: SampleResult):
        """
        Add one sample and any extrema committed by the frame it completed.

        Args:
            timestamp: Sample time in seconds
            raw_value: Unfiltered vertical acceleration
            result: Pedometer output for the sample
        """
        self.times.append(timestamp)
        self.raw.append(raw_value)
        self.smoothed.append(result.smoothed)

        if result.detection is not None:
            self.maxima.extend(result.detection.maxima)
            self.minima.extend(result.detection.minima)

        # Drop extrema that have scrolled out of view
        window_start = self.times[0]
        for events in (self.maxima, self.minima):
            while events and events[0][0] < window_start:
                events.popleft()

    def get_current_data(self) -> Dict:
        """
        Get current windowed data.

        Returns:
            Dictionary with times, raw and smoothed values, extrema and y range
        """
        return {
            'times': list(self.times),
            'raw': list(self.raw),
            'smoothed': list(self.smoothed),
            'maxima': list(self.maxima),
            'minima': list(self.minima),
            'y_range': list(self.y_range) if self.y_range else self.calculate_y_range(list(self.raw)),
        }

    def calculate_y_range(self, values: List[float]) -> List[float]:
        """
        Calculate a y-axis range with padding.

        Args:
            values: Values to cover

        Returns:
            List of [min_value, max_value] for y-axis range
        """
        if not values:
            return [0.0, 1.0]

        data_min, data_max = min(values), max(values)
        data_range = data_max - data_min
        min_range = self.config.ACCEL_MIN_RANGE

        if data_range < min_range:
            # Center the range if data range is too small
            center = (data_max + data_min) / 2
            return [center - min_range / 2, center + min_range / 2]

        padding = data_range * self.config.Y_AXIS_PADDING
        return [data_min - padding, data_max + padding]

    def update_y_range(self) -> List[float]:
        """
        Grow the y range when current data exceeds it; never shrink while streaming.

        Returns:
            The current y range
        """
        values = list(self.raw) + list(self.smoothed)
        needed = self.calculate_y_range(values)
        if self.y_range is None:
            self.y_range = needed
        else:
            self.y_range = [min(self.y_range[0], needed[0]), max(self.y_range[1], needed[1])]
        return list(self.y_range)

    def x_range(self, fallback_start: float = 0.0) -> Tuple[float, float]:
        """Scrolling x-axis range covering the configured window length."""
        duration = self.config.WINDOW_SECONDS
        if self.times:
            current = self.times[-1]
            return max(current - duration, 0.0), max(current, duration)
        return fallback_start, fallback_start + duration
