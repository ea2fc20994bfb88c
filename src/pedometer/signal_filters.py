"""
Second-order IIR filters for the pedometer front end.

This module provides the filter primitive shared by both stages of the pipeline:
1. Low-pass smoother (3 Hz) applied to vertical acceleration, sample by sample
2. Lead-lag derivative filter (4 Hz) applied to each frame of smoothed samples

Filters are causal and keep their own input/output histories so that a stream
can be processed one sample (or one frame) at a time.
"""

from dataclasses import dataclass
from typing import Sequence
import numpy as np
from scipy.signal import freqz, lfilter, lfiltic


@dataclass(frozen=True)
class FilterCoefficients:
    """
    Coefficients of a second-order section.

    y(n) = b0*x(n) + b1*x(n-1) + b2*x(n-2) - a1*y(n-1) - a2*y(n-2)
    """
    name: str
    b0: float
    b1: float
    b2: float
    a1: float
    a2: float
    delay_sec: float  # Approximate group delay in the passband

    @property
    def b(self) -> np.ndarray:
        return np.array([self.b0, self.b1, self.b2])

    @property
    def a(self) -> np.ndarray:
        return np.array([1.0, self.a1, self.a2])


LOWPASS_3HZ = FilterCoefficients(
    name='Low-pass 3 Hz',
    b0=7.2269463e-3,
    b1=1.4453893e-2,
    b2=7.2269463e-3,
    a1=-1.7455322,
    a2=7.7444003e-1,
    delay_sec=0.075,
)

LEADLAG_4HZ = FilterCoefficients(
    name='Lead-lag 4 Hz',
    b0=2.5369363,
    b1=0.0,
    b2=-2.5369363,
    a1=-1.6641912,
    a2=0.71297842,
    delay_sec=0.060,
)


def group_delay_samples(fs: int, delay_sec: float, max_samples: int = 20) -> int:
    """
    Convert a group-delay constant to a whole number of samples.

    Args:
        fs: Sampling rate in Hz
        delay_sec: Group delay in seconds
        max_samples: Upper bound on the result

    Returns:
        floor(fs * delay_sec) + 1, capped at max_samples
    """
    return min(int(fs * delay_sec) + 1, max_samples)


class SecondOrderFilter:
    """
    Causal second-order IIR filter with explicit input/output histories.

    Coefficients are fixed at construction; the two most recent inputs and
    outputs change on every call.
    """

    def __init__(self, coefficients: FilterCoefficients, fs: int = 104, max_delay_samples: int = 20):
        """
        Initialize the filter.

        Args:
            coefficients: Section coefficients and delay constant
            fs: Sampling rate in Hz
            max_delay_samples: Cap applied to the group delay in samples
        """
        self.coefficients = coefficients
        self.fs = fs
        self.delay_samples = group_delay_samples(fs, coefficients.delay_sec, max_delay_samples)

        self.prev_in = 0.0
        self.prev_prev_in = 0.0
        self.prev_out = 0.0
        self.prev_prev_out = 0.0

    def filter_sample(self, sample: float) -> float:
        """
        Filter a single sample and advance the histories.

        Args:
            sample: Input sample value

        Returns:
            Filtered sample value
        """
        c = self.coefficients
        out = (c.b0 * sample + c.b1 * self.prev_in + c.b2 * self.prev_prev_in
               - c.a1 * self.prev_out - c.a2 * self.prev_prev_out)

        self.prev_prev_in = self.prev_in
        self.prev_in = sample
        self.prev_prev_out = self.prev_out
        self.prev_out = out
        return out

    def filter_batch(self, samples: Sequence[float]) -> np.ndarray:
        """
        Filter a batch of samples, continuing from the current histories.

        Equivalent to calling filter_sample on each element in order.

        Args:
            samples: Array of input samples

        Returns:
            Array of filtered samples
        """
        samples = np.asarray(samples, dtype=float)
        if samples.size == 0:
            return np.empty(0)

        c = self.coefficients
        zi = lfiltic(c.b, c.a,
                     y=[self.prev_out, self.prev_prev_out],
                     x=[self.prev_in, self.prev_prev_in])
        filtered, _ = lfilter(c.b, c.a, samples, zi=zi)

        if samples.size >= 2:
            self.prev_prev_in, self.prev_in = float(samples[-2]), float(samples[-1])
            self.prev_prev_out, self.prev_out = float(filtered[-2]), float(filtered[-1])
        else:
            self.prev_prev_in, self.prev_in = self.prev_in, float(samples[0])
            self.prev_prev_out, self.prev_out = self.prev_out, float(filtered[0])
        return filtered

    def reset(self):
        """Reset filter histories to zero (useful when starting a new stream)."""
        self.prev_in = 0.0
        self.prev_prev_in = 0.0
        self.prev_out = 0.0
        self.prev_prev_out = 0.0

    def frequency_response(self, freqs_hz: Sequence[float]) -> np.ndarray:
        """
        Complex frequency response at the given frequencies.

        Args:
            freqs_hz: Frequencies in Hz

        Returns:
            Array of complex gains
        """
        c = self.coefficients
        _, response = freqz(c.b, c.a, worN=np.asarray(freqs_hz, dtype=float), fs=self.fs)
        return response

    def get_info(self) -> dict:
        """
        Get filter information for display.

        Returns:
            Dictionary with filter details
        """
        c = self.coefficients
        return {
            'type': c.name,
            'delay': f'{c.delay_sec * 1000:.0f} ms ({self.delay_samples} samples)',
            'description': f'2nd order IIR, b=({c.b0:.6g}, {c.b1:.6g}, {c.b2:.6g}), '
                           f'a=(1, {c.a1:.6g}, {c.a2:.6g})',
        }


def lowpass_filter(fs: int = 104, max_delay_samples: int = 20) -> SecondOrderFilter:
    """Create the 3 Hz smoothing filter."""
    return SecondOrderFilter(LOWPASS_3HZ, fs, max_delay_samples)


def derivative_filter(fs: int = 104, max_delay_samples: int = 20) -> SecondOrderFilter:
    """Create the 4 Hz lead-lag filter that approximates d/dt."""
    return SecondOrderFilter(LEADLAG_4HZ, fs, max_delay_samples)
