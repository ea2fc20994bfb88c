"""Peak-pair step detection on smoothed vertical acceleration."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .config import PedometerConfig
from .frame_buffer import OverlapTail
from .signal_filters import SecondOrderFilter, derivative_filter

logger = logging.getLogger(__name__)


class SearchMode(Enum):
    """Which extremum the detector is waiting for next."""
    SEARCHING_MAX = 'max'
    SEARCHING_MIN = 'min'


@dataclass
class DetectorState:
    """Detector state that survives from one frame to the next."""

    prev_max: float = 0.0
    prev_max_ts: float = 0.0
    prev_min: float = 0.0
    prev_min_ts: float = 0.0
    prev_acc_der: float = 0.0  # Last derivative sample of the previous frame
    prev_amp_est: float = 0.0
    prev_freq_est: float = 0.0
    amp_hold_count: int = 0  # Consecutive frames without a new minimum
    freq_hold_count: int = 0  # Consecutive frames without a new period

    @property
    def mode(self) -> SearchMode:
        """
        Current search mode.

        SEARCHING_MIN while the latest maximum is newer than the latest
        minimum. The period clamp moves timestamps without a commit, so it can
        flip the mode as well.
        """
        if self.prev_max_ts > self.prev_min_ts:
            return SearchMode.SEARCHING_MIN
        return SearchMode.SEARCHING_MAX


@dataclass
class ScanTotals:
    """Sums accumulated while scanning one frame."""

    period_sum: float = 0.0
    max_sum: float = 0.0
    min_sum: float = 0.0
    amp_sum: float = 0.0
    count_max: int = 0
    count_min: int = 0
    maxima: List[Tuple[float, float]] = field(default_factory=list)  # (timestamp, value)
    minima: List[Tuple[float, float]] = field(default_factory=list)


@dataclass(frozen=True)
class BatchDetection:
    """Result of running the detector over one frame."""

    count_max: int
    count_min: int
    amp_est: float
    freq_est: float
    period_est: float
    mean_max: Optional[float]
    mean_min: Optional[float]
    maxima: Tuple[Tuple[float, float], ...] = ()
    minima: Tuple[Tuple[float, float], ...] = ()

    @property
    def steps(self) -> int:
        """Each confirmed minimum completes one step."""
        return self.count_min


class PeakPairDetector:
    """
    Finds alternating maxima and minima of the smoothed vertical acceleration.

    Extrema are located at zero crossings of a lead-lag derivative estimate: a
    falling crossing marks a maximum, a rising crossing a minimum. Candidates
    are gated on dead time, peak height and peak-to-trough separation; every
    confirmed minimum after a maximum is one step. Per frame the detector also
    estimates the step amplitude and frequency used for motion classification.
    """

    def __init__(
        self,
        config: Optional[PedometerConfig] = None,
        derivative: Optional[SecondOrderFilter] = None,
    ):
        """
        Initialize the detector.

        Args:
            config: Pedometer configuration (defaults to PedometerConfig())
            derivative: Derivative filter; defaults to the 4 Hz lead-lag filter
        """
        self.config = config or PedometerConfig()
        self.config.validate()
        self.frame_length = self.config.FRAME_LENGTH
        self.derivative_filter = derivative or derivative_filter(
            self.config.SAMPLING_RATE, self.config.MAX_TC_SAMPLES
        )
        self.tail = OverlapTail(self.derivative_filter.delay_samples)
        self.state = DetectorState()

    def reset(self):
        """Reset all internal state."""
        self.derivative_filter.reset()
        self.tail.reset()
        self.state = DetectorState()

    @property
    def mode(self) -> SearchMode:
        return self.state.mode

    def process_frame(self, values: Sequence[float], timestamps: Sequence[float]) -> BatchDetection:
        """
        Run detection over one full frame of smoothed samples.

        Args:
            values: Smoothed vertical acceleration, frame_length samples
            timestamps: Sample times in seconds

        Returns:
            BatchDetection with counts and amplitude/frequency estimates
        """
        values = np.asarray(values, dtype=float)
        timestamps = np.asarray(timestamps, dtype=float)
        if len(values) != self.frame_length or len(timestamps) != self.frame_length:
            raise ValueError(
                f"Expected frames of {self.frame_length} samples, "
                f"got {len(values)} values and {len(timestamps)} timestamps"
            )

        derivative = self.derivative_filter.filter_batch(values)

        ext_values, ext_times = self.tail.extend(values, timestamps)
        offset = 0 if self.config.COMPENSATE_DERIVATIVE_DELAY else self.tail.length
        totals = self.scan(
            derivative,
            ext_values[offset:offset + self.frame_length],
            ext_times[offset:offset + self.frame_length],
        )
        self.tail.save(values, timestamps)

        detection = self._aggregate(totals)
        logger.debug(
            "Frame ending %.3fs: %d max, %d min, amp %.2f, freq %.2f Hz",
            timestamps[-1], detection.count_max, detection.count_min,
            detection.amp_est, detection.freq_est,
        )
        return detection

    def scan(
        self,
        derivative: Sequence[float],
        values: Sequence[float],
        timestamps: Sequence[float],
    ) -> ScanTotals:
        """
        Walk the derivative and commit extrema into the detector state.

        values[i] and timestamps[i] are the smoothed sample and time paired
        with derivative[i]; alignment is the caller's job.

        Args:
            derivative: Derivative estimate for the frame
            values: Smoothed values aligned with the derivative
            timestamps: Timestamps aligned with the derivative

        Returns:
            ScanTotals with sums and committed extrema
        """
        cfg = self.config
        state = self.state
        totals = ScanTotals()
        prev_der = state.prev_acc_der

        for cur, value, ts in zip(np.asarray(derivative, dtype=float).tolist(),
                                  np.asarray(values, dtype=float).tolist(),
                                  np.asarray(timestamps, dtype=float).tolist()):
            if state.mode is SearchMode.SEARCHING_MAX:
                # Falling zero crossing => maximum
                if cur < -cfg.EPSILON and prev_der >= 0.0:
                    if ts - state.prev_max_ts > cfg.NO_DETECT_DUR_SEC and abs(value) > cfg.CLOSE_TO_ZERO:
                        if ts > state.prev_max_ts + cfg.MAX_TIME_PERIOD_SEC:
                            state.prev_max_ts = ts - cfg.MAX_TIME_PERIOD_SEC
                        if value - state.prev_min > cfg.CLOSE_TO_ZERO:
                            totals.period_sum += ts - state.prev_max_ts
                            totals.max_sum += value
                            totals.count_max += 1
                            totals.maxima.append((ts, value))
                            state.prev_max_ts = ts
                            state.prev_max = value
            else:
                # Rising zero crossing => minimum
                if cur > cfg.EPSILON and prev_der <= 0.0:
                    if ts - state.prev_min_ts > cfg.NO_DETECT_DUR_SEC:
                        if ts > state.prev_min_ts + cfg.MAX_TIME_PERIOD_SEC:
                            state.prev_min_ts = ts - cfg.MAX_TIME_PERIOD_SEC
                        if state.prev_max - value > cfg.CLOSE_TO_ZERO:
                            totals.period_sum += ts - state.prev_min_ts
                            totals.min_sum += value
                            totals.amp_sum += state.prev_max - value
                            totals.count_min += 1
                            totals.minima.append((ts, value))
                            state.prev_min_ts = ts
                            state.prev_min = value
            prev_der = cur

        state.prev_acc_der = prev_der
        return totals

    def _aggregate(self, totals: ScanTotals) -> BatchDetection:
        """Turn frame sums into amplitude/frequency estimates, aging stale ones out."""
        cfg = self.config
        state = self.state

        if totals.count_min > 0:
            amp_est = totals.amp_sum / totals.count_min
            state.amp_hold_count = 0
        else:
            amp_est = state.prev_amp_est
            state.amp_hold_count += 1
        if state.amp_hold_count > cfg.BUFF_FACTOR:
            state.amp_hold_count = 0
            amp_est = 0.0

        detections = totals.count_max + totals.count_min
        period_est = totals.period_sum / detections if detections > 0 else 0.0
        if period_est > cfg.EPSILON:
            freq_est = 1.0 / period_est
            state.freq_hold_count = 0
        else:
            freq_est = state.prev_freq_est
            state.freq_hold_count += 1
        if state.freq_hold_count > cfg.BUFF_FACTOR:
            state.freq_hold_count = 0
            freq_est = 0.0

        state.prev_amp_est = amp_est
        state.prev_freq_est = freq_est

        return BatchDetection(
            count_max=totals.count_max,
            count_min=totals.count_min,
            amp_est=amp_est,
            freq_est=freq_est,
            period_est=period_est,
            mean_max=totals.max_sum / totals.count_max if totals.count_max else None,
            mean_min=totals.min_sum / totals.count_min if totals.count_min else None,
            maxima=tuple(totals.maxima),
            minima=tuple(totals.minima),
        )
