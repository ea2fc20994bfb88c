"""Sample-at-a-time pedometer combining filtering, framing, detection and classification."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from .config import PedometerConfig
from .frame_buffer import FrameBuffer
from .motion_classifier import MotionType, StepCounters, classify_motion
from .signal_filters import lowpass_filter
from .step_detector import BatchDetection, PeakPairDetector

logger = logging.getLogger(__name__)

Sample = Tuple[float, float, float, float, float, float, float]


@dataclass(frozen=True)
class SampleResult:
    """Pedometer output after one input sample."""

    motion_type: MotionType
    step_count: int
    smoothed: float
    frame_processed: bool
    detection: Optional[BatchDetection] = None

    @property
    def label(self) -> str:
        return self.motion_type.label


@dataclass(frozen=True)
class SessionSummary:
    """Totals for a processed recording."""

    duration: float
    total_steps: int
    walk_steps: int
    run_steps: int
    hop_steps: int
    motion_type: MotionType

    def format(self) -> str:
        return (
            f"Total motion duration is {self.duration:f} sec, which contains approximately:\n"
            f" {self.total_steps} Total number of steps including\n"
            f" |---> {self.walk_steps} steps of WALKING, \n"
            f" |---> {self.run_steps} steps of RUNNING, and \n"
            f" |---> {self.hop_steps} steps of HOPPING."
        )


class Pedometer:
    """
    Step counter and motion classifier for one accelerometer stream.

    Only the vertical (y) acceleration and the timestamp drive the algorithm;
    the other channels are accepted so raw sensor rows can be passed through
    unchanged. Each instance owns all of its state, so independent streams
    need independent instances.
    """

    def __init__(self, config: Optional[PedometerConfig] = None):
        """
        Initialize the pedometer.

        Args:
            config: Pedometer configuration (defaults to PedometerConfig())
        """
        self.config = config or PedometerConfig()
        self.config.validate()

        self.lowpass = lowpass_filter(self.config.SAMPLING_RATE, self.config.MAX_TC_SAMPLES)
        self.frame = FrameBuffer(self.config.FRAME_LENGTH)
        self.detector = PeakPairDetector(self.config)
        self.counters = StepCounters()
        self.motion_type = MotionType.STATIC
        self.last_detection: Optional[BatchDetection] = None
        self.last_timestamp = 0.0

    def reset(self):
        """Reset all state (useful when starting a new stream)."""
        self.lowpass.reset()
        self.frame.reset()
        self.detector.reset()
        self.counters = StepCounters()
        self.motion_type = MotionType.STATIC
        self.last_detection = None
        self.last_timestamp = 0.0

    @property
    def label(self) -> str:
        return self.motion_type.label

    @property
    def step_count(self) -> int:
        return self.counters.total

    def push_sample(
        self,
        timestamp: float,
        arx: float,
        ary: float,
        arz: float,
        grx: float = 0.0,
        gry: float = 0.0,
        grz: float = 0.0,
    ) -> SampleResult:
        """
        Process one sensor sample.

        Args:
            timestamp: Sample time in seconds
            arx, ary, arz: Acceleration (m/s^2); only ary is used
            grx, gry, grz: Angular rate (rad/s); unused

        Returns:
            SampleResult with the current label and total step count
        """
        smoothed = self.lowpass.filter_sample(ary)
        self.last_timestamp = timestamp

        detection = None
        if self.frame.push(smoothed, timestamp):
            values, timestamps = self.frame.drain()
            detection = self._run_detector(values, timestamps)

        return SampleResult(
            motion_type=self.motion_type,
            step_count=self.counters.total,
            smoothed=smoothed,
            frame_processed=detection is not None,
            detection=detection,
        )

    def process_rows(self, rows: Iterable[Sample]) -> Iterator[SampleResult]:
        """
        Process a sequence of (timestamp, arx, ary, arz, grx, gry, grz) rows.

        Args:
            rows: Iterable of sample tuples in time order

        Yields:
            SampleResult for every row
        """
        for row in rows:
            yield self.push_sample(*row)

    def _run_detector(self, values, timestamps) -> BatchDetection:
        detection = self.detector.process_frame(values, timestamps)
        motion = classify_motion(detection.amp_est, detection.freq_est, self.config)
        self.counters.record(motion, detection.count_min)

        if motion is not self.motion_type:
            logger.info("Motion changed %s -> %s at %.2fs (amp %.2f, freq %.2f Hz)",
                        self.motion_type.label, motion.label, timestamps[-1],
                        detection.amp_est, detection.freq_est)
        self.motion_type = motion
        self.last_detection = detection
        return detection

    def summary(self, duration: Optional[float] = None) -> SessionSummary:
        """
        Summarise the session so far.

        Args:
            duration: Session duration in seconds; defaults to the last timestamp seen

        Returns:
            SessionSummary with per-class step counts
        """
        return SessionSummary(
            duration=self.last_timestamp if duration is None else duration,
            total_steps=self.counters.walk + self.counters.run + self.counters.hop,
            walk_steps=self.counters.walk,
            run_steps=self.counters.run,
            hop_steps=self.counters.hop,
            motion_type=self.motion_type,
        )
