"""Configuration settings for the pedometer pipeline and playback app."""

from pathlib import Path
from dataclasses import dataclass, field

from .signal_filters import LEADLAG_4HZ, group_delay_samples


@dataclass
class PedometerConfig:
    """Configuration for sampling, framing and step detection."""

    SAMPLING_RATE: int = 104  # Hz
    BUFF_FACTOR: int = 2  # Detector runs this many times per second
    MAX_TC_SAMPLES: int = 20  # Cap on filter group-delay samples

    # Peak-pair detection
    EPSILON: float = 1e-6  # Dead-band on the derivative
    NO_DETECT_DUR_SEC: float = 0.2  # Minimum time between extrema of the same kind
    CLOSE_TO_ZERO: float = 1.5  # Minimum peak height and peak-to-trough separation
    MAX_TIME_PERIOD_SEC: float = 1.5  # Maximum duration credited to one step

    # Motion classification
    SMALL_AMP: float = 5.0  # m/s^2
    LARGE_AMP: float = 15.0  # m/s^2
    SLOW_FREQ: float = 0.5  # Hz
    FAST_FREQ: float = 2.2  # Hz

    # True reads peak values K samples back, nearer where the derivative crossing really sits
    COMPENSATE_DERIVATIVE_DELAY: bool = False

    # Recording files
    HEADER_LINES: int = 2

    @property
    def FRAME_LENGTH(self) -> int:
        """Number of smoothed samples per detector run."""
        return self.SAMPLING_RATE // self.BUFF_FACTOR

    @property
    def SAMPLE_INTERVAL(self) -> float:
        return 1.0 / self.SAMPLING_RATE

    def validate(self) -> None:
        """
        Check that the framing parameters are consistent.

        Raises:
            ValueError: If the sampling rate or frame geometry is unusable
        """
        if self.SAMPLING_RATE <= 0:
            raise ValueError(f"Sampling rate must be positive, got {self.SAMPLING_RATE}")
        if self.BUFF_FACTOR <= 0:
            raise ValueError(f"Buffer factor must be positive, got {self.BUFF_FACTOR}")
        if self.FRAME_LENGTH < 2:
            raise ValueError(
                f"Frame length {self.FRAME_LENGTH} is too short "
                f"(sampling rate {self.SAMPLING_RATE} Hz, buffer factor {self.BUFF_FACTOR})"
            )
        if self.MAX_TC_SAMPLES < 1:
            raise ValueError(f"MAX_TC_SAMPLES must be at least 1, got {self.MAX_TC_SAMPLES}")
        overlap = group_delay_samples(self.SAMPLING_RATE, LEADLAG_4HZ.delay_sec, self.MAX_TC_SAMPLES)
        if overlap > self.FRAME_LENGTH:
            raise ValueError(
                f"Derivative delay of {overlap} samples does not fit in a frame of {self.FRAME_LENGTH} "
                f"(sampling rate {self.SAMPLING_RATE} Hz, buffer factor {self.BUFF_FACTOR})"
            )


@dataclass
class UIConfig:
    """Configuration for the playback app."""

    DATA_DIR: Path = Path("data/recordings")
    CHART_HEIGHT: int = 420
    CHART_LINE_WIDTH: float = 1.5
    CHART_MARGIN: dict = field(default_factory=lambda: dict(l=50, r=20, t=40, b=50))
    RAW_COLOR: str = 'rgba(120, 120, 120, 0.5)'
    SMOOTHED_COLOR: str = '#2a9d8f'  # Teal
    MOTION_COLORS: dict = field(default_factory=lambda: {
        'STATIONARY': '#8d99ae',
        'WALKING': '#2a9d8f',
        'RUNNING': '#e76f51',
        'HOPPING': '#d68032',
    })
    WINDOW_SECONDS: float = 6.0  # Visible playback window
    UPDATE_INTERVAL: int = 26  # Redraw every N samples (a quarter second at 104 Hz)
    DOWNSAMPLE_FACTOR: int = 2
    DEFAULT_SPEED: float = 1.0
    ACCEL_MIN_RANGE: float = 4.0
    Y_AXIS_PADDING: float = 0.2
