"""Motion type classification from step amplitude and frequency."""

from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Dict, Optional

from .config import PedometerConfig


class MotionType(IntEnum):
    """Motion classes with their numeric codes in result files."""
    STATIC = 0
    WALK = 1
    HOP = 2
    RUN = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> 'MotionType':
        for motion, name in _LABELS.items():
            if name == label.strip().upper():
                return motion
        raise ValueError(f"Unknown motion label: {label!r}")


_LABELS = {
    MotionType.STATIC: 'STATIONARY',
    MotionType.WALK: 'WALKING',
    MotionType.HOP: 'HOPPING',
    MotionType.RUN: 'RUNNING',
}


def classify_motion(amp_est: float, freq_est: float, config: Optional[PedometerConfig] = None) -> MotionType:
    """
    Map estimated step amplitude and frequency to a motion type.

    Small amplitude is stationary or walking depending on frequency, large
    amplitude is running or hopping. In between, fast steps are running and
    everything else walking.

    Args:
        amp_est: Estimated peak-to-trough amplitude (m/s^2)
        freq_est: Estimated step frequency (Hz)
        config: Thresholds (defaults to PedometerConfig())

    Returns:
        MotionType for the frame
    """
    cfg = config or PedometerConfig()

    if amp_est <= cfg.SMALL_AMP:
        if freq_est <= cfg.SLOW_FREQ:
            return MotionType.STATIC
        return MotionType.WALK
    if amp_est >= cfg.LARGE_AMP:
        if freq_est >= cfg.FAST_FREQ:
            return MotionType.RUN
        return MotionType.HOP
    if freq_est >= cfg.FAST_FREQ:
        return MotionType.RUN
    return MotionType.WALK


@dataclass
class StepCounters:
    """Cumulative step counts, overall and per motion type."""

    total: int = 0
    walk: int = 0
    run: int = 0
    hop: int = 0

    def record(self, motion: MotionType, steps: int) -> int:
        """
        Attribute steps to a motion type.

        Stationary frames attribute nothing, so the total always equals
        walk + run + hop.

        Args:
            motion: Motion type of the frame
            steps: Steps completed in the frame

        Returns:
            Number of steps added to the total
        """
        if steps <= 0 or motion is MotionType.STATIC:
            return 0
        if motion is MotionType.WALK:
            self.walk += steps
        elif motion is MotionType.RUN:
            self.run += steps
        elif motion is MotionType.HOP:
            self.hop += steps
        self.total += steps
        return steps

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
