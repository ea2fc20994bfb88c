"""Accelerometer step counting and motion classification."""

from .config import PedometerConfig, UIConfig
from .signal_filters import (
    FilterCoefficients,
    SecondOrderFilter,
    LOWPASS_3HZ,
    LEADLAG_4HZ,
    group_delay_samples,
    lowpass_filter,
    derivative_filter
)
from .frame_buffer import FrameBuffer, OverlapTail
from .step_detector import PeakPairDetector, DetectorState, SearchMode, BatchDetection
from .motion_classifier import MotionType, StepCounters, classify_motion
from .pedometer import Pedometer, SampleResult, SessionSummary
from .data_loader import (
    RecordingLoader,
    ResultWriter,
    PedometerIOError,
    InputFileError,
    OutputFileError,
    TruncatedHeaderError,
    list_recordings,
    read_results
)
from .stream_processor import PlaybackWindow
from .chart_renderer import ChartRenderer
from .ui_components import PedometerUI
from .metrics_display import (
    calculate_session_metrics,
    format_metric_value,
    display_step_metrics,
    display_empty_metrics
)


__all__ = [
    'PedometerConfig',
    'UIConfig',
    'FilterCoefficients',
    'SecondOrderFilter',
    'LOWPASS_3HZ',
    'LEADLAG_4HZ',
    'group_delay_samples',
    'lowpass_filter',
    'derivative_filter',
    'FrameBuffer',
    'OverlapTail',
    'PeakPairDetector',
    'DetectorState',
    'SearchMode',
    'BatchDetection',
    'MotionType',
    'StepCounters',
    'classify_motion',
    'Pedometer',
    'SampleResult',
    'SessionSummary',
    'RecordingLoader',
    'ResultWriter',
    'PedometerIOError',
    'InputFileError',
    'OutputFileError',
    'TruncatedHeaderError',
    'list_recordings',
    'read_results',
    'PlaybackWindow',
    'ChartRenderer',
    'PedometerUI',
    'calculate_session_metrics',
    'format_metric_value',
    'display_step_metrics',
    'display_empty_metrics'
]
