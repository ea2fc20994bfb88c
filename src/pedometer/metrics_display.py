"""Metrics display helpers for the pedometer playback UI."""

from typing import Optional, Dict, Any

from .pedometer import Pedometer


MOTION_EMOJI = {
    'STATIONARY': "🧍",
    'WALKING': "🚶",
    'RUNNING': "🏃",
    'HOPPING': "🦘",
}


def calculate_session_metrics(pedometer: Pedometer) -> Dict[str, Any]:
    """
    Collect the values shown in the metrics panel.

    Args:
        pedometer: Pedometer being streamed

    Returns:
        Dictionary of counters, current label and latest estimates
    """
    detection = pedometer.last_detection
    freq_est = detection.freq_est if detection is not None else None
    return {
        'total_steps': pedometer.counters.total,
        'walk_steps': pedometer.counters.walk,
        'run_steps': pedometer.counters.run,
        'hop_steps': pedometer.counters.hop,
        'motion': pedometer.label,
        'amp_est': detection.amp_est if detection is not None else None,
        'freq_est': freq_est,
        # One minimum per step
        'cadence': freq_est * 60.0 if freq_est else None,
    }


def format_metric_value(value: Optional[float], unit: str, precision: int = 1) -> str:
    """
    Format a metric value, or a placeholder when it is not available yet.

    Args:
        value: The metric value to format
        unit: The unit string to append
        precision: Decimal places

    Returns:
        Formatted metric string
    """
    if value is None:
        return "--"
    return f"{value:.{precision}f}{unit}"


def display_step_metrics(placeholders: Dict[str, Any], metrics: Dict[str, Any],
                         tooltips: Dict[str, str]):
    """
    Display step counters and the current motion class.

    Args:
        placeholders: Dictionary of Streamlit placeholder objects
        metrics: Output of calculate_session_metrics
        tooltips: Tooltip text dictionary
    """
    emoji = MOTION_EMOJI.get(metrics['motion'], "")
    placeholders['motion'].metric("Motion", value=f"{emoji} {metrics['motion']}", help=tooltips['motion'])
    placeholders['total_steps'].metric("Total Steps", value=metrics['total_steps'])
    placeholders['cadence'].metric("Cadence (steps/min)", value=format_metric_value(metrics['cadence'], ""),
                                   help=tooltips['cadence'])
    placeholders['amplitude'].metric("Step Amplitude", value=format_metric_value(metrics['amp_est'], " m/s²"),
                                     help=tooltips['amplitude'])
    placeholders['walk_steps'].metric("Walking", value=metrics['walk_steps'])
    placeholders['run_steps'].metric("Running", value=metrics['run_steps'])
    placeholders['hop_steps'].metric("Hopping", value=metrics['hop_steps'])


def display_empty_metrics(placeholders: Dict[str, Any], tooltips: Dict[str, str]):
    """
    Display empty metric placeholders before the first stream.

    Args:
        placeholders: Dictionary of Streamlit placeholder objects
        tooltips: Tooltip text dictionary
    """
    placeholders['motion'].metric("Motion", value="--", help=tooltips['motion'])
    placeholders['total_steps'].metric("Total Steps", value="--")
    placeholders['cadence'].metric("Cadence (steps/min)", value="--", help=tooltips['cadence'])
    placeholders['amplitude'].metric("Step Amplitude", value="--", help=tooltips['amplitude'])
    for key, title in [('walk_steps', "Walking"), ('run_steps', "Running"), ('hop_steps', "Hopping")]:
        placeholders[key].metric(title, value="--")
