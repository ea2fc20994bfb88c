"""UI components for the Streamlit pedometer playback app."""

import streamlit as st
from typing import Dict, Optional, Tuple

from .config import UIConfig
from .signal_filters import SecondOrderFilter


class PedometerUI:
    """Handles rendering of UI components for the playback app."""

    def __init__(self, ui_config: UIConfig):
        """
        Initialize the UI component manager.

        Args:
            ui_config: UI configuration object
        """
        self.config = ui_config

    def render_header(self):
        """Render app title."""
        st.title("Step counting and motion classification")
        st.caption("Replays a recorded accelerometer stream through the pedometer")

    def render_recording_selector(self, recordings: list) -> Optional[str]:
        """
        Render recording selection dropdown.

        Args:
            recordings: List of available recording file names

        Returns:
            Selected file name or None
        """
        return st.selectbox(
            "Select Recording",
            recordings,
            index=0 if recordings else None
        )

    def render_stream_controls(self) -> Tuple[float, bool, bool]:
        """
        Render streaming control inputs.

        Returns:
            Tuple of (speed, start_clicked, stop_clicked)
        """
        speed = st.select_slider(
            "Playback speed",
            options=[0.5, 1.0, 2.0, 5.0, 10.0],
            value=self.config.DEFAULT_SPEED,
            help="Multiple of real time"
        )

        col1, col2 = st.columns([1, 1])
        with col1:
            start = st.button("▶ Start Stream")
        with col2:
            stop = st.button("⏹ Stop Stream")

        return speed, start, stop

    def render_filter_info(self, filters: Dict[str, SecondOrderFilter]):
        """
        Show the fixed filters used by the pipeline.

        Args:
            filters: Mapping of stage name to filter
        """
        with st.expander("Filters"):
            for stage, filt in filters.items():
                info = filt.get_info()
                st.markdown(f"**{stage}**: {info['type']}, delay {info['delay']}")
                st.caption(info['description'])

    def create_metric_placeholders(self) -> Dict[str, st.delta_generator.DeltaGenerator]:
        """
        Lay out the metrics panel.

        Returns:
            Dictionary of Streamlit placeholders keyed by metric name
        """
        st.subheader("Metrics")
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            motion = st.empty()
        with col2:
            total_steps = st.empty()
        with col3:
            cadence = st.empty()
        with col4:
            amplitude = st.empty()

        col_walk, col_run, col_hop = st.columns(3)
        with col_walk:
            walk_steps = st.empty()
        with col_run:
            run_steps = st.empty()
        with col_hop:
            hop_steps = st.empty()

        return {
            'motion': motion,
            'total_steps': total_steps,
            'cadence': cadence,
            'amplitude': amplitude,
            'walk_steps': walk_steps,
            'run_steps': run_steps,
            'hop_steps': hop_steps,
        }

    def create_status_placeholder(self) -> st.delta_generator.DeltaGenerator:
        """
        Create a placeholder for status messages.

        Returns:
            Streamlit empty placeholder
        """
        return st.empty()
