"""Chart rendering utilities for pedometer playback."""

import plotly.graph_objects as go
from typing import List, Tuple, Optional

from .config import UIConfig


class ChartRenderer:
    """Handles creation and styling of Plotly charts for vertical acceleration."""

    def __init__(self, ui_config: UIConfig):
        """
        Initialize the chart renderer.

        Args:
            ui_config: UI configuration object
        """
        self.config = ui_config

    def create_signal_chart(
        self,
        times: List[float],
        raw: List[float],
        smoothed: List[float],
        y_range: List[float],
        maxima: Optional[List[Tuple[float, float]]] = None,
        minima: Optional[List[Tuple[float, float]]] = None,
        x_range: Optional[Tuple[float, float]] = None,
        motion_label: Optional[str] = None,
    ) -> go.Figure:
        """
        Create a chart of raw and smoothed acceleration with detected extrema.

        Args:
            times: Time values (x-axis)
            raw: Unfiltered vertical acceleration
            smoothed: Low-pass filtered vertical acceleration
            y_range: Y-axis range [min, max]
            maxima: Committed maxima as (timestamp, value)
            minima: Committed minima (one per step) as (timestamp, value)
            x_range: Optional x-axis range for a scrolling window
            motion_label: Current motion class, used for the title and line colour

        Returns:
            Plotly Figure object
        """
        smoothed_color = self.config.MOTION_COLORS.get(motion_label, self.config.SMOOTHED_COLOR)

        fig = go.Figure()

        fig.add_trace(go.Scatter(
            x=times,
            y=raw,
            mode='lines',
            line=dict(color=self.config.RAW_COLOR, width=1),
            name='Raw Acc Y',
            hoverinfo='skip'
        ))
        fig.add_trace(go.Scatter(
            x=times,
            y=smoothed,
            mode='lines',
            line=dict(color=smoothed_color, width=self.config.CHART_LINE_WIDTH),
            name='Smoothed Acc Y'
        ))

        if maxima:
            fig.add_trace(go.Scatter(
                x=[t for t, _ in maxima],
                y=[v for _, v in maxima],
                mode='markers',
                marker=dict(symbol='triangle-up', size=8, color='rgba(0, 0, 0, 0.5)'),
                name='Maximum',
                hoverinfo='skip'
            ))
        if minima:
            fig.add_trace(go.Scatter(
                x=[t for t, _ in minima],
                y=[v for _, v in minima],
                mode='markers',
                marker=dict(symbol='circle', size=7, color='rgba(0, 0, 0, 0.7)'),
                name='Step (minimum)',
                hoverinfo='skip'
            ))

        fig.update_layout(
            title=motion_label or None,
            height=self.config.CHART_HEIGHT,
            margin=self.config.CHART_MARGIN,
            xaxis_title="Time (s)",
            yaxis_title="Acceleration Y (m/s²)",
            showlegend=True,
            legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
            transition={'duration': 0},
            uirevision='constant',
            hovermode=False,
            dragmode=False,
            plot_bgcolor='white',
            paper_bgcolor='white',
        )

        fig.update_xaxes(
            range=list(x_range) if x_range else None,
            fixedrange=True,
            showgrid=True,
            gridcolor='rgba(220, 220, 220, 0.3)',
            zeroline=False,
            type='linear'
        )
        fig.update_yaxes(
            range=y_range,
            fixedrange=True,
            showgrid=True,
            gridcolor='rgba(220, 220, 220, 0.3)',
            zeroline=True,
            zerolinecolor='rgba(200, 200, 200, 0.5)',
            type='linear'
        )

        return fig

    def downsample_data(
        self,
        times: List[float],
        values: List[float],
        factor: int
    ) -> Tuple[List[float], List[float]]:
        """
        Downsample data for display performance.

        Args:
            times: List of time values
            values: List of sensor values
            factor: Downsampling factor (keep every Nth point)

        Returns:
            Tuple of (downsampled_times, downsampled_values)
        """
        return times[::factor], values[::factor]
