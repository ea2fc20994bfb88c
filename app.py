"""
Streamlit app that replays accelerometer recordings through the pedometer.
Streams a recording at (a multiple of) real time, charting the smoothed vertical
acceleration with detected extrema and updating step counters as frames complete.
"""
import asyncio
import streamlit as st
import time

from pedometer import (
    PedometerConfig,
    UIConfig,
    Pedometer,
    RecordingLoader,
    PlaybackWindow,
    ChartRenderer,
    PedometerUI,
    PedometerIOError,
    list_recordings,
    calculate_session_metrics,
    display_step_metrics,
    display_empty_metrics,
)


TOOLTIPS = {
    'motion': "Class of the last detection frame: stationary, walking, running or hopping, "
              "from the estimated step amplitude and frequency.",
    'cadence': "Estimated step rate over the last frame. Walking ~90-120, running ~150-180.",
    'amplitude': "Average peak-to-trough swing of the smoothed vertical acceleration per step.",
}


# Initialize configurations and components
pedometer_config = PedometerConfig()
ui_config = UIConfig()

st.set_page_config(page_title="Pedometer playback")
ui = PedometerUI(ui_config)
renderer = ChartRenderer(ui_config)

# === UI Setup ===
ui.render_header()

recordings = list_recordings(ui_config.DATA_DIR)
selected_recording = ui.render_recording_selector(recordings)
speed, start_stream, stop_stream = ui.render_stream_controls()

pedometer = Pedometer(pedometer_config)
window = PlaybackWindow(ui_config, pedometer_config.SAMPLING_RATE)
ui.render_filter_info({
    'Smoothing': pedometer.lowpass,
    'Derivative': pedometer.detector.derivative_filter,
})

# === UI Placeholders ===
status = ui.create_status_placeholder()
st.subheader("Vertical acceleration")
chart = st.empty()
st.markdown("---")
metric_placeholders = ui.create_metric_placeholders()

# === Session State Initialization ===
for key, default in [('streaming', False), ('last_chart', None), ('last_metrics', None)]:
    if key not in st.session_state:
        st.session_state[key] = default


def render_frame():
    """Redraw the chart from the playback window."""
    data = window.get_current_data()
    times, raw = renderer.downsample_data(data['times'], data['raw'], ui_config.DOWNSAMPLE_FACTOR)
    _, smoothed = renderer.downsample_data(data['times'], data['smoothed'], ui_config.DOWNSAMPLE_FACTOR)
    fig = renderer.create_signal_chart(
        times, raw, smoothed,
        y_range=window.update_y_range(),
        maxima=data['maxima'],
        minima=data['minima'],
        x_range=window.x_range(),
        motion_label=pedometer.label,
    )
    st.session_state.last_chart = fig
    chart.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False})


# === Main Streaming Function ===
async def stream_recording(recording: str, playback_speed: float) -> None:
    """
    Stream a recording through the pedometer and update the UI.

    Args:
        recording: File name inside the data directory
        playback_speed: Multiple of real time
    """
    loader = RecordingLoader(ui_config.DATA_DIR / recording, pedometer_config)
    status.info(f"Loading {recording}...")
    try:
        df = loader.load()
    except PedometerIOError as e:
        status.error(str(e))
        st.session_state.streaming = False
        return

    pedometer.reset()
    window.reset()
    status.success(f"Streaming {len(df)} samples ({len(df) / pedometer_config.SAMPLING_RATE:.1f}s)")

    last_update_time = time.time()
    sample_count = 0

    for row_idx, sample in enumerate(loader.iter_samples(df)):
        if not st.session_state.streaming:
            status.warning("Stream stopped by user")
            break

        result = pedometer.push_sample(*sample)
        window.update(sample[0], sample[2], result)
        sample_count += 1

        # Only update charts every UPDATE_INTERVAL samples for better performance
        if sample_count >= ui_config.UPDATE_INTERVAL:
            render_frame()

            metrics = calculate_session_metrics(pedometer)
            st.session_state.last_metrics = metrics
            display_step_metrics(metric_placeholders, metrics, TOOLTIPS)

            elapsed_real_time = time.time() - last_update_time
            status.info(
                f"Sample {row_idx + 1}/{len(df)} | Time: {sample[0]:.2f}s | "
                f"Steps: {result.step_count} | {result.label}"
            )

            # Calculate sleep time accounting for rendering overhead
            target_update_time = ui_config.UPDATE_INTERVAL / pedometer_config.SAMPLING_RATE / playback_speed
            await asyncio.sleep(max(0, target_update_time - elapsed_real_time))

            last_update_time = time.time()
            sample_count = 0

    summary = pedometer.summary()
    status.success(
        f"Stream completed! {summary.total_steps} steps in {summary.duration:.1f}s "
        f"(walking {summary.walk_steps}, running {summary.run_steps}, hopping {summary.hop_steps})"
    )
    st.session_state.streaming = False


# Pre-populate UI with frozen/empty state before streaming starts
if not st.session_state.streaming:
    if st.session_state.last_chart is not None:
        chart.plotly_chart(st.session_state.last_chart, use_container_width=True,
                           config={'displayModeBar': False}, key='frozen_chart')
    if st.session_state.last_metrics is not None:
        display_step_metrics(metric_placeholders, st.session_state.last_metrics, TOOLTIPS)
    else:
        display_empty_metrics(metric_placeholders, TOOLTIPS)
        if not recordings:
            status.warning(f"No recordings found in {ui_config.DATA_DIR}")
        else:
            status.info("Ready to stream. Click 'Start Stream' to begin.")


# === Stream Control Logic ===
if start_stream and selected_recording:
    st.session_state.streaming = True
    asyncio.run(stream_recording(selected_recording, speed))

if stop_stream:
    st.session_state.streaming = False
    st.rerun()
