"""Command line entry point: run the pedometer over a recording file."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import PedometerConfig
from .data_loader import PedometerIOError, RecordingLoader, ResultWriter
from .pedometer import Pedometer, SessionSummary

logger = logging.getLogger(__name__)


def process_recording(input_path: Path, output_path: Path,
                      config: Optional[PedometerConfig] = None) -> SessionSummary:
    """
    Run the pedometer over a recording and write per-sample results.

    Args:
        input_path: Recording CSV (two header lines, then sensor rows)
        output_path: Result CSV to create
        config: Pedometer configuration

    Returns:
        SessionSummary for the recording

    Raises:
        PedometerIOError: If either file cannot be used
    """
    config = config or PedometerConfig()
    loader = RecordingLoader(input_path, config)
    df = loader.load()
    pedometer = Pedometer(config)

    with ResultWriter(output_path) as writer:
        for row in df.iter_rows(named=True):
            result = pedometer.push_sample(
                row['timestamp'], row['arx'], row['ary'], row['arz'],
                row['grx'], row['gry'], row['grz'],
            )
            writer.write(row, result)

    duration = df['timestamp'][-1] if len(df) else 0.0
    summary = pedometer.summary(duration)
    logger.info("Wrote %d result rows to %s", len(df), output_path)
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(
        description="Count steps and classify motion from accelerometer recordings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process a recording at the default 104 Hz
  pedometer sensor_data.csv results.csv

  # Recording sampled at 52 Hz, with per-frame debug output
  pedometer sensor_data.csv results.csv --sampling-rate 52 --verbose
        """
    )

    parser.add_argument('input', help='Recording CSV (two header lines, then sensor rows)')
    parser.add_argument('output', help='Result CSV to write')
    parser.add_argument(
        '--sampling-rate',
        type=int,
        default=PedometerConfig.SAMPLING_RATE,
        help=f'Sensor sampling rate in Hz (default: {PedometerConfig.SAMPLING_RATE})'
    )
    parser.add_argument('--verbose', action='store_true', help='Log per-frame detection details')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = PedometerConfig(SAMPLING_RATE=args.sampling_rate)
        config.validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        summary = process_recording(Path(args.input), Path(args.output), config)
    except PedometerIOError as e:
        print(e, file=sys.stderr)
        return 1

    print(summary.format())
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
