"""Reading sensor recordings and writing per-sample pedometer results."""

import logging
from itertools import islice
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Tuple

import numpy as np
import polars as pl

from .config import PedometerConfig
from .pedometer import SampleResult

logger = logging.getLogger(__name__)

RAW_COLUMNS = ['RECORD', 'TYPE', 'DATE', 'TIME', 'arx', 'ary', 'arz', 'grx', 'gry', 'grz']
ID_COLUMNS = ['RECORD', 'TYPE']
TEXT_COLUMNS = ['DATE', 'TIME']
SENSOR_COLUMNS = ['arx', 'ary', 'arz', 'grx', 'gry', 'grz']

RESULT_HEADER = (
    "RECORD, TYPE, DATE, TIME, arx, ary, arz, grx, gry, grz, "
    "timestamp(sec), step_count, step_type, step_type_num"
)
RESULT_INT_COLUMNS = ID_COLUMNS + ['step_count', 'step_type_num']
RESULT_FLOAT_COLUMNS = SENSOR_COLUMNS + ['timestamp(sec)']


class PedometerIOError(Exception):
    """Base class for recording and result file errors."""


class InputFileError(PedometerIOError):
    """The recording cannot be opened."""


class OutputFileError(PedometerIOError):
    """The result file cannot be created."""


class TruncatedHeaderError(PedometerIOError):
    """The recording ends before its header lines."""


class RecordingLoader:
    """Loads sensor recordings exported as CSV text."""

    def __init__(self, path: Path, config: Optional[PedometerConfig] = None):
        """
        Initialize the loader.

        Args:
            path: Recording CSV file
            config: Pedometer configuration (sampling rate, header lines)
        """
        self.path = Path(path)
        self.config = config or PedometerConfig()

    def read_header(self) -> Tuple[List[str], bool]:
        """
        Read the header lines and check whether anything follows them.

        Returns:
            Tuple of (header_lines, has_data)

        Raises:
            InputFileError: If the file cannot be opened
            TruncatedHeaderError: If the file has fewer header lines than expected
        """
        n_header = self.config.HEADER_LINES
        try:
            with open(self.path, 'r', encoding='utf-8', errors='replace') as f:
                lines = [line.rstrip('\r\n') for line in islice(f, n_header + 1)]
        except OSError as e:
            raise InputFileError(f"Cannot open input file: {self.path}") from e

        if len(lines) < n_header:
            raise TruncatedHeaderError(
                f"Cannot read first {n_header} lines of input file: {self.path}"
            )
        return lines[:n_header], len(lines) > n_header

    def load(self) -> pl.DataFrame:
        """
        Load the recording into a DataFrame.

        Fields are parsed leniently: missing or non-numeric sensor values
        become 0.0, extra fields are dropped and undecodable bytes are
        replaced. Blank lines are skipped. Timestamps are synthesised as
        i / fs for i = 1, 2, ... regardless of the DATE/TIME text.

        Returns:
            DataFrame with RAW_COLUMNS plus a 'timestamp' column (seconds)
        """
        header, has_data = self.read_header()

        schema = {name: pl.String for name in RAW_COLUMNS}
        raw = pl.DataFrame(schema=schema)
        if has_data:
            try:
                raw = pl.read_csv(
                    self.path,
                    skip_rows=len(header),
                    has_header=False,
                    schema=schema,
                    quote_char=None,
                    truncate_ragged_lines=True,
                    encoding='utf8-lossy',
                )
            except pl.exceptions.NoDataError:
                pass
            except (OSError, pl.exceptions.PolarsError) as e:
                raise InputFileError(f"Cannot parse input file: {self.path}") from e

        raw = raw.with_columns(pl.all().str.strip_chars())
        # Drop blank lines
        raw = raw.filter(~pl.all_horizontal(pl.all().fill_null("") == ""))

        df = raw.with_columns(
            [pl.col(c).cast(pl.Int64, strict=False).fill_null(0) for c in ID_COLUMNS]
            + [pl.col(c).fill_null("") for c in TEXT_COLUMNS]
            + [pl.col(c).cast(pl.Float64, strict=False).fill_null(0.0) for c in SENSOR_COLUMNS]
        )

        timestamps = np.arange(1, len(df) + 1) / self.config.SAMPLING_RATE
        df = df.with_columns(pl.Series('timestamp', timestamps, dtype=pl.Float64))

        logger.info("Loaded %d samples from %s (%.2fs at %d Hz)",
                    len(df), self.path.name, len(df) / self.config.SAMPLING_RATE,
                    self.config.SAMPLING_RATE)
        return df

    def iter_samples(self, df: Optional[pl.DataFrame] = None) -> Iterator[Tuple[float, ...]]:
        """
        Yield (timestamp, arx, ary, arz, grx, gry, grz) tuples in file order.

        Args:
            df: Previously loaded DataFrame; loaded from disk if omitted
        """
        if df is None:
            df = self.load()
        yield from df.select(['timestamp'] + SENSOR_COLUMNS).iter_rows()


def list_recordings(data_dir: Path) -> List[str]:
    """
    List recording CSV files in a directory.

    Returns:
        Sorted list of file names
    """
    return [f.name for f in sorted(Path(data_dir).glob("*.csv"))]


class ResultWriter:
    """Writes one result line per input sample."""

    def __init__(self, path: Path):
        """
        Initialize the writer.

        Args:
            path: Output CSV file
        """
        self.path = Path(path)
        self._file: Optional[TextIO] = None

    def __enter__(self) -> 'ResultWriter':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        """
        Create the output file and write the header.

        Raises:
            OutputFileError: If the file cannot be created
        """
        try:
            self._file = open(self.path, 'w', encoding='utf-8')
        except OSError as e:
            raise OutputFileError(f"Cannot open output file: {self.path}") from e
        self._file.write(RESULT_HEADER + "\n")

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    def write(self, row: dict, result: SampleResult):
        """
        Write the result line for one sample.

        Args:
            row: Recording row with RAW_COLUMNS and 'timestamp'
            result: Pedometer output after that sample
        """
        if self._file is None:
            raise RuntimeError("ResultWriter is not open")
        sensors = ", ".join(f"{row[c]:f}" for c in SENSOR_COLUMNS)
        self._file.write(
            f"{row['RECORD']}, {row['TYPE']}, {row['DATE']}, {row['TIME']}, {sensors}, "
            f"{row['timestamp']:f}, {result.step_count}, {result.label}, {int(result.motion_type)}\n"
        )


def read_results(path: Path) -> pl.DataFrame:
    """
    Read a result file written by ResultWriter.

    Returns:
        DataFrame with the result columns (header names stripped, numeric
        columns typed)
    """
    df = pl.read_csv(path, has_header=True, infer_schema_length=0)
    df = df.rename({c: c.strip() for c in df.columns})
    df = df.with_columns(pl.all().str.strip_chars())
    return df.with_columns(
        [pl.col(c).cast(pl.Int64, strict=False) for c in RESULT_INT_COLUMNS]
        + [pl.col(c).cast(pl.Float64, strict=False) for c in RESULT_FLOAT_COLUMNS]
    )
