"""Loader for Yahoo historical price files.

A file starts with a title line listing the columns, followed by one line
per trading day, most recent day first:

    Date,Open,High,Low,Close,Volume
    12-Jan-02,45.10,45.80,44.92,45.55,1203400
    11-Jan-02,...

The loader returns the requested column oldest first. Failures are logged
and reported as None so that experiments can skip a symbol and continue.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)


class PriceField(Enum):
    """Column of a price line. Values are positions after the date."""

    OPEN = 0
    HIGH = 1
    LOW = 2
    CLOSE = 3
    VOLUME = 4

    @classmethod
    def parse(cls, name: str | PriceField) -> PriceField:
        """Look up a field by case-insensitive name ('close', 'Open', ...)."""
        if isinstance(name, PriceField):
            return name
        try:
            return cls[name.upper()]
        except KeyError as e:
            raise ValueError(
                f"Unknown price field '{name}', expected one of "
                f"{[f.name.lower() for f in cls]}"
            ) from e


def parse_line(line: str, field: PriceField) -> float:
    """Extract one value from a ``date,open,high,low,close,volume`` line.

    Raises:
        ValueError: If the line has too few columns or the value is not a number
    """
    parts = line.strip().split(",")
    if len(parts) < 2 or not parts[0]:
        raise ValueError(f"date expected in line {line.strip()!r}")
    values = parts[1:]
    if field.value >= len(values):
        raise ValueError(f"{field.name.lower()} value expected in line {line.strip()!r}")
    return float(values[field.value])


def load_series(
    path: str | Path,
    field: PriceField | str = PriceField.CLOSE,
    capacity: int = 512,
) -> np.ndarray | None:
    """Read up to ``capacity`` of the most recent values of one column.

    Args:
        path: Price history file
        field: Column to extract
        capacity: Maximum number of samples

    Returns:
        float64 array, oldest first, or None if the file cannot be opened or
        has no title line. The array is shorter than ``capacity`` when the
        file has fewer lines. A malformed line reads as 0.0 and is logged.
    """
    field = PriceField.parse(field)
    path = Path(path)
    try:
        with path.open("r") as f:
            title = f.readline()
            if not title:
                logger.error("%s: title line expected", path)
                return None

            values: list[float] = []
            for lineno, line in enumerate(f, start=2):
                if len(values) >= capacity:
                    break
                if not line.strip():
                    continue
                try:
                    values.append(parse_line(line, field))
                except ValueError as e:
                    logger.warning("%s:%d: %s", path, lineno, e)
                    values.append(0.0)
    except OSError as e:
        logger.error("error opening %s: %s", path, e)
        return None

    if len(values) < capacity:
        logger.info("%s: read %d of %d requested values", path, len(values), capacity)
    return np.array(values[::-1], dtype=np.float64)


class YahooSeries:
    """A directory of price history files, one file per symbol.

    Example:
        >>> series = YahooSeries("data/equities")
        >>> close = series.load("aa", capacity=512)
    """

    def __init__(self, directory: str | Path, suffix: str = "") -> None:
        self.directory = Path(directory)
        self.suffix = suffix

    def path(self, symbol: str) -> Path:
        return self.directory / f"{symbol}{self.suffix}"

    def load(
        self,
        symbol: str,
        field: PriceField | str = PriceField.CLOSE,
        capacity: int = 512,
    ) -> np.ndarray | None:
        """``load_series`` for the file of ``symbol``."""
        return load_series(self.path(symbol), field, capacity)

    def __repr__(self) -> str:
        return f"YahooSeries(directory={str(self.directory)!r})"
