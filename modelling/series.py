# MIT License
"""In-memory containers for named yearly series.

A *series* is a one-dimensional ``float64`` numpy array with one value
per horizon position.  Two containers are defined here:

* :class:`SeriesTable` is the transient result of parsing a data file.
* :class:`ResultsStore` accumulates the outputs of a model run and any
  series introduced or redefined by scripts.

Both keep insertion order and enforce a single shared length.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
import numpy as np
import pandas as pd


def as_series(values, horizon: Optional[int] = None) -> np.ndarray:
    """Coerce ``values`` into a one-dimensional float array.

    Parameters
    ----------
    values:
        Any array-like of real numbers (list, tuple, numpy array or
        pandas Series).
    horizon:
        Expected length.  ``None`` skips the length check.

    Returns
    -------
    numpy.ndarray
        A new ``float64`` array.

    Raises
    ------
    ValueError
        If the values are not one-dimensional numbers or the length does
        not match ``horizon``.
    """
    if isinstance(values, pd.Series):
        values = values.to_numpy()
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Series values must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise ValueError(f"Series must be one-dimensional, got {arr.ndim} dimensions")
    if horizon is not None and len(arr) != horizon:
        raise ValueError(f"Series length {len(arr)} does not match horizon {horizon}")
    return arr


def is_numeric_series(value) -> bool:
    """Return True for one-dimensional numeric arrays and Series."""
    if isinstance(value, pd.Series):
        value = value.to_numpy()
    return isinstance(value, np.ndarray) and value.ndim == 1 and value.dtype.kind in "iuf"


def synthesize_years(horizon: int, first_year: int = 2015) -> List[int]:
    """Build a default year axis ``first_year, first_year + 1, ...``."""
    return [first_year + i for i in range(horizon)]


class _OrderedSeries:
    """Shared behaviour of the two series containers."""

    def __init__(self, horizon: Optional[int] = None):
        self._horizon = horizon
        self._data: Dict[str, np.ndarray] = {}

    @property
    def horizon(self) -> Optional[int]:
        return self._horizon

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __getitem__(self, name: str) -> np.ndarray:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def names(self) -> List[str]:
        return list(self._data)

    def items(self) -> Iterable[Tuple[str, np.ndarray]]:
        return self._data.items()

    def _store(self, name: str, values) -> np.ndarray:
        arr = as_series(values, self._horizon)
        if self._horizon is None:
            self._horizon = len(arr)
        self._data[name] = arr
        return arr

    def to_frame(self, years: Optional[List[int]] = None) -> pd.DataFrame:
        """Return the series as a dataframe, one row per series.

        Columns are the ``years`` when given, otherwise horizon positions.
        """
        df = pd.DataFrame.from_dict(self._data, orient="index")
        if years is not None and len(df.columns) == len(years):
            df.columns = list(years)
        return df


class SeriesTable(_OrderedSeries):
    """Series parsed from one data file.

    All series share the horizon declared by the file header.  Names are
    unique; adding a name twice keeps the later values.
    """

    def __init__(self, horizon: int):
        super().__init__(horizon)

    def add(self, name: str, values) -> np.ndarray:
        return self._store(name, values)


class ResultsStore(_OrderedSeries):
    """Insertion-ordered results of a run, extended by scripts.

    Writing an existing name replaces its values in place (the name keeps
    its position); writing a new name appends it.
    """

    def put(self, name: str, values) -> np.ndarray:
        return self._store(name, values)

    def merge(self, updates: Mapping[str, np.ndarray]) -> None:
        """Write every entry of ``updates``, all or nothing.

        All values are validated before the store is touched.
        """
        checked: Dict[str, np.ndarray] = {}
        horizon = self._horizon
        for name, values in updates.items():
            checked[name] = as_series(values, horizon)
            horizon = len(checked[name])
        for name, arr in checked.items():
            self._store(name, arr)

    def snapshot(self) -> Dict[str, np.ndarray]:
        """Copies of all series, keyed by name."""
        return {name: arr.copy() for name, arr in self._data.items()}
