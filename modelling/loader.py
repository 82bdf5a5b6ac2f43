# MIT License
"""Reader for the line-oriented ``LATA`` data format.

A data file looks like::

    LATA    2015  2016  2017  2018
    twKI    1.03
    KI      1023752.2

The header line starts with ``LATA`` and lists one year per horizon
position; its length defines the horizon, which is bound onto the
model straight away.  Every following line is ``NAME v1 v2 ...``.  A
short line is padded by repeating its last value, a long line is cut at
the horizon.  Blank lines, and lines starting with the comment prefix,
are skipped.
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .errors import DataFileNotFound, DataFormatError, UnknownAttribute
from .model import ModelHandle
from .series import SeriesTable

logger = logging.getLogger(__name__)

HEADER = "LATA"

# plain decimal notation with an optional exponent; no nan, inf or digit separators
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_YEAR = re.compile(r"[+-]?[0-9]+")


def forward_fill(values: Sequence[float], horizon: int) -> np.ndarray:
    """Pad or cut ``values`` to ``horizon`` positions.

    Missing positions repeat the last supplied value; excess values are
    dropped.  At least one value is required.

    >>> forward_fill([1, 2, 3], 5).tolist()
    [1.0, 2.0, 3.0, 3.0, 3.0]
    """
    if len(values) == 0:
        raise ValueError("at least one value is required")
    out = np.empty(horizon, dtype=float)
    n = min(len(values), horizon)
    out[:n] = values[:n]
    out[n:] = values[n - 1]
    return out


def parse_values(tokens: Sequence[str], horizon: int, path: str = "", line_no: Optional[int] = None) -> np.ndarray:
    """Parse decimal tokens into a horizon-length array.

    Only tokens inside the horizon are parsed, the rest are ignored.
    """
    values: List[float] = []
    for token in tokens[:horizon]:
        if not _DECIMAL.fullmatch(token):
            raise DataFormatError("Malformed number", path, line_no, token)
        values.append(float(token))
    if not values:
        raise DataFormatError("Series has no values", path, line_no)
    return forward_fill(values, horizon)


def _parse_header(tokens: Sequence[str], path: str, line_no: int) -> List[int]:
    years = []
    for token in tokens[1:]:
        if not _YEAR.fullmatch(token):
            raise DataFormatError("Malformed year", path, line_no, token)
        years.append(int(token))
    if not years:
        raise DataFormatError("LATA header declares no years", path, line_no)
    return years


def load_data(
    path: str | Path, handle: ModelHandle, comment_prefix: Optional[str] = "|"
) -> Tuple[SeriesTable, List[int]]:
    """Read ``path`` and bind every series onto ``handle``.

    Parameters
    ----------
    path:
        Data file in the ``LATA`` format.
    handle:
        Model receiving the horizon and the series.
    comment_prefix:
        Lines starting with this string are skipped.  ``None`` only
        skips blank lines.

    Returns
    -------
    tuple
        The parsed :class:`SeriesTable` and the header years.  If the
        file holds no header the table is empty and the years list is
        empty.

    Raises
    ------
    DataFileNotFound
        ``path`` does not exist.
    DataFormatError
        Malformed header or number, a line that is not valid UTF-8, a
        data line before the header, or a series name the model does not
        declare.
    """
    path = Path(path)
    if not path.is_file():
        raise DataFileNotFound(str(path))
    src = str(path)
    years: List[int] = []
    table: Optional[SeriesTable] = None
    with path.open("rb") as fh:
        for line_no, raw in enumerate(fh, start=1):
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError as exc:
                raise DataFormatError("File is not valid UTF-8", src, line_no) from exc
            if not line or (comment_prefix and line.startswith(comment_prefix)):
                continue
            tokens = line.split()
            if tokens[0] == HEADER:
                if table is not None:
                    raise DataFormatError("Duplicate LATA header", src, line_no)
                years = _parse_header(tokens, src, line_no)
                table = SeriesTable(len(years))
                handle.set_attribute(handle.horizon_name, len(years))
                continue
            if table is None:
                raise DataFormatError("Data line before the LATA header", src, line_no, tokens[0])
            name = tokens[0]
            values = parse_values(tokens[1:], table.horizon, src, line_no)
            try:
                handle.set_attribute(name, values)
            except UnknownAttribute as exc:
                raise DataFormatError(f"Unknown series '{name}'", src, line_no, name) from exc
            except (TypeError, ValueError) as exc:
                raise DataFormatError(f"Cannot bind series '{name}': {exc}", src, line_no, name) from exc
            table.add(name, values)
    if table is None:
        logger.warning("No LATA header in %s", src)
        return SeriesTable(0), years
    logger.info("Loaded %d series over %d years from %s", len(table), table.horizon, src)
    return table, years
