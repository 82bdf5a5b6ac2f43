# MIT License
"""Tab-separated yearly report of a :class:`~modelling.series.ResultsStore`.

The report has one header line ``LATA<TAB>year<TAB>year...`` followed by
one line per series, in store order.  Every value is rounded by
:func:`round_value`:

* the number of fractional digits depends on the magnitude band of
  ``abs(value)`` (by default at most 1 digit from 10 up, at most 2 in
  ``[1, 10)``, at most 3 below 1);
* rounding is half-even on the exact binary value of the float;
* trailing fractional zeros are trimmed, so integral values have no
  fractional part;
* thousands are grouped with a space and the decimal separator is a
  comma (``1234.56 -> "1 234,6"``).
"""

from __future__ import annotations
import logging
import math
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import List, Optional, Sequence
import pandas as pd

from .config import ReportStyle
from .errors import EmptyHorizon
from .loader import HEADER
from .series import ResultsStore

logger = logging.getLogger(__name__)

_DEFAULT_STYLE = ReportStyle()


def fraction_digits(value: float, style: ReportStyle = _DEFAULT_STYLE) -> int:
    """Maximum fractional digits for ``value`` under ``style``."""
    magnitude = abs(value)
    for band in style.bands:
        if magnitude >= band.min_magnitude:
            return band.max_fraction_digits
    return style.bands[-1].max_fraction_digits


def round_value(value: float, style: Optional[ReportStyle] = None) -> str:
    """Format one report cell.

    >>> round_value(1234.56)
    '1 234,6'
    >>> round_value(0.0009)
    '0,001'
    """
    style = style or _DEFAULT_STYLE
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    digits = fraction_digits(value, style)
    exact = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + digits + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)
    if rounded == 0:
        rounded = abs(rounded)
    text = format(rounded, ",f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text.translate(str.maketrans({",": style.grouping_separator, ".": style.decimal_separator}))


def render_report(results: ResultsStore, years: Sequence[int], style: Optional[ReportStyle] = None) -> str:
    """Render ``results`` against the ``years`` axis.

    Raises
    ------
    EmptyHorizon
        ``years`` is empty.
    """
    if not years:
        raise EmptyHorizon()
    lines: List[str] = [HEADER + "".join(f"\t{year}" for year in years)]
    for name, values in results.items():
        lines.append(name + "\t" + "\t".join(round_value(v, style) for v in values))
    logger.debug("Rendered report with %d series", len(results))
    return "\n".join(lines) + "\n"


def report_to_frame(text: str) -> pd.DataFrame:
    """Split a rendered report into a table of strings.

    The header years become the columns and series names the index.
    """
    rows = [line.split("\t") for line in text.splitlines() if line]
    if not rows:
        raise EmptyHorizon("Report is empty")
    header = rows[0]
    df = pd.DataFrame([r[1:] for r in rows[1:]], index=[r[0] for r in rows[1:]], columns=header[1:])
    df.index.name = header[0]
    return df
