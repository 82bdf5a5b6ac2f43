# MIT License
"""Runtime configuration for the modelling framework.

All settings are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, validation and JSON serialisation.  The
top-level :class:`RuntimeConfig` tells the runtime where models, data
files and scripts live, which script engine to use, how the year axis
of a report is built and how numbers are rounded.

A configuration can be stored as JSON (see ``assets/presets``) and
loaded with :func:`load_config`.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic import field_validator

logger = logging.getLogger(__name__)


class RoundingBand(BaseModel):
    """One magnitude band of the report rounding rule.

    Attributes
    ----------
    min_magnitude:
        Inclusive lower bound on ``abs(value)`` for the band.
    max_fraction_digits:
        Maximum number of fractional digits kept for values in the band.
        Trailing zeros are always trimmed.
    """

    min_magnitude: float = Field(0.0, ge=0.0)
    max_fraction_digits: int = Field(3, ge=0, le=15)


def _default_bands() -> List[RoundingBand]:
    return [
        RoundingBand(min_magnitude=10.0, max_fraction_digits=1),
        RoundingBand(min_magnitude=1.0, max_fraction_digits=2),
        RoundingBand(min_magnitude=0.0, max_fraction_digits=3),
    ]


class ReportStyle(BaseModel):
    """Number formatting used by the tabular report."""

    grouping_separator: str = Field(" ", max_length=1, description="Thousands separator ('' disables grouping)")
    decimal_separator: str = Field(",", min_length=1, max_length=1, description="Decimal separator")
    bands: List[RoundingBand] = Field(default_factory=_default_bands)

    @field_validator("bands")
    def bands_cover_zero(cls, v):
        if not v:
            raise ValueError("at least one rounding band is required")
        v = sorted(v, key=lambda b: b.min_magnitude, reverse=True)
        if v[-1].min_magnitude != 0.0:
            raise ValueError("the lowest rounding band must start at 0")
        return v

    @field_validator("decimal_separator")
    def separators_differ(cls, v, values):
        if "grouping_separator" in values.data and v == values.data["grouping_separator"]:
            raise ValueError("decimal_separator must differ from grouping_separator")
        return v


class RuntimeConfig(BaseModel):
    """Top-level settings of a modelling session and of the shell."""

    models_package: str = Field("models", description="Namespace prefixed to model names")
    models_dir: Path = Field(Path("models"), description="Directory scanned for model files")
    data_dir: Path = Field(Path("assets/data"), description="Directory scanned for .txt data files")
    scripts_dir: Path = Field(Path("assets/scripts"), description="Directory offered for script files")
    script_engine: str = Field("python", description="Name of the script engine")
    year_axis: Literal["header", "synthesized"] = Field(
        "header", description="Take report years from the LATA header or synthesize them"
    )
    first_year: int = Field(2015, ge=1, le=9999, description="First year of a synthesized axis")
    comment_prefix: Optional[str] = Field("|", description="Data lines starting with this are skipped")
    report: ReportStyle = Field(default_factory=ReportStyle)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO")

    @field_validator("comment_prefix")
    def prefix_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("comment_prefix must be None or a non-blank string")
        return v


def load_config(path: Optional[str | Path] = None) -> RuntimeConfig:
    """Load a :class:`RuntimeConfig` from a JSON file.

    Without a path, or when the file does not exist, the defaults are
    returned.  A file that exists but does not validate raises
    :class:`pydantic.ValidationError`.
    """
    if path is None:
        return RuntimeConfig()
    path = Path(path)
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return RuntimeConfig()
    cfg = RuntimeConfig.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info("Loaded config from %s", path)
    return cfg


def configure_logging(level: str = "INFO") -> None:
    """Send runtime log records to stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
