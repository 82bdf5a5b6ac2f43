"""Runtime of the modelling framework.

This package loads a named model from the catalog, binds the yearly
series of a ``LATA`` data file onto it, runs it, lets user scripts
derive further series from the results and renders everything as a
tab-separated yearly report.

The high-level :class:`~modelling.session.Session` composes these steps
for the Streamlit dashboard; the individual modules can also be used on
their own.
"""

from .config import RuntimeConfig, ReportStyle, RoundingBand, load_config, configure_logging
from .errors import (
    ModellingError,
    ModelLoadError,
    UnknownAttribute,
    DataFormatError,
    DataFileNotFound,
    ModelExecutionError,
    ScriptError,
    EmptyHorizon,
)
from .series import SeriesTable, ResultsStore, synthesize_years
from .model import Bind, Model, ModelHandle, register_model
from .loader import load_data
from .runner import execute
from .scripting import ScriptEngine, PythonScriptEngine, PandasEvalEngine, apply_script, get_engine, read_script
from .report import round_value, render_report, report_to_frame
from .session import Session

__all__ = [
    "RuntimeConfig",
    "ReportStyle",
    "RoundingBand",
    "load_config",
    "configure_logging",
    "ModellingError",
    "ModelLoadError",
    "UnknownAttribute",
    "DataFormatError",
    "DataFileNotFound",
    "ModelExecutionError",
    "ScriptError",
    "EmptyHorizon",
    "SeriesTable",
    "ResultsStore",
    "synthesize_years",
    "Bind",
    "Model",
    "ModelHandle",
    "register_model",
    "load_data",
    "execute",
    "ScriptEngine",
    "PythonScriptEngine",
    "PandasEvalEngine",
    "apply_script",
    "get_engine",
    "read_script",
    "round_value",
    "render_report",
    "report_to_frame",
    "Session",
]
