# MIT License
"""Run user scripts against the results of a model.

A script sees every result series as a variable, plus the horizon under
its bind name (``LL``).  After the script finishes, every variable that
holds a one-dimensional numeric array is written back into the
:class:`~modelling.series.ResultsStore`: existing names are overwritten,
new names are appended.  Scripts are applied all or nothing; a failing
script leaves the store exactly as it was.

The interpreter is pluggable through :class:`ScriptEngine`.  Two engines
are available by name:

``python``
    Executes Python statements.  ``np`` (numpy) and ``math`` are
    preloaded, so ``ZDEKS = EKS / PKB`` or ``Z = np.cumsum(X)`` work.
``pandas``
    One ``name = expression`` per line, each expression evaluated with
    :func:`pandas.eval`.  Lines starting with ``#`` are comments.
"""

from __future__ import annotations
import logging
import math
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Type
import numpy as np
import pandas as pd

from .errors import DataFileNotFound, ScriptError
from .series import ResultsStore, is_numeric_series

logger = logging.getLogger(__name__)


class ScriptEngine(ABC):
    """Interpreter capability: variables in, source executed, variables out."""

    name = ""

    @abstractmethod
    def evaluate(self, variables: Dict[str, Any], source: str) -> Dict[str, Any]:
        """Execute ``source`` with ``variables`` in scope.

        Returns the variables visible after execution.  Any exception
        propagates to the caller.
        """


class PythonScriptEngine(ScriptEngine):
    name = "python"

    def evaluate(self, variables: Dict[str, Any], source: str) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {"np": np, "math": math}
        namespace.update(variables)
        exec(compile(source, "<script>", "exec"), namespace)
        namespace.pop("__builtins__", None)
        return namespace


_ASSIGNMENT = re.compile(r"^\s*([A-Za-z_]\w*)\s*=(?!=)\s*(.+)$")


class PandasEvalEngine(ScriptEngine):
    name = "pandas"

    def evaluate(self, variables: Dict[str, Any], source: str) -> Dict[str, Any]:
        env = dict(variables)
        for line_no, raw in enumerate(source.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            m = _ASSIGNMENT.match(line)
            if m is None:
                raise SyntaxError(f"line {line_no}: expected 'name = expression', got '{line}'")
            target, expr = m.groups()
            value = pd.eval(expr, local_dict=env, engine="python")
            if isinstance(value, pd.Series):
                value = value.to_numpy()
            env[target] = value
        return env


ENGINES: Dict[str, Type[ScriptEngine]] = {
    PythonScriptEngine.name: PythonScriptEngine,
    PandasEvalEngine.name: PandasEvalEngine,
}


def register_engine(engine_cls: Type[ScriptEngine]) -> Type[ScriptEngine]:
    ENGINES[engine_cls.name] = engine_cls
    return engine_cls


def get_engine(name: str) -> ScriptEngine:
    """Instantiate the engine registered under ``name``."""
    try:
        return ENGINES[name.lower()]()
    except KeyError as exc:
        raise ScriptError("", f"Script engine '{name}' not found", exc) from exc


def decode_script(data: bytes, origin: str = "") -> str:
    """Decode UTF-8 script bytes, raising :class:`ScriptError` when they are not valid."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScriptError(origin, "Cannot decode script", exc) from exc


def read_script(path: str | Path) -> str:
    path = Path(path)
    if not path.is_file():
        raise DataFileNotFound(str(path))
    return decode_script(path.read_bytes(), str(path))


def apply_script(
    results: ResultsStore,
    horizon: int,
    source: str,
    engine: ScriptEngine,
    horizon_name: str = "LL",
) -> ResultsStore:
    """Evaluate ``source`` and merge its series into ``results``.

    Parameters
    ----------
    results:
        Store to read from and merge into.  Modified in place.
    horizon:
        Horizon value exposed to the script.
    source:
        Script text.
    engine:
        Interpreter used to run the script.
    horizon_name:
        Variable name under which the horizon is exposed; never merged.

    Returns
    -------
    ResultsStore
        ``results`` itself, for chaining.

    Raises
    ------
    ScriptError
        Empty script, interpreter fault, or a produced series whose
        length differs from the horizon.  ``results`` is unchanged.
    """
    if not source or not source.strip():
        raise ScriptError(source or "", "Script cannot be empty")
    variables: Dict[str, Any] = results.snapshot()
    variables[horizon_name] = horizon
    try:
        out = engine.evaluate(variables, source)
    except Exception as exc:
        raise ScriptError(source, cause=exc) from exc
    updates = {
        name: value
        for name, value in out.items()
        if name != horizon_name and not name.startswith("_") and is_numeric_series(value)
    }
    try:
        results.merge(updates)
    except ValueError as exc:
        raise ScriptError(source, "Script produced an invalid series", exc) from exc
    added = [name for name in updates if name not in variables]
    logger.info("Script merged %d series (%d new) via %s engine", len(updates), len(added), engine.name)
    return results
