# MIT License
"""One modelling session: load a model, bind data, run, script, report.

Typical use::

    session = Session("models.model1")
    session.read_data_from("assets/data/data1.txt").run_model()
    session.run_script("ZDEKS = EKS / PKB")
    print(session.results_as_tsv())

A session owns exactly one model instance and one results store.  A
failed step leaves everything produced by earlier successful steps
untouched, so the caller can report the error and carry on.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional

from .config import RuntimeConfig
from .errors import ModelExecutionError
from .loader import load_data
from .model import ModelHandle
from .report import render_report
from .runner import execute
from .scripting import ScriptEngine, apply_script, get_engine, read_script
from .series import ResultsStore, synthesize_years

logger = logging.getLogger(__name__)


class Session:
    """Controller for a single model run and its scripts."""

    def __init__(self, model_name: str, config: Optional[RuntimeConfig] = None, engine: Optional[ScriptEngine] = None):
        self.config = config or RuntimeConfig()
        self.handle = ModelHandle.load(model_name)
        self._engine = engine
        self.years: List[int] = []
        self.results: Optional[ResultsStore] = None

    @property
    def engine(self) -> ScriptEngine:
        if self._engine is None:
            self._engine = get_engine(self.config.script_engine)
        return self._engine

    @property
    def horizon(self) -> Optional[int]:
        return self.handle.horizon

    def read_data_from(self, path: str | Path) -> "Session":
        """Bind the series of a data file onto the model."""
        _, header_years = load_data(path, self.handle, self.config.comment_prefix)
        if self.config.year_axis == "synthesized" and header_years:
            self.years = synthesize_years(len(header_years), self.config.first_year)
        else:
            self.years = header_years
        return self

    def run_model(self) -> "Session":
        """Execute the model and replace the results with its outputs."""
        self.results = execute(self.handle)
        return self

    def _require_results(self) -> ResultsStore:
        if self.results is None:
            raise ModelExecutionError(self.handle.name, "Run the model before applying scripts")
        return self.results

    def run_script(self, source: str) -> "Session":
        """Apply script text to the current results."""
        results = self._require_results()
        apply_script(results, self.horizon, source, self.engine, self.handle.horizon_name)
        return self

    def run_script_from_file(self, path: str | Path) -> "Session":
        logger.info("Running script file %s", path)
        self._require_results()
        return self.run_script(read_script(path))

    def results_as_tsv(self) -> str:
        """Render the current results (empty store before a run)."""
        results = self.results if self.results is not None else ResultsStore(self.horizon)
        return render_report(results, self.years, self.config.report)
