# MIT License
"""Execute a bound model and harvest its series."""

from __future__ import annotations
import logging

from .errors import ModelExecutionError
from .model import ModelHandle
from .series import ResultsStore

logger = logging.getLogger(__name__)


def execute(handle: ModelHandle) -> ResultsStore:
    """Run ``handle`` once and collect every series bind into a new store.

    The store lists series in bind declaration order.  Inputs that the
    model left untouched are harvested too.

    Raises
    ------
    ModelExecutionError
        The handle already ran, the horizon is unbound, or the model
        raised during its computation.
    """
    if handle.has_run:
        raise ModelExecutionError(handle.name, "Model already executed; load a fresh model to run again")
    horizon = handle.horizon
    if horizon is None:
        raise ModelExecutionError(handle.name, "Horizon is not bound; load data before running")
    handle.run()
    results = ResultsStore(horizon)
    try:
        for name in handle.output_attribute_names():
            results.put(name, handle.get_attribute(name))
    except ValueError as exc:
        raise ModelExecutionError(handle.name, "Model produced an invalid series", exc) from exc
    logger.info("Model %s produced %d series", handle.name, len(results))
    return results
