"""Pytest configuration and shared fixtures.

Registers a few small test-only models and provides a helper to write
``LATA`` data files into a temporary directory.
"""

from pathlib import Path

import numpy as np
import pytest

from modelling.model import Bind, Model, register_model

REPO_ROOT = Path(__file__).resolve().parents[1]


@register_model(name="test.doubler")
class Doubler(Model):
    LL = Bind(int)
    X = Bind()
    Y = Bind()

    def run(self):
        self.Y = self.X * 2


@register_model(name="test.failing")
class Failing(Model):
    LL = Bind(int)
    X = Bind()

    def run(self):
        raise ZeroDivisionError("division by zero in model")


@register_model(name="test.bad_ctor")
class BadConstructor(Model):
    LL = Bind(int)

    def __init__(self):
        super().__init__()
        raise RuntimeError("cannot build")

    def run(self):
        pass


@register_model(name="test.wrong_length")
class WrongLength(Model):
    LL = Bind(int)
    X = Bind()
    Y = Bind()

    def run(self):
        # bypasses the bind check on purpose
        self._values["Y"] = np.zeros(self.LL + 1)


@pytest.fixture(scope="session")
def repo_root():
    """Return the project root (holds models/ and assets/)."""
    return REPO_ROOT


@pytest.fixture
def write_data(tmp_path):
    """Write a data file and return its path."""

    def _write(text, name="data.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
