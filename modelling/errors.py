# MIT License
"""Error taxonomy for the modelling runtime.

Every fault raised by the runtime is one of the classes below.  Each
error keeps the context it was raised with (model name, file path, line
number, offending token or script text) as attributes so the
presentation shell can show a useful message without parsing strings.
The original exception is always chained through ``__cause__``.
"""

from __future__ import annotations
from typing import Optional


class ModellingError(Exception):
    """Base class for all runtime faults."""


class ModelLoadError(ModellingError):
    """A model could not be resolved or instantiated."""

    def __init__(self, name: str, cause: Optional[BaseException] = None):
        self.name = name
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot load model '{name}'{detail}")


class UnknownAttribute(ModellingError, KeyError):
    """Read or write against a name the model does not declare bindable."""

    def __init__(self, name: str, model: str = ""):
        self.name = name
        self.model = model
        where = f" on model '{model}'" if model else ""
        super().__init__(f"Attribute '{name}' is not bindable{where}")

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return self.args[0]


class DataFormatError(ModellingError):
    """Malformed or inconsistent line in a data file."""

    def __init__(self, message: str, path: str = "", line_no: Optional[int] = None, token: Optional[str] = None):
        self.path = path
        self.line_no = line_no
        self.token = token
        where = ""
        if path:
            where = f"{path}"
        if line_no is not None:
            where = f"{where}:{line_no}" if where else f"line {line_no}"
        if token is not None:
            message = f"{message} (token '{token}')"
        super().__init__(f"{where}: {message}" if where else message)


class DataFileNotFound(ModellingError, FileNotFoundError):
    """A data or script file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")

    def __str__(self) -> str:
        return self.args[0]


class ModelExecutionError(ModellingError):
    """Fault raised while running a model, or a run requested out of order."""

    def __init__(self, name: str, message: str = "Error executing model", cause: Optional[BaseException] = None):
        self.name = name
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{message} ({name}){detail}")


class ScriptError(ModellingError):
    """Fault raised while evaluating a user script."""

    def __init__(self, script: str, message: str = "Error executing script", cause: Optional[BaseException] = None):
        self.script = script
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{message}{detail}")


class EmptyHorizon(ModellingError):
    """A report was requested without a year axis."""

    def __init__(self, message: str = "Years list is empty. Load a data file before rendering results."):
        super().__init__(message)
