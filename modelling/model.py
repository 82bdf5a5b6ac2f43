# MIT License
"""Model contract, model registry and the :class:`ModelHandle` wrapper.

A model is a subclass of :class:`Model` that declares its bindable
attributes as :class:`Bind` descriptors::

    @register_model
    class Doubler(Model):
        LL = Bind(int)
        X = Bind()
        Y = Bind()

        def run(self):
            self.Y = self.X * 2

Exactly one ``Bind(int)`` is the horizon (conventionally ``LL``); every
other bind holds a one-dimensional float array of horizon length.  Bound
values are kept in a per-instance store, so the runtime reads and writes
them by name without touching the class.

Models register themselves on import.  The default registry key is the
defining module's dotted name, so ``models/model1.py`` is known as
``models.model1``.
"""

from __future__ import annotations
import importlib
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional
import numpy as np

from .errors import ModelExecutionError, ModelLoadError, UnknownAttribute
from .series import as_series

logger = logging.getLogger(__name__)


class Bind:
    """Declare a bindable attribute on a :class:`Model`.

    Parameters
    ----------
    kind:
        ``int`` for the horizon attribute, ``float`` (default) for a
        numeric series.
    """

    def __init__(self, kind: type = float):
        if kind not in (int, float):
            raise TypeError("Bind kind must be int or float")
        self.kind = kind
        self.name = ""

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._values.get(self.name)

    def __set__(self, instance, value) -> None:
        instance._values[self.name] = self.coerce(value, instance)

    def coerce(self, value, instance) -> Any:
        if self.kind is int:
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"'{self.name}' expects an integer, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"'{self.name}' must not be negative")
            return int(value)
        return as_series(value, instance.horizon)

    def __repr__(self) -> str:
        return f"Bind({self.kind.__name__})"


class Model(ABC):
    """Base class of every model in the catalog.

    Subclasses must be constructible without arguments.  All binds start
    unset (``None``).
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}

    @classmethod
    def binds(cls) -> Dict[str, Bind]:
        """Bindable attributes in declaration order (base classes first)."""
        out: Dict[str, Bind] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Bind):
                    out[name] = attr
        return out

    @classmethod
    def horizon_bind(cls) -> str:
        names = [name for name, b in cls.binds().items() if b.kind is int]
        if len(names) != 1:
            raise TypeError(f"{cls.__name__} must declare exactly one Bind(int) horizon, found {names}")
        return names[0]

    @property
    def horizon(self) -> Optional[int]:
        return self._values.get(type(self).horizon_bind())

    @abstractmethod
    def run(self) -> None:
        """Read input binds and write output binds."""


# registry of model factories keyed by logical name
_REGISTRY: Dict[str, Callable[[], Model]] = {}


def register_model(cls=None, *, name: Optional[str] = None):
    """Class decorator adding a model to the registry.

    Usable bare (``@register_model``) or with an explicit key
    (``@register_model(name="test.Doubler")``).  The class is checked for
    a single horizon bind at registration time.
    """

    def wrap(klass):
        if not (isinstance(klass, type) and issubclass(klass, Model)):
            raise TypeError("register_model expects a Model subclass")
        try:
            klass.horizon_bind()
        except TypeError as exc:
            raise ModelLoadError(name or klass.__module__, exc) from exc
        key = name or klass.__module__
        _REGISTRY[key] = klass
        logger.debug("Registered model %s -> %s", key, klass.__name__)
        return klass

    if cls is None:
        return wrap
    return wrap(cls)


def registered_models() -> List[str]:
    return sorted(_REGISTRY)


def _resolve(name: str) -> Callable[[], Model]:
    if name in _REGISTRY:
        return _REGISTRY[name]
    if not name:
        raise ModelLoadError(name, ValueError("empty model name"))
    try:
        importlib.import_module(name)
    except ModelLoadError:
        raise
    except Exception as exc:
        # also covers syntax errors and module-level faults in a model file
        raise ModelLoadError(name, exc) from exc
    if name not in _REGISTRY:
        raise ModelLoadError(name, LookupError("module does not register a model"))
    return _REGISTRY[name]


class ModelHandle:
    """A live model instance addressed by attribute name.

    Use :meth:`load` to create one.  The handle tracks whether the model
    has already run; the runtime executes each handle at most once.
    """

    def __init__(self, name: str, model: Model):
        self.name = name
        self.model = model
        self.has_run = False

    @classmethod
    def load(cls, name: str) -> "ModelHandle":
        """Resolve ``name`` and construct a fresh model instance.

        Raises
        ------
        ModelLoadError
            Unknown name, or the model constructor raised.
        """
        factory = _resolve(name)
        try:
            model = factory()
        except Exception as exc:
            raise ModelLoadError(name, exc) from exc
        logger.info("Loaded model %s (%s)", name, type(model).__name__)
        return cls(name, model)

    def bindable_attribute_names(self) -> List[str]:
        return list(type(self.model).binds())

    @property
    def horizon_name(self) -> str:
        return type(self.model).horizon_bind()

    @property
    def horizon(self) -> Optional[int]:
        return self.model.horizon

    def _bind(self, name: str) -> Bind:
        binds = type(self.model).binds()
        if name not in binds:
            raise UnknownAttribute(name, self.name)
        return binds[name]

    def set_attribute(self, name: str, value) -> None:
        """Bind ``value`` to ``name`` on the live instance.

        Raises
        ------
        UnknownAttribute
            ``name`` is not declared bindable.
        TypeError, ValueError
            The value does not fit the bind (wrong kind or length).
        """
        bind = self._bind(name)
        self.model._values[name] = bind.coerce(value, self.model)

    def get_attribute(self, name: str):
        self._bind(name)
        return self.model._values.get(name)

    def run(self) -> None:
        """Invoke the model computation.

        Raises
        ------
        ModelExecutionError
            Wraps any exception raised by the model.
        """
        logger.info("Running model %s", self.name)
        try:
            self.model.run()
        except Exception as exc:
            raise ModelExecutionError(self.name, cause=exc) from exc
        finally:
            self.has_run = True

    def output_attribute_names(self) -> List[str]:
        """Binds currently holding a numeric series, in declaration order."""
        return [
            name
            for name, bind in type(self.model).binds().items()
            if bind.kind is float and isinstance(self.model._values.get(name), np.ndarray)
        ]
