"""Model catalog.

Each module in this package defines one :class:`~modelling.model.Model`
subclass and registers it with :func:`~modelling.model.register_model`,
so the model is known by its module name (``models.model1``).  The
dashboard lists the module files of this directory as the available
models.
"""
