"""Built-in CLI commands implementing the Command protocol.

Modules in this package are auto-discovered by the registry. Each
module exports a class with a ``name`` attribute and the ``help``,
``synopsis`` and ``run`` methods.
"""
