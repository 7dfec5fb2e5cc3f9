"""Exceptions raised while building the engine configuration."""


class BangServeError(Exception):
    """Base class for bangserve errors."""


class InvalidEngineError(BangServeError):
    """An engine definition breaks the registry invariants."""


class UnknownEngineError(BangServeError):
    """A bang referenced by configuration is not in the registry."""
