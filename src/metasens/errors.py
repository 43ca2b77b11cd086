"""Exceptions raised by metasens."""


class MetasensError(Exception):
    """Base class for metasens errors."""


class ConfigurationError(MetasensError, ValueError):
    """A run or a settings file asks for something that cannot be built.

    Raised for interaction orders outside [1, k], unknown distribution,
    function, sampling or estimator names and malformed settings. Never
    retried.
    """
