"""Exception types raised by pairscore."""


class PairscoreError(Exception):
    """Base class for all pairscore errors."""


class ConfigurationError(PairscoreError, ValueError):
    """A model or matrix was built from inconsistent data.

    Raised at construction time; the object cannot be used.
    """


class MatrixFileError(PairscoreError, ValueError):
    """A substitution matrix file could not be parsed."""
