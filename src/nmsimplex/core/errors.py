"""
Exception hierarchy for nmsimplex.

Every error derives from NelderMeadError and from the builtin exception
that best describes it, so callers can catch either the library-specific
class or the generic one (``ValueError``, ``TypeError``, ...).
"""


class NelderMeadError(Exception):
    """Base class for all nmsimplex errors."""


class ConfigurationError(NelderMeadError, ValueError):
    """Invalid optimizer, evaluator or file configuration."""


class InvalidDimension(ConfigurationError):
    """Simplex dimension (vertex count) is not an integer >= 2."""


class ArityMismatch(NelderMeadError, ValueError):
    """Wrong number of start points for the simplex dimension."""


class DimensionMismatch(NelderMeadError, ValueError):
    """Vector has the wrong number of coordinates."""


class TypeMismatch(NelderMeadError, TypeError):
    """Argument is not of the expected kind (vector, real number, mapping)."""


class InvalidKey(NelderMeadError, KeyError):
    """Unknown simplex accessor key."""


class InsufficientVertices(NelderMeadError, IndexError):
    """Simplex does not hold enough vertices for the requested quantity."""


class TemplateError(NelderMeadError, ValueError):
    """Template substitution left unresolved tags."""


class OutputParseError(NelderMeadError, ValueError):
    """External evaluation output could not be turned into a number."""
