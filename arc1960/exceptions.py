"""
Errors raised by coordinate validation and projection
"""

__all__ = ['InvalidInput', 'ProjectionError', 'ProjectionFailure']


class ProjectionError(ValueError):
    """Base class for every error raised while converting coordinates"""


class InvalidInput(ProjectionError):
    """A coordinate is non-finite or lies outside its valid range"""


class ProjectionFailure(ProjectionError):
    """
    The datum shift or projection could not produce a defined result, e.g. the
    geocentric to geodetic iteration did not converge or an intermediate value
    became non-finite.
    """
