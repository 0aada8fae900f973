"""Errors raised by the zmanim library."""


class ZmanimError(Exception):
    """Base class for every zmanim library error."""


class InvalidRequestError(ZmanimError, ValueError):
    """A query parameter failed validation."""


class InvalidDateError(InvalidRequestError):
    """The caller passed a date that can't be parsed or normalized."""


class ZmanimComputationError(ZmanimError):
    """The solar math produced no value (e.g. the sun never reaches the angle)."""
