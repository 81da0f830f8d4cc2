"""Exceptions raised while building a toggle field."""

from __future__ import annotations


class GenerationError(Exception):
    """Error during field generation."""

    pass


class PoolExhausted(GenerationError):
    """The cell pool cannot supply the requested cells."""

    pass


class InvalidConfiguration(GenerationError):
    """The grid configuration cannot produce a valid field."""

    pass
