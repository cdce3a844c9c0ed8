"""Exceptions raised by the shadow engine.

Every failure the engine can report derives from ``ShadowError`` and also
from the builtin exception it most resembles, so callers that only know
about ``ValueError`` or ``RuntimeError`` still catch them:

  * ``DegenerateGeometryError`` (``ValueError``): the input has no
    well-defined shadow: a zero-length ray, a light outside the world or
    inside an obstacle, or a hull with no area. The aggregator can skip the
    offending light/obstacle pair instead of aborting the whole frame.
  * ``UnsupportedOperationError`` (``NotImplementedError``): a boolean
    operation name the scaled engine does not know.
  * ``BooleanOperationError`` (``RuntimeError``): GEOS gave up on an
    overlay. Retrying the same input gives the same failure, so nothing
    retries it.
"""

from __future__ import annotations


class ShadowError(Exception):
    pass


class DegenerateGeometryError(ShadowError, ValueError):
    pass


class UnsupportedOperationError(ShadowError, NotImplementedError):
    pass


class BooleanOperationError(ShadowError, RuntimeError):
    def __init__(self, op: str, message: str) -> None:
        super().__init__(f"{op} failed: {message}")
        self.op = op
