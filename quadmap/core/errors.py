"""
Exceptions raised by the solver and the transformer.
"""

from __future__ import annotations


class QuadMapError(Exception):
    """Base class for quadmap failures."""


class DegenerateQuadError(QuadMapError, ValueError):
    """The four correspondences do not admit a unique projective transform."""


class NotReadyError(QuadMapError, RuntimeError):
    """A transform was requested before any matrix was built."""
