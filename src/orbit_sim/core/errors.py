from __future__ import annotations


class OrbitModelError(Exception):
    """Base class for errors raised by the orbit model."""


class ValidationError(OrbitModelError, ValueError):
    """An element or argument is outside its allowed range."""


class DegenerateGeometryError(OrbitModelError, RuntimeError):
    """
    Raised when geometry is requested from a model whose semi-major axis or
    central mass has not been validly assigned yet.
    """
