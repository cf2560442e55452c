"""Custom exceptions for margee-lib."""


class MargeeError(Exception):
    """Base exception for margee-lib."""

    pass


class ValidationError(MargeeError):
    """Raised when input validation fails."""

    pass


class ProjectionError(MargeeError):
    """Raised when projection operations fail."""

    pass


class GeometryError(MargeeError):
    """Raised when geometry operations fail."""

    pass


class NonConvexPolygonError(GeometryError):
    """Raised when a containment test is run against a non-convex polygon."""

    pass


class IndeterminatePoleError(GeometryError):
    """Raised when a rotation pole or intersection cannot be determined."""

    pass


class DegenerateBearingError(GeometryError):
    """Raised when a bearing is undefined (coincident or antipodal points)."""

    pass
