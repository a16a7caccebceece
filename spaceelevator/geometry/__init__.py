"""Vector and cone geometry module."""

from spaceelevator.geometry.cone import (
    Cone,
    IntersectionKind,
    IntersectionResult,
    intersect,
    intersect_line_cone,
)

__all__ = ["Cone", "IntersectionKind", "IntersectionResult", "intersect", "intersect_line_cone"]
