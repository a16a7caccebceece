"""Line/cone intersection for shadow cones.

A cone is described by a vertex V, a unit axis A (the direction the cone
opens) and the half-angle theta between the axis and the cone surface.
Points X on the double cone satisfy

    (X - V)^T M (X - V) = 0,   M = A A^T - cos^2(theta) I

Substituting the line X(t) = P + t D gives the quadratic

    c2 t^2 + 2 c1 t + c0 = 0

with c0 = Delta^T M Delta, c1 = D^T M Delta, c2 = D^T M D and Delta = P - V
(D. Eberly, "Intersection of a Line and a Cone", Geometric Tools).

Both nappes are intersected. Crossings of the opposite nappe are kept because
they mark the transition into an annular eclipse.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from spaceelevator.geometry.vectors import is_unit, normalize


class IntersectionKind(str, Enum):
    """How a line meets a cone."""

    NONE = "none"  # Line misses the cone
    RAY = "ray"  # Single (double) root, line grazes the cone
    SEGMENT = "segment"  # Two distinct roots


_PARAM_COUNT = {
    IntersectionKind.NONE: 0,
    IntersectionKind.RAY: 1,
    IntersectionKind.SEGMENT: 2,
}


@dataclass(frozen=True)
class IntersectionResult:
    """Classified line/cone intersection.

    ``params`` are line parameters t in solver order: for a segment the
    ``+sqrt`` root comes first. The order says nothing about which root is
    larger, since c2 may be negative.
    """

    kind: IntersectionKind
    params: tuple[float, ...] = ()

    def __post_init__(self):
        expected = _PARAM_COUNT[self.kind]
        if len(self.params) != expected:
            raise ValueError(
                f"{self.kind.value} intersection needs {expected} parameters, "
                f"got {len(self.params)}"
            )

    def farthest(self, default: float = 0.0) -> float:
        """Largest line parameter, or ``default`` when the line misses."""
        if not self.params:
            return default
        return max(self.params)

    def nearest(self, default: float = 0.0) -> float:
        """Smallest line parameter, or ``default`` when the line misses."""
        if not self.params:
            return default
        return min(self.params)


@dataclass(frozen=True, eq=False)
class Cone:
    """Double cone with a vertex, unit axis and half-angle.

    Attributes:
        vertex: Cone apex in the inertial frame (km)
        axis: Unit vector in the direction the cone opens
        half_angle: Angle between axis and surface (rad, 0 to pi)
    """

    vertex: NDArray[np.float64]
    axis: NDArray[np.float64]
    half_angle: float

    def __post_init__(self):
        if not 0.0 <= self.half_angle <= np.pi:
            raise ValueError(f"Cone half-angle must be within [0, pi], got {self.half_angle}")
        object.__setattr__(self, "vertex", np.asarray(self.vertex, dtype=np.float64))
        object.__setattr__(self, "axis", normalize(self.axis))
        object.__setattr__(self, "half_angle", float(self.half_angle))

    def reflected(self) -> "Cone":
        """Point-reflect the cone through the origin: (-V, -A, theta)."""
        return Cone(-self.vertex, -self.axis, self.half_angle)

    def quadratic_form(self) -> NDArray[np.float64]:
        """M = A A^T - cos^2(theta) I."""
        return np.outer(self.axis, self.axis) - np.cos(self.half_angle) ** 2 * np.eye(3)

    def contains(self, point: NDArray[np.float64]) -> bool:
        """Check if a point lies inside the nappe the axis opens into."""
        delta = np.asarray(point, dtype=np.float64) - self.vertex
        return bool(
            np.dot(self.axis, delta) >= np.linalg.norm(delta) * np.cos(self.half_angle)
        )


def classify_roots(c0: float, c1: float, c2: float) -> IntersectionResult:
    """Solve c2 t^2 + 2 c1 t + c0 = 0 and classify the roots.

    Args:
        c0: Constant coefficient
        c1: Half of the linear coefficient
        c2: Quadratic coefficient

    Returns:
        SEGMENT with (-c1 + sqrt(disc)) / c2 and (-c1 - sqrt(disc)) / c2,
        RAY with -c1 / c2 when disc == 0, NONE otherwise
    """
    # TODO: c2 == 0 (line parallel to a ruling) has a linear solution that
    # is not needed for a rigid vertical elevator; handle it if cable sway
    # is ever modelled.
    if c2 == 0.0:
        return IntersectionResult(IntersectionKind.NONE)

    disc = c1 * c1 - c0 * c2
    if disc > 0.0:
        root = np.sqrt(disc)
        return IntersectionResult(
            IntersectionKind.SEGMENT,
            (float((-c1 + root) / c2), float((-c1 - root) / c2)),
        )
    if disc == 0.0:
        return IntersectionResult(IntersectionKind.RAY, (float(-c1 / c2),))
    return IntersectionResult(IntersectionKind.NONE)


def quadratic_coefficients(
    cone: Cone,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
) -> tuple[float, float, float]:
    """Coefficients (c0, c1, c2) of the line/cone quadratic."""
    m = cone.quadratic_form()
    delta = np.asarray(origin, dtype=np.float64) - cone.vertex
    direction = np.asarray(direction, dtype=np.float64)

    c0 = float(delta @ m @ delta)
    c1 = float(direction @ m @ delta)
    c2 = float(direction @ m @ direction)
    return c0, c1, c2


def intersect_line_cone(
    cone: Cone,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
) -> IntersectionResult:
    """Intersect the line origin + t * direction with a double cone.

    Args:
        cone: Cone to intersect
        origin: Line origin P (km)
        direction: Unit line direction D

    Returns:
        Classified intersection; parameters are distances along D from P

    Raises:
        ValueError: If direction is not a unit vector
    """
    if not is_unit(direction):
        raise ValueError("Line direction must be a unit vector")
    return classify_roots(*quadratic_coefficients(cone, origin, direction))


def intersect(
    vertex: NDArray[np.float64],
    axis: NDArray[np.float64],
    half_angle: float,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
) -> IntersectionResult:
    """Intersect a line with the cone (vertex, axis, half_angle).

    Convenience wrapper around ``intersect_line_cone``.
    """
    return intersect_line_cone(Cone(vertex, axis, half_angle), origin, direction)
