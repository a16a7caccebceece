"""Earth shadow geometry module."""

from spaceelevator.shadow.umbra import (
    ShadowHeights,
    build_shadow_cones,
    build_umbra_cone,
    compute_shadow_heights,
)

__all__ = ["ShadowHeights", "build_shadow_cones", "build_umbra_cone", "compute_shadow_heights"]
