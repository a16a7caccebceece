"""Data models for shadow transition prediction."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from astropy.time import Time


class ShadowKind(str, Enum):
    """Which part of the Earth's shadow."""

    UMBRA = "umbra"
    PENUMBRA = "penumbra"


@dataclass
class ShadowTransition:
    """Predicted instant a point on the elevator enters or leaves a shadow.

    A point at ``height_km`` above the base is shadowed while the shadow's
    exit height is above it.
    """

    shadow: ShadowKind
    height_km: float  # Height above the base (km)
    time: Time  # Transition instant
    entering: bool  # True when the point goes from sunlight into shadow

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "shadow": self.shadow.value,
            "heightKm": self.height_km,
            "time": self.time.isot,
            "entering": self.entering,
        }
