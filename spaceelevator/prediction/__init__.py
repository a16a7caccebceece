"""Shadow transition prediction module."""

from spaceelevator.prediction.models import ShadowKind, ShadowTransition
from spaceelevator.prediction.shadow_predictor import ShadowPredictor

__all__ = ["ShadowKind", "ShadowTransition", "ShadowPredictor"]
