"""Integration tests for shadow transition prediction.

Scenario: the reference elevator at 0N 120E on the March 2024 equinox.
Local noon is near 04:00 UTC and local midnight near 16:00 UTC.
"""

import pytest
from astropy.time import Time

from spaceelevator.config import Config
from spaceelevator.prediction import ShadowKind, ShadowPredictor, ShadowTransition
from spaceelevator.simulation.elevator import Elevator


NOON_120E = Time("2024-03-20T04:00:00", scale="utc")
MIDNIGHT_120E = Time("2024-03-20T16:00:00", scale="utc")


@pytest.fixture
def predictor() -> ShadowPredictor:
    config = Config()
    elevator = Elevator(0.0, 120.0, 100_000.0, NOON_120E, config=config)
    return ShadowPredictor(elevator, config=config)


class TestShadowPredictor:
    """Tests for ShadowPredictor."""

    def test_is_shadowed(self, predictor: ShadowPredictor):
        assert not predictor.is_shadowed(NOON_120E, 1000.0)
        assert predictor.is_shadowed(MIDNIGHT_120E, 1000.0)
        assert predictor.is_shadowed(MIDNIGHT_120E, 1000.0, ShadowKind.PENUMBRA)

    def test_evening_umbra_entry(self, predictor: ShadowPredictor):
        """1000 km up, the umbra arrives about two hours after ground sunset."""
        transition = predictor.predict_next_transition(
            NOON_120E,
            height_km=1000.0,
            search_duration=12 * 3600.0,
            coarse_step=1800.0,
            fine_tolerance=60.0,
        )

        assert isinstance(transition, ShadowTransition)
        assert transition.entering
        assert transition.shadow is ShadowKind.UMBRA
        assert Time("2024-03-20T11:00:00") < transition.time < Time("2024-03-20T13:00:00")

    def test_morning_umbra_exit(self, predictor: ShadowPredictor):
        transition = predictor.predict_next_transition(
            MIDNIGHT_120E,
            height_km=1000.0,
            search_duration=12 * 3600.0,
            coarse_step=1800.0,
            fine_tolerance=60.0,
        )

        assert transition is not None
        assert not transition.entering
        assert Time("2024-03-20T19:00:00") < transition.time < Time("2024-03-20T21:00:00")

    def test_penumbra_leaves_after_umbra(self, predictor: ShadowPredictor):
        """At dawn the point leaves the umbra before the penumbra."""
        kwargs = dict(
            height_km=1000.0,
            search_duration=12 * 3600.0,
            coarse_step=1800.0,
            fine_tolerance=30.0,
        )
        umbra = predictor.predict_next_transition(MIDNIGHT_120E, **kwargs)
        penumbra = predictor.predict_next_transition(
            MIDNIGHT_120E, shadow=ShadowKind.PENUMBRA, **kwargs
        )

        assert umbra is not None and penumbra is not None
        assert penumbra.time >= umbra.time

    def test_no_transition_returns_none(self, predictor: ShadowPredictor):
        """Around local noon nothing changes within an hour."""
        transition = predictor.predict_next_transition(
            NOON_120E,
            height_km=1000.0,
            search_duration=3600.0,
            coarse_step=1800.0,
        )
        assert transition is None

    def test_height_out_of_range_rejected(self, predictor: ShadowPredictor):
        with pytest.raises(ValueError):
            predictor.predict_next_transition(NOON_120E, height_km=100_000.0)
        with pytest.raises(ValueError):
            predictor.predict_next_transition(NOON_120E, height_km=-1.0)

    def test_transition_to_dict(self, predictor: ShadowPredictor):
        transition = ShadowTransition(
            shadow=ShadowKind.PENUMBRA,
            height_km=500.0,
            time=MIDNIGHT_120E,
            entering=True,
        )
        assert transition.to_dict() == {
            "shadow": "penumbra",
            "heightKm": 500.0,
            "time": "2024-03-20T16:00:00.000",
            "entering": True,
        }
