"""
Unit tests for Central-European transition helpers.
"""

from datetime import datetime, timedelta, timezone


class TestNextTransition:
    """Test locating the next offset change."""

    def test_autumn_change(self):
        from radio_clock.timing.dst import next_transition

        dt = datetime(2019, 6, 1, 12, 0, tzinfo=timezone.utc)
        assert next_transition(dt) == datetime(2019, 10, 27, 1, 0, tzinfo=timezone.utc)

    def test_spring_change(self, central_europe):
        from radio_clock.timing.dst import next_transition

        dt = datetime(2019, 11, 1, 0, 0, tzinfo=central_europe)
        assert next_transition(dt) == datetime(2020, 3, 29, 1, 0, tzinfo=timezone.utc)

    def test_strictly_after(self):
        from radio_clock.timing.dst import next_transition

        change = datetime(2019, 10, 27, 1, 0, tzinfo=timezone.utc)
        assert next_transition(change - timedelta(seconds=1)) == change
        assert next_transition(change) == datetime(2020, 3, 29, 1, 0, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        from radio_clock.timing.dst import next_transition

        dt = datetime(2019, 10, 27, 0, 59, 59, 500000, tzinfo=timezone.utc)
        assert next_transition(dt) == datetime(2019, 10, 27, 1, 0, tzinfo=timezone.utc)

    def test_horizon_limits_search(self):
        from radio_clock.timing.dst import next_transition

        dt = datetime(2019, 6, 1, 0, 0, tzinfo=timezone.utc)
        assert next_transition(dt, horizon=timedelta(days=30)) is None


class TestTransitionWithin:
    """Test the one-hour announcement window."""

    def test_window_edges(self):
        from radio_clock.timing.dst import transition_within

        change = datetime(2019, 10, 27, 1, 0, tzinfo=timezone.utc)
        assert transition_within(change - timedelta(hours=1))
        assert transition_within(change - timedelta(minutes=1))
        assert not transition_within(change - timedelta(minutes=61))
        assert not transition_within(change)

    def test_custom_window(self):
        from radio_clock.timing.dst import transition_within

        change = datetime(2019, 10, 27, 1, 0, tzinfo=timezone.utc)
        assert transition_within(change - timedelta(days=2), window=timedelta(days=3))
