"""Tests for the shared rate and distribution helpers (pulse_engines.rates)."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pulse_engines.rates import (
    mean_rounded,
    minutes_to_hours,
    percentage,
    round_half_up,
    start_of_day,
    start_of_week,
    zero_filled_distribution,
)
from pulse_modules.projects.models import ProjectStatus
from pulse_modules.tasks.models import TaskStatus


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("2.5"), 3), (Decimal("3.5"), 4), (Decimal("2.4999"), 2), (0.5, 1), (7, 7)],
    )
    def test_halves_round_up(self, value, expected):
        """Python's round() would give 2 for 2.5; dashboards expect 3."""
        assert round_half_up(value) == expected


class TestPercentage:

    def test_zero_denominator_is_zero(self):
        assert percentage(5, 0) == 0
        assert percentage(Decimal("0"), Decimal("0")) == 0

    def test_rounds_half_up(self):
        assert percentage(1, 8) == 13  # 12.5

    def test_small_share_rounds_down(self):
        assert percentage(Decimal("150"), Decimal("50000")) == 0  # 0.3%

    def test_can_exceed_hundred(self):
        assert percentage(3, 2) == 150


class TestMeanRounded:

    def test_empty_is_zero(self):
        assert mean_rounded([]) == 0

    def test_mean(self):
        assert mean_rounded([Decimal("105"), Decimal("0"), Decimal("50")]) == 52  # 51.67


class TestMinutesToHours:

    def test_quantized_to_hundredths(self):
        assert minutes_to_hours(90) == Decimal("1.50")
        assert minutes_to_hours(10) == Decimal("0.17")
        assert minutes_to_hours(0) == Decimal("0.00")


class TestZeroFilledDistribution:

    def test_every_member_present(self):
        dist = zero_filled_distribution([], ProjectStatus)
        assert set(dist) == set(ProjectStatus)
        assert all(count == 0 for count in dist.values())

    def test_counts_and_coerces_strings(self):
        dist = zero_filled_distribution([TaskStatus.DONE, "done", "todo"], TaskStatus)
        assert dist[TaskStatus.DONE] == 2
        assert dist[TaskStatus.TODO] == 1
        assert sum(dist.values()) == 3

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            zero_filled_distribution(["archived"], ProjectStatus)


class TestCalendarAnchors:

    def test_start_of_day(self):
        instant = datetime(2024, 6, 12, 15, 30, 5, 12, tzinfo=timezone.utc)
        assert start_of_day(instant) == datetime(2024, 6, 12, tzinfo=timezone.utc)

    def test_start_of_week_is_monday(self):
        wednesday = datetime(2024, 6, 12, 12, tzinfo=timezone.utc)
        assert start_of_week(wednesday) == datetime(2024, 6, 10, tzinfo=timezone.utc)

    def test_monday_is_its_own_week_start(self):
        monday = datetime(2024, 6, 10, 0, 0, tzinfo=timezone.utc)
        assert start_of_week(monday) == monday

    def test_sunday_belongs_to_previous_monday(self):
        sunday = datetime(2024, 6, 16, 23, 59, tzinfo=timezone.utc)
        assert start_of_week(sunday) == sunday.replace(hour=0, minute=0) - timedelta(days=6)
