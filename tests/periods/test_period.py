"""
Tests — Period Parsing & Bucket Alignment
============================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from timeseries.periods import EPOCH, InvalidPeriodExpression, Period


T0 = datetime(2025, 6, 1, 0, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════
# PARSING
# ══════════════════════════════════════════════════════════════


class TestParse:
    @pytest.mark.parametrize(
        "expression, seconds",
        [
            ("1 second", 1),
            ("30 seconds", 30),
            ("5 minutes", 300),
            ("1 minute", 60),
            ("2 hours", 7200),
            ("1 day", 86400),
            ("1 week", 604800),
            ("  15   MINUTES ", 900),
        ],
    )
    def test_parses_magnitude_and_unit(self, expression, seconds):
        assert Period.parse(expression).seconds == seconds

    @pytest.mark.parametrize(
        "expression",
        ["5 fortnights", "1 month", "2 years", "5", "minutes", "", "5.5 minutes", "five minutes"],
    )
    def test_rejects_unparseable_expressions(self, expression):
        with pytest.raises(InvalidPeriodExpression) as excinfo:
            Period.parse(expression)
        assert excinfo.value.expression == expression

    @pytest.mark.parametrize("expression", ["0 minutes", "-5 minutes"])
    def test_rejects_non_positive_magnitude(self, expression):
        with pytest.raises(InvalidPeriodExpression, match="magnitude must be > 0"):
            Period.parse(expression)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidPeriodExpression):
            Period.parse(300)

    def test_period_instance_passes_through(self):
        period = Period.parse("5 minutes")
        assert Period.parse(period) is period

    def test_rejects_non_positive_duration(self):
        with pytest.raises(InvalidPeriodExpression):
            Period(seconds=0)


# ══════════════════════════════════════════════════════════════
# CANONICAL FORM, EQUALITY, ORDERING
# ══════════════════════════════════════════════════════════════


class TestCanonicalForm:
    @pytest.mark.parametrize(
        "expression, canonical",
        [
            ("5 minutes", "5 minutes"),
            ("1 minutes", "1 minute"),
            ("60 minutes", "1 hour"),
            ("90 minutes", "90 minutes"),
            ("24 hours", "1 day"),
            ("14 days", "2 weeks"),
            ("120 seconds", "2 minutes"),
        ],
    )
    def test_canonical_uses_largest_dividing_unit(self, expression, canonical):
        assert str(Period.parse(expression)) == canonical

    @pytest.mark.parametrize("expression", ["5 minutes", "90 minutes", "1 week", "45 seconds"])
    def test_canonical_round_trips(self, expression):
        period = Period.parse(expression)
        assert Period.parse(period.canonical) == period
        assert Period.parse(period.canonical).canonical == period.canonical

    def test_equality_by_duration(self):
        assert Period.parse("60 minutes") == Period.parse("1 hour")
        assert hash(Period.parse("60 minutes")) == hash(Period.parse("1 hour"))
        assert Period.parse("5 minutes") != Period.parse("6 minutes")

    def test_ordering_by_duration(self):
        periods = [Period.parse(e) for e in ("1 day", "5 minutes", "1 hour")]
        assert [str(p) for p in sorted(periods)] == ["5 minutes", "1 hour", "1 day"]
        assert Period.parse("5 minutes") < Period.parse("1 hour")
        assert Period.parse("1 week") >= Period.parse("7 days")

    def test_repr(self):
        assert repr(Period.parse("5 minutes")) == "Period('5 minutes')"


# ══════════════════════════════════════════════════════════════
# ALIGNMENT
# ══════════════════════════════════════════════════════════════


class TestAlignment:
    def test_floors_to_bucket_start(self):
        period = Period.parse("5 minutes")
        instant = T0 + timedelta(minutes=7, seconds=42, microseconds=5)
        assert period.aligned_start(instant) == T0 + timedelta(minutes=5)

    def test_instant_on_boundary_is_its_own_start(self):
        period = Period.parse("5 minutes")
        assert period.aligned_start(T0 + timedelta(minutes=10)) == T0 + timedelta(minutes=10)

    def test_last_second_of_bucket_stays_in_bucket(self):
        period = Period.parse("5 minutes")
        instant = T0 + timedelta(minutes=4, seconds=59, microseconds=999999)
        assert period.aligned_start(instant) == T0

    def test_aligned_to_unix_epoch(self):
        period = Period.parse("7 minutes")
        start = period.aligned_start(T0)
        assert (start - EPOCH).total_seconds() % period.seconds == 0

    def test_weeks_align_to_epoch_weekday(self):
        # The epoch is a Thursday; weekly buckets start on Thursdays.
        start = Period.parse("1 week").aligned_start(T0)
        assert start.weekday() == 3

    def test_non_utc_instant_aligns_in_utc(self):
        plus_two = timezone(timedelta(hours=2))
        instant = datetime(2025, 6, 1, 2, 7, 0, tzinfo=plus_two)  # 00:07Z
        start = Period.parse("5 minutes").aligned_start(instant)
        assert start == T0 + timedelta(minutes=5)
        assert start.tzinfo == timezone.utc

    def test_pre_epoch_instant_floors_down(self):
        period = Period.parse("1 hour")
        instant = datetime(1969, 12, 31, 23, 30, tzinfo=timezone.utc)
        assert period.aligned_start(instant) == datetime(1969, 12, 31, 23, 0, tzinfo=timezone.utc)

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            Period.parse("5 minutes").aligned_start(datetime(2025, 1, 1))

    @pytest.mark.parametrize("expression", ["1 second", "5 minutes", "1 hour", "3 hours", "1 day", "1 week"])
    @pytest.mark.parametrize("offset_seconds", [0, 1, 299, 300, 3599, 86399, 123457])
    def test_floor_bounds_and_idempotence(self, expression, offset_seconds):
        period = Period.parse(expression)
        instant = T0 + timedelta(seconds=offset_seconds, microseconds=250)
        start = period.aligned_start(instant)
        assert start <= instant < start + period.duration
        assert period.aligned_start(start) == start


# ══════════════════════════════════════════════════════════════
# BUCKET END & GRID
# ══════════════════════════════════════════════════════════════


class TestBucketEnd:
    def test_end_is_inclusive_last_second(self):
        period = Period.parse("5 minutes")
        assert period.end(T0) == T0 + timedelta(minutes=5) - timedelta(seconds=1)

    def test_next_start(self):
        assert Period.parse("1 hour").next_start(T0) == T0 + timedelta(hours=1)


class TestBucketStarts:
    def test_window_ending_on_boundary_excludes_that_bucket(self):
        period = Period.parse("5 minutes")
        starts = period.bucket_starts(T0, T0 + timedelta(minutes=15))
        assert starts == [T0, T0 + timedelta(minutes=5), T0 + timedelta(minutes=10)]

    def test_window_ending_mid_bucket_includes_partial_bucket(self):
        period = Period.parse("5 minutes")
        starts = period.bucket_starts(T0 + timedelta(minutes=2), T0 + timedelta(minutes=11))
        assert starts == [T0, T0 + timedelta(minutes=5), T0 + timedelta(minutes=10)]

    def test_empty_window(self):
        assert Period.parse("5 minutes").bucket_starts(T0, T0) == []
