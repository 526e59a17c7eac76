from __future__ import annotations

from datetime import date, datetime, timedelta

from app.models.weather import ForecastSample
from app.services.aggregation import aggregate_daily_forecast
from tests.fakes import make_samples


def _sample(ts: str, temp: float, description: str = "clear sky", icon: str = "01d") -> ForecastSample:
    return ForecastSample(
        timestamp=datetime.strptime(ts, "%Y-%m-%d %H:%M:%S"),
        temperature=temp,
        condition_code=800,
        description=description,
        icon=icon,
    )


def test_empty_input_yields_empty_output() -> None:
    assert aggregate_daily_forecast([]) == []


def test_single_sample_is_dropped_as_today() -> None:
    assert aggregate_daily_forecast([_sample("2026-10-19 12:00:00", 14.0)]) == []


def test_single_day_yields_empty_output() -> None:
    samples = [_sample(f"2026-10-19 {h:02d}:00:00", 10.0 + h) for h in range(0, 24, 3)]
    assert aggregate_daily_forecast(samples) == []


def test_three_days_drop_first_and_fold_min_max() -> None:
    samples = [
        _sample("2026-10-19 18:00:00", 10.0),
        _sample("2026-10-19 21:00:00", 12.0),
        _sample("2026-10-20 00:00:00", 5.0, "light rain", "10n"),
        _sample("2026-10-20 03:00:00", 9.0, "overcast clouds", "04n"),
        _sample("2026-10-20 06:00:00", 7.0),
        _sample("2026-10-21 00:00:00", 14.0, "few clouds", "02n"),
        _sample("2026-10-21 03:00:00", 16.0),
        _sample("2026-10-21 06:00:00", 15.0),
    ]

    result = aggregate_daily_forecast(samples)

    assert [(d.date, d.temp_max, d.temp_min) for d in result] == [
        (date(2026, 10, 20), 9.0, 5.0),
        (date(2026, 10, 21), 16.0, 14.0),
    ]
    # Representative condition is the first sample of the day.
    assert (result[0].description, result[0].icon) == ("light rain", "10n")
    assert (result[1].description, result[1].icon) == ("few clouds", "02n")


def test_forty_samples_over_six_days_yield_days_two_to_six() -> None:
    samples = make_samples(start=datetime(2026, 10, 19, 9, 0), count=40)
    distinct_days = list(dict.fromkeys(s.timestamp.date() for s in samples))
    assert len(distinct_days) == 6

    result = aggregate_daily_forecast(samples)

    assert [d.date for d in result] == distinct_days[1:6]


def test_output_is_truncated_to_five_days() -> None:
    samples = make_samples(start=datetime(2026, 10, 19, 0, 0), count=8 * 9)

    result = aggregate_daily_forecast(samples)

    assert len(result) == 5
    assert result[0].date == date(2026, 10, 20)
    assert result[-1].date == date(2026, 10, 24)


def test_days_parameter_limits_output() -> None:
    samples = make_samples(count=40)
    assert len(aggregate_daily_forecast(samples, days=2)) == 2
    assert aggregate_daily_forecast(samples, days=0) == []


def test_fewer_days_are_not_padded() -> None:
    samples = make_samples(start=datetime(2026, 10, 19, 0, 0), count=8 * 3)
    assert len(aggregate_daily_forecast(samples)) == 2


def test_first_seen_order_is_kept_not_sorted() -> None:
    samples = [
        _sample("2026-10-21 00:00:00", 1.0),
        _sample("2026-10-23 00:00:00", 2.0),
        _sample("2026-10-20 00:00:00", 3.0),
        _sample("2026-10-23 03:00:00", 4.0),
        _sample("2026-10-22 00:00:00", 5.0),
    ]

    result = aggregate_daily_forecast(samples)

    assert [d.date for d in result] == [date(2026, 10, 23), date(2026, 10, 20), date(2026, 10, 22)]
    assert (result[0].temp_min, result[0].temp_max) == (2.0, 4.0)


def test_day_key_uses_feed_clock_without_conversion() -> None:
    samples = [
        _sample("2026-10-19 21:00:00", 8.0),
        _sample("2026-10-19 23:59:59", 6.0),
        _sample("2026-10-20 00:00:00", 4.0),
    ]

    result = aggregate_daily_forecast(samples)

    assert len(result) == 1
    assert result[0].date == date(2026, 10, 20)
    assert result[0].temp_max == result[0].temp_min == 4.0


def test_summaries_satisfy_max_ge_min_and_are_deterministic() -> None:
    start = datetime(2026, 10, 19, 6, 0)
    samples = [
        _sample(
            (start + timedelta(hours=3 * i)).strftime("%Y-%m-%d %H:%M:%S"),
            float((i * 7) % 13) - 4.5,
        )
        for i in range(40)
    ]
    snapshot = list(samples)

    first = aggregate_daily_forecast(samples)
    second = aggregate_daily_forecast(samples)

    assert first == second
    assert samples == snapshot
    assert all(d.temp_max >= d.temp_min for d in first)
    input_days = list(dict.fromkeys(s.timestamp.date() for s in samples))
    assert [d.date for d in first] == input_days[1 : 1 + len(first)]


def test_accepts_any_iterable() -> None:
    samples = make_samples(count=16, start=datetime(2026, 10, 19, 0, 0))
    assert aggregate_daily_forecast(iter(samples)) == aggregate_daily_forecast(samples)
