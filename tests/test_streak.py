from datetime import date, datetime, timedelta

from actionplan.plan.streak import calculate_streak

TODAY = date(2026, 3, 10)


def days_ago(n):
    return TODAY - timedelta(days=n)


def test_empty_set_has_no_streak():
    assert calculate_streak(set(), TODAY) == 0


def test_single_day_today_or_yesterday_counts():
    assert calculate_streak({TODAY}, TODAY) == 1
    assert calculate_streak({days_ago(1)}, TODAY) == 1


def test_latest_activity_two_days_ago_breaks_streak():
    assert calculate_streak({days_ago(2)}, TODAY) == 0
    assert calculate_streak({days_ago(2), days_ago(3), days_ago(4)}, TODAY) == 0


def test_consecutive_days_are_counted():
    assert calculate_streak({TODAY, days_ago(1)}, TODAY) == 2
    assert calculate_streak({TODAY, days_ago(1), days_ago(2)}, TODAY) == 3


def test_gap_stops_the_run_closest_to_today():
    assert calculate_streak({TODAY, days_ago(2)}, TODAY) == 1
    assert calculate_streak({days_ago(1), days_ago(2), days_ago(4), days_ago(5)}, TODAY) == 2


def test_input_order_does_not_matter():
    dates = [days_ago(2), TODAY, days_ago(1)]
    assert calculate_streak(dates, TODAY) == 3
    assert calculate_streak(list(reversed(dates)), TODAY) == 3


def test_time_of_day_is_ignored():
    dates = [datetime(2026, 3, 10, 23, 59), datetime(2026, 3, 9, 0, 1)]
    assert calculate_streak(dates, TODAY) == 2
    assert calculate_streak(dates, datetime(2026, 3, 11, 8, 0)) == 2


def test_duplicate_days_are_not_double_counted():
    dates = [TODAY, datetime(2026, 3, 10, 12, 0), days_ago(1)]
    assert calculate_streak(dates, TODAY) == 2


def test_is_pure():
    dates = {TODAY, days_ago(1), days_ago(3)}
    first = calculate_streak(dates, TODAY)
    assert calculate_streak(dates, TODAY) == first == 2
    assert dates == {TODAY, days_ago(1), days_ago(3)}
