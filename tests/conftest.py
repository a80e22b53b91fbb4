from collections.abc import Callable
from datetime import date
from datetime import timedelta

import pytest

from contribution_heatmap.api.schemas.heatmap import ContributionCalendar
from contribution_heatmap.api.schemas.heatmap import ContributionDay
from contribution_heatmap.api.schemas.heatmap import ContributionWeek
from contribution_heatmap.api.schemas.heatmap import HeatmapData


def github_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def build_calendar(start: date, counts: list[int]) -> ContributionCalendar:
    """Lay `counts` out day by day from `start`, cutting weeks on Sundays."""

    weeks: list[ContributionWeek] = []
    days: list[ContributionDay] = []
    for offset, count in enumerate(counts):
        day = start + timedelta(days=offset)
        if days and github_weekday(day) == 0:
            weeks.append(ContributionWeek(first_day=days[0].date, days=days))
            days = []
        days.append(ContributionDay(date=day, count=count, weekday=github_weekday(day)))
    if days:
        weeks.append(ContributionWeek(first_day=days[0].date, days=days))

    return ContributionCalendar(total=sum(counts), weeks=weeks)


@pytest.fixture
def calendar_factory() -> Callable[[date, list[int]], ContributionCalendar]:
    return build_calendar


@pytest.fixture
def single_week_calendar() -> ContributionCalendar:
    # 2024-01-07 is a Sunday, so the seven days fill one week exactly.
    return build_calendar(date(2024, 1, 7), [0, 1, 4, 7, 10, 2, 0])


@pytest.fixture
def year_calendar() -> ContributionCalendar:
    counts = [(index * 7) % 13 for index in range(53 * 7)]
    return build_calendar(date(2024, 1, 7), counts)


@pytest.fixture
def year_heatmap(year_calendar: ContributionCalendar) -> HeatmapData:
    return HeatmapData(
        weeks=year_calendar.weeks,
        total_contributions=1247,
        username="octocat",
    )
