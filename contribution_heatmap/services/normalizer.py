from collections import defaultdict
from collections.abc import Iterable
from datetime import timedelta

from contribution_heatmap.api.schemas.heatmap import ContributionCalendar
from contribution_heatmap.api.schemas.heatmap import ContributionCollection
from contribution_heatmap.api.schemas.heatmap import ContributionDay
from contribution_heatmap.api.schemas.heatmap import ContributionStatistics
from contribution_heatmap.api.schemas.heatmap import HeatmapData
from contribution_heatmap.api.schemas.heatmap import MonthTotal
from contribution_heatmap.api.schemas.heatmap import ProcessedContributions
from contribution_heatmap.api.schemas.heatmap import Streaks
from contribution_heatmap.api.schemas.heatmap import WeekdayTotal


DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def flatten(calendar: ContributionCalendar) -> list[ContributionDay]:
    """Concatenate every week's days in calendar order."""

    return [day for week in calendar.weeks for day in week.days]


def calculate_streaks(days: Iterable[ContributionDay]) -> Streaks:
    """Compute current and longest runs of consecutive active days.

    A run only continues across days exactly one calendar day apart. The
    current streak is the run ending at the most recent day, so it is zero
    when that day has no contributions.
    """

    sorted_days = sorted(days, key=lambda day: day.date)

    longest = 0
    run = 0
    previous = None
    for day in sorted_days:
        if day.count <= 0:
            run = 0
        elif previous is not None and run and day.date - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day.date

    # `run` now holds the streak ending at the most recent day.
    return Streaks(current=run, longest=longest)


def group_by_weekday(days: Iterable[ContributionDay]) -> list[WeekdayTotal]:
    totals = [0] * 7
    for day in days:
        totals[day.weekday] += day.count

    return [
        WeekdayTotal(day_of_week=index, day_name=DAY_NAMES[index], total=total)
        for index, total in enumerate(totals)
    ]


def group_by_month(days: Iterable[ContributionDay]) -> list[MonthTotal]:
    totals: dict[str, int] = defaultdict(int)
    for day in days:
        totals[day.date.isoformat()[:7]] += day.count

    return [MonthTotal(month=month, total=totals[month]) for month in sorted(totals)]


def compute_statistics(
    days: list[ContributionDay], calendar_total: int | None = None
) -> ContributionStatistics:
    """Derive totals, streaks and weekday/month aggregates from `days`.

    When `calendar_total` is given it is used as the authoritative total.
    An empty list produces zero average and max and sets `is_empty`.
    """

    summed = sum(day.count for day in days)
    total = summed if calendar_total is None else calendar_total

    return ContributionStatistics(
        total_contributions=total,
        summed_contributions=summed,
        average_per_day=total / len(days) if days else 0.0,
        max_per_day=max((day.count for day in days), default=0),
        is_empty=not days,
        streaks=calculate_streaks(days),
        by_weekday=group_by_weekday(days),
        by_month=group_by_month(days),
    )


def process_contributions(collection: ContributionCollection) -> ProcessedContributions:
    """Flatten a fetched calendar and attach its statistics."""

    days = flatten(collection.calendar)
    return ProcessedContributions(
        calendar=collection.calendar,
        days=days,
        statistics=compute_statistics(days, calendar_total=collection.calendar.total),
        breakdown=collection.breakdown,
    )


def create_heatmap_data(
    processed: ProcessedContributions, username: str | None = None
) -> HeatmapData:
    return HeatmapData(
        weeks=processed.calendar.weeks,
        total_contributions=processed.statistics.total_contributions,
        username=username,
    )
