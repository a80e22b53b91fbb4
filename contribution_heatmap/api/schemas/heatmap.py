from datetime import date
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


PALETTE_SIZE = 5

DEFAULT_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif"
)
GITHUB_COLORS = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")


class ContributionDay(BaseModel):
    """Single calendar day with its contribution count.

    `weekday` follows GitHub: 0 is Sunday and 6 is Saturday.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    date: date
    count: int = Field(ge=0, alias="contributionCount")
    weekday: int = Field(ge=0, le=6)


class ContributionWeek(BaseModel):
    """Week column containing chronologically ordered days."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    first_day: date = Field(alias="firstDay")
    days: list[ContributionDay] = Field(alias="contributionDays")


class ContributionCalendar(BaseModel):
    """Full contribution range organized into weeks."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    total: int = Field(ge=0, alias="totalContributions")
    weeks: list[ContributionWeek]


class ContributionBreakdown(BaseModel):
    """Per-kind contribution totals reported next to the calendar."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    commits: int = Field(default=0, alias="totalCommitContributions")
    issues: int = Field(default=0, alias="totalIssueContributions")
    pull_requests: int = Field(default=0, alias="totalPullRequestContributions")
    pull_request_reviews: int = Field(
        default=0, alias="totalPullRequestReviewContributions"
    )
    repositories: int = Field(default=0, alias="totalRepositoryContributions")


class ContributionCollection(BaseModel):
    """Contribution data returned by the GitHub client for one user."""

    model_config = ConfigDict(frozen=True)

    username: str
    calendar: ContributionCalendar
    breakdown: ContributionBreakdown = ContributionBreakdown()


class Streaks(BaseModel):
    current: int
    longest: int


class WeekdayTotal(BaseModel):
    day_of_week: int
    day_name: str
    total: int


class MonthTotal(BaseModel):
    month: str
    total: int


class ContributionStatistics(BaseModel):
    """Aggregates derived from a flat list of contribution days.

    `total_contributions` is the authoritative figure (the calendar total when
    one is supplied); `summed_contributions` is always the sum of day counts.
    """

    total_contributions: int
    summed_contributions: int
    average_per_day: float
    max_per_day: int
    is_empty: bool
    streaks: Streaks
    by_weekday: list[WeekdayTotal]
    by_month: list[MonthTotal]


class ProcessedContributions(BaseModel):
    """Normalized contribution data ready for rendering."""

    calendar: ContributionCalendar
    days: list[ContributionDay]
    statistics: ContributionStatistics
    breakdown: ContributionBreakdown = ContributionBreakdown()

    @property
    def days_by_date(self) -> dict[date, ContributionDay]:
        return {day.date: day for day in self.days}


class StatisticsResponse(BaseModel):
    """Statistics payload returned by the HTTP API."""

    username: str
    statistics: ContributionStatistics
    breakdown: ContributionBreakdown


class HeatmapData(BaseModel):
    """Renderer input: week columns, headline total and display name."""

    model_config = ConfigDict(frozen=True)

    weeks: list[ContributionWeek]
    total_contributions: int
    username: str | None = None


class Padding(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    top: int = Field(default=10, ge=0)
    right: int = Field(default=10, ge=0)
    bottom: int = Field(default=20, ge=0)
    left: int = Field(default=10, ge=0)


class LayoutOptions(BaseModel):
    """Immutable rendering configuration.

    Build variants with `merged()`: plain fields are replaced, `padding` is
    merged field by field. Unknown option names are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cell_size: int = Field(default=11, gt=0)
    cell_padding: int = Field(default=2, ge=0)
    font_size: int = Field(default=9, gt=0)
    font_family: str = DEFAULT_FONT_FAMILY
    colors: tuple[str, ...] = GITHUB_COLORS
    show_month_labels: bool = True
    show_day_labels: bool = True
    show_tooltips: bool = True
    show_legend: bool = True
    show_title: bool = True
    show_summary: bool = True
    border_radius: float = Field(default=0, ge=0)
    padding: Padding = Padding()

    @field_validator("colors")
    @classmethod
    def check_palette_size(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) != PALETTE_SIZE:
            raise ValueError(
                f"palette must contain exactly {PALETTE_SIZE} colors, got {len(value)}"
            )
        return value

    def merged(self, **overrides: Any) -> "LayoutOptions":
        """Return a copy with `overrides` applied; `None` values are ignored."""

        overrides = {
            key: value for key, value in overrides.items() if value is not None
        }
        padding = overrides.pop("padding", None)

        data = self.model_dump()
        data.update(overrides)
        if padding is not None:
            if isinstance(padding, Padding):
                padding = padding.model_dump(exclude_unset=True)
            data["padding"] = {**data["padding"], **padding}

        return LayoutOptions.model_validate(data)


class LayoutDimensions(BaseModel):
    graph_width: int
    graph_height: int
    total_width: int
    total_height: int
    left_padding: int
    top_padding: int
    right_padding: int
    bottom_padding: int


class HeatmapComponents(BaseModel):
    """Which pipeline stages a modular render includes."""

    model_config = ConfigDict(frozen=True)

    include_grid: bool = True
    include_title: bool = True
    include_summary: bool = True
    include_legend: bool = True
    include_month_labels: bool = True
    include_day_labels: bool = True
