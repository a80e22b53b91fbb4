from collections.abc import Mapping
from datetime import date
from datetime import timedelta
from typing import Any

import httpx

from contribution_heatmap.api.schemas.heatmap import ContributionBreakdown
from contribution_heatmap.api.schemas.heatmap import ContributionCalendar
from contribution_heatmap.api.schemas.heatmap import ContributionCollection


USER_AGENT = "contribution-heatmap"

CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    login
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          firstDay
          contributionDays {
            date
            contributionCount
            weekday
          }
        }
      }
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
      totalRepositoryContributions
    }
  }
}
"""


class GitHubGraphQLError(Exception):
    """Raised when the GraphQL response carries an `errors` block."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages) or "GitHub GraphQL returned errors")
        self.messages = messages


def default_date_range(today: date | None = None) -> tuple[date, date]:
    """Return the one-year window ending today."""

    to_day = today or date.today()
    return to_day - timedelta(days=364), to_day


def fetch_contribution_calendar(
    username: str,
    token: str,
    graphql_url: str,
    from_date: date | None = None,
    to_date: date | None = None,
) -> ContributionCollection:
    """Fetch a user's contribution calendar from the GitHub GraphQL API."""

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    if from_date is None or to_date is None:
        from_date, to_date = default_date_range()

    variables = {
        "login": username,
        "from": f"{from_date.isoformat()}T00:00:00Z",
        "to": f"{to_date.isoformat()}T23:59:59Z",
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }

    response = httpx.post(
        graphql_url,
        json={"query": CONTRIBUTIONS_QUERY, "variables": variables},
        headers=headers,
        timeout=20.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        raise GitHubGraphQLError(
            [
                str(error.get("message", ""))
                for error in errors
                if isinstance(error, Mapping)
            ]
        )

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise GitHubGraphQLError(
            [f"Could not resolve to a User with the login of '{username}'."]
        )

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    login = user.get("login")
    return ContributionCollection(
        username=login if isinstance(login, str) and login else username,
        calendar=ContributionCalendar.model_validate(calendar),
        breakdown=ContributionBreakdown.model_validate(collection),
    )
