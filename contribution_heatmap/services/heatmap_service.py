import logging
from datetime import date

import httpx

from contribution_heatmap.api.schemas.heatmap import ProcessedContributions
from contribution_heatmap.clients.github_client import GitHubGraphQLError
from contribution_heatmap.clients.github_client import fetch_contribution_calendar
from contribution_heatmap.services.normalizer import process_contributions


logger = logging.getLogger(__name__)


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubUserNotFoundError(Exception):
    """Raised when GitHub does not know the requested login."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def get_user_contributions(
    username: str,
    token: str,
    graphql_url: str,
    from_date: date | None = None,
    to_date: date | None = None,
) -> tuple[str, ProcessedContributions]:
    """Fetch and normalize one user's contributions.

    Returns the login as reported by GitHub together with the processed data.
    """

    try:
        collection = fetch_contribution_calendar(
            username=username,
            token=token,
            graphql_url=graphql_url,
            from_date=from_date,
            to_date=to_date,
        )
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError("Bad credentials") from exc
        raise GitHubAPIError(str(exc)) from exc
    except GitHubGraphQLError as exc:
        if any("Could not resolve to a User" in message for message in exc.messages):
            raise GitHubUserNotFoundError(str(exc)) from exc
        raise GitHubAPIError(str(exc)) from exc
    except Exception as exc:
        raise GitHubAPIError(str(exc)) from exc

    processed = process_contributions(collection)
    logger.info(
        "Fetched %d days for %s (%d contributions)",
        len(processed.days),
        collection.username,
        processed.statistics.total_contributions,
    )
    return collection.username, processed
