from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Response
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials

from contribution_heatmap.api.schemas.heatmap import ProcessedContributions
from contribution_heatmap.api.schemas.heatmap import StatisticsResponse
from contribution_heatmap.core.security import bearer_scheme
from contribution_heatmap.core.security import resolve_github_token
from contribution_heatmap.services.heatmap_service import GitHubAPIError
from contribution_heatmap.services.heatmap_service import GitHubUserNotFoundError
from contribution_heatmap.services.heatmap_service import InvalidGitHubTokenError
from contribution_heatmap.services.heatmap_service import get_user_contributions
from contribution_heatmap.services.normalizer import create_heatmap_data
from contribution_heatmap.services.presets import COLOR_SCHEMES
from contribution_heatmap.services.presets import FIXED_CANVAS_PRESETS
from contribution_heatmap.services.presets import PRESETS
from contribution_heatmap.services.presets import render_preset
from contribution_heatmap.settings import Settings


router = APIRouter()


def get_settings() -> Settings:
    return Settings()


def load_contributions(
    username: str,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> tuple[str, ProcessedContributions]:
    """Fetch contributions, translating service errors to HTTP errors."""

    token = resolve_github_token(credentials, settings.github_token)

    try:
        return get_user_contributions(
            username=username,
            token=token,
            graphql_url=settings.github_graphql_url,
        )
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubUserNotFoundError as exc:
        raise HTTPException(status_code=404, detail="GitHub user not found") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/presets")
def list_presets() -> dict[str, list[str]]:
    """List preset and colour scheme names accepted by the SVG endpoint.

    `fixed_canvas` presets reject the `scheme`, `cell_size` and
    `border_radius` parameters.
    """

    return {
        "presets": sorted(PRESETS),
        "fixed_canvas": sorted(FIXED_CANVAS_PRESETS),
        "schemes": sorted(COLOR_SCHEMES),
    }


@router.get(
    "/heatmap/{username}/stats",
    response_model=StatisticsResponse,
    response_model_by_alias=False,
)
def get_statistics(
    username: str,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> StatisticsResponse:
    """Return contribution statistics for a GitHub user."""

    login, processed = load_contributions(username, credentials, settings)
    return StatisticsResponse(
        username=login,
        statistics=processed.statistics,
        breakdown=processed.breakdown,
    )


@router.get("/heatmap/{username}.svg")
def get_heatmap_svg(
    username: str,
    preset: str = Query(default="default"),
    scheme: str | None = Query(default=None),
    cell_size: int | None = Query(default=None, ge=1, le=64),
    border_radius: float | None = Query(default=None, ge=0),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Render a GitHub user's contribution heatmap as SVG."""

    if preset not in PRESETS:
        raise HTTPException(status_code=400, detail="unknown preset")
    if scheme is not None and scheme not in COLOR_SCHEMES:
        raise HTTPException(status_code=400, detail="unknown color scheme")
    layout_params = (scheme, cell_size, border_radius)
    if preset in FIXED_CANVAS_PRESETS and any(
        value is not None for value in layout_params
    ):
        raise HTTPException(
            status_code=400, detail=f"preset {preset!r} does not accept layout options"
        )

    login, processed = load_contributions(username, credentials, settings)
    svg = render_preset(
        preset,
        create_heatmap_data(processed, username=login),
        colors=COLOR_SCHEMES[scheme] if scheme else None,
        cell_size=cell_size,
        border_radius=border_radius,
    )
    return Response(content=svg, media_type="image/svg+xml")
