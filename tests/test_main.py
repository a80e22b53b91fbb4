import xml.etree.ElementTree as ET

import pytest
from fastapi.testclient import TestClient

from contribution_heatmap.api.routes.heatmap import get_settings
from contribution_heatmap.api.schemas.heatmap import ContributionCollection
from contribution_heatmap.main import create_app
from contribution_heatmap.services.heatmap_service import GitHubAPIError
from contribution_heatmap.services.heatmap_service import GitHubUserNotFoundError
from contribution_heatmap.services.heatmap_service import InvalidGitHubTokenError
from contribution_heatmap.services.normalizer import process_contributions
from contribution_heatmap.settings import Settings


SERVICE_PATH = "contribution_heatmap.api.routes.heatmap.get_user_contributions"


@pytest.fixture
def api_client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(
        github_token="server-token"
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def fake_service(monkeypatch, year_calendar) -> list[dict[str, str]]:
    calls: list[dict[str, str]] = []

    def fake_get_user_contributions(username: str, token: str, graphql_url: str):
        calls.append({"username": username, "token": token})
        collection = ContributionCollection(username="octocat", calendar=year_calendar)
        return "octocat", process_contributions(collection)

    monkeypatch.setattr(SERVICE_PATH, fake_get_user_contributions)
    return calls


def raise_from_service(monkeypatch, error: Exception) -> None:
    def failing_service(username: str, token: str, graphql_url: str):
        raise error

    monkeypatch.setattr(SERVICE_PATH, failing_service)


def test_health_live_returns_ok(api_client: TestClient) -> None:
    response = api_client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_presets_includes_banners_and_schemes(api_client: TestClient) -> None:
    response = api_client.get("/presets")

    assert response.status_code == 200
    assert "linkedin" in response.json()["presets"]
    assert "banner" in response.json()["fixed_canvas"]
    assert "clean" not in response.json()["fixed_canvas"]
    assert response.json()["schemes"] == ["blue", "github", "green", "orange", "purple"]


def test_stats_returns_statistics(
    api_client: TestClient, fake_service, year_calendar
) -> None:
    response = api_client.get("/heatmap/octocat/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "octocat"
    assert body["statistics"]["total_contributions"] == year_calendar.total
    assert len(body["statistics"]["by_weekday"]) == 7
    assert body["breakdown"]["commits"] == 0
    assert fake_service == [{"username": "octocat", "token": "server-token"}]


def test_bearer_token_takes_precedence(api_client: TestClient, fake_service) -> None:
    api_client.get(
        "/heatmap/octocat/stats", headers={"Authorization": "Bearer user-token"}
    )

    assert fake_service[0]["token"] == "user-token"


def test_svg_endpoint_renders_heatmap(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get("/heatmap/octocat.svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    root = ET.fromstring(response.text)
    assert root.get("width") == "727"
    assert "octocat's Contribution Graph" in response.text


def test_svg_endpoint_applies_preset_and_scheme(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get(
        "/heatmap/octocat.svg",
        params={"preset": "clean", "scheme": "blue", "cell_size": 10},
    )

    assert response.status_code == 200
    assert 'width="10"' in response.text
    assert "#1d4ed8" in response.text
    assert "Contribution Graph" not in response.text


def test_svg_endpoint_renders_banner_preset(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get("/heatmap/octocat.svg", params={"preset": "linkedin"})

    root = ET.fromstring(response.text)
    assert (root.get("width"), root.get("height")) == ("1584", "396")


@pytest.mark.parametrize(
    "params", [{"scheme": "blue"}, {"cell_size": 5}, {"border_radius": 2}]
)
def test_svg_endpoint_rejects_layout_options_for_banners(
    api_client: TestClient, fake_service, params: dict
) -> None:
    response = api_client.get(
        "/heatmap/octocat.svg", params={"preset": "linkedin", **params}
    )

    assert response.status_code == 400
    assert "does not accept layout options" in response.json()["detail"]
    assert fake_service == []


def test_svg_endpoint_applies_overrides_to_aesthetic_presets(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get(
        "/heatmap/octocat.svg", params={"preset": "aesthetic-neon", "cell_size": 7}
    )

    assert response.status_code == 200
    assert 'width="7"' in response.text


def test_svg_endpoint_rejects_unknown_preset(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get("/heatmap/octocat.svg", params={"preset": "poster"})

    assert response.status_code == 400
    assert response.json() == {"detail": "unknown preset"}
    assert fake_service == []


def test_svg_endpoint_rejects_unknown_scheme(
    api_client: TestClient, fake_service
) -> None:
    response = api_client.get("/heatmap/octocat.svg", params={"scheme": "rainbow"})

    assert response.status_code == 400
    assert response.json() == {"detail": "unknown color scheme"}


def test_missing_token_returns_401(year_calendar, fake_service) -> None:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(github_token=None)
    client = TestClient(app)

    response = client.get("/heatmap/octocat/stats")

    assert response.status_code == 401
    assert fake_service == []


@pytest.mark.parametrize(
    ("error", "status_code", "detail"),
    [
        (InvalidGitHubTokenError("Bad credentials"), 401, "GitHub token is invalid"),
        (GitHubUserNotFoundError("ghost"), 404, "GitHub user not found"),
        (GitHubAPIError("boom"), 502, "GitHub API request failed"),
    ],
)
def test_service_errors_map_to_http_errors(
    api_client: TestClient, monkeypatch, error: Exception, status_code: int, detail: str
) -> None:
    raise_from_service(monkeypatch, error)

    response = api_client.get("/heatmap/ghost/stats")

    assert response.status_code == status_code
    assert response.json() == {"detail": detail}


def test_settings_reads_github_token_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("RASTER_ENABLED", "false")

    settings = Settings()

    assert settings.github_token == "env-token"
    assert settings.raster_enabled is False
    assert settings.github_graphql_url == "https://api.github.com/graphql"
